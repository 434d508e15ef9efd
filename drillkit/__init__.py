"""
drillkit: content-agnostic drill engine for kana, kanji and vocabulary practice.

Components:
- drill: Content adapters and the session engine
- events: Event bus separating gameplay from telemetry
- delivery: Statistics and achievement subscribers
- content: Bundled drill content and its loader
- app: Composition root wiring the pieces together
"""

__version__ = "1.0.0"

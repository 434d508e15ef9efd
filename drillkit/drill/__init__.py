"""
Drill: content adapters and the session engine.

Components:
- adapters: Per-domain content adapters (kana, kanji, vocabulary)
- session: The session state machine driving one drill over an adapter
"""

from .adapters import ADAPTERS, ContentAdapter, GameMode, get_adapter
from .session import AnswerOutcome, Question, SessionEngine, SessionStatus

__all__ = [
    "ADAPTERS",
    "AnswerOutcome",
    "ContentAdapter",
    "GameMode",
    "Question",
    "SessionEngine",
    "SessionStatus",
    "get_adapter",
]

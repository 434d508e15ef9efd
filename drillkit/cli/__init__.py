"""
Terminal driver for drill sessions.
"""

from .drill_cli import app, configure_logging, main

__all__ = ["app", "configure_logging", "main"]

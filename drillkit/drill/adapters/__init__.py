"""
Content adapters for drill sessions.

Each content domain (kana, kanji, vocabulary) has its own module with an
adapter that projects an item onto:
- prompt(): what the user is shown
- expected_answer(): what the user must answer
- distractors(): options for choice modes
- validate(): answer checking
- metadata(): display details
"""

from typing import TYPE_CHECKING

from drillkit.content.models import ContentDomain

if TYPE_CHECKING:
    from .base import ContentAdapter


# Adapter registry - populated by @register decorator
ADAPTERS: dict[ContentDomain, "ContentAdapter"] = {}


def register(domain: ContentDomain):
    """Decorator to register a content adapter."""
    def decorator(cls):
        ADAPTERS[domain] = cls()
        return cls
    return decorator


def get_adapter(domain: str | ContentDomain) -> "ContentAdapter | None":
    """Get the adapter for a content domain."""
    if isinstance(domain, str) and not isinstance(domain, ContentDomain):
        try:
            domain = ContentDomain(domain.lower())
        except ValueError:
            return None
    return ADAPTERS.get(domain)


# Import adapters to trigger registration
from . import kana
from . import kanji
from . import vocabulary

from .base import AdapterBase, ContentAdapter, DisplayMetadata, GameMode, normalize_answer

__all__ = [
    "ADAPTERS",
    "AdapterBase",
    "ContentAdapter",
    "ContentDomain",
    "DisplayMetadata",
    "GameMode",
    "get_adapter",
    "normalize_answer",
    "register",
]

"""
Drill content: item models per domain and the JSON content loader.
"""

from .loader import BUNDLED_CONTENT_DIR, available_groups, load_items
from .models import ContentDomain, DrillItem, KanaItem, KanjiItem, VocabularyItem

__all__ = [
    "BUNDLED_CONTENT_DIR",
    "ContentDomain",
    "DrillItem",
    "KanaItem",
    "KanjiItem",
    "VocabularyItem",
    "available_groups",
    "load_items",
]

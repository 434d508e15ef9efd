"""
Kana (syllabary) adapter.

- Forward modes: show the character, answer with its romaji.
- Reverse modes: show the romaji, answer with the character.
"""

from drillkit.content.models import ContentDomain, KanaItem

from . import register
from .base import AdapterBase, DisplayMetadata


@register(ContentDomain.KANA)
class KanaAdapter(AdapterBase):
    """Adapter for hiragana/katakana items."""

    def _front(self, item: KanaItem) -> str:
        return item.kana

    def _back(self, item: KanaItem) -> str:
        return item.romaji

    def metadata(self, item: KanaItem) -> DisplayMetadata:
        return DisplayMetadata(primary=item.kana, secondary=item.romaji)

"""
Kanji (logogram) adapter.

The primary (first) meaning is the answer axis; readings are display-only.
"""

from drillkit.content.models import ContentDomain, KanjiItem

from . import register
from .base import AdapterBase, DisplayMetadata


@register(ContentDomain.KANJI)
class KanjiAdapter(AdapterBase):
    """Adapter for kanji items."""

    def _front(self, item: KanjiItem) -> str:
        return item.kanji

    def _back(self, item: KanjiItem) -> str:
        return item.meanings[0]

    def metadata(self, item: KanjiItem) -> DisplayMetadata:
        """Kanji, primary meaning, then on'yomi followed by kun'yomi readings."""
        return DisplayMetadata(
            primary=item.kanji,
            secondary=item.meanings[0],
            extra=(*item.onyomi, *item.kunyomi),
        )

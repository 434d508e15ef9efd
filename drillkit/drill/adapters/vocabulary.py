"""
Vocabulary adapter.

Words are drilled against their primary meaning; the kana reading and any
further meanings are shown as metadata.
"""

from drillkit.content.models import ContentDomain, VocabularyItem

from . import register
from .base import AdapterBase, DisplayMetadata


@register(ContentDomain.VOCABULARY)
class VocabularyAdapter(AdapterBase):
    """Adapter for vocabulary items."""

    def _front(self, item: VocabularyItem) -> str:
        return item.word

    def _back(self, item: VocabularyItem) -> str:
        return item.meanings[0]

    def metadata(self, item: VocabularyItem) -> DisplayMetadata:
        return DisplayMetadata(
            primary=item.word,
            secondary=item.reading,
            extra=tuple(item.meanings[1:]),
        )

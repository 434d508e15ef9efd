"""
Drill item models, one per content domain.

Items are immutable; the session engine never inspects them and only hands
them back to the adapter registered for their domain.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class KanaItem(BaseModel):
    """One syllabary character and its romanization."""

    model_config = ConfigDict(frozen=True)

    kana: str = Field(..., min_length=1, description="Hiragana or katakana character(s)")
    romaji: str = Field(..., min_length=1, description="Hepburn romanization")
    group: str = Field("hiragana", description="Script: hiragana or katakana")


class KanjiItem(BaseModel):
    """One logogram with its meanings and readings."""

    model_config = ConfigDict(frozen=True)

    kanji: str = Field(..., min_length=1)
    meanings: tuple[str, ...] = Field(..., min_length=1, description="English meanings, primary first")
    onyomi: tuple[str, ...] = ()
    kunyomi: tuple[str, ...] = ()
    group: str = Field("N5", description="JLPT level")


class VocabularyItem(BaseModel):
    """One vocabulary word with its kana reading and meanings."""

    model_config = ConfigDict(frozen=True)

    word: str = Field(..., min_length=1)
    reading: str = Field(..., min_length=1, description="Kana reading")
    meanings: tuple[str, ...] = Field(..., min_length=1, description="English meanings, primary first")
    group: str = Field("N5", description="JLPT level")


DrillItem = KanaItem | KanjiItem | VocabularyItem


class ContentDomain(str, Enum):
    """Content domains a drill session can run over."""
    KANA = "kana"
    KANJI = "kanji"
    VOCABULARY = "vocabulary"


MODEL_FOR_DOMAIN: dict[ContentDomain, type[BaseModel]] = {
    ContentDomain.KANA: KanaItem,
    ContentDomain.KANJI: KanjiItem,
    ContentDomain.VOCABULARY: VocabularyItem,
}

"""
Unit tests for the drill content loader.
"""

import json

import pytest

from drillkit.content import (
    ContentDomain,
    KanaItem,
    KanjiItem,
    VocabularyItem,
    available_groups,
    load_items,
)
from drillkit.errors import ContentError


class TestBundledContent:
    """Test the content shipped with the package."""

    def test_kana_has_both_scripts(self):
        items = load_items(ContentDomain.KANA)
        assert len(items) == 92
        assert all(isinstance(item, KanaItem) for item in items)

    def test_group_filter(self):
        hiragana = load_items("kana", groups=["hiragana"])
        assert len(hiragana) == 46
        assert {item.group for item in hiragana} == {"hiragana"}

    def test_group_filter_is_case_insensitive(self):
        assert len(load_items("kana", groups=["KATAKANA"])) == 46

    def test_unknown_group_yields_nothing(self):
        assert load_items("kana", groups=["cyrillic"]) == []

    def test_kanji_and_vocabulary_load(self):
        assert all(isinstance(item, KanjiItem) for item in load_items("kanji"))
        assert all(isinstance(item, VocabularyItem) for item in load_items("vocabulary"))

    def test_available_groups(self):
        assert available_groups("kana") == ["hiragana", "katakana"]
        assert available_groups("kanji") == ["N5", "N4"]

    def test_items_are_immutable(self):
        item = load_items("kana")[0]
        with pytest.raises(Exception):
            item.romaji = "x"


class TestLoaderErrors:
    """Test failure handling."""

    def test_unknown_domain(self):
        with pytest.raises(ContentError, match="Unknown content domain"):
            load_items("hanzi")

    def test_missing_file(self, tmp_path):
        with pytest.raises(ContentError, match="not found"):
            load_items("kana", content_dir=tmp_path)

    def test_invalid_json(self, tmp_path):
        (tmp_path / "kana.json").write_text("[{", encoding="utf-8")
        with pytest.raises(ContentError, match="Invalid JSON"):
            load_items("kana", content_dir=tmp_path)

    def test_invalid_item(self, tmp_path):
        payload = [{"kanji": "日", "meanings": []}]
        (tmp_path / "kanji.json").write_text(json.dumps(payload), encoding="utf-8")
        with pytest.raises(ContentError, match="Invalid kanji content"):
            load_items("kanji", content_dir=tmp_path)

    def test_custom_content_dir(self, tmp_path):
        payload = [
            {"word": "水", "reading": "みず", "meanings": ["water"], "group": "custom"},
        ]
        (tmp_path / "vocabulary.json").write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")

        items = load_items("vocabulary", content_dir=str(tmp_path))

        assert items == [VocabularyItem(word="水", reading="みず", meanings=("water",), group="custom")]

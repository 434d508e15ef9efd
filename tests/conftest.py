"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import random
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from drillkit.content import KanaItem, KanjiItem, VocabularyItem  # noqa: E402
from drillkit.events import Channel, EventBus  # noqa: E402


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def vowel_items():
    """The five hiragana vowels."""
    return [
        KanaItem(kana="あ", romaji="a"),
        KanaItem(kana="い", romaji="i"),
        KanaItem(kana="う", romaji="u"),
        KanaItem(kana="え", romaji="e"),
        KanaItem(kana="お", romaji="o"),
    ]


@pytest.fixture
def vowel_answers():
    """Prompt -> romaji for the vowel fixture."""
    return {"あ": "a", "い": "i", "う": "u", "え": "e", "お": "o"}


@pytest.fixture
def kanji_items():
    return [
        KanjiItem(kanji="日", meanings=["day", "sun"], onyomi=["ニチ", "ジツ"], kunyomi=["ひ", "か"]),
        KanjiItem(kanji="月", meanings=["month", "moon"], onyomi=["ゲツ", "ガツ"], kunyomi=["つき"]),
        KanjiItem(kanji="火", meanings=["fire"], onyomi=["カ"], kunyomi=["ひ"]),
        KanjiItem(kanji="人", meanings=["person"], onyomi=["ジン", "ニン"], kunyomi=["ひと"]),
        KanjiItem(kanji="者", meanings=["person", "someone"], onyomi=["シャ"], kunyomi=["もの"]),
    ]


@pytest.fixture
def vocabulary_items():
    return [
        VocabularyItem(word="犬", reading="いぬ", meanings=["dog"]),
        VocabularyItem(word="猫", reading="ねこ", meanings=["cat"]),
        VocabularyItem(word="先生", reading="せんせい", meanings=["teacher", "doctor"]),
        VocabularyItem(word="学校", reading="がっこう", meanings=["school"]),
    ]


@pytest.fixture
def rng():
    """Seeded random source for reproducible shuffles."""
    return random.Random(1234)


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def telemetry_log(bus):
    """Every telemetry event published on the bus fixture, in delivery order."""
    received = []
    bus.subscribe(Channel.TELEMETRY, received.append)
    return received

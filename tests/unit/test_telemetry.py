"""
Unit tests for the telemetry subscriber and the in-memory stats store.
"""

import pytest

from drillkit.delivery import InMemoryStatsStore, StatsRecorder
from drillkit.delivery.stats_store import BEST_STREAK, CURRENT_STREAK, PERFECT_SESSIONS
from drillkit.events import AchievementKind, Channel, StatEvent


class RecordingStore:
    """Stats facade double recording every call made on it."""

    def __init__(self):
        self.calls = []

    def read_counters(self):
        self.calls.append(("read_counters",))
        return {}

    def increment(self, kind):
        self.calls.append(("increment", kind))

    def record_history(self, prompt, correct, domain):
        self.calls.append(("record_history", prompt, correct, domain))

    def persist_session(self):
        self.calls.append(("persist_session",))


@pytest.fixture
def store():
    return RecordingStore()


@pytest.fixture
def checks(bus):
    received = []
    bus.subscribe(Channel.ACHIEVEMENT, received.append)
    return received


@pytest.fixture
def recorder(store, bus):
    recorder = StatsRecorder(store)
    recorder.attach(bus)
    return recorder


class TestStatsRecorder:
    """Test the StatEvent -> store mapping."""

    def test_correct_event(self, recorder, store, bus):
        bus.publish(StatEvent.correct("kana", "あ"))
        assert store.calls == [
            ("increment", "correct"),
            ("record_history", "あ", True, "kana"),
        ]

    def test_incorrect_event(self, recorder, store, bus):
        bus.publish(StatEvent.incorrect("kanji", "日", "moon", "day"))
        assert store.calls == [
            ("increment", "incorrect"),
            ("record_history", "日", False, "kanji"),
        ]

    def test_session_complete_event(self, recorder, store, bus):
        bus.publish(StatEvent.session_complete("vocabulary", answered=3, correct=2))
        assert store.calls == [
            ("increment", "sessions"),
            ("persist_session",),
        ]

    def test_forwards_achievement_check(self, recorder, bus, checks):
        bus.publish(StatEvent.correct("kana", "あ"))
        bus.publish(StatEvent.session_complete("kana"))
        assert [e.kind for e in checks] == [AchievementKind.CHECK, AchievementKind.CHECK]

    def test_detach(self, recorder, store, bus):
        recorder.detach()
        bus.publish(StatEvent.correct("kana", "あ"))
        assert store.calls == []
        assert bus.subscriber_count(Channel.TELEMETRY) == 0

    def test_explicit_publish_target(self, store):
        forwarded = []
        recorder = StatsRecorder(store, publish=forwarded.append)
        recorder.handle(StatEvent.correct("kana", "あ"))
        assert [e.kind for e in forwarded] == [AchievementKind.CHECK]

    def test_store_failure_does_not_reach_publisher(self, bus):
        class BrokenStore(RecordingStore):
            def increment(self, kind):
                raise OSError("disk full")

        StatsRecorder(BrokenStore()).attach(bus)
        bus.publish(StatEvent.correct("kana", "あ"))
        assert bus.failures == 1


class TestInMemoryStatsStore:
    """Test the bundled store."""

    @pytest.fixture
    def memory_store(self):
        return InMemoryStatsStore()

    def test_increment_and_read(self, memory_store):
        memory_store.increment("correct")
        memory_store.increment("correct")
        assert memory_store.read_counters()["correct"] == 2

    def test_read_counters_is_a_snapshot(self, memory_store):
        snapshot = memory_store.read_counters()
        memory_store.increment("correct")
        assert "correct" not in snapshot

    def test_history_and_streaks(self, memory_store):
        for correct in (True, True, True, False, True):
            memory_store.record_history("あ", correct, "kana")

        counters = memory_store.read_counters()
        assert len(memory_store.history) == 5
        assert counters[BEST_STREAK] == 3
        assert counters[CURRENT_STREAK] == 1

    def test_persist_session_snapshots_since_last_persist(self, memory_store):
        memory_store.record_history("あ", True, "kana")
        memory_store.record_history("い", False, "kana")
        memory_store.persist_session()
        memory_store.record_history("日", True, "kanji")
        memory_store.persist_session()

        first, second = memory_store.sessions
        assert (first.correct, first.incorrect) == (1, 1)
        assert (second.correct, second.incorrect, second.domains) == (1, 0, ("kanji",))
        assert memory_store.read_counters()[PERFECT_SESSIONS] == 1

    def test_empty_session_is_not_perfect(self, memory_store):
        memory_store.persist_session()
        assert memory_store.read_counters().get(PERFECT_SESSIONS, 0) == 0

    def test_weakest_prompts(self, memory_store):
        memory_store.record_history("あ", False, "kana")
        memory_store.record_history("あ", False, "kana")
        memory_store.record_history("い", False, "kana")
        memory_store.record_history("い", True, "kana")
        memory_store.record_history("う", True, "kana")
        memory_store.record_history("日", False, "kanji")

        weakest = memory_store.weakest_prompts("kana")

        assert [prompt for prompt, _ in weakest] == ["あ", "い"]
        assert weakest[1][1].accuracy == 50.0

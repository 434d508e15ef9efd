"""
Unit tests for achievement evaluation.
"""

import pytest

from drillkit.delivery import Achievement, AchievementEvaluator, InMemoryStatsStore
from drillkit.events import AchievementEvent, AchievementKind, Channel


@pytest.fixture
def store():
    return InMemoryStatsStore()


@pytest.fixture
def evaluator(store, bus):
    evaluator = AchievementEvaluator(store)
    evaluator.attach(bus)
    return evaluator


@pytest.fixture
def achievement_log(bus):
    received = []
    bus.subscribe(Channel.ACHIEVEMENT, received.append)
    return received


class TestAchievementEvaluator:
    """Test check -> unlock evaluation."""

    def test_nothing_unlocked_initially(self, evaluator, bus, achievement_log):
        bus.publish(AchievementEvent.check())
        assert [e.kind for e in achievement_log] == [AchievementKind.CHECK]
        assert evaluator.unlocked == set()

    def test_first_correct_unlocks(self, evaluator, store, bus, achievement_log):
        store.increment("correct")
        bus.publish(AchievementEvent.check())

        unlocks = [e.achievement_id for e in achievement_log if e.kind is AchievementKind.UNLOCK]
        assert unlocks == ["first_correct"]
        assert evaluator.announced == ["first_correct"]

    def test_unlocks_only_once(self, evaluator, store, bus, achievement_log):
        store.increment("correct")
        bus.publish(AchievementEvent.check())
        bus.publish(AchievementEvent.check())

        unlocks = [e for e in achievement_log if e.kind is AchievementKind.UNLOCK]
        assert len(unlocks) == 1

    def test_threshold_rules(self, evaluator, store, bus):
        for _ in range(10):
            store.increment("correct")
            store.record_history("あ", True, "kana")
        bus.publish(AchievementEvent.check())

        assert {"first_correct", "correct_10", "streak_10"} <= evaluator.unlocked
        assert "correct_100" not in evaluator.unlocked

    def test_custom_achievements(self, store, bus):
        evaluator = AchievementEvaluator(
            store, achievements=(Achievement("two_sessions", "Regular", "Finish two sessions", "sessions", 2),)
        )
        evaluator.attach(bus)

        store.increment("sessions")
        bus.publish(AchievementEvent.check())
        assert evaluator.unlocked == set()

        store.increment("sessions")
        bus.publish(AchievementEvent.check())
        assert evaluator.unlocked == {"two_sessions"}

    def test_unlock_from_elsewhere_is_announced(self, evaluator, bus):
        bus.publish(AchievementEvent.unlock("perfect_session"))
        assert evaluator.announced == ["perfect_session"]

    def test_evaluate_without_bus(self, store):
        evaluator = AchievementEvaluator(store)
        store.increment("sessions")
        assert evaluator.evaluate() == ["first_session"]
        assert evaluator.evaluate() == []

    def test_detach(self, evaluator, bus):
        evaluator.detach()
        assert bus.subscriber_count(Channel.ACHIEVEMENT) == 0

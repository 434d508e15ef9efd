"""
Achievement evaluation on the achievement-trigger channel.

The evaluator reacts to `check` events by reading the statistics counters
and publishing one `unlock` event per newly satisfied achievement. It also
receives its own `unlock` notifications back from the bus and records them.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass

from loguru import logger

from drillkit.delivery.stats_store import (
    BEST_STREAK,
    CORRECT,
    PERFECT_SESSIONS,
    SESSIONS,
    StatsStore,
)
from drillkit.events.bus import EventBus, Subscription
from drillkit.events.types import AchievementEvent, AchievementKind, Channel


@dataclass(frozen=True)
class Achievement:
    """An unlockable milestone: a counter reaching a threshold."""
    id: str
    title: str
    description: str
    counter: str
    threshold: int

    def is_met(self, counters: Mapping[str, int]) -> bool:
        return counters.get(self.counter, 0) >= self.threshold


DEFAULT_ACHIEVEMENTS: tuple[Achievement, ...] = (
    Achievement("first_correct", "First Steps", "Answer your first question correctly", CORRECT, 1),
    Achievement("correct_10", "Warming Up", "Answer 10 questions correctly", CORRECT, 10),
    Achievement("correct_100", "Centurion", "Answer 100 questions correctly", CORRECT, 100),
    Achievement("first_session", "Finisher", "Complete a drill session", SESSIONS, 1),
    Achievement("perfect_session", "Flawless", "Complete a session without a mistake", PERFECT_SESSIONS, 1),
    Achievement("streak_10", "On a Roll", "Answer 10 questions in a row correctly", BEST_STREAK, 10),
)


class AchievementEvaluator:
    """Achievement-channel subscriber that unlocks achievements from store counters."""

    def __init__(
        self,
        store: StatsStore,
        achievements: tuple[Achievement, ...] = DEFAULT_ACHIEVEMENTS,
        publish: Callable[[AchievementEvent], None] | None = None,
    ):
        self.store = store
        self.achievements = {a.id: a for a in achievements}
        self._publish = publish
        self._unlocked: set[str] = set()
        self._announced: list[str] = []
        self._subscription: Subscription | None = None

    @property
    def unlocked(self) -> set[str]:
        """Ids of achievements unlocked so far."""
        return set(self._unlocked)

    @property
    def announced(self) -> list[str]:
        """Unlock notifications received back from the bus, in delivery order."""
        return list(self._announced)

    def attach(self, bus: EventBus) -> Subscription:
        if self._publish is None:
            self._publish = bus.publish
        self._subscription = bus.subscribe(Channel.ACHIEVEMENT, self.handle)
        return self._subscription

    def detach(self) -> None:
        if self._subscription is not None:
            self._subscription()
            self._subscription = None

    def handle(self, event: AchievementEvent) -> None:
        if event.kind is AchievementKind.CHECK:
            for achievement_id in self.evaluate():
                if self._publish is not None:
                    self._publish(AchievementEvent.unlock(achievement_id))
        elif event.kind is AchievementKind.UNLOCK and event.achievement_id:
            self._announced.append(event.achievement_id)
            achievement = self.achievements.get(event.achievement_id)
            title = achievement.title if achievement else event.achievement_id
            logger.info(f"Achievement unlocked: {title}")

    def evaluate(self) -> list[str]:
        """Mark and return achievements newly satisfied by the current counters."""
        counters = self.store.read_counters()
        newly: list[str] = []
        for achievement in self.achievements.values():
            if achievement.id in self._unlocked:
                continue
            if achievement.is_met(counters):
                self._unlocked.add(achievement.id)
                newly.append(achievement.id)
        return newly

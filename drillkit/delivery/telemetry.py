"""
Telemetry subscriber: binds session StatEvents to the statistics store.

    correct / incorrect  -> increment(kind), record_history(prompt, correct, domain)
    session-complete     -> increment("sessions"), persist_session()

After each handled event an achievement `check` is forwarded onto the bus.
The recorder never sees the session that produced the event.
"""

from __future__ import annotations

from collections.abc import Callable

from loguru import logger

from drillkit.delivery.stats_store import SESSIONS, StatsStore
from drillkit.events.bus import EventBus, Subscription
from drillkit.events.types import AchievementEvent, Channel, StatEvent, StatKind


class StatsRecorder:
    """Telemetry-channel subscriber writing to a StatsStore."""

    def __init__(
        self,
        store: StatsStore,
        publish: Callable[[AchievementEvent], None] | None = None,
    ):
        """
        Args:
            store: Statistics facade
            publish: Where achievement checks are forwarded (usually EventBus.publish)
        """
        self.store = store
        self._publish = publish
        self._subscription: Subscription | None = None

    def attach(self, bus: EventBus) -> Subscription:
        """Subscribe to every telemetry event on the bus."""
        if self._publish is None:
            self._publish = bus.publish
        self._subscription = bus.subscribe(Channel.TELEMETRY, self.handle)
        return self._subscription

    def detach(self) -> None:
        if self._subscription is not None:
            self._subscription()
            self._subscription = None

    def handle(self, event: StatEvent) -> None:
        if event.kind is StatKind.SESSION_COMPLETE:
            self.store.increment(SESSIONS)
            self.store.persist_session()
            logger.info(
                f"Session {event.metadata.get('session_id', '?')} finished: "
                f"{event.metadata.get('correct', 0)}/{event.metadata.get('answered', 0)} correct"
            )
        else:
            is_correct = event.kind is StatKind.CORRECT
            self.store.increment(event.kind.value)
            self.store.record_history(event.prompt, is_correct, event.domain)

        if self._publish is not None:
            self._publish(AchievementEvent.check())

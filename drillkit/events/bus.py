"""
In-process event bus separating gameplay from telemetry.

Two independent channels:
- telemetry: StatEvents, subscribers may filter by StatKind
- achievement: AchievementEvents, unkeyed

Delivery is synchronous and in subscription order. Events published from
inside a handler are queued and delivered once the current event has reached
every handler, so dispatch never nests. A handler that raises is logged and
skipped; the publisher never sees subscriber failures.

Publishing from another thread while an event is being dispatched only
enqueues it; the dispatching thread delivers it next.
"""

from __future__ import annotations

import itertools
import threading
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from loguru import logger

from drillkit.events.types import AchievementEvent, Channel, StatEvent, StatKind

EventHandler = Callable[[Any], None]


@dataclass(frozen=True, eq=False)
class _Registration:
    """One subscribe() call."""
    seq: int
    channel: Channel
    handler: EventHandler
    kind: StatKind | None = None

    def matches(self, event: StatEvent | AchievementEvent) -> bool:
        return self.kind is None or self.kind == event.kind


class Subscription:
    """
    Unsubscribe token returned by EventBus.subscribe().

    Calling it removes exactly the registration it was issued for. Further
    calls do nothing.
    """

    def __init__(self, bus: EventBus, registration: _Registration):
        self._bus = bus
        self._registration = registration
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def __call__(self) -> None:
        if not self._active:
            return
        self._active = False
        self._bus._remove(self._registration)

    def __repr__(self) -> str:
        state = "active" if self._active else "cancelled"
        return f"<Subscription {self._registration.channel.value} #{self._registration.seq} {state}>"


class EventBus:
    """
    Pub/sub relay with a telemetry channel and an achievement-trigger channel.

    Instances are constructed and owned explicitly by the composition root;
    there is no module-level bus.
    """

    def __init__(self):
        self._subscribers: dict[Channel, list[_Registration]] = {channel: [] for channel in Channel}
        self._seq = itertools.count()
        self._queue: deque[StatEvent | AchievementEvent] = deque()
        self._lock = threading.RLock()
        self._dispatching = False
        self.failures = 0

    def subscribe(
        self,
        channel: Channel | str,
        handler: EventHandler,
        kind: StatKind | str | None = None,
    ) -> Subscription:
        """
        Register a handler on a channel.

        Args:
            channel: Channel.TELEMETRY or Channel.ACHIEVEMENT
            handler: Callable receiving the event
            kind: Telemetry only - deliver just this StatKind (None = all kinds)

        Returns:
            Subscription token; call it to unsubscribe
        """
        channel = Channel(channel)
        if kind is not None:
            if channel is not Channel.TELEMETRY:
                raise ValueError("Only the telemetry channel is keyed by event kind")
            kind = StatKind(kind)

        with self._lock:
            registration = _Registration(
                seq=next(self._seq), channel=channel, handler=handler, kind=kind
            )
            self._subscribers[channel].append(registration)
        return Subscription(self, registration)

    def publish(self, event: StatEvent | AchievementEvent) -> None:
        """Deliver an event to every matching handler on its channel."""
        self._channel_for(event)

        with self._lock:
            self._queue.append(event)
            if self._dispatching:
                # Re-entrant or concurrent publish: the active dispatch loop drains it
                return
            self._dispatching = True

        try:
            while True:
                with self._lock:
                    if not self._queue:
                        self._dispatching = False
                        return
                    next_event = self._queue.popleft()
                self._deliver(next_event)
        except BaseException:
            # Undelivered events stay queued for the next publish
            with self._lock:
                self._dispatching = False
            raise

    def subscriber_count(self, channel: Channel | str) -> int:
        """Number of registrations currently on a channel."""
        with self._lock:
            return len(self._subscribers[Channel(channel)])

    def clear(self) -> None:
        """Drop every registration on both channels."""
        with self._lock:
            for registrations in self._subscribers.values():
                registrations.clear()

    def _channel_for(self, event: object) -> Channel:
        if isinstance(event, StatEvent):
            return Channel.TELEMETRY
        if isinstance(event, AchievementEvent):
            return Channel.ACHIEVEMENT
        raise TypeError(f"Cannot publish {type(event).__name__}; expected StatEvent or AchievementEvent")

    def _deliver(self, event: StatEvent | AchievementEvent) -> None:
        channel = self._channel_for(event)
        with self._lock:
            targets = [r for r in self._subscribers[channel] if r.matches(event)]

        for registration in targets:
            try:
                registration.handler(event)
            except Exception:
                with self._lock:
                    self.failures += 1
                logger.opt(exception=True).error(
                    f"Event handler {getattr(registration.handler, '__qualname__', registration.handler)!r} "
                    f"failed on {channel.value}/{event.kind.value}"
                )

    def _remove(self, registration: _Registration) -> None:
        with self._lock:
            registrations = self._subscribers[registration.channel]
            for i, existing in enumerate(registrations):
                if existing is registration:
                    del registrations[i]
                    return

"""
Event bus and event schemas.

Gameplay publishes StatEvents on the telemetry channel; statistics and
achievement logic subscribe without ever touching the session that emitted
them.
"""

from .bus import EventBus, EventHandler, Subscription
from .types import AchievementEvent, AchievementKind, Channel, StatEvent, StatKind

__all__ = [
    "AchievementEvent",
    "AchievementKind",
    "Channel",
    "EventBus",
    "EventHandler",
    "StatEvent",
    "StatKind",
    "Subscription",
]

"""
Event schemas published on the event bus.

Events are immutable messages built at the point of emission. Subscribers may
read them but never feed them back into a session.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class Channel(str, Enum):
    """Independent delivery channels on the bus."""
    TELEMETRY = "telemetry"
    ACHIEVEMENT = "achievement"


class StatKind(str, Enum):
    """Discriminator for telemetry events."""
    CORRECT = "correct"
    INCORRECT = "incorrect"
    SESSION_COMPLETE = "session-complete"


class AchievementKind(str, Enum):
    """Discriminator for achievement-trigger events."""
    CHECK = "check"
    UNLOCK = "unlock"


def _freeze(metadata: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(metadata or {}))


@dataclass(frozen=True)
class StatEvent:
    """Captures a single answer, or the end of a session."""

    kind: StatKind
    domain: str
    prompt: str = ""
    submitted: str | None = None  # incorrect only
    expected: str | None = None  # incorrect only
    timestamp: float = field(default_factory=time.monotonic)
    metadata: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", _freeze(self.metadata))

    @classmethod
    def correct(cls, domain: str, prompt: str, **metadata: Any) -> StatEvent:
        return cls(kind=StatKind.CORRECT, domain=domain, prompt=prompt, metadata=metadata)

    @classmethod
    def incorrect(
        cls, domain: str, prompt: str, submitted: str, expected: str, **metadata: Any
    ) -> StatEvent:
        return cls(
            kind=StatKind.INCORRECT,
            domain=domain,
            prompt=prompt,
            submitted=submitted,
            expected=expected,
            metadata=metadata,
        )

    @classmethod
    def session_complete(cls, domain: str, **metadata: Any) -> StatEvent:
        return cls(kind=StatKind.SESSION_COMPLETE, domain=domain, metadata=metadata)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "kind": self.kind.value,
            "domain": self.domain,
            "prompt": self.prompt,
            "submitted": self.submitted,
            "expected": self.expected,
            "timestamp": self.timestamp,
            "metadata": dict(self.metadata),
        }


@dataclass(frozen=True)
class AchievementEvent:
    """Asks the evaluator to re-check achievements, or announces an unlock."""

    kind: AchievementKind
    achievement_id: str | None = None
    timestamp: float = field(default_factory=time.monotonic)

    @classmethod
    def check(cls) -> AchievementEvent:
        return cls(kind=AchievementKind.CHECK)

    @classmethod
    def unlock(cls, achievement_id: str) -> AchievementEvent:
        return cls(kind=AchievementKind.UNLOCK, achievement_id=achievement_id)

"""
Statistics store facade.

The telemetry subscriber reaches long-lived statistics only through the
StatsStore protocol below. InMemoryStatsStore is the bundled implementation;
hosts that persist statistics provide their own.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

from loguru import logger

# Counter names
CORRECT = "correct"
INCORRECT = "incorrect"
SESSIONS = "sessions"
PERFECT_SESSIONS = "perfect_sessions"
CURRENT_STREAK = "current_streak"
BEST_STREAK = "best_streak"


class StatsStore(Protocol):
    """Narrow interface onto preference/statistics state."""

    def read_counters(self) -> Mapping[str, int]:
        """Snapshot of the current counters."""
        ...

    def increment(self, kind: str) -> None:
        """Add one to a named counter."""
        ...

    def record_history(self, prompt: str, correct: bool, domain: str) -> None:
        """Append one answer to the history."""
        ...

    def persist_session(self) -> None:
        """Close out the current session's statistics."""
        ...


@dataclass(frozen=True)
class HistoryEntry:
    """One recorded answer."""
    prompt: str
    correct: bool
    domain: str
    recorded_at: str  # ISO format


@dataclass
class PromptTally:
    """Per-prompt answer counts."""
    correct: int = 0
    incorrect: int = 0

    @property
    def attempts(self) -> int:
        return self.correct + self.incorrect

    @property
    def accuracy(self) -> float:
        return self.correct / self.attempts * 100 if self.attempts else 0.0


@dataclass(frozen=True)
class SessionSnapshot:
    """Answers recorded between two persist_session() calls."""
    ended_at: str  # ISO format
    correct: int
    incorrect: int
    domains: tuple[str, ...]

    @property
    def perfect(self) -> bool:
        return self.correct > 0 and self.incorrect == 0


@dataclass
class InMemoryStatsStore:
    """
    Process-lifetime statistics.

    Tracks global counters, answer history, per-prompt tallies, answer streaks
    and one snapshot per completed session.
    """

    counters: Counter = field(default_factory=Counter)
    history: list[HistoryEntry] = field(default_factory=list)
    tallies: dict[tuple[str, str], PromptTally] = field(default_factory=dict)
    sessions: list[SessionSnapshot] = field(default_factory=list)
    _session_start: int = 0

    def read_counters(self) -> Mapping[str, int]:
        return dict(self.counters)

    def increment(self, kind: str) -> None:
        self.counters[kind] += 1

    def record_history(self, prompt: str, correct: bool, domain: str) -> None:
        self.history.append(
            HistoryEntry(
                prompt=prompt,
                correct=correct,
                domain=domain,
                recorded_at=datetime.now().isoformat(),
            )
        )

        tally = self.tallies.setdefault((domain, prompt), PromptTally())
        if correct:
            tally.correct += 1
            self.counters[CURRENT_STREAK] += 1
            self.counters[BEST_STREAK] = max(self.counters[BEST_STREAK], self.counters[CURRENT_STREAK])
        else:
            tally.incorrect += 1
            self.counters[CURRENT_STREAK] = 0

    def persist_session(self) -> None:
        entries = self.history[self._session_start:]
        snapshot = SessionSnapshot(
            ended_at=datetime.now().isoformat(),
            correct=sum(1 for e in entries if e.correct),
            incorrect=sum(1 for e in entries if not e.correct),
            domains=tuple(dict.fromkeys(e.domain for e in entries)),
        )
        self.sessions.append(snapshot)
        self._session_start = len(self.history)
        if snapshot.perfect:
            self.counters[PERFECT_SESSIONS] += 1
        logger.debug(f"Session snapshot stored: {snapshot.correct} correct, {snapshot.incorrect} incorrect")

    def weakest_prompts(self, domain: str, limit: int = 5) -> list[tuple[str, PromptTally]]:
        """Prompts in a domain with the most misses, worst first."""
        rows = [
            (prompt, tally)
            for (tally_domain, prompt), tally in self.tallies.items()
            if tally_domain == domain and tally.incorrect
        ]
        rows.sort(key=lambda row: (-row[1].incorrect, row[1].accuracy))
        return rows[:limit]

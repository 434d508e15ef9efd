"""
Base protocol and types for content adapters.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol


class GameMode(str, Enum):
    """Which item field is the prompt, and whether options are offered."""
    FORWARD_CHOICE = "forward-choice"
    REVERSE_CHOICE = "reverse-choice"
    FORWARD_FREE_ENTRY = "forward-free-entry"
    REVERSE_FREE_ENTRY = "reverse-free-entry"

    @property
    def is_choice(self) -> bool:
        return self in (GameMode.FORWARD_CHOICE, GameMode.REVERSE_CHOICE)

    @property
    def is_reverse(self) -> bool:
        return self in (GameMode.REVERSE_CHOICE, GameMode.REVERSE_FREE_ENTRY)


@dataclass(frozen=True)
class DisplayMetadata:
    """Display-only details for an item."""
    primary: str  # glyph or word
    secondary: str  # main reading or meaning
    extra: tuple[str, ...] = ()  # further readings/meanings


def normalize_answer(text: str) -> str:
    """Comparison key for answers: trimmed and case-folded."""
    return text.strip().lower()


class ContentAdapter(Protocol):
    """Protocol for content domain adapters."""

    def prompt(self, item: Any, mode: GameMode) -> str:
        """Text shown to the user for this item."""
        ...

    def expected_answer(self, item: Any, mode: GameMode) -> str:
        """The answer for this item; always the field that is not the prompt."""
        ...

    def distractors(
        self,
        item: Any,
        pool: Sequence[Any],
        mode: GameMode,
        count: int,
        rng: random.Random | None = None,
    ) -> list[str]:
        """Correct answer plus up to count-1 distinct wrong answers drawn from pool, shuffled."""
        ...

    def validate(self, submitted: str, item: Any, mode: GameMode) -> bool:
        """Check a submitted answer against the expected answer."""
        ...

    def metadata(self, item: Any) -> DisplayMetadata | None:
        """Display details for the item, or None if the domain has none."""
        ...


class AdapterBase:
    """
    Shared option and validation logic for adapters.

    Subclasses supply the two field projections:
    - _front(): glyph/word side (prompt in forward modes)
    - _back(): reading/meaning side (prompt in reverse modes)
    """

    def _front(self, item: Any) -> str:
        raise NotImplementedError

    def _back(self, item: Any) -> str:
        raise NotImplementedError

    def prompt(self, item: Any, mode: GameMode) -> str:
        return self._back(item) if mode.is_reverse else self._front(item)

    def expected_answer(self, item: Any, mode: GameMode) -> str:
        return self._front(item) if mode.is_reverse else self._back(item)

    def distractors(
        self,
        item: Any,
        pool: Sequence[Any],
        mode: GameMode,
        count: int,
        rng: random.Random | None = None,
    ) -> list[str]:
        """
        Build the option list for a choice question.

        Pool items sharing the item's prompt are skipped, since their answer
        would also be right (あ and ア both read "a"). When the pool has fewer
        distinct wrong answers than count-1, the list shrinks instead of
        repeating answers.
        """
        if count < 1:
            raise ValueError(f"Option count must be at least 1, got {count}")
        rng = rng or random.Random()

        correct = self.expected_answer(item, mode)
        prompt_key = normalize_answer(self.prompt(item, mode))
        taken = {normalize_answer(correct)}
        candidates: list[str] = []
        for other in pool:
            if normalize_answer(self.prompt(other, mode)) == prompt_key:
                continue
            answer = self.expected_answer(other, mode)
            key = normalize_answer(answer)
            if key in taken:
                continue
            taken.add(key)
            candidates.append(answer)

        options = [correct, *rng.sample(candidates, min(count - 1, len(candidates)))]
        rng.shuffle(options)
        return options

    def validate(self, submitted: str, item: Any, mode: GameMode) -> bool:
        return normalize_answer(submitted) == normalize_answer(self.expected_answer(item, mode))

    def metadata(self, item: Any) -> DisplayMetadata | None:
        return None

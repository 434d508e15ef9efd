"""
Drill session engine.

One SessionEngine drives one traversal of a fixed, shuffled item sequence:

    engine = SessionEngine(items, GameMode.FORWARD_CHOICE, adapter, "kana", sink=bus.publish)
    while not engine.is_complete():
        question = engine.current_question()
        outcome = engine.submit_answer(ask_user(question))

The engine only knows the ContentAdapter protocol. Its single side effect is
publishing StatEvents through the sink it was given; statistics, persistence
and achievements all live behind that sink.
"""

from __future__ import annotations

import random
import uuid
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from loguru import logger

from drillkit.drill.adapters.base import ContentAdapter, DisplayMetadata, GameMode, normalize_answer
from drillkit.errors import (
    AdapterContractViolation,
    InvalidSession,
    QuestionNotPresented,
    SessionExhausted,
)
from drillkit.events.types import StatEvent

DEFAULT_OPTION_COUNT = 4

EventSink = Callable[[StatEvent], None]


class SessionStatus(str, Enum):
    """Externally observable engine states."""
    ACTIVE = "active"  # accepting answers
    EXHAUSTED = "exhausted"  # every item answered


@dataclass(frozen=True)
class Question:
    """What the driver shows for the current position."""
    prompt: str
    options: tuple[str, ...]  # empty in free-entry modes
    position: int
    total: int


@dataclass(frozen=True)
class AnswerOutcome:
    """Result of one submission."""
    correct: bool
    submitted: str
    expected: str
    metadata: DisplayMetadata | None = None


@dataclass
class SessionState:
    """Session-local progress. Never persisted."""
    order: list[Any]
    position: int = 0
    answered: int = 0
    correct: int = 0
    incorrect: int = 0
    exhausted: bool = False
    pending: Question | None = field(default=None, repr=False)


class SessionEngine:
    """
    State machine for a single drill session.

    States: ACTIVE until the last item is answered, then EXHAUSTED. An
    exhausted engine rejects every further question/answer request.
    """

    def __init__(
        self,
        items: Sequence[Any],
        mode: GameMode | str,
        adapter: ContentAdapter,
        domain: str,
        *,
        sink: EventSink | None = None,
        option_count: int = DEFAULT_OPTION_COUNT,
        rng: random.Random | None = None,
        session_id: str | None = None,
        distractor_pool: Sequence[Any] | None = None,
    ):
        """
        Build a session.

        Args:
            items: Items to drill; copied and shuffled once into the session order
            mode: Game mode (enum or its string value)
            adapter: Adapter for the items' content domain
            domain: Domain tag carried on every StatEvent
            sink: Receives StatEvents (typically EventBus.publish); None drops them
            option_count: Options per question in choice modes
            rng: Random source for shuffling and options (seed it for reproducible sessions)
            session_id: Identifier carried in event metadata (generated if omitted)
            distractor_pool: Items wrong options are drawn from (defaults to items)

        Raises:
            InvalidSession: Empty item pool or an option count below 2
        """
        order = list(items)
        if not order:
            raise InvalidSession("Cannot start a session with an empty item pool")
        if option_count < 2:
            raise InvalidSession(f"Option count must be at least 2, got {option_count}")

        self._mode = GameMode(mode)
        self._adapter = adapter
        self._domain = str(getattr(domain, "value", domain))
        self._sink = sink
        self._option_count = option_count
        self._rng = rng or random.Random()
        self._session_id = session_id or uuid.uuid4().hex
        self._distractor_pool = list(distractor_pool) if distractor_pool else list(order)
        self._pool_key_pairs: list[tuple[str, str]] | None = None

        self._rng.shuffle(order)
        self._state = SessionState(order=order)

        logger.debug(
            f"Session {self._session_id} started: {len(order)} {self._domain} items, mode={self._mode.value}"
        )

    # ========================================
    # Queries
    # ========================================

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def mode(self) -> GameMode:
        return self._mode

    @property
    def domain(self) -> str:
        return self._domain

    @property
    def status(self) -> SessionStatus:
        return SessionStatus.EXHAUSTED if self._state.exhausted else SessionStatus.ACTIVE

    @property
    def position(self) -> int:
        return self._state.position

    @property
    def total(self) -> int:
        return len(self._state.order)

    @property
    def remaining(self) -> int:
        return self.total - self._state.position

    @property
    def answered(self) -> int:
        return self._state.answered

    @property
    def correct_count(self) -> int:
        return self._state.correct

    @property
    def incorrect_count(self) -> int:
        return self._state.incorrect

    @property
    def accuracy(self) -> float:
        """Percentage of answered items that were correct."""
        if not self._state.answered:
            return 0.0
        return self._state.correct / self._state.answered * 100

    def is_complete(self) -> bool:
        return self._state.exhausted

    # ========================================
    # Operations
    # ========================================

    def current_question(self) -> Question:
        """
        Question for the current position.

        The question is built once per position; repeated calls return the
        same prompt and option order.
        """
        self._ensure_active()
        state = self._state
        if state.pending is None:
            item = state.order[state.position]
            options: tuple[str, ...] = ()
            if self._mode.is_choice:
                options = tuple(
                    self._adapter.distractors(
                        item, self._distractor_pool, self._mode, self._option_count, self._rng
                    )
                )
                self._check_options(item, options)
            state.pending = Question(
                prompt=self._adapter.prompt(item, self._mode),
                options=options,
                position=state.position,
                total=len(state.order),
            )
        return state.pending

    def submit_answer(self, answer: str) -> AnswerOutcome:
        """
        Grade an answer for the displayed question and advance.

        Publishes one correct/incorrect StatEvent, plus one session-complete
        StatEvent when this answer finishes the session.

        Raises:
            SessionExhausted: The session has already finished
            QuestionNotPresented: current_question() was not called for this position
        """
        self._ensure_active()
        state = self._state
        question = state.pending
        if question is None:
            raise QuestionNotPresented(
                f"No question pending at position {state.position}; call current_question() first"
            )

        item = state.order[state.position]
        expected = self._adapter.expected_answer(item, self._mode)
        is_correct = self._adapter.validate(answer, item, self._mode)

        state.answered += 1
        if is_correct:
            state.correct += 1
        else:
            state.incorrect += 1
        state.position += 1
        state.pending = None
        if state.position == len(state.order):
            state.exhausted = True

        meta = {"mode": self._mode.value, "session_id": self._session_id}
        if is_correct:
            self._emit(StatEvent.correct(self._domain, question.prompt, **meta))
        else:
            self._emit(
                StatEvent.incorrect(self._domain, question.prompt, answer, expected, **meta)
            )

        if state.exhausted:
            logger.debug(
                f"Session {self._session_id} complete: {state.correct}/{state.answered} correct"
            )
            self._emit(
                StatEvent.session_complete(
                    self._domain,
                    answered=state.answered,
                    correct=state.correct,
                    incorrect=state.incorrect,
                    **meta,
                )
            )

        return AnswerOutcome(
            correct=is_correct,
            submitted=answer,
            expected=expected,
            metadata=self._adapter.metadata(item),
        )

    # ========================================
    # Internals
    # ========================================

    def _ensure_active(self) -> None:
        if self._state.exhausted:
            raise SessionExhausted(f"Session {self._session_id} has no items left")

    def _emit(self, event: StatEvent) -> None:
        if self._sink is None:
            logger.debug(f"No event sink; dropping {event.kind.value} event")
            return
        self._sink(event)

    def _check_options(self, item: Any, options: tuple[str, ...]) -> None:
        """Reject option sets with duplicates, a missing answer, or the wrong length."""
        keys = [normalize_answer(option) for option in options]
        if len(set(keys)) != len(keys):
            raise AdapterContractViolation(f"Adapter returned duplicate options: {list(options)}")

        correct_key = normalize_answer(self._adapter.expected_answer(item, self._mode))
        if keys.count(correct_key) != 1:
            raise AdapterContractViolation(
                f"Adapter options {list(options)} must contain the correct answer exactly once"
            )

        prompt_key = normalize_answer(self._adapter.prompt(item, self._mode))
        wrong_keys = {
            answer_key
            for other_prompt, answer_key in self._pool_keys()
            if other_prompt != prompt_key and answer_key != correct_key
        }
        expected_length = min(self._option_count, len(wrong_keys) + 1)
        if len(options) != expected_length:
            raise AdapterContractViolation(
                f"Adapter returned {len(options)} options, expected {expected_length}"
            )

    def _pool_keys(self) -> list[tuple[str, str]]:
        """Normalized (prompt, answer) pairs for the distractor pool."""
        if self._pool_key_pairs is None:
            self._pool_key_pairs = [
                (
                    normalize_answer(self._adapter.prompt(other, self._mode)),
                    normalize_answer(self._adapter.expected_answer(other, self._mode)),
                )
                for other in self._distractor_pool
            ]
        return self._pool_key_pairs

    def __repr__(self) -> str:
        return (
            f"<SessionEngine {self._session_id} {self._domain} {self._mode.value} "
            f"{self._state.position}/{len(self._state.order)} {self.status.value}>"
        )

"""
Composition root.

DrillApp owns the process-wide pieces: the event bus, the statistics store,
the telemetry recorder and the achievement evaluator. Sessions are built
through it so every engine publishes to the same bus.
"""

from __future__ import annotations

import random
from collections.abc import Iterable, Sequence
from typing import Any

from loguru import logger

from config import Settings, get_settings
from drillkit.content import ContentDomain, load_items
from drillkit.delivery import AchievementEvaluator, InMemoryStatsStore, StatsRecorder, StatsStore
from drillkit.drill import GameMode, SessionEngine, get_adapter
from drillkit.drill.adapters.base import normalize_answer
from drillkit.errors import InvalidSession
from drillkit.events import EventBus


class DrillApp:
    """Wires the bus, store and subscribers together and builds sessions."""

    def __init__(
        self,
        settings: Settings | None = None,
        store: StatsStore | None = None,
    ):
        self.settings = settings or get_settings()
        self.bus = EventBus()
        self.store = store if store is not None else InMemoryStatsStore()

        self.recorder = StatsRecorder(self.store)
        self.recorder.attach(self.bus)
        self.achievements = AchievementEvaluator(self.store)
        self.achievements.attach(self.bus)

        self._rng = random.Random(self.settings.random_seed)

    def new_session(
        self,
        domain: str | ContentDomain,
        mode: GameMode | str | None = None,
        *,
        groups: Iterable[str] | None = None,
        limit: int | None = None,
        option_count: int | None = None,
        items: Sequence[Any] | None = None,
    ) -> SessionEngine:
        """
        Build a session publishing to this app's bus.

        Args:
            domain: Content domain
            mode: Game mode (defaults to settings.default_mode)
            groups: Content groups to draw from (ignored when items are given)
            limit: Maximum items in the session (defaults to settings.session_limit, 0 = all)
            option_count: Options per choice question (defaults to settings.option_count)
            items: Explicit item pool instead of loading the domain's content

        Raises:
            InvalidSession: Unknown domain, a negative limit or an empty pool
            ContentError: Content could not be loaded
        """
        adapter = get_adapter(domain)
        if adapter is None:
            raise InvalidSession(f"No content adapter registered for domain '{domain}'")
        domain = ContentDomain(getattr(domain, "value", domain).lower())

        pool = list(items) if items is not None else load_items(
            domain, groups, self.settings.content_dir
        )

        limit = self.settings.session_limit if limit is None else limit
        if limit < 0:
            raise InvalidSession(f"Session limit cannot be negative, got {limit}")

        mode = GameMode(mode if mode is not None else self.settings.default_mode)
        selection = pool
        if mode.is_reverse:
            selection = _one_per_prompt(self._rng.sample(pool, len(pool)), adapter, mode)
        if limit and limit < len(selection):
            selection = self._rng.sample(selection, limit)

        session = SessionEngine(
            selection,
            mode,
            adapter,
            domain.value,
            sink=self.bus.publish,
            option_count=self.settings.option_count if option_count is None else option_count,
            rng=random.Random(self._rng.getrandbits(64)),
            distractor_pool=pool,
        )
        logger.debug(f"Built {session!r} from a pool of {len(pool)} items")
        return session


def _one_per_prompt(items: Sequence[Any], adapter: Any, mode: GameMode) -> list[Any]:
    """Keep the first item for each prompt so every question has one right answer."""
    seen: set[str] = set()
    unique = []
    for item in items:
        key = normalize_answer(adapter.prompt(item, mode))
        if key not in seen:
            seen.add(key)
            unique.append(item)
    return unique

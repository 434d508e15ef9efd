"""
Delivery: subscribers that turn session events into statistics and achievements.
"""

from .achievements import DEFAULT_ACHIEVEMENTS, Achievement, AchievementEvaluator
from .stats_store import InMemoryStatsStore, StatsStore
from .telemetry import StatsRecorder

__all__ = [
    "Achievement",
    "AchievementEvaluator",
    "DEFAULT_ACHIEVEMENTS",
    "InMemoryStatsStore",
    "StatsRecorder",
    "StatsStore",
]

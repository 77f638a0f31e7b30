"""Data access layer: repository interfaces and shared persistence models."""

from shared.dal.models import GameRecord, PlayerGameTypeStats, StatsBook
from shared.dal.stats_repository import StatsRepository

__all__ = [
    "GameRecord",
    "PlayerGameTypeStats",
    "StatsBook",
    "StatsRepository",
]

"""Repository implementations."""

from shared.db.stats_repository import InMemoryStatsRepository

__all__ = [
    "InMemoryStatsRepository",
]

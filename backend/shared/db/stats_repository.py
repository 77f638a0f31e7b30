"""In-memory statistics repository fed from and drained into persistence snapshots."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog

from shared.dal.stats_repository import StatsRepository

if TYPE_CHECKING:
    from collections.abc import Callable

    from shared.dal.models import GameRecord, StatsBook

logger = structlog.get_logger()


class InMemoryStatsRepository(StatsRepository):
    """In-memory implementation of StatsRepository.

    Holds the stats book and game log for the process. Durable storage is an
    external collaborator: it seeds the repository through ``load`` and reads
    it back through the snapshots the service emits. Writes are serialized
    with an asyncio.Lock so concurrent games never interleave a
    read-modify-write of the shared counters.
    """

    def __init__(self) -> None:
        self._stats: StatsBook = {}
        self._game_log: list[GameRecord] = []
        self._lock = asyncio.Lock()

    async def apply_game(
        self,
        update: Callable[[StatsBook], tuple[StatsBook, list[GameRecord]]],
    ) -> list[GameRecord]:
        """Run a stats update against the current book and append its records."""
        async with self._lock:
            new_stats, records = update(self._stats)
            self._stats = new_stats
            self._game_log.extend(records)
            logger.info("recorded game", records=len(records), log_size=len(self._game_log))
            return records

    async def get_stats(self) -> StatsBook:
        """Return a copy of the stats book; entries themselves are frozen."""
        return {game_type: dict(players) for game_type, players in self._stats.items()}

    async def get_game_log(
        self,
        *,
        player_id: str | None = None,
        game_type: str | None = None,
    ) -> list[GameRecord]:
        """Return log records in append order, optionally filtered."""
        return [
            record
            for record in self._game_log
            if (player_id is None or record.player_id == player_id)
            and (game_type is None or record.game_type == game_type)
        ]

    async def load(self, stats: StatsBook, game_log: list[GameRecord]) -> None:
        """Replace the repository contents with a persisted snapshot."""
        async with self._lock:
            self._stats = {game_type: dict(players) for game_type, players in stats.items()}
            self._game_log = list(game_log)

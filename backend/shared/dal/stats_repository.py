"""Abstract interface for statistics and game log persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from shared.dal.models import GameRecord, StatsBook


class StatsRepository(ABC):
    """Abstract interface for the statistics map and the append-only game log.

    ``apply_game`` is a read-modify-write over shared per-(game type, player)
    counters; implementations must serialize it.
    """

    @abstractmethod
    async def apply_game(
        self,
        update: Callable[[StatsBook], tuple[StatsBook, list[GameRecord]]],
    ) -> list[GameRecord]: ...

    @abstractmethod
    async def get_stats(self) -> StatsBook: ...

    @abstractmethod
    async def get_game_log(
        self,
        *,
        player_id: str | None = None,
        game_type: str | None = None,
    ) -> list[GameRecord]: ...

    @abstractmethod
    async def load(self, stats: StatsBook, game_log: list[GameRecord]) -> None: ...

"""Tests for InMemoryStatsRepository."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime

import pytest

from shared.dal.models import GameRecord, PlayerGameTypeStats, StatsBook
from shared.db import InMemoryStatsRepository


def _record(
    player_id: str = "alice",
    *,
    game_id: str = "g1",
    game_type: str = "free_game",
    result: str = "win",
) -> GameRecord:
    return GameRecord(
        game_id=game_id,
        player_id=player_id,
        game_type=game_type,
        score=50,
        turns=5,
        played_at=datetime(2025, 1, 15, 12, 0, 0, tzinfo=UTC),
        result=result,
    )


def _bump_games(player_id: str, record: GameRecord):
    """Build an update that increments games_played for one player and logs one record."""

    def update(stats: StatsBook) -> tuple[StatsBook, list[GameRecord]]:
        players = dict(stats.get("free_game", {}))
        current = players.get(player_id, PlayerGameTypeStats())
        players[player_id] = current.model_copy(update={"games_played": current.games_played + 1})
        return {**stats, "free_game": players}, [record]

    return update


@pytest.fixture
def repo() -> InMemoryStatsRepository:
    return InMemoryStatsRepository()


class TestApplyGame:
    async def test_starts_empty(self, repo: InMemoryStatsRepository) -> None:
        assert await repo.get_stats() == {}
        assert await repo.get_game_log() == []

    async def test_applies_update_and_appends_records(self, repo: InMemoryStatsRepository) -> None:
        record = _record()

        returned = await repo.apply_game(_bump_games("alice", record))

        assert returned == [record]
        stats = await repo.get_stats()
        assert stats["free_game"]["alice"].games_played == 1
        assert await repo.get_game_log() == [record]

    async def test_concurrent_updates_are_serialized(self, repo: InMemoryStatsRepository) -> None:
        await asyncio.gather(*(repo.apply_game(_bump_games("alice", _record(game_id=f"g{i}"))) for i in range(10)))

        stats = await repo.get_stats()
        assert stats["free_game"]["alice"].games_played == 10
        assert len(await repo.get_game_log()) == 10

    async def test_get_stats_returns_copy(self, repo: InMemoryStatsRepository) -> None:
        await repo.apply_game(_bump_games("alice", _record()))

        stats = await repo.get_stats()
        stats["free_game"]["bob"] = PlayerGameTypeStats()

        assert "bob" not in (await repo.get_stats())["free_game"]


class TestGameLog:
    async def test_filters_by_player_and_game_type(self, repo: InMemoryStatsRepository) -> None:
        alice = _record("alice")
        bob = _record("bob", result="loss")
        other = _record("alice", game_id="g2", game_type="three_cushion")
        await repo.load({}, [alice, bob, other])

        assert await repo.get_game_log(player_id="alice") == [alice, other]
        assert await repo.get_game_log(game_type="free_game") == [alice, bob]
        assert await repo.get_game_log(player_id="alice", game_type="three_cushion") == [other]

    async def test_load_replaces_contents(self, repo: InMemoryStatsRepository) -> None:
        await repo.apply_game(_bump_games("alice", _record()))
        seeded: StatsBook = {"three_cushion": {"carol": PlayerGameTypeStats(games_played=4)}}

        await repo.load(seeded, [])

        assert await repo.get_stats() == seeded
        assert await repo.get_game_log() == []

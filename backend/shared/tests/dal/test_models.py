"""Tests for DAL persistence models."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from shared.dal.models import GameRecord, PlayerGameTypeStats


class TestPlayerGameTypeStats:
    def test_defaults_to_zero(self):
        stats = PlayerGameTypeStats()
        assert stats.games_played == 0
        assert stats.highest_score_in_game == 0
        assert stats.zero_innings == 0

    def test_is_frozen(self):
        stats = PlayerGameTypeStats(games_played=1)
        with pytest.raises(ValidationError):
            stats.games_played = 2  # type: ignore[misc]


class TestGameRecord:
    def test_serialization_roundtrip(self):
        record = GameRecord(
            game_id="g1",
            player_id="alice",
            game_type="free_game",
            score=50,
            turns=7,
            played_at=datetime(2025, 1, 1, 20, 15, tzinfo=UTC),
            result="win",
            handicap_applied=5,
            zero_innings=2,
            clean_10s=1,
        )
        restored = GameRecord.model_validate_json(record.model_dump_json())
        assert restored == record

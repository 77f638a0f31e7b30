from datetime import UTC, datetime, timedelta

import pytest

from scoreboard.logic.enums import GameResult, LeaderboardSortKey, Trend
from scoreboard.stats.queries import (
    avg_score,
    hall_of_fame,
    head_to_head,
    leaderboard,
    player_average,
    player_form,
    recent_results,
    trend,
    win_rate,
)
from shared.dal.models import GameRecord, PlayerGameTypeStats

START = datetime(2025, 1, 1, 18, 0, tzinfo=UTC)


def _record(
    game_id: str,
    player_id: str,
    *,
    score: int,
    turns: int,
    result: str,
    day: int = 0,
    game_type: str = "free_game",
) -> GameRecord:
    return GameRecord(
        game_id=game_id,
        player_id=player_id,
        game_type=game_type,
        score=score,
        turns=turns,
        played_at=START + timedelta(days=day),
        result=result,
    )


def _duel(game_id: str, winner: str, loser: str, *, day: int) -> list[GameRecord]:
    return [
        _record(game_id, winner, score=50, turns=10, result="win", day=day),
        _record(game_id, loser, score=20, turns=10, result="loss", day=day),
    ]


class TestRates:
    def test_win_rate_and_avg_score(self):
        stats = PlayerGameTypeStats(games_played=4, wins=3, losses=1, total_turns=20, total_score=90)
        assert win_rate(stats) == 0.75
        assert avg_score(stats) == 4.5

    def test_rates_are_zero_without_games(self):
        assert win_rate(PlayerGameTypeStats()) == 0.0
        assert avg_score(PlayerGameTypeStats()) == 0.0


class TestLeaderboard:
    @pytest.fixture
    def stats(self):
        return {
            "free_game": {
                "alice": PlayerGameTypeStats(games_played=4, wins=2, losses=2, total_turns=40, total_score=200),
                "bob": PlayerGameTypeStats(games_played=2, wins=1, losses=1, total_turns=10, total_score=80),
                "carol": PlayerGameTypeStats(games_played=3, wins=3, total_turns=60, total_score=120),
            }
        }

    def test_sorted_by_wins(self, stats):
        assert [e.player_id for e in leaderboard(stats, "free_game")] == ["carol", "alice", "bob"]

    def test_sorted_by_average(self, stats):
        entries = leaderboard(stats, "free_game", LeaderboardSortKey.AVG_SCORE)
        assert [e.player_id for e in entries] == ["bob", "alice", "carol"]
        assert entries[0].avg_score == 8.0

    def test_sorted_by_win_rate(self, stats):
        entries = leaderboard(stats, "free_game", LeaderboardSortKey.WIN_RATE)
        assert [e.player_id for e in entries] == ["carol", "alice", "bob"]

    def test_unknown_game_type_is_empty(self, stats):
        assert leaderboard(stats, "three_cushion") == []


class TestPlayerAverage:
    def test_uses_most_recent_games_only(self):
        log = [_record(f"g{day}", "alice", score=10 * (day + 1), turns=10, result="win", day=day) for day in range(4)]
        # newest two games: 30 + 40 points over 20 turns
        assert player_average(log, "alice", "free_game", window=2) == 3.5

    def test_no_history_is_zero(self):
        assert player_average([], "alice", "free_game") == 0.0

    def test_ignores_other_game_types(self):
        log = [
            _record("g1", "alice", score=30, turns=10, result="win"),
            _record("g2", "alice", score=10, turns=10, result="win", game_type="three_cushion"),
        ]
        assert player_average(log, "alice", "free_game") == 3.0


class TestTrend:
    @pytest.mark.parametrize(
        ("overall", "moving", "expected"),
        [
            (4.0, 4.5, Trend.IMPROVING),
            (4.0, 4.1, Trend.STAGNATING),
            (4.0, 3.5, Trend.WORSENING),
            (0.0, 3.0, Trend.STAGNATING),
        ],
    )
    def test_classification(self, overall, moving, expected):
        assert trend(overall, moving) == expected


class TestPlayerForm:
    def test_returns_none_for_unknown_player(self):
        assert player_form({}, [], "alice", "free_game") is None

    def test_reports_averages_and_recent_results(self):
        log = [
            _record("g1", "alice", score=20, turns=10, result="loss", day=0),
            _record("g2", "alice", score=40, turns=10, result="win", day=1),
            _record("g3", "alice", score=60, turns=10, result="win", day=2),
        ]
        stats = {
            "free_game": {
                "alice": PlayerGameTypeStats(games_played=3, wins=2, losses=1, total_turns=30, total_score=120)
            }
        }

        form = player_form(stats, log, "alice", "free_game", window=2, results_count=2)

        assert form is not None
        assert form.overall_average == 4.0
        assert form.moving_average == 5.0
        assert form.trend == Trend.IMPROVING
        assert form.recent_results == [GameResult.WIN, GameResult.WIN]

    def test_recent_results_oldest_first(self):
        log = [
            _record("g2", "alice", score=1, turns=1, result="win", day=1),
            _record("g1", "alice", score=1, turns=1, result="loss", day=0),
        ]
        assert recent_results(log, "alice", "free_game") == [GameResult.LOSS, GameResult.WIN]


class TestHallOfFame:
    def test_empty_log(self):
        fame = hall_of_fame([], "free_game")
        assert fame.highest_score is None
        assert fame.longest_win_streak is None

    def test_records(self):
        log = [
            _record("g1", "alice", score=50, turns=20, result="win", day=0),
            _record("g1", "bob", score=45, turns=20, result="loss", day=0),
            _record("g2", "bob", score=55, turns=11, result="win", day=1),
            _record("g2", "alice", score=10, turns=10, result="loss", day=1),
            _record("g3", "bob", score=50, turns=8, result="win", day=2),
            _record("g3", "alice", score=30, turns=8, result="loss", day=2),
        ]

        fame = hall_of_fame(log, "free_game")

        assert fame.highest_average is not None
        assert fame.highest_average.player_id == "bob"
        assert fame.highest_average.value == 6.25
        assert fame.highest_score is not None
        assert (fame.highest_score.player_id, fame.highest_score.value) == ("bob", 55)
        assert fame.fewest_innings is not None
        assert (fame.fewest_innings.player_id, fame.fewest_innings.value) == ("bob", 8)
        assert fame.longest_win_streak is not None
        assert (fame.longest_win_streak.player_id, fame.longest_win_streak.value) == ("bob", 2)


class TestHeadToHead:
    def test_counts_wins_and_losses_per_opponent(self):
        log = [
            *_duel("g1", "alice", "bob", day=0),
            *_duel("g2", "bob", "alice", day=1),
            *_duel("g3", "alice", "bob", day=2),
            *_duel("g4", "alice", "carol", day=3),
        ]

        entries = head_to_head(log, "alice", "free_game")

        assert [(e.opponent_id, e.wins, e.losses) for e in entries] == [("bob", 2, 1), ("carol", 1, 0)]
        assert entries[0].games == 3

    def test_ignores_multi_player_games(self):
        log = [
            _record("g1", "alice", score=30, turns=5, result="win"),
            _record("g1", "bob", score=10, turns=5, result="loss"),
            _record("g1", "carol", score=10, turns=5, result="loss"),
        ]
        assert head_to_head(log, "alice", "free_game") == []

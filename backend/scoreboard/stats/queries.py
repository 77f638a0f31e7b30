"""
Statistics query surface: leaderboards, averages, form and records.

All functions are read-only over the stats book and the game log.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from scoreboard.logic.enums import GameResult, LeaderboardSortKey, Trend
from scoreboard.logic.settings import HANDICAP_HISTORY_WINDOW
from scoreboard.stats.types import HallOfFame, HeadToHeadEntry, LeaderboardEntry, PlayerForm, RecordHolder

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from shared.dal.models import GameRecord, PlayerGameTypeStats, StatsBook

DEFAULT_TREND_THRESHOLD = 0.05
DEFAULT_RECENT_RESULTS = 6
HEAD_TO_HEAD_PARTICIPANTS = 2


def win_rate(stats: PlayerGameTypeStats) -> float:
    return stats.wins / stats.games_played if stats.games_played > 0 else 0.0


def avg_score(stats: PlayerGameTypeStats) -> float:
    return stats.total_score / stats.total_turns if stats.total_turns > 0 else 0.0


def leaderboard(
    stats: StatsBook,
    game_type: str,
    sort_by: LeaderboardSortKey = LeaderboardSortKey.WINS,
) -> list[LeaderboardEntry]:
    """Return every player's stats for a game type, sorted descending by the chosen metric."""
    entries = [
        LeaderboardEntry(
            player_id=player_id,
            games_played=player_stats.games_played,
            wins=player_stats.wins,
            losses=player_stats.losses,
            total_turns=player_stats.total_turns,
            total_score=player_stats.total_score,
            highest_score_in_game=player_stats.highest_score_in_game,
            zero_innings=player_stats.zero_innings,
            win_rate=win_rate(player_stats),
            avg_score=avg_score(player_stats),
        )
        for player_id, player_stats in stats.get(game_type, {}).items()
    ]
    return sorted(entries, key=lambda entry: getattr(entry, sort_by.value), reverse=True)


def _player_games(game_log: Sequence[GameRecord], player_id: str, game_type: str) -> list[GameRecord]:
    """Return a player's records for a game type, oldest first."""
    games = [r for r in game_log if r.player_id == player_id and r.game_type == game_type]
    return sorted(games, key=lambda r: r.played_at)


def player_average(
    game_log: Sequence[GameRecord],
    player_id: str,
    game_type: str,
    window: int = HANDICAP_HISTORY_WINDOW,
) -> float:
    """
    Points per turn over a player's most recent games of one game type.

    Uses the newest ``window`` records (fewer if the player has fewer games).
    Returns 0 when there are no games or no turns.
    """
    recent = _player_games(game_log, player_id, game_type)[-window:]
    total_turns = sum(r.turns for r in recent)
    if total_turns == 0:
        return 0.0
    return sum(r.score for r in recent) / total_turns


def trend(overall: float, moving: float, threshold: float = DEFAULT_TREND_THRESHOLD) -> Trend:
    """Classify recent form against the overall average with a relative tolerance band."""
    if overall <= 0 or moving <= 0:
        return Trend.STAGNATING
    if moving > overall * (1 + threshold):
        return Trend.IMPROVING
    if moving < overall * (1 - threshold):
        return Trend.WORSENING
    return Trend.STAGNATING


def recent_results(
    game_log: Sequence[GameRecord],
    player_id: str,
    game_type: str,
    count: int = DEFAULT_RECENT_RESULTS,
) -> list[GameResult]:
    """Return the outcomes of a player's last ``count`` games, oldest first."""
    return [GameResult(r.result) for r in _player_games(game_log, player_id, game_type)[-count:]]


def player_form(
    stats: StatsBook,
    game_log: Sequence[GameRecord],
    player_id: str,
    game_type: str,
    *,
    window: int = HANDICAP_HISTORY_WINDOW,
    threshold: float = DEFAULT_TREND_THRESHOLD,
    results_count: int = DEFAULT_RECENT_RESULTS,
) -> PlayerForm | None:
    """Return a player's overall and recent form, or None if they never played this game type."""
    player_stats = stats.get(game_type, {}).get(player_id)
    if player_stats is None:
        return None
    overall = avg_score(player_stats)
    moving = player_average(game_log, player_id, game_type, window)
    return PlayerForm(
        player_id=player_id,
        game_type=game_type,
        overall_average=overall,
        moving_average=moving,
        trend=trend(overall, moving, threshold),
        recent_results=recent_results(game_log, player_id, game_type, results_count),
    )


def _best(
    records: Sequence[GameRecord],
    extract: Callable[[GameRecord], float | None],
    *,
    lowest: bool = False,
) -> RecordHolder | None:
    """Return the first record with the best extracted value; None values are skipped."""
    best: RecordHolder | None = None
    for record in records:
        value = extract(record)
        if value is None:
            continue
        if best is None or (value < best.value if lowest else value > best.value):
            best = RecordHolder(player_id=record.player_id, value=value)
    return best


def _longest_win_streak(records: Sequence[GameRecord]) -> RecordHolder | None:
    by_player: dict[str, list[GameRecord]] = {}
    for record in sorted(records, key=lambda r: r.played_at):
        by_player.setdefault(record.player_id, []).append(record)

    best: RecordHolder | None = None
    for player_id, games in by_player.items():
        longest = current = 0
        for game in games:
            current = current + 1 if game.result == GameResult.WIN.value else 0
            longest = max(longest, current)
        if best is None or longest > best.value:
            best = RecordHolder(player_id=player_id, value=longest)
    return best


def hall_of_fame(game_log: Sequence[GameRecord], game_type: str) -> HallOfFame:
    """Compute all-time records for a game type from the game log."""
    records = [r for r in game_log if r.game_type == game_type]
    if not records:
        return HallOfFame()
    return HallOfFame(
        highest_average=_best(records, lambda r: r.score / r.turns if r.turns > 0 else 0.0),
        highest_score=_best(records, lambda r: float(r.score)),
        fewest_innings=_best(
            records,
            lambda r: float(r.turns) if r.result == GameResult.WIN.value else None,
            lowest=True,
        ),
        longest_win_streak=_longest_win_streak(records),
    )


def head_to_head(
    game_log: Sequence[GameRecord],
    player_id: str,
    game_type: str,
) -> list[HeadToHeadEntry]:
    """
    Return a player's win/loss record per opponent across two-player games.

    Entries are sorted by number of games played against that opponent, most first.
    """
    games: dict[str, list[GameRecord]] = {}
    for record in game_log:
        games.setdefault(record.game_id, []).append(record)

    opponents: dict[str, HeadToHeadEntry] = {}
    for records in games.values():
        if len(records) != HEAD_TO_HEAD_PARTICIPANTS or records[0].game_type != game_type:
            continue
        own = next((r for r in records if r.player_id == player_id), None)
        if own is None:
            continue
        opponent = next(r for r in records if r.player_id != player_id)
        entry = opponents.setdefault(opponent.player_id, HeadToHeadEntry(opponent_id=opponent.player_id))
        if own.result == GameResult.WIN.value:
            entry.wins += 1
        else:
            entry.losses += 1

    return sorted(opponents.values(), key=lambda entry: entry.games, reverse=True)

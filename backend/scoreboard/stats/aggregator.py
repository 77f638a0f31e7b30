"""
Post-game statistics aggregation.

Turns a finished session's final ledger and committed snapshots into updated
per-player-per-game-type counters plus one immutable log record per
participant. Never touches the session itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from scoreboard.logic.enums import GameResult
from scoreboard.logic.game import count_turns_per_player
from shared.dal.models import GameRecord, PlayerGameTypeStats, StatsBook

if TYPE_CHECKING:
    from datetime import datetime

    from scoreboard.logic.ledger import ScoreLedger
    from scoreboard.logic.settings import GameConfiguration
    from scoreboard.logic.state import TurnSnapshot, TurnStats
    from scoreboard.logic.types import GameOutcome


def _accumulate(
    current: PlayerGameTypeStats,
    *,
    score: int,
    turns: int,
    is_winner: bool,
    zero_innings: int,
) -> PlayerGameTypeStats:
    return PlayerGameTypeStats(
        games_played=current.games_played + 1,
        wins=current.wins + (1 if is_winner else 0),
        losses=current.losses + (0 if is_winner else 1),
        total_turns=current.total_turns + turns,
        total_score=current.total_score + score,
        highest_score_in_game=max(current.highest_score_in_game, score),
        zero_innings=current.zero_innings + zero_innings,
    )


def finalize(
    config: GameConfiguration,
    final_ledger: ScoreLedger,
    winner_ids: tuple[str, ...] | list[str],
    turn_snapshots: tuple[TurnSnapshot, ...] | list[TurnSnapshot],
    winner_awarded_final_turn: bool,
    *,
    game_id: str,
    played_at: datetime,
    stats: StatsBook,
    turn_stats: dict[str, TurnStats] | None = None,
) -> tuple[StatsBook, list[GameRecord]]:
    """
    Fold a finished game into the stats book.

    Steps:
    1. Count committed turns per participant from the snapshots
    2. Add the sole winner's game-ending turn when ``winner_awarded_final_turn``
    3. Update every participant's counters for the game type
    4. Build one GameRecord per participant

    Returns (new_stats, records). The input book is not modified.
    """
    turns_per_player = count_turns_per_player(
        config,
        turn_snapshots,
        winner_ids,
        winner_awarded_final_turn=winner_awarded_final_turn,
    )
    winners = set(winner_ids)
    per_player_turn_stats = turn_stats or {}

    game_type_stats = dict(stats.get(config.game_type, {}))
    records: list[GameRecord] = []
    for pid in config.player_ids:
        score = final_ledger.score_of(pid)
        turns = turns_per_player[pid]
        is_winner = pid in winners
        player_turn_stats = per_player_turn_stats.get(pid)
        zero_innings = player_turn_stats.zero_innings if player_turn_stats else 0

        game_type_stats[pid] = _accumulate(
            game_type_stats.get(pid, PlayerGameTypeStats()),
            score=score,
            turns=turns,
            is_winner=is_winner,
            zero_innings=zero_innings,
        )
        records.append(
            GameRecord(
                game_id=game_id,
                player_id=pid,
                game_type=config.game_type,
                score=score,
                turns=turns,
                played_at=played_at,
                result=GameResult.WIN.value if is_winner else GameResult.LOSS.value,
                handicap_applied=config.handicap_for(pid),
                zero_innings=zero_innings,
                clean_10s=player_turn_stats.clean_10s if player_turn_stats else 0,
                clean_20s=player_turn_stats.clean_20s if player_turn_stats else 0,
            )
        )

    return {**stats, config.game_type: game_type_stats}, records


def finalize_outcome(
    outcome: GameOutcome,
    *,
    game_id: str,
    played_at: datetime,
    stats: StatsBook,
) -> tuple[StatsBook, list[GameRecord]]:
    """Fold a GameOutcome handed off by a terminal session into the stats book."""
    return finalize(
        outcome.config,
        outcome.final_ledger,
        outcome.winner_ids,
        outcome.turn_snapshots,
        outcome.winner_awarded_final_turn,
        game_id=game_id,
        played_at=played_at,
        stats=stats,
        turn_stats=outcome.turn_stats,
    )

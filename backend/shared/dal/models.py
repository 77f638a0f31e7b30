"""Persistence models for the data access layer."""

from datetime import datetime

from pydantic import BaseModel


class PlayerGameTypeStats(BaseModel, frozen=True):
    """Cumulative statistics of one player for one game type. Counters only grow."""

    games_played: int = 0
    wins: int = 0
    losses: int = 0
    total_turns: int = 0
    total_score: int = 0
    highest_score_in_game: int = 0
    zero_innings: int = 0


class GameRecord(BaseModel, frozen=True):
    """One participant's line in the append-only game log."""

    game_id: str
    player_id: str
    game_type: str
    score: int  # final ledger score, handicap included
    turns: int
    played_at: datetime
    result: str  # "win" | "loss"
    handicap_applied: int = 0
    zero_innings: int = 0
    clean_10s: int = 0
    clean_20s: int = 0


# game type -> player id -> stats
StatsBook = dict[str, dict[str, PlayerGameTypeStats]]

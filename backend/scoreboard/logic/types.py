"""
Pydantic models for game logic data structures.

Contains typed models for the terminal hand-off to statistics, handicap
offers and post-game summaries that cross component boundaries.
"""

from pydantic import BaseModel, ConfigDict, Field

from scoreboard.logic.ledger import ScoreLedger
from scoreboard.logic.settings import GameConfiguration
from scoreboard.logic.state import TurnSnapshot, TurnStats


class HandicapOffer(BaseModel):
    """Suggested start bonus for the weaker of two players."""

    model_config = ConfigDict(frozen=True)

    player_id: str
    points: int


class GameOutcome(BaseModel):
    """Everything the statistics aggregator needs from a finished session."""

    model_config = ConfigDict(frozen=True)

    config: GameConfiguration
    final_ledger: ScoreLedger
    winner_ids: tuple[str, ...]
    turn_snapshots: tuple[TurnSnapshot, ...]
    winner_awarded_final_turn: bool
    turn_stats: dict[str, TurnStats] = Field(default_factory=dict)


class PlayerResult(BaseModel):
    """Per-player line of a post-game summary."""

    player_id: str
    score: int
    turns: int
    handicap: int = 0
    average: float  # points per turn, handicap excluded
    is_winner: bool
    turn_stats: TurnStats = Field(default_factory=TurnStats)


class TeamResult(BaseModel):
    """Combined score of one team in team mode."""

    team: int
    player_ids: list[str]
    score: int
    is_winner: bool


class GameSummary(BaseModel):
    """Post-game summary returned when a session reaches its terminal state."""

    game_id: str
    config: GameConfiguration
    final_scores: dict[str, int]
    winner_ids: list[str]
    turns_per_player: dict[str, int]
    players: list[PlayerResult]
    teams: list[TeamResult] = Field(default_factory=list)
    history: list[TurnSnapshot] = Field(default_factory=list)

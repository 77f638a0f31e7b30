"""
Pydantic models returned by the statistics query surface.
"""

from pydantic import BaseModel

from scoreboard.logic.enums import GameResult, Trend


class LeaderboardEntry(BaseModel):
    """Cumulative stats of one player for a game type plus derived rates."""

    player_id: str
    games_played: int
    wins: int
    losses: int
    total_turns: int
    total_score: int
    highest_score_in_game: int
    zero_innings: int
    win_rate: float  # wins / games_played, 0 when no games
    avg_score: float  # total_score / total_turns, 0 when no turns


class RecordHolder(BaseModel):
    """A single all-time record and the player holding it."""

    player_id: str
    value: float


class HallOfFame(BaseModel):
    """All-time records for a game type, computed from the game log."""

    highest_average: RecordHolder | None = None
    highest_score: RecordHolder | None = None
    fewest_innings: RecordHolder | None = None  # fewest turns in a won game
    longest_win_streak: RecordHolder | None = None


class HeadToHeadEntry(BaseModel):
    """A player's record against one opponent in two-player games."""

    opponent_id: str
    wins: int = 0
    losses: int = 0

    @property
    def games(self) -> int:
        return self.wins + self.losses


class PlayerForm(BaseModel):
    """Overall and recent performance of a player for a game type."""

    player_id: str
    game_type: str
    overall_average: float
    moving_average: float
    trend: Trend
    recent_results: list[GameResult]

"""
String enum definitions for scoreboard game concepts.
"""

from enum import Enum


class GameMode(str, Enum):
    """How participants are grouped for a game."""

    ROUND_ROBIN = "round-robin"
    TEAM = "team"


class EndCondition(str, Enum):
    """When a game ends once a participant reaches the target score."""

    SUDDEN_DEATH = "sudden-death"
    EQUAL_INNINGS = "equal-innings"


class SessionPhase(str, Enum):
    """Phase of a game session."""

    ACTIVE = "active"
    TERMINAL = "terminal"


class ScoreActionType(str, Enum):
    """Source of a single point addition within a turn."""

    STANDARD = "standard"
    CLEAN_10 = "clean_10"
    CLEAN_20 = "clean_20"
    NUMPAD = "numpad"


class GameResult(str, Enum):
    """Outcome of a game for a single participant."""

    WIN = "win"
    LOSS = "loss"


class LeaderboardSortKey(str, Enum):
    """Metric used to order leaderboard entries (descending)."""

    WINS = "wins"
    WIN_RATE = "win_rate"
    AVG_SCORE = "avg_score"


class Trend(str, Enum):
    """Direction of a player's recent form relative to their overall average."""

    IMPROVING = "improving"
    STAGNATING = "stagnating"
    WORSENING = "worsening"

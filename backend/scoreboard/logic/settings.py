"""Game configuration for a scoreboard session - all rules chosen at game start."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from scoreboard.logic.enums import EndCondition, GameMode
from scoreboard.logic.exceptions import InvalidConfigurationError

MIN_PARTICIPANTS = 2
MAX_PARTICIPANTS = 4
TEAM_PARTICIPANTS = 4
HANDICAP_HISTORY_WINDOW = 10

# game type tags used by the setup screen and their customary target scores
FOUR_BALL = "four_ball"
FREE_GAME = "free_game"
ONE_CUSHION = "one_cushion"
THREE_CUSHION = "three_cushion"

DEFAULT_TARGET_SCORES: dict[str, int] = {
    FOUR_BALL: 200,
    FREE_GAME: 50,
    ONE_CUSHION: 30,
    THREE_CUSHION: 15,
}


class HandicapGrant(BaseModel):
    """One-time score bonus granted to a participant at game start."""

    model_config = ConfigDict(frozen=True)

    player_id: str
    points: int


class GameConfiguration(BaseModel):
    """
    Rules for a single game, fixed for the lifetime of its session.

    ``player_ids`` is the seat order; seat 0 plays first.
    """

    model_config = ConfigDict(frozen=True)

    game_type: str
    mode: GameMode = GameMode.ROUND_ROBIN
    player_ids: tuple[str, ...]
    target_score: int
    end_condition: EndCondition = EndCondition.SUDDEN_DEATH
    allow_overshooting: bool = False
    handicap: HandicapGrant | None = None

    @property
    def participant_count(self) -> int:
        return len(self.player_ids)

    def handicap_for(self, player_id: str) -> int:
        """Return the handicap points granted to a player (0 if none)."""
        if self.handicap is not None and self.handicap.player_id == player_id:
            return self.handicap.points
        return 0


def default_target_score(game_type: str) -> int | None:
    """Return the customary target score for a known game type."""
    return DEFAULT_TARGET_SCORES.get(game_type)


def validate_configuration(config: GameConfiguration) -> None:
    """Validate that a configuration describes a playable game.

    Raises InvalidConfigurationError listing every violated rule.
    """
    errors: list[str] = []
    count = config.participant_count

    if not config.game_type:
        errors.append("game_type must not be empty")

    if not (MIN_PARTICIPANTS <= count <= MAX_PARTICIPANTS):
        errors.append(f"player_ids must hold {MIN_PARTICIPANTS}-{MAX_PARTICIPANTS} participants, got {count}")

    if len(set(config.player_ids)) != count:
        errors.append("player_ids must be unique")

    if config.mode == GameMode.TEAM and count != TEAM_PARTICIPANTS:
        errors.append(f"team mode requires exactly {TEAM_PARTICIPANTS} participants, got {count}")

    if config.target_score <= 0:
        errors.append(f"target_score must be positive, got {config.target_score}")

    if config.handicap is not None:
        if config.handicap.player_id not in config.player_ids:
            errors.append(f"handicap player {config.handicap.player_id!r} is not a participant")
        if config.handicap.points <= 0:
            errors.append(f"handicap points must be positive, got {config.handicap.points}")
        elif config.handicap.points >= config.target_score > 0:
            errors.append(
                f"handicap points must be below target_score {config.target_score}, got {config.handicap.points}"
            )

    if errors:
        raise InvalidConfigurationError("; ".join(errors))


def team_of(config: GameConfiguration, player_id: str) -> int:
    """Return the team number (1 or 2) of a participant; teams alternate by seat."""
    seat = config.player_ids.index(player_id)
    return 1 if seat % 2 == 0 else 2

"""
Game session state models for the scoreboard.

All models are frozen Pydantic models. Transitions in ``scoreboard.logic.game``
never mutate a state; they build the next one with ``model_copy``.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from scoreboard.logic.enums import SessionPhase
from scoreboard.logic.ledger import ScoreLedger
from scoreboard.logic.settings import GameConfiguration


class TurnStats(BaseModel):
    """Per-player counters of notable turns within one game."""

    model_config = ConfigDict(frozen=True)

    clean_10s: int = 0
    clean_20s: int = 0
    zero_innings: int = 0


class PlayoutNotStarted(BaseModel):
    """No participant has reached the target yet."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["not_started"] = "not_started"


class PlayoutInProgress(BaseModel):
    """
    A participant has reached the target under equal-innings.

    ``start_index`` is the seat that first finished; the playout round is
    complete once play reaches or passes it again.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["in_progress"] = "in_progress"
    start_index: int


PlayoutState = Annotated[PlayoutNotStarted | PlayoutInProgress, Field(discriminator="kind")]


class TurnSnapshot(BaseModel):
    """Pre-turn state pushed on every commit, replayed verbatim by undo."""

    model_config = ConfigDict(frozen=True)

    ledger: ScoreLedger
    current_player_index: int
    turn_stats: dict[str, TurnStats] = Field(default_factory=dict)


class GameSessionState(BaseModel):
    """
    Represents the full state of one game session.
    """

    model_config = ConfigDict(frozen=True)

    config: GameConfiguration
    ledger: ScoreLedger
    current_player_index: int = 0
    finished_player_ids: tuple[str, ...] = ()  # equal-innings only, in finishing order
    playout: PlayoutState = Field(default_factory=PlayoutNotStarted)
    history: tuple[TurnSnapshot, ...] = ()
    turn_stats: dict[str, TurnStats] = Field(default_factory=dict)
    phase: SessionPhase = SessionPhase.ACTIVE
    winner_ids: tuple[str, ...] = ()  # set only once terminal

    @property
    def current_player_id(self) -> str:
        return self.config.player_ids[self.current_player_index]

    @property
    def is_terminal(self) -> bool:
        return self.phase == SessionPhase.TERMINAL

    def stats_for(self, player_id: str) -> TurnStats:
        return self.turn_stats.get(player_id, TurnStats())

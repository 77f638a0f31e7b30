"""Persistence snapshot exchanged with the external key-value store."""

from __future__ import annotations

from pydantic import BaseModel, Field

from scoreboard.logic.enums import SessionPhase
from scoreboard.logic.ledger import ScoreLedger
from scoreboard.logic.settings import GameConfiguration
from scoreboard.logic.state import (
    GameSessionState,
    PlayoutNotStarted,
    PlayoutState,
    TurnSnapshot,
    TurnStats,
)
from shared.dal.models import GameRecord, PlayerGameTypeStats


class PersistenceSnapshot(BaseModel):
    """
    Everything the store needs to resume a game and its statistics.

    Emitted after every mutating operation. Integers round-trip exactly
    through ``model_dump_json`` / ``model_validate_json``.
    """

    game_id: str
    game_config: GameConfiguration
    ledger: ScoreLedger
    current_player_index: int
    finished_player_ids: list[str] = Field(default_factory=list)
    playout: PlayoutState = Field(default_factory=PlayoutNotStarted)
    turn_snapshot_stack: list[TurnSnapshot] = Field(default_factory=list)
    turn_stats: dict[str, TurnStats] = Field(default_factory=dict)
    phase: SessionPhase = SessionPhase.ACTIVE
    winner_ids: list[str] = Field(default_factory=list)
    stats: dict[str, dict[str, PlayerGameTypeStats]] = Field(default_factory=dict)
    game_log: list[GameRecord] = Field(default_factory=list)

    @classmethod
    def capture(
        cls,
        game_id: str,
        state: GameSessionState,
        stats: dict[str, dict[str, PlayerGameTypeStats]],
        game_log: list[GameRecord],
    ) -> PersistenceSnapshot:
        return cls(
            game_id=game_id,
            game_config=state.config,
            ledger=state.ledger,
            current_player_index=state.current_player_index,
            finished_player_ids=list(state.finished_player_ids),
            playout=state.playout,
            turn_snapshot_stack=list(state.history),
            turn_stats=dict(state.turn_stats),
            phase=state.phase,
            winner_ids=list(state.winner_ids),
            stats=stats,
            game_log=game_log,
        )

    def to_session_state(self) -> GameSessionState:
        """Rebuild the frozen session state held in this snapshot."""
        return GameSessionState(
            config=self.game_config,
            ledger=self.ledger,
            current_player_index=self.current_player_index,
            finished_player_ids=tuple(self.finished_player_ids),
            playout=self.playout,
            history=tuple(self.turn_snapshot_stack),
            turn_stats=dict(self.turn_stats),
            phase=self.phase,
            winner_ids=tuple(self.winner_ids),
        )

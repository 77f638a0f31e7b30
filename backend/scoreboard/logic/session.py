"""Owner of a single game session: frozen state plus the live turn accumulator."""

from __future__ import annotations

from typing import TYPE_CHECKING

from scoreboard.logic.enums import GameMode, ScoreActionType
from scoreboard.logic.exceptions import SessionPreconditionError
from scoreboard.logic.game import commit_turn, init_session, undo_last_turn
from scoreboard.logic.settings import team_of
from scoreboard.logic.turn import TurnAccumulator, TurnAction

if TYPE_CHECKING:
    from scoreboard.logic.settings import GameConfiguration
    from scoreboard.logic.state import GameSessionState
    from scoreboard.logic.types import GameOutcome


class GameSession:
    """
    Game session state machine (Active -> Terminal).

    Holds the current GameSessionState by exclusive ownership: each mutation
    replaces the reference with the next frozen state produced by
    ``scoreboard.logic.game``. The turn accumulator is reset on every commit
    and every whole-turn undo.
    """

    def __init__(self, state: GameSessionState) -> None:
        self._state = state
        self._turn = TurnAccumulator()

    @classmethod
    def start(cls, config: GameConfiguration) -> GameSession:
        return cls(init_session(config))

    @classmethod
    def from_state(cls, state: GameSessionState) -> GameSession:
        """Resume a session from a persisted state; the live turn starts empty."""
        return cls(state)

    @property
    def state(self) -> GameSessionState:
        return self._state

    @property
    def turn(self) -> TurnAccumulator:
        return self._turn

    @property
    def can_undo_turn(self) -> bool:
        return bool(self._state.history)

    @property
    def points_to_target(self) -> int:
        """Points the active player still needs, counting the uncommitted turn.

        In team mode the active player's team total is measured instead.
        """
        state = self._state
        config = state.config
        player_id = state.current_player_id
        if config.mode == GameMode.TEAM:
            team = team_of(config, player_id)
            committed = state.ledger.total_for([pid for pid in config.player_ids if team_of(config, pid) == team])
        else:
            committed = state.ledger.score_of(player_id)
        return config.target_score - (committed + self._turn.total)

    def _ensure_active(self, operation: str) -> None:
        if self._state.is_terminal:
            raise SessionPreconditionError(operation=operation, reason="session has already ended")

    def add_points(self, delta: int, action_type: ScoreActionType = ScoreActionType.STANDARD) -> None:
        self._ensure_active("add_points")
        self._turn.add_points(delta, action_type)

    def undo_last_action(self) -> TurnAction | None:
        self._ensure_active("undo_last_action")
        return self._turn.undo_last_action()

    def commit_turn(self) -> GameOutcome | None:
        """
        End the active player's turn with the accumulated total.

        Returns the GameOutcome when the commit ends the game, None otherwise.
        """
        turn = self._turn
        self._state, outcome = commit_turn(
            self._state,
            turn.total,
            clean_10s=turn.count(ScoreActionType.CLEAN_10),
            clean_20s=turn.count(ScoreActionType.CLEAN_20),
        )
        turn.reset()
        return outcome

    def undo_last_turn(self) -> None:
        self._state = undo_last_turn(self._state)
        self._turn.reset()

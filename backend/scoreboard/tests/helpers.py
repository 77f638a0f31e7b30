from __future__ import annotations

from typing import TYPE_CHECKING

from scoreboard.logic.enums import EndCondition, GameMode
from scoreboard.logic.game import commit_turn, init_session
from scoreboard.logic.settings import FREE_GAME, GameConfiguration, HandicapGrant

if TYPE_CHECKING:
    from collections.abc import Sequence

    from scoreboard.logic.state import GameSessionState
    from scoreboard.logic.types import GameOutcome


# ============================================================================
# Test State Builder Helpers
# ============================================================================


def make_config(
    player_ids: Sequence[str] = ("alice", "bob"),
    *,
    target_score: int = 50,
    game_type: str = FREE_GAME,
    mode: GameMode = GameMode.ROUND_ROBIN,
    end_condition: EndCondition = EndCondition.SUDDEN_DEATH,
    allow_overshooting: bool = False,
    handicap: tuple[str, int] | None = None,
) -> GameConfiguration:
    return GameConfiguration(
        game_type=game_type,
        mode=mode,
        player_ids=tuple(player_ids),
        target_score=target_score,
        end_condition=end_condition,
        allow_overshooting=allow_overshooting,
        handicap=HandicapGrant(player_id=handicap[0], points=handicap[1]) if handicap else None,
    )


def play_turns(
    state: GameSessionState,
    totals: Sequence[int],
) -> tuple[GameSessionState, GameOutcome | None]:
    """Commit one turn per total in seat order; stops early if the game ends."""
    outcome = None
    for total in totals:
        state, outcome = commit_turn(state, total)
        if outcome is not None:
            break
    return state, outcome


def start(config: GameConfiguration | None = None) -> GameSessionState:
    return init_session(config or make_config())

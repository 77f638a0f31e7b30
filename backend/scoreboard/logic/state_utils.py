"""
Immutable state update utilities using Pydantic model_copy.

Provides helper functions for common immutable updates on the frozen
session models. These functions never mutate the input state - they
always return new state objects with the requested changes applied.
"""

from scoreboard.logic.state import GameSessionState, TurnSnapshot, TurnStats


def take_snapshot(state: GameSessionState) -> TurnSnapshot:
    """
    Capture the pre-turn ledger, current player and turn stats.

    Args:
        state: Current session state

    Returns:
        TurnSnapshot holding references to the (immutable) pre-turn values

    """
    return TurnSnapshot(
        ledger=state.ledger,
        current_player_index=state.current_player_index,
        turn_stats=dict(state.turn_stats),
    )


def push_snapshot(state: GameSessionState) -> GameSessionState:
    """
    Return new state with the current pre-turn snapshot pushed onto history.

    Args:
        state: Current session state

    Returns:
        New GameSessionState with one more history entry

    """
    return state.model_copy(update={"history": (*state.history, take_snapshot(state))})


def update_score(
    state: GameSessionState,
    player_id: str,
    score: int,
) -> GameSessionState:
    """
    Return new state with one participant's committed score replaced.

    Args:
        state: Current session state
        player_id: Participant whose score changes
        score: New committed score

    Returns:
        New GameSessionState with an updated ledger

    """
    return state.model_copy(update={"ledger": state.ledger.with_score(player_id, score)})


def add_finished_player(
    state: GameSessionState,
    player_id: str,
) -> GameSessionState:
    """
    Return new state with a participant marked as finished.

    Idempotent: an already finished participant leaves the state unchanged.
    """
    if player_id in state.finished_player_ids:
        return state
    return state.model_copy(update={"finished_player_ids": (*state.finished_player_ids, player_id)})


def record_turn_stats(
    state: GameSessionState,
    player_id: str,
    *,
    turn_total: int,
    clean_10s: int = 0,
    clean_20s: int = 0,
) -> GameSessionState:
    """
    Return new state with the committed turn counted in the player's turn stats.

    A turn with a total of zero counts as a zero inning.
    """
    current = state.stats_for(player_id)
    updated = TurnStats(
        clean_10s=current.clean_10s + clean_10s,
        clean_20s=current.clean_20s + clean_20s,
        zero_innings=current.zero_innings + (1 if turn_total == 0 else 0),
    )
    return state.model_copy(update={"turn_stats": {**state.turn_stats, player_id: updated}})


def next_unfinished_index(
    player_ids: tuple[str, ...],
    current_index: int,
    finished_player_ids: tuple[str, ...],
) -> int:
    """
    Scan forward from the seat after ``current_index`` for a player still in play.

    The scan wraps around and may land back on ``current_index`` itself.
    When every participant is finished the index is returned unchanged.
    """
    count = len(player_ids)
    finished = set(finished_player_ids)
    for offset in range(1, count + 1):
        index = (current_index + offset) % count
        if player_ids[index] not in finished:
            return index
    return current_index


def restore_snapshot(
    state: GameSessionState,
    snapshot: TurnSnapshot,
    history: tuple[TurnSnapshot, ...],
) -> GameSessionState:
    """
    Return new state with ledger, current player and turn stats taken verbatim from a snapshot.

    Args:
        state: Current session state
        snapshot: Snapshot to roll back to
        history: Remaining history after popping the snapshot

    Returns:
        New GameSessionState rolled back to the snapshot

    """
    return state.model_copy(
        update={
            "ledger": snapshot.ledger,
            "current_player_index": snapshot.current_player_index,
            "turn_stats": dict(snapshot.turn_stats),
            "history": history,
        }
    )

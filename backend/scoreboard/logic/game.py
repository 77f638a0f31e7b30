"""
Game session transitions for the scoreboard.

Every function here is pure: it takes a frozen GameSessionState and returns
the next one. Turn accumulation lives in ``scoreboard.logic.turn`` and the
owning, mutable facade in ``scoreboard.logic.session``.
"""

from scoreboard.logic.enums import EndCondition, GameMode, SessionPhase
from scoreboard.logic.exceptions import SessionPreconditionError
from scoreboard.logic.ledger import ScoreLedger
from scoreboard.logic.settings import GameConfiguration, team_of, validate_configuration
from scoreboard.logic.state import (
    GameSessionState,
    PlayoutInProgress,
    PlayoutNotStarted,
    TurnSnapshot,
    TurnStats,
)
from scoreboard.logic.state_utils import (
    add_finished_player,
    next_unfinished_index,
    push_snapshot,
    record_turn_stats,
    restore_snapshot,
    update_score,
)
from scoreboard.logic.types import GameOutcome, GameSummary, PlayerResult, TeamResult


def init_session(config: GameConfiguration) -> GameSessionState:
    """
    Initialize a new session for a validated configuration.

    Seat 0 starts. Every participant starts at 0 plus any handicap bonus.
    """
    validate_configuration(config)
    return GameSessionState(
        config=config,
        ledger=ScoreLedger.initial(config),
        current_player_index=0,
    )


def _ensure_active(state: GameSessionState, operation: str) -> None:
    if state.is_terminal:
        raise SessionPreconditionError(operation=operation, reason="session has already ended")


def _round_elapsed(start_index: int, current_index: int, next_index: int, count: int) -> bool:
    """Check whether advancing from current to next reaches or passes the start seat."""
    index = current_index
    while True:
        index = (index + 1) % count
        if index == start_index:
            return True
        if index == next_index:
            return False


def _playout_complete(state: GameSessionState, next_index: int) -> bool:
    """
    Check the equal-innings termination rule after a commit.

    Terminal when play has come back around to the seat that finished first
    (finished seats are skipped, so passing over it counts), or when at most
    one participant is still unfinished.
    """
    if not isinstance(state.playout, PlayoutInProgress):
        return False
    count = state.config.participant_count
    finished = len(state.finished_player_ids)
    round_elapsed = _round_elapsed(state.playout.start_index, state.current_player_index, next_index, count)
    return round_elapsed or finished >= count - 1 or finished == count


def commit_turn(
    state: GameSessionState,
    turn_total: int,
    *,
    clean_10s: int = 0,
    clean_20s: int = 0,
) -> tuple[GameSessionState, GameOutcome | None]:
    """
    Commit the active player's turn.

    Pushes a pre-turn snapshot, writes the new score (capped at the target
    under equal-innings unless overshooting is allowed), then either ends the
    game or advances to the next player still in play.

    Returns (new_state, outcome). ``outcome`` is None while the game goes on.
    Under sudden-death the outcome's snapshots exclude the game-ending turn,
    which is counted through ``winner_awarded_final_turn`` instead.
    """
    _ensure_active(state, "commit_turn")
    config = state.config
    player_id = state.current_player_id
    equal_innings = config.end_condition == EndCondition.EQUAL_INNINGS

    previous_history = state.history
    new_state = push_snapshot(state)

    new_score = new_state.ledger.score_of(player_id) + turn_total
    has_reached_target = new_score >= config.target_score
    if equal_innings and has_reached_target and not config.allow_overshooting:
        new_score = config.target_score

    new_state = update_score(new_state, player_id, new_score)
    new_state = record_turn_stats(
        new_state,
        player_id,
        turn_total=turn_total,
        clean_10s=clean_10s,
        clean_20s=clean_20s,
    )

    if not equal_innings and has_reached_target:
        new_state = new_state.model_copy(update={"phase": SessionPhase.TERMINAL, "winner_ids": (player_id,)})
        return new_state, _outcome(new_state, previous_history, winner_awarded_final_turn=True)

    if equal_innings and has_reached_target:
        new_state = add_finished_player(new_state, player_id)
        if isinstance(new_state.playout, PlayoutNotStarted):
            new_state = new_state.model_copy(
                update={"playout": PlayoutInProgress(start_index=new_state.current_player_index)}
            )

    next_index = next_unfinished_index(
        config.player_ids,
        new_state.current_player_index,
        new_state.finished_player_ids,
    )

    if _playout_complete(new_state, next_index):
        winner_ids = tuple(new_state.ledger.players_at_or_above(config.target_score))
        new_state = new_state.model_copy(update={"phase": SessionPhase.TERMINAL, "winner_ids": winner_ids})
        return new_state, _outcome(new_state, new_state.history, winner_awarded_final_turn=False)

    return new_state.model_copy(update={"current_player_index": next_index}), None


def undo_last_turn(state: GameSessionState) -> GameSessionState:
    """
    Roll back the most recently committed turn.

    Restores the ledger, current player and turn stats verbatim from the last
    snapshot, then drops finished players who are back below the target and
    clears the playout when its first finisher is no longer at the target.
    A session with no history is returned unchanged.
    """
    _ensure_active(state, "undo_last_turn")
    if not state.history:
        return state

    restored = restore_snapshot(state, state.history[-1], state.history[:-1])
    target = restored.config.target_score

    finished = tuple(pid for pid in restored.finished_player_ids if restored.ledger.score_of(pid) >= target)
    playout = restored.playout
    if isinstance(playout, PlayoutInProgress):
        first_finisher = restored.config.player_ids[playout.start_index]
        if restored.ledger.score_of(first_finisher) < target:
            playout = PlayoutNotStarted()

    return restored.model_copy(update={"finished_player_ids": finished, "playout": playout})


def _outcome(
    state: GameSessionState,
    snapshots: tuple[TurnSnapshot, ...],
    *,
    winner_awarded_final_turn: bool,
) -> GameOutcome:
    return GameOutcome(
        config=state.config,
        final_ledger=state.ledger,
        winner_ids=state.winner_ids,
        turn_snapshots=snapshots,
        winner_awarded_final_turn=winner_awarded_final_turn,
        turn_stats=dict(state.turn_stats),
    )


def count_turns_per_player(
    config: GameConfiguration,
    snapshots: tuple[TurnSnapshot, ...] | list[TurnSnapshot],
    winner_ids: tuple[str, ...] | list[str],
    *,
    winner_awarded_final_turn: bool,
) -> dict[str, int]:
    """
    Reconstruct turns taken per participant from the committed snapshots.

    Each snapshot records the pre-turn current player, so it counts one turn
    for that player. When ``winner_awarded_final_turn`` is set the sole
    winner's game-ending turn, which has no snapshot, is added on top.
    """
    turns = dict.fromkeys(config.player_ids, 0)
    for snapshot in snapshots:
        turns[config.player_ids[snapshot.current_player_index]] += 1
    if winner_awarded_final_turn and len(winner_ids) == 1:
        turns[winner_ids[0]] += 1
    return turns


def summarize_game(game_id: str, outcome: GameOutcome, turns_per_player: dict[str, int]) -> GameSummary:
    """
    Build the post-game summary.

    Averages exclude handicap points. In team mode the summary also carries
    both team totals; a team wins only with a strictly higher total.
    """
    config = outcome.config
    ledger = outcome.final_ledger
    winners = set(outcome.winner_ids)

    players = []
    for pid in config.player_ids:
        handicap = config.handicap_for(pid)
        turns = turns_per_player.get(pid, 0)
        score = ledger.score_of(pid)
        players.append(
            PlayerResult(
                player_id=pid,
                score=score,
                turns=turns,
                handicap=handicap,
                average=(score - handicap) / turns if turns > 0 else 0.0,
                is_winner=pid in winners,
                turn_stats=outcome.turn_stats.get(pid, TurnStats()),
            )
        )

    teams: list[TeamResult] = []
    if config.mode == GameMode.TEAM:
        members: dict[int, list[str]] = {1: [], 2: []}
        for pid in config.player_ids:
            members[team_of(config, pid)].append(pid)
        totals = {team: ledger.total_for(ids) for team, ids in members.items()}
        teams = [
            TeamResult(
                team=team,
                player_ids=ids,
                score=totals[team],
                is_winner=totals[team] > totals[3 - team],
            )
            for team, ids in members.items()
        ]

    return GameSummary(
        game_id=game_id,
        config=config,
        final_scores=dict(ledger.scores),
        winner_ids=list(outcome.winner_ids),
        turns_per_player=turns_per_player,
        players=players,
        teams=teams,
        history=list(outcome.turn_snapshots),
    )

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import structlog

from scoreboard.logic.enums import LeaderboardSortKey, ScoreActionType
from scoreboard.logic.exceptions import SessionPreconditionError
from scoreboard.logic.game import summarize_game
from scoreboard.logic.handicap import is_handicap_eligible, offer_for_configuration
from scoreboard.logic.session import GameSession
from scoreboard.session.settings import ScoreboardSettings
from scoreboard.session.snapshot import PersistenceSnapshot
from scoreboard.stats.aggregator import finalize_outcome
from scoreboard.stats.queries import hall_of_fame, head_to_head, leaderboard, player_average, player_form

if TYPE_CHECKING:
    from collections.abc import Iterable

    from scoreboard.logic.settings import GameConfiguration
    from scoreboard.logic.turn import TurnAction
    from scoreboard.logic.types import GameSummary, HandicapOffer
    from scoreboard.stats.types import HallOfFame, HeadToHeadEntry, LeaderboardEntry, PlayerForm
    from shared.dal.stats_repository import StatsRepository
    from shared.storage import SnapshotStorage

logger = structlog.get_logger()


class ScoreboardService:
    """
    Orchestrates live game sessions and post-game statistics.

    Owns one GameSession per game id. Every mutating operation emits a
    PersistenceSnapshot to the snapshot storage (when configured). When a
    commit ends a game, the outcome is folded into the statistics repository,
    the session is discarded and the GameSummary is returned.
    """

    def __init__(
        self,
        stats_repository: StatsRepository,
        storage: SnapshotStorage | None = None,
        settings: ScoreboardSettings | None = None,
        roster: Iterable[str] | None = None,
    ) -> None:
        self._stats_repository = stats_repository
        self._storage = storage
        self._settings = settings or ScoreboardSettings()
        self._roster = frozenset(roster) if roster is not None else None
        self._sessions: dict[str, GameSession] = {}  # game_id -> GameSession
        self._game_locks: dict[str, asyncio.Lock] = {}  # game_id -> Lock

    @property
    def game_count(self) -> int:
        return len(self._sessions)

    def get_session(self, game_id: str) -> GameSession | None:
        return self._sessions.get(game_id)

    def _require_session(self, game_id: str, operation: str) -> GameSession:
        session = self._sessions.get(game_id)
        if session is None:
            raise SessionPreconditionError(operation=operation, reason=f"unknown game {game_id!r}")
        return session

    def _check_roster(self, config: GameConfiguration, operation: str) -> None:
        if self._roster is None:
            return
        unknown = [pid for pid in config.player_ids if pid not in self._roster]
        if unknown:
            raise SessionPreconditionError(
                operation=operation,
                reason=f"unknown participants: {', '.join(unknown)}",
            )

    async def _emit_snapshot(self, game_id: str, session: GameSession) -> PersistenceSnapshot:
        snapshot = PersistenceSnapshot.capture(
            game_id,
            session.state,
            await self._stats_repository.get_stats(),
            await self._stats_repository.get_game_log(),
        )
        if self._storage is not None:
            self._storage.save_snapshot(game_id, snapshot.model_dump_json())
        return snapshot

    async def suggest_handicap(self, config: GameConfiguration) -> HandicapOffer | None:
        """
        Suggest a start bonus for the weaker player of a two-player round-robin game.

        Averages come from each player's most recent games of the configured
        game type. Returns None when no handicap applies.
        """
        self._check_roster(config, "suggest_handicap")
        if not is_handicap_eligible(config):
            return None
        game_log = await self._stats_repository.get_game_log(game_type=config.game_type)
        window = self._settings.handicap_history_window
        averages = {pid: player_average(game_log, pid, config.game_type, window) for pid in config.player_ids}
        offer = offer_for_configuration(config, averages)
        if offer is not None:
            logger.info("handicap offered", player_id=offer.player_id, points=offer.points)
        return offer

    async def start_game(self, game_id: str, config: GameConfiguration) -> PersistenceSnapshot:
        """Start a new game session under ``game_id`` and emit its first snapshot."""
        if game_id in self._sessions:
            raise SessionPreconditionError(operation="start_game", reason=f"game {game_id!r} already running")
        game_log = await self._stats_repository.get_game_log()
        if any(record.game_id == game_id for record in game_log):
            raise SessionPreconditionError(operation="start_game", reason=f"game {game_id!r} already recorded")
        self._check_roster(config, "start_game")
        session = GameSession.start(config)
        self._sessions[game_id] = session
        self._game_locks[game_id] = asyncio.Lock()
        logger.info(
            "game started",
            game_id=game_id,
            game_type=config.game_type,
            mode=config.mode,
            end_condition=config.end_condition,
            target_score=config.target_score,
            players=list(config.player_ids),
        )
        return await self._emit_snapshot(game_id, session)

    async def restore_game(self, snapshot: PersistenceSnapshot) -> GameSession:
        """
        Resume a game and the statistics held in a persistence snapshot.

        The repository contents are replaced by the snapshot's stats book and
        game log; the live turn of the restored session starts empty.
        """
        if snapshot.game_id in self._sessions:
            raise SessionPreconditionError(
                operation="restore_game", reason=f"game {snapshot.game_id!r} already running"
            )
        state = snapshot.to_session_state()
        self._check_roster(state.config, "restore_game")
        await self._stats_repository.load(snapshot.stats, snapshot.game_log)
        session = GameSession.from_state(state)
        if not state.is_terminal:
            self._sessions[snapshot.game_id] = session
            self._game_locks[snapshot.game_id] = asyncio.Lock()
        logger.info("game restored", game_id=snapshot.game_id, turns=len(state.history), phase=state.phase)
        return session

    async def add_points(
        self,
        game_id: str,
        delta: int,
        action_type: ScoreActionType = ScoreActionType.STANDARD,
    ) -> int:
        """Add points to the active player's turn; returns the running turn total."""
        session = self._require_session(game_id, "add_points")
        session.add_points(delta, action_type)
        await self._emit_snapshot(game_id, session)
        return session.turn.total

    async def undo_last_action(self, game_id: str) -> TurnAction | None:
        session = self._require_session(game_id, "undo_last_action")
        action = session.undo_last_action()
        await self._emit_snapshot(game_id, session)
        return action

    async def end_turn(self, game_id: str) -> GameSummary | None:
        """
        Commit the active player's turn.

        Returns the GameSummary when the commit ends the game, None otherwise.
        A finished game is recorded in the statistics repository and its
        session is discarded.
        """
        session = self._require_session(game_id, "end_turn")
        lock = self._game_locks[game_id]
        async with lock:
            player_id = session.state.current_player_id
            turn_total = session.turn.total
            outcome = session.commit_turn()
            logger.info(
                "turn committed",
                game_id=game_id,
                player_id=player_id,
                points=turn_total,
                score=session.state.ledger.score_of(player_id),
            )

            if outcome is None:
                await self._emit_snapshot(game_id, session)
                return None

            played_at = datetime.now(UTC)
            records = await self._stats_repository.apply_game(
                lambda stats: finalize_outcome(outcome, game_id=game_id, played_at=played_at, stats=stats),
            )
            summary = summarize_game(game_id, outcome, {r.player_id: r.turns for r in records})
            await self._emit_snapshot(game_id, session)

        logger.info(
            "game finished",
            game_id=game_id,
            winners=list(outcome.winner_ids),
            final_scores=summary.final_scores,
        )
        self.cleanup_game(game_id)
        return summary

    async def undo_last_turn(self, game_id: str) -> bool:
        """Revert the last committed turn; returns False when there was nothing to undo."""
        session = self._require_session(game_id, "undo_last_turn")
        if not session.can_undo_turn:
            return False
        session.undo_last_turn()
        logger.info("turn undone", game_id=game_id, player_id=session.state.current_player_id)
        await self._emit_snapshot(game_id, session)
        return True

    async def get_snapshot(self, game_id: str) -> PersistenceSnapshot:
        session = self._require_session(game_id, "get_snapshot")
        return PersistenceSnapshot.capture(
            game_id,
            session.state,
            await self._stats_repository.get_stats(),
            await self._stats_repository.get_game_log(),
        )

    async def get_leaderboard(
        self,
        game_type: str,
        sort_by: LeaderboardSortKey = LeaderboardSortKey.WINS,
    ) -> list[LeaderboardEntry]:
        return leaderboard(await self._stats_repository.get_stats(), game_type, sort_by)

    async def get_player_form(self, player_id: str, game_type: str) -> PlayerForm | None:
        settings = self._settings
        return player_form(
            await self._stats_repository.get_stats(),
            await self._stats_repository.get_game_log(player_id=player_id, game_type=game_type),
            player_id,
            game_type,
            window=settings.moving_average_window,
            threshold=settings.trend_threshold,
            results_count=settings.recent_results_count,
        )

    async def get_hall_of_fame(self, game_type: str) -> HallOfFame:
        return hall_of_fame(await self._stats_repository.get_game_log(game_type=game_type), game_type)

    async def get_head_to_head(self, player_id: str, game_type: str) -> list[HeadToHeadEntry]:
        return head_to_head(await self._stats_repository.get_game_log(game_type=game_type), player_id, game_type)

    def cleanup_game(self, game_id: str) -> None:
        """Discard a game session. Unknown ids are ignored."""
        self._sessions.pop(game_id, None)
        self._game_locks.pop(game_id, None)

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from scoreboard.session.manager import ScoreboardService
from scoreboard.session.settings import ScoreboardSettings
from shared.db import InMemoryStatsRepository
from shared.logging import setup_logging
from shared.storage import InMemorySnapshotStorage

if TYPE_CHECKING:
    from collections.abc import Iterable

    from shared.dal.stats_repository import StatsRepository
    from shared.storage import SnapshotStorage

logger = structlog.get_logger()


def create_service(
    settings: ScoreboardSettings | None = None,
    *,
    stats_repository: StatsRepository | None = None,
    storage: SnapshotStorage | None = None,
    roster: Iterable[str] | None = None,
) -> ScoreboardService:
    """Wire a ScoreboardService, defaulting to in-memory statistics and snapshot storage."""
    if settings is None:
        settings = ScoreboardSettings()
    service = ScoreboardService(
        stats_repository if stats_repository is not None else InMemoryStatsRepository(),
        storage if storage is not None else InMemorySnapshotStorage(),
        settings=settings,
        roster=roster,
    )
    logger.info("scoreboard service ready")
    return service


def get_service() -> ScoreboardService:  # pragma: no cover
    """Production entry point: configure logging from the environment, then build the service."""
    settings = ScoreboardSettings()
    setup_logging(log_dir=settings.log_dir)
    return create_service(settings)

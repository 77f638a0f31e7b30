"""Scoreboard service configuration via environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings


class ScoreboardSettings(BaseSettings):
    model_config = {"env_prefix": "SCOREBOARD_"}

    log_dir: str = Field(default="backend/logs/scoreboard", min_length=1)
    handicap_history_window: int = Field(default=10, ge=1)  # most recent games used for averages
    moving_average_window: int = Field(default=10, ge=1)
    trend_threshold: float = Field(default=0.05, ge=0)  # relative band around the overall average
    recent_results_count: int = Field(default=6, ge=1)

"""Application configuration loaded from environment variables."""
from functools import lru_cache
from pydantic_settings import BaseSettings

from wellbeing_engine.goal_evaluator import ACTIVITY_TREND_DEADBAND
from wellbeing_engine.trend_comparator import DEFAULT_DEADBAND


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # API configuration
    api_host: str = "127.0.0.1"
    api_port: int = 8082

    # CORS
    cors_origins: list[str] = ["http://localhost:1420", "http://127.0.0.1:1420"]

    # Trend deadbands (score points / percentage points)
    trend_deadband: float = DEFAULT_DEADBAND
    activity_trend_deadband: float = ACTIVITY_TREND_DEADBAND

    # Largest record list accepted in a single request
    max_records: int = 1000

    class Config:
        env_prefix = "DASHBOARD_"


@lru_cache
def get_settings() -> Settings:
    return Settings()

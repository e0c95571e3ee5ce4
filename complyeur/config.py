"""Application configuration from environment."""
from datetime import date
from pathlib import Path

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings
from functools import lru_cache

from complyeur.constants import (
    DEFAULT_ALERT_CRITICAL_THRESHOLD,
    DEFAULT_ALERT_WARNING_THRESHOLD,
    DEFAULT_SAFE_ENTRY_HORIZON_DAYS,
    MAX_TRIPS_PER_CALCULATION,
)
from complyeur.models.risk import RiskThresholds

# Load .env from project root (parent of complyeur/) so env vars are available everywhere
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=_env_path)


class Settings(BaseSettings):
    app_name: str = "ComplyEUR Compliance Engine"
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return (v or "INFO").strip().upper()

    # Days remaining at or above which status is green / amber
    risk_green_min: float = 30
    risk_amber_min: float = 10

    # Trips before this date never count (unset = no floor)
    compliance_start_date: date | None = None

    safe_entry_horizon_days: int = DEFAULT_SAFE_ENTRY_HORIZON_DAYS
    max_trips_per_request: int = MAX_TRIPS_PER_CALCULATION

    alert_warning_threshold: int = DEFAULT_ALERT_WARNING_THRESHOLD
    alert_critical_threshold: int = DEFAULT_ALERT_CRITICAL_THRESHOLD

    class Config:
        env_file = str(_env_path)
        extra = "ignore"

    def risk_thresholds(self) -> RiskThresholds:
        """Validated thresholds; raises InvalidConfigError on a bad environment."""
        return RiskThresholds(green_min=self.risk_green_min, amber_min=self.risk_amber_min)


@lru_cache
def get_settings() -> Settings:
    return Settings()

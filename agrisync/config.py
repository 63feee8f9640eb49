"""Application settings loaded from environment variables via pydantic-settings."""

from enum import StrEnum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class LogFormat(StrEnum):
    json = "json"
    console = "console"


class Settings(BaseSettings):
    """AgriSync configuration, read from env vars or a .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ── Redis ───────────────────────────────────────────────────────────────
    # Unset keeps manual/cached regions in process memory.
    redis_url: str | None = None
    redis_key_prefix: str = "agrisync:"

    # ── Knowledge base ──────────────────────────────────────────────────────
    data_dir: str | None = None

    # ── Region resolution ───────────────────────────────────────────────────
    location_timeout_seconds: float = 5.0
    default_state: str = "Maharashtra"
    default_district: str = "Nashik"
    default_latitude: float = 19.9975
    default_longitude: float = 73.7898
    fallback_state: str = "Maharashtra"

    # ── Weather synthesis ───────────────────────────────────────────────────
    weather_seed: int | None = None

    # ── Advisory thresholds ─────────────────────────────────────────────────
    irrigation_rainfall_threshold_mm: float = 5.0
    irrigation_moisture_threshold: float = 30.0
    fertilizer_window_start_day: int = 20
    fertilizer_window_end_day: int = 30
    pest_humidity_threshold: float = 80.0
    pest_temperature_threshold_c: float = 25.0
    heatwave_threshold_c: float = 35.0

    # ── Observability ───────────────────────────────────────────────────────
    log_level: str = "info"
    log_format: LogFormat = LogFormat.json


@lru_cache
def get_settings() -> Settings:
    """Singleton settings instance (cached after first call)."""
    return Settings()

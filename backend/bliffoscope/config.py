"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings

from bliffoscope.engine.config import DEFAULT_MARKER, DEFAULT_THRESHOLD


class Settings(BaseSettings):
    env: str = "development"
    log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Search
    match_threshold: float = DEFAULT_THRESHOLD
    search_workers: int = 1
    # Character that marks an "on" pixel in submitted scans and patterns
    scan_marker: str = DEFAULT_MARKER
    # Largest scan accepted by the API, in characters
    max_scan_chars: int = 1_000_000

    model_config = {"env_prefix": "BLIFFOSCOPE_", "env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()

"""Runtime settings, read from the environment or a .env file."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LAYOUTCORE_",
        env_file=".env",
        extra="ignore",
    )

    # External classification service (cleanroom adjacency rules)
    classifier_url: str = "http://localhost:5000/api"
    classifier_path: str = "/validation/door-connection"
    classifier_timeout: float | None = 10.0

    log_level: str = "INFO"
    log_json: bool = False

    cors_origins: list[str] = ["*"]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

"""Application settings for the LAN lobby server and tests."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic import model_validator
from pydantic_settings import BaseSettings

MAX_SWEEP_TO_STALE_RATIO = 10


class Settings(BaseSettings):
    """Typed settings loaded from environment variables or explicit kwargs."""

    lansync_app_host: str = "0.0.0.0"
    lansync_app_port: int = Field(default=8080, ge=1)
    lansync_log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    lansync_stale_player_seconds: float = Field(default=45.0, gt=0)
    lansync_sweep_interval_seconds: float = Field(default=15.0, ge=0)
    lansync_max_body_bytes: int = Field(default=1_000_000, ge=1)
    lansync_cors_allow_origins: str = "*"

    @model_validator(mode="after")
    def validate_sweep_interval(self) -> "Settings":
        """Keep the periodic sweep close enough to the staleness threshold to matter."""
        if (
            self.lansync_sweep_interval_seconds
            > self.lansync_stale_player_seconds * MAX_SWEEP_TO_STALE_RATIO
        ):
            raise ValueError(
                "LANSYNC_SWEEP_INTERVAL_SECONDS must not exceed "
                f"{MAX_SWEEP_TO_STALE_RATIO}x LANSYNC_STALE_PLAYER_SECONDS"
            )
        return self

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.lansync_cors_allow_origins.split(",") if origin.strip()]


def load_settings() -> Settings:
    """Load settings from process environment."""
    return Settings()

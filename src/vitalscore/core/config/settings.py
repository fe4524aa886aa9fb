"""Application settings loaded from environment variables."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """vitalscore server configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # Server
    # Default to loopback; health readings should not be served to the LAN
    # unless explicitly requested.
    vitalscore_host: str = "127.0.0.1"
    vitalscore_port: int = 8011
    vitalscore_log_level: str = "info"
    # Refuse non-loopback binds unless this is set (there is no auth layer).
    vitalscore_allow_insecure_bind: bool = False

    # Evaluator defaults for goal-relative metrics
    default_steps_goal: float = Field(default=10000, gt=0)
    default_water_goal: float = Field(default=2.5, gt=0)  # litres


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()

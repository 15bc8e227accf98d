"""Arbor runtime configuration via environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Global runtime settings loaded from environment / .env file."""

    # General
    arbor_debug: bool = False
    arbor_log_level: str = "INFO"

    # Tree runner
    arbor_default_tick_hz: float = 10.0  # <= 0 ticks as fast as possible
    arbor_max_ticks: int = 0  # 0 = unlimited

    # How long Action.reset() waits for an in-flight task
    arbor_action_join_timeout: float = 0.0  # 0 = wait forever

    @property
    def max_ticks(self) -> int | None:
        return self.arbor_max_ticks if self.arbor_max_ticks > 0 else None

    @property
    def action_join_timeout(self) -> float | None:
        return self.arbor_action_join_timeout if self.arbor_action_join_timeout > 0 else None

    @property
    def log_level(self) -> str:
        """Effective log level; debug mode always wins."""
        return "DEBUG" if self.arbor_debug else self.arbor_log_level.upper()

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()

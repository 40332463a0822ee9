"""Configuration Pydantic models: PollSettings, LoggingConfig, WhenConfig."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_INTERVAL_MS = 50
DEFAULT_SYNC_TIMEOUT_MS = 0
DEFAULT_ASYNC_TIMEOUT_MS = 5000


class PollSettings(BaseModel):
    """Interval and deadline for one polling invocation.

    A ``timeout_ms`` of ``0`` (or ``None``) means "no deadline": polling
    continues until the condition becomes true.
    """

    model_config = ConfigDict(extra="forbid")

    interval_ms: float = Field(
        default=DEFAULT_INTERVAL_MS, gt=0, description="Delay between condition checks"
    )
    timeout_ms: float = Field(
        default=DEFAULT_SYNC_TIMEOUT_MS, ge=0, description="Deadline from start, 0 = none"
    )

    @field_validator("timeout_ms", mode="before")
    @classmethod
    def none_means_no_timeout(cls, value: Any) -> Any:
        return 0 if value is None else value

    @property
    def interval_seconds(self) -> float:
        return self.interval_ms / 1000.0

    @property
    def timeout_seconds(self) -> float | None:
        """Deadline in seconds, or ``None`` when polling is unbounded."""
        if self.timeout_ms == 0:
            return None
        return self.timeout_ms / 1000.0


class LoggingConfig(BaseModel):
    """Settings for the ``when`` logger, applied by :func:`when.log_config.setup_logging`."""

    model_config = ConfigDict(extra="forbid")

    log_level: str = Field(default="INFO", description="Level of the when logger")
    log_dir: str | None = Field(
        default=None, description="Directory for rotating log files (console only when unset)"
    )

    @field_validator("log_dir", mode="before")
    @classmethod
    def blank_means_console_only(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class WhenConfig(BaseModel):
    """Top-level configuration loaded from ``when_config.json``.

    The polling sections are meant to be splatted into the entry points,
    e.g. ``run_async(cond, cb, **cfg.awaitable.model_dump())``.
    """

    model_config = ConfigDict(extra="forbid")

    fire_and_forget: PollSettings = Field(
        default_factory=lambda: PollSettings(timeout_ms=DEFAULT_SYNC_TIMEOUT_MS),
        description="Defaults for run_sync",
    )
    awaitable: PollSettings = Field(
        default_factory=lambda: PollSettings(timeout_ms=DEFAULT_ASYNC_TIMEOUT_MS),
        description="Defaults for run_async",
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

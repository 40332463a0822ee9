"""Pydantic models for polling settings and configuration."""
from when.core.models.settings import (
    DEFAULT_ASYNC_TIMEOUT_MS,
    DEFAULT_INTERVAL_MS,
    DEFAULT_SYNC_TIMEOUT_MS,
    LoggingConfig,
    PollSettings,
    WhenConfig,
)

__all__ = [
    "DEFAULT_ASYNC_TIMEOUT_MS",
    "DEFAULT_INTERVAL_MS",
    "DEFAULT_SYNC_TIMEOUT_MS",
    "LoggingConfig",
    "PollSettings",
    "WhenConfig",
]

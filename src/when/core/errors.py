"""Errors surfaced by the awaitable entry point."""

from __future__ import annotations


def format_ms(value: float) -> str:
    """Render a millisecond value without a trailing ``.0`` when integral."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return str(value)


class ConditionTimeoutError(TimeoutError):
    """The condition did not become true before the configured deadline."""

    def __init__(self, timeout_ms: float) -> None:
        self.timeout_ms = timeout_ms
        super().__init__(f"Condition not met within {format_ms(timeout_ms)}ms.")

"""Shared pytest fixtures for the when test suite."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import pytest

from tests.helpers.fake_scheduler import FakeScheduler


@pytest.fixture
def fake_scheduler() -> FakeScheduler:
    """Fresh virtual-clock scheduler starting at t=0."""
    return FakeScheduler()


@pytest.fixture
async def loop_errors():
    """Capture contexts passed to the running loop's exception handler.

    Exceptions escaping ``call_later`` callbacks end up here instead of in
    the default handler's log output.
    """
    loop = asyncio.get_running_loop()
    captured: list[dict[str, Any]] = []
    loop.set_exception_handler(lambda _loop, context: captured.append(context))
    yield captured
    loop.set_exception_handler(None)


@pytest.fixture
def when_logger():
    """Undo handler, level and propagation changes made by ``setup_logging``."""
    logger = logging.getLogger("when")
    handlers = logger.handlers[:]
    level = logger.level
    propagate = logger.propagate
    yield logger
    for handler in logger.handlers[:]:
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)
    logger.propagate = propagate

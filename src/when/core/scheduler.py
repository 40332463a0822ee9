"""Timer facility used by the Poller.

Two interchangeable schedulers are provided:

* :class:`LoopScheduler` runs callbacks on an asyncio event loop via
  ``loop.call_later``.
* :class:`ThreadScheduler` runs each callback on its own daemon
  ``threading.Timer``.  Used by ``run_sync`` when no loop is running.

Both return handles with an idempotent ``cancel()``.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Callable, Protocol

_log = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(
        self, delay: float, callback: Callable[[], None], *, name: str | None = None
    ) -> TimerHandle: ...


class LoopScheduler:
    """Schedule callbacks on an asyncio event loop.

    Args:
        loop: Target loop.  Defaults to the running loop, so constructing
            one outside ``async`` code without *loop* raises ``RuntimeError``.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop if loop is not None else asyncio.get_running_loop()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    def call_later(
        self, delay: float, callback: Callable[[], None], *, name: str | None = None
    ) -> asyncio.TimerHandle:
        return self._loop.call_later(delay, callback)


class ThreadScheduler:
    """Schedule callbacks on daemon :class:`threading.Timer` threads."""

    def call_later(
        self, delay: float, callback: Callable[[], None], *, name: str | None = None
    ) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        if name:
            timer.name = name
        timer.start()
        return timer


def default_scheduler() -> Scheduler:
    """Return a scheduler for the current context.

    Inside a running event loop the loop is used; anywhere else the timers
    run on daemon threads.
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        _log.debug("No running event loop, using thread timers")
        return ThreadScheduler()
    return LoopScheduler(loop)

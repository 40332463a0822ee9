"""Entry points: fire-and-forget ``run_sync`` and awaitable ``run_async``."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from when.core.errors import ConditionTimeoutError
from when.core.models.settings import (
    DEFAULT_ASYNC_TIMEOUT_MS,
    DEFAULT_INTERVAL_MS,
    DEFAULT_SYNC_TIMEOUT_MS,
)
from when.core.poller import Poller
from when.core.scheduler import LoopScheduler, Scheduler

_log = logging.getLogger(__name__)


def run_sync(
    condition: Callable[[], object],
    callback: Callable[[], None],
    interval_ms: float = DEFAULT_INTERVAL_MS,
    timeout_ms: float | None = DEFAULT_SYNC_TIMEOUT_MS,
    *,
    scheduler: Scheduler | None = None,
) -> None:
    """Call *callback* once *condition* is true, without waiting for it.

    Returns immediately; the first check happens one *interval_ms* later.
    If *timeout_ms* elapses first, polling stops silently and *callback* is
    never called.  With no timeout (the default) polling continues until the
    condition holds, so a condition that never becomes true keeps its timer
    alive for the life of the process.

    Exceptions raised by *condition* or *callback* are not caught: they
    surface in the timer context (the loop's exception handler, or
    ``threading.excepthook`` for thread timers) and polling stops.
    """
    poller = Poller(
        condition,
        on_success=callback,
        interval_ms=interval_ms,
        deadline_ms=timeout_ms,
        scheduler=scheduler,
    )
    poller.start()


def run_async(
    condition: Callable[[], object],
    callback: Callable[[], None],
    interval_ms: float = DEFAULT_INTERVAL_MS,
    timeout_ms: float | None = DEFAULT_ASYNC_TIMEOUT_MS,
    *,
    loop: asyncio.AbstractEventLoop | None = None,
) -> asyncio.Future[bool]:
    """Call *callback* once *condition* is true and return a future for the outcome.

    The future resolves to ``True`` after *callback* returns.  If
    *timeout_ms* elapses first it fails with :class:`ConditionTimeoutError`
    and *callback* is never called.  ``0`` or ``None`` disables the deadline.

    An exception raised by *condition* or *callback* fails the future with
    that exception; a callback raising ``CancelledError`` cancels it.
    Cancelling the future stops polling.

    Must be called with a running event loop unless *loop* is given.
    """
    if not callable(callback):
        raise TypeError(f"callback must be callable, got {type(callback)}")
    loop = loop if loop is not None else asyncio.get_running_loop()
    future: asyncio.Future[bool] = loop.create_future()

    def _fail(exc: BaseException) -> None:
        if not future.done():
            future.set_exception(exc)

    def _on_success() -> None:
        if future.cancelled():
            return
        try:
            callback()
        except asyncio.CancelledError:
            # set_exception() rejects CancelledError.
            future.cancel()
            return
        except Exception as exc:
            _fail(exc)
            return
        if not future.done():
            future.set_result(True)

    def _on_timeout() -> None:
        _fail(ConditionTimeoutError(poller.settings.timeout_ms))

    poller = Poller(
        condition,
        on_success=_on_success,
        on_timeout=_on_timeout,
        on_error=_fail,
        interval_ms=interval_ms,
        deadline_ms=timeout_ms,
        scheduler=LoopScheduler(loop),
    )

    def _on_done(fut: asyncio.Future[bool]) -> None:
        if fut.cancelled():
            _log.debug("Future for %s cancelled, stopping", poller.name)
            poller.stop()

    future.add_done_callback(_on_done)
    poller.start()
    return future

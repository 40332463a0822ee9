"""Poller — the polling/timeout state machine behind both entry points."""

from __future__ import annotations

import itertools
import logging
import threading
from enum import Enum
from typing import Callable

from when.core.errors import format_ms
from when.core.models.settings import DEFAULT_INTERVAL_MS, PollSettings
from when.core.scheduler import Scheduler, TimerHandle, default_scheduler
from when.log_config.logger import ContextualLogger

_log = logging.getLogger(__name__)

_poll_ids = itertools.count(1)


class PollState(str, Enum):
    """Lifecycle status of a single polling invocation."""

    IDLE = "idle"
    POLLING = "polling"
    SUCCEEDED = "succeeded"
    TIMED_OUT = "timed_out"
    FAILED = "failed"
    STOPPED = "stopped"


_TERMINAL = frozenset(
    {PollState.SUCCEEDED, PollState.TIMED_OUT, PollState.FAILED, PollState.STOPPED}
)


class Poller:
    """Evaluate *condition* on a timer until it is true or a deadline passes.

    The first evaluation happens one interval after :meth:`start`, never
    synchronously.  Each tick arms the next one only after it has finished,
    so ticks never overlap.  Exactly one of *on_success*, *on_timeout* or
    *on_error* fires per invocation; after that both timers are cancelled
    and the condition is not evaluated again.

    Args:
        condition: Zero-argument predicate.
        on_success: Called once, on the tick where *condition* is first true.
        on_timeout: Called once if the deadline fires first.  Optional.
        on_error: Called with the exception if *condition* raises.  When
            omitted the exception is re-raised into the timer context.
        interval_ms: Delay between ticks, must be positive.
        deadline_ms: Deadline from :meth:`start`; ``0`` or ``None`` polls
            until success.
        scheduler: Timer facility.  Defaults to
            :func:`~when.core.scheduler.default_scheduler`, resolved here at
            construction time.
        name: Label used in log lines and thread names.
    """

    def __init__(
        self,
        condition: Callable[[], object],
        *,
        on_success: Callable[[], None],
        on_timeout: Callable[[], None] | None = None,
        on_error: Callable[[BaseException], None] | None = None,
        interval_ms: float = DEFAULT_INTERVAL_MS,
        deadline_ms: float | None = 0,
        scheduler: Scheduler | None = None,
        name: str | None = None,
    ) -> None:
        if not callable(condition):
            raise TypeError(f"condition must be callable, got {type(condition)}")
        if not callable(on_success):
            raise TypeError(f"on_success must be callable, got {type(on_success)}")
        self._settings = PollSettings(interval_ms=interval_ms, timeout_ms=deadline_ms)
        self._condition = condition
        self._on_success = on_success
        self._on_timeout = on_timeout
        self._on_error = on_error
        self._scheduler: Scheduler = scheduler if scheduler is not None else default_scheduler()
        self._name = name or f"poll-{next(_poll_ids)}"

        self._state = PollState.IDLE
        self._ticks = 0
        self._lock = threading.RLock()
        self._poll_handle: TimerHandle | None = None
        self._deadline_handle: TimerHandle | None = None
        self._log = ContextualLogger(_log, poll=self._name)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def settings(self) -> PollSettings:
        return self._settings

    @property
    def state(self) -> PollState:
        return self._state

    @property
    def ticks(self) -> int:
        """Number of times the condition has been evaluated."""
        return self._ticks

    @property
    def done(self) -> bool:
        return self._state in _TERMINAL

    def start(self) -> None:
        """Arm the first tick and, when configured, the deadline."""
        with self._lock:
            if self._state is not PollState.IDLE:
                raise RuntimeError(
                    f"Poller {self._name} cannot start from state {self._state.value}"
                )
            self._state = PollState.POLLING
            self._schedule_tick()
            timeout = self._settings.timeout_seconds
            if timeout is not None:
                self._deadline_handle = self._scheduler.call_later(
                    timeout, self._on_deadline, name=f"{self._name}-deadline"
                )
        self._log.debug(
            "Polling every %sms (deadline: %s)",
            format_ms(self._settings.interval_ms),
            f"{format_ms(self._settings.timeout_ms)}ms" if timeout is not None else "none",
        )

    def stop(self) -> None:
        """Cancel both timers without notifying anyone.  Idempotent."""
        with self._lock:
            if self.done:
                return
            self._settle(PollState.STOPPED)
        self._log.debug("Stopped after %d ticks", self._ticks)

    # ------------------------------------------------------------------
    # Timer callbacks
    # ------------------------------------------------------------------

    def _tick(self) -> None:
        error: BaseException | None = None
        with self._lock:
            if self._state is not PollState.POLLING:
                return
            self._poll_handle = None
            self._ticks += 1
            try:
                met = self._condition()
            except Exception as exc:
                self._settle(PollState.FAILED)
                error = exc
            else:
                if not met:
                    self._schedule_tick()
                    return
                self._settle(PollState.SUCCEEDED)

        if error is not None:
            self._log.debug("Condition raised on tick %d: %r", self._ticks, error)
            if self._on_error is None:
                raise error
            self._on_error(error)
            return

        self._log.debug("Condition met on tick %d", self._ticks)
        self._on_success()

    def _on_deadline(self) -> None:
        with self._lock:
            if self._state is not PollState.POLLING:
                return
            self._deadline_handle = None
            self._settle(PollState.TIMED_OUT)
        self._log.debug(
            "Deadline of %sms reached after %d ticks",
            format_ms(self._settings.timeout_ms),
            self._ticks,
        )
        if self._on_timeout is not None:
            self._on_timeout()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _schedule_tick(self) -> None:
        self._poll_handle = self._scheduler.call_later(
            self._settings.interval_seconds,
            self._tick,
            name=f"{self._name}-tick-{self._ticks + 1}",
        )

    def _settle(self, state: PollState) -> None:
        """Enter a terminal *state* and release both timers."""
        self._state = state
        for handle in (self._poll_handle, self._deadline_handle):
            if handle is not None:
                handle.cancel()
        self._poll_handle = None
        self._deadline_handle = None

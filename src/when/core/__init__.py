"""Core polling machinery: scheduler, poller, and entry points."""

from when.core.errors import ConditionTimeoutError
from when.core.poller import Poller, PollState
from when.core.runners import run_async, run_sync
from when.core.scheduler import LoopScheduler, ThreadScheduler, default_scheduler

__all__ = [
    "ConditionTimeoutError",
    "LoopScheduler",
    "Poller",
    "PollState",
    "ThreadScheduler",
    "default_scheduler",
    "run_async",
    "run_sync",
]

"""when — call back once a condition becomes true.

Two entry points share one polling state machine::

    when.run_sync(lambda: job.done, notify)              # fire-and-forget
    await when.run_async(lambda: job.done, notify, 10)   # awaitable
"""

from when.config.config_manager import configure, load_config
from when.core.errors import ConditionTimeoutError
from when.core.models.settings import LoggingConfig, PollSettings, WhenConfig
from when.core.poller import Poller, PollState
from when.core.runners import run_async, run_sync
from when.log_config.logger import ContextualLogger, get_logger, setup_logging

__version__ = "1.0.0"

__all__ = [
    "ConditionTimeoutError",
    "configure",
    "ContextualLogger",
    "LoggingConfig",
    "PollSettings",
    "PollState",
    "Poller",
    "WhenConfig",
    "get_logger",
    "load_config",
    "run_async",
    "run_sync",
    "setup_logging",
]

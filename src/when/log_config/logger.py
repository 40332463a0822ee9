"""Package logging: handlers on the ``when`` logger and a contextual wrapper.

Nothing here runs on import.  Applications that want the package's own
log output call :func:`setup_logging` (or :func:`when.configure`); the root
logger and any handlers the application installed are left alone.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Any

from when.core.models.settings import LoggingConfig

PACKAGE_LOGGER = "when"

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_LOG_FILE = "when.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3

# Marks handlers installed by setup_logging so a re-run only replaces those.
_OWNED = "_when_owned"


def setup_logging(config: LoggingConfig | None = None) -> logging.Logger:
    """Attach console (and optionally rotating-file) handlers to ``when``.

    Re-running replaces the handlers from the previous call.  While these
    handlers are installed the ``when`` logger stops propagating, so its
    records are not printed twice by root handlers.

    Returns the configured package logger.
    """
    config = config or LoggingConfig()
    level = getattr(logging, config.log_level.upper(), logging.INFO)
    logger = logging.getLogger(PACKAGE_LOGGER)

    for handler in [h for h in logger.handlers if getattr(h, _OWNED, False)]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.log_dir:
        os.makedirs(config.log_dir, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                os.path.join(config.log_dir, _LOG_FILE),
                maxBytes=_MAX_BYTES,
                backupCount=_BACKUP_COUNT,
                encoding="utf-8",
            )
        )
    for handler in handlers:
        setattr(handler, _OWNED, True)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a stdlib Logger for *name* (typically ``__name__``)."""
    return logging.getLogger(name)


class ContextualLogger:
    """Prepends ``[key=value …]`` context to every message.

    ``ContextualLogger(get_logger(__name__), poll="poll-3").debug("Condition met on tick %d", 4)``
    logs ``"[poll=poll-3] Condition met on tick 4"``.
    """

    def __init__(self, logger: logging.Logger, **context: Any) -> None:
        self._logger = logger
        self._prefix = " ".join(f"[{k}={v}]" for k, v in context.items())

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        if self._prefix:
            msg = f"{self._prefix} {msg}"
        self._logger.debug(msg, *args, **kwargs)

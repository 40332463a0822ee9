"""Package logging setup and contextual logger."""

from when.log_config.logger import PACKAGE_LOGGER, ContextualLogger, get_logger, setup_logging

__all__ = ["PACKAGE_LOGGER", "setup_logging", "get_logger", "ContextualLogger"]

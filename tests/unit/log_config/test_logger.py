"""Tests for the package logging setup and the contextual logger."""

import logging
from logging.handlers import RotatingFileHandler

from when.core.models.settings import LoggingConfig
from when.log_config.logger import ContextualLogger, get_logger, setup_logging


class TestSetupLogging:
    def test_console_only_by_default(self, when_logger):
        logger = setup_logging()
        assert logger is when_logger
        assert when_logger.level == logging.INFO
        assert not when_logger.propagate
        assert len(when_logger.handlers) == 1
        assert not isinstance(when_logger.handlers[0], RotatingFileHandler)

    def test_root_logger_untouched(self, when_logger):
        root = logging.getLogger()
        sentinel = logging.NullHandler()
        root.addHandler(sentinel)
        level = root.level
        try:
            setup_logging(LoggingConfig(log_level="DEBUG"))
            assert sentinel in root.handlers
            assert root.level == level
        finally:
            root.removeHandler(sentinel)

    def test_file_handler_when_log_dir_given(self, when_logger, tmp_path):
        log_dir = tmp_path / "logs"
        setup_logging(LoggingConfig(log_dir=str(log_dir)))

        logging.getLogger("when.core.poller").info("written to file")
        for handler in when_logger.handlers:
            handler.flush()

        log_file = log_dir / "when.log"
        assert log_file.is_file()
        assert "written to file" in log_file.read_text(encoding="utf-8")

    def test_blank_log_dir_is_console_only(self, when_logger):
        setup_logging(LoggingConfig(log_dir="  "))
        assert len(when_logger.handlers) == 1

    def test_rerun_replaces_own_handlers_only(self, when_logger, tmp_path):
        foreign = logging.NullHandler()
        when_logger.addHandler(foreign)

        setup_logging(LoggingConfig(log_dir=str(tmp_path)))
        setup_logging(LoggingConfig(log_dir=str(tmp_path)))

        assert foreign in when_logger.handlers
        assert len(when_logger.handlers) == 3

    def test_unknown_level_falls_back_to_info(self, when_logger):
        setup_logging(LoggingConfig(log_level="chatty"))
        assert when_logger.level == logging.INFO


class TestContextualLogger:
    def test_prefixes_context(self, caplog):
        caplog.set_level(logging.DEBUG, logger="tests.ctx")
        log = ContextualLogger(get_logger("tests.ctx"), poll="door", kind="sync")
        log.debug("Condition met on tick %d", 3)
        assert caplog.records[-1].getMessage() == "[poll=door] [kind=sync] Condition met on tick 3"

    def test_no_context_leaves_message(self, caplog):
        caplog.set_level(logging.DEBUG, logger="tests.ctx")
        ContextualLogger(get_logger("tests.ctx")).debug("plain")
        assert caplog.records[-1].getMessage() == "plain"

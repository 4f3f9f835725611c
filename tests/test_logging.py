"""Tests for the logging helpers."""

import logging

import pytest

from package_auditor.logging import configure_logging, get_logger, progress_logger, status_logger


@pytest.fixture(autouse=True)
def _restore_package_logger():
    logger = logging.getLogger("package_auditor")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


class TestGetLogger:
    def test_root(self):
        assert get_logger().name == "package_auditor"

    def test_child(self):
        assert get_logger("fetcher").name == "package_auditor.fetcher"


class TestConfigureLogging:
    def test_single_handler_after_repeated_calls(self):
        configure_logging()
        logger = configure_logging()
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_default_level_is_info(self):
        logger = configure_logging()
        assert logger.level == logging.INFO
        assert "%(name)s" not in logger.handlers[0].formatter._fmt

    def test_verbose_adds_debug_and_names(self):
        logger = configure_logging(verbose=True)
        assert logger.level == logging.DEBUG
        assert "%(name)s" in logger.handlers[0].formatter._fmt


class TestCallbacks:
    def test_status_logger_logs_info(self, caplog):
        logging.getLogger("package_auditor").propagate = True
        with caplog.at_level(logging.INFO, logger="package_auditor"):
            status_logger()("Found 3 repositories")
        assert ("package_auditor.status", logging.INFO, "Found 3 repositories") in caplog.record_tuples

    def test_progress_logger_logs_debug(self, caplog):
        logging.getLogger("package_auditor").propagate = True
        with caplog.at_level(logging.DEBUG, logger="package_auditor"):
            progress_logger()(2, 5)
        assert (
            "package_auditor.status",
            logging.DEBUG,
            "Repositories processed: 2/5",
        ) in caplog.record_tuples

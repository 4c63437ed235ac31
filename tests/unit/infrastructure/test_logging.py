"""Tests for logging setup and the logging adapter."""

import logging

import pytest

from azfailaway.config.schemas.app_schema import LoggingConfig
from azfailaway.infrastructure.adapters.logging_adapter import LoggingAdapter
from azfailaway.infrastructure.logging.logger import ROOT_LOGGER_NAME, get_logger, setup_logging


@pytest.fixture
def restore_root_logger():
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.mark.unit
@pytest.mark.usefixtures("restore_root_logger")
class TestLogging:
    def test_get_logger_namespaces(self):
        assert get_logger("orchestrator").name == "azfailaway.orchestrator"
        assert get_logger("azfailaway.discovery").name == "azfailaway.discovery"
        assert get_logger("azfailaway").name == "azfailaway"

    def test_setup_replaces_handlers(self):
        setup_logging(LoggingConfig())
        logger = setup_logging(LoggingConfig(level="debug"))

        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG
        assert logger.propagate is False
        assert logging.getLogger("botocore").level == logging.WARNING

    def test_adapter_writes_to_file(self, tmp_path):
        log_file = tmp_path / "failover.log"
        setup_logging(LoggingConfig(file_path=str(log_file)))

        LoggingAdapter("zone_mutator").info("ASG %s successfully updated", "web")
        LoggingAdapter("zone_mutator").debug("not written at INFO")
        for handler in logging.getLogger(ROOT_LOGGER_NAME).handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "INFO" in content
        assert "azfailaway.zone_mutator: ASG web successfully updated" in content
        assert "not written" not in content

    def test_adapter_reports_caller_location(self, tmp_path):
        log_file = tmp_path / "failover.log"
        setup_logging(LoggingConfig(format="%(funcName)s: %(message)s", file_path=str(log_file)))

        LoggingAdapter("orchestrator").warning("skipped %s", "web")
        try:
            raise ValueError("boom")
        except ValueError:
            LoggingAdapter("orchestrator").exception("branch crashed")
        for handler in logging.getLogger(ROOT_LOGGER_NAME).handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "test_adapter_reports_caller_location: skipped web" in content
        assert "test_adapter_reports_caller_location: branch crashed" in content
        assert "ValueError: boom" in content

import logging
import time

import pytest
import structlog

import core.logger
from config import LoggingConfig
from core.logger import bind_context, get_structured_logger, setup_logging


@pytest.fixture(autouse=True)
def configured_logger(monkeypatch):
    """Configure logging without a file handler for every test in the module."""
    monkeypatch.setattr(core.logger, "_is_configured", False)
    setup_logging(LoggingConfig(log_file_path=None))


logger = logging.getLogger(__name__)


def test_logging_setup_produces_correct_log_record(caplog):
    with caplog.at_level(logging.INFO):
        test_message = "Filled 3 controls"
        pre_log_time = time.time()
        logger.info(test_message)

    assert len(caplog.records) == 1, f"Should have captured exactly one log record, but captured {len(caplog.records)}."
    record = caplog.records[0]

    assert record.levelname == "INFO"
    assert record.name == __name__
    assert record.getMessage() == test_message
    assert pre_log_time <= record.created <= time.time()


def test_setup_logging_is_idempotent():
    handlers = list(logging.getLogger().handlers)
    setup_logging(LoggingConfig(log_level="DEBUG", log_file_path=None))
    assert logging.getLogger().handlers == handlers


def test_file_handler_writes_timestamped_file(tmp_path, monkeypatch):
    monkeypatch.setattr(core.logger, "_is_configured", False)
    setup_logging(LoggingConfig(log_file_path=tmp_path / "logs" / "filler.log"))

    file_handlers = [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]
    assert len(file_handlers) == 1
    written = list((tmp_path / "logs").glob("filler_*.log"))
    assert len(written) == 1

    file_handlers[0].close()
    monkeypatch.setattr(core.logger, "_is_configured", False)
    setup_logging(LoggingConfig(log_file_path=None))


def test_bind_context_returns_bound_logger():
    bound = bind_context(get_structured_logger(__name__), pass_id="abc123", url="https://example.com")
    context = structlog.get_context(bound)
    assert context["pass_id"] == "abc123"
    assert context["url"] == "https://example.com"

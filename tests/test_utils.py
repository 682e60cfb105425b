"""Unit tests for lib/utils.py."""

import json
import logging

import pytest

from lib.utils import JSONFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.mark.unit
class TestSetupLogging:
    def test_returns_audit_logger(self, restore_root_logger):
        logger = setup_logging()
        assert logger.name == "privatelink_audit"
        assert logging.getLogger().level == logging.INFO

    def test_verbose_enables_debug(self, restore_root_logger):
        setup_logging(verbose=True)
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("botocore").level == logging.DEBUG

    def test_quiets_third_party_loggers(self, restore_root_logger):
        setup_logging(verbose=False)
        assert logging.getLogger("botocore").level == logging.WARNING

    def test_json_format(self, restore_root_logger):
        setup_logging(log_format="json")
        handler = logging.getLogger().handlers[0]
        assert isinstance(handler.formatter, JSONFormatter)

    def test_no_duplicate_handlers(self, restore_root_logger):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger().handlers) == 1


@pytest.mark.unit
def test_json_formatter_output():
    record = logging.LogRecord("privatelink_audit", logging.ERROR, __file__, 10, "failed %s", ("check",), None)

    data = json.loads(JSONFormatter().format(record))

    assert data["level"] == "ERROR"
    assert data["message"] == "failed check"
    assert data["logger"] == "privatelink_audit"

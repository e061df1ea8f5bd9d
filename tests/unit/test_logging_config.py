"""
Unit tests for logging configuration.
"""
import json
import logging
import sys

import pytest

from mercure_client import logging_config
from mercure_client.config import Settings
from mercure_client.logging_config import JsonFormatter, setup_logging


def _use_environment(monkeypatch, environment):
    settings = Settings(MERCURE_CLIENT_ENVIRONMENT=environment, _env_file=None)
    monkeypatch.setattr(logging_config, "get_settings", lambda: settings)


def _record(**extra):
    record = logging.LogRecord(
        "mercure_client.client", logging.INFO, __file__, 42, "published %s", ("update",), None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    @pytest.fixture(autouse=True)
    def staging_settings(self, monkeypatch):
        _use_environment(monkeypatch, "staging")

    def test_formats_standard_fields(self):
        payload = json.loads(JsonFormatter().format(_record()))

        assert payload["level"] == "INFO"
        assert payload["logger"] == "mercure_client.client"
        assert payload["message"] == "published update"
        assert payload["line"] == 42
        assert "timestamp" in payload
        assert payload["environment"] == "staging"

    def test_includes_extra_fields(self):
        payload = json.loads(JsonFormatter().format(_record(topic="https://example.com/books/1")))

        assert payload["topic"] == "https://example.com/books/1"
        assert "args" not in payload
        assert "msg" not in payload

    def test_includes_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.LogRecord(
                "mercure_client", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
            )

        payload = json.loads(JsonFormatter().format(record))

        assert "RuntimeError: boom" in payload["exception"]


class TestSetupLogging:
    def test_plain_text_outside_production(self, restore_root_logger, monkeypatch):
        _use_environment(monkeypatch, "development")

        setup_logging("debug")

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert not isinstance(restore_root_logger.handlers[0].formatter, JsonFormatter)
        assert logging.getLogger("mercure_client").level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_json_in_production(self, restore_root_logger, monkeypatch):
        _use_environment(monkeypatch, "production")

        setup_logging("warning")

        assert restore_root_logger.level == logging.WARNING
        assert isinstance(restore_root_logger.handlers[0].formatter, JsonFormatter)

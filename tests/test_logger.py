"""Tests for logging setup and log sanitization."""

import logging
import re

import structlog

from binelek_mcp.observability import get_logger, sanitize_log_data
from binelek_mcp.observability.logger import StructuredFormatter


class TestConfigureLogging:
    def test_processors_leave_metadata_to_formatter(self):
        processors = structlog.get_config()["processors"]

        assert structlog.stdlib.add_log_level not in processors
        assert structlog.stdlib.add_logger_name not in processors
        assert not any(isinstance(p, structlog.processors.TimeStamper) for p in processors)

    def test_console_line_carries_metadata_once(self, caplog):
        logger = get_logger("tests.logging")

        with caplog.at_level(logging.INFO):
            logger.info("Gateway probe finished", healthy=True)

        record = caplog.records[-1]
        line = StructuredFormatter().format(record)

        assert record.getMessage().startswith("Gateway probe finished")
        assert line.count("tests.logging") == 1
        assert line.count("INFO") == 1
        assert "[info" not in line
        assert not re.search(r"\d{4}-\d{2}-\d{2}T", line)


class TestSanitizeLogData:
    def test_redacts_credentials(self):
        data = {"entityId": "prop-1", "authToken": "abc", "nested": {"password": "pw"}}

        assert sanitize_log_data(data) == {
            "entityId": "prop-1",
            "authToken": "[REDACTED]",
            "nested": {"password": "[REDACTED]"},
        }

    def test_keeps_search_weights(self):
        data = {"semanticWeight": 0.7, "keywordWeight": 0.3}

        assert sanitize_log_data(data) == data

    def test_truncates_long_strings(self):
        result = sanitize_log_data("x" * 50, max_length=10)

        assert result == "x" * 10 + "..."

    def test_caps_lists(self):
        assert sanitize_log_data(list(range(25))) == list(range(10))

    def test_none(self):
        assert sanitize_log_data(None) is None

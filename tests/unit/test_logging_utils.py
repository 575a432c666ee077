# ============================================================================
# tests/unit/test_logging_utils.py
# ============================================================================
"""
Tests for logging helpers
"""

import json
import logging

import pytest

from sut_audit.utils.logging import JsonFormatter, log_performance

logger = logging.getLogger("tests.logging_utils")


def test_json_formatter_keeps_turkish():
    record = logging.LogRecord(
        name="sut_audit.test", level=logging.INFO, pathname=__file__, lineno=1,
        msg="Tanı: %s", args=("İLAÇ",), exc_info=None,
    )
    data = json.loads(JsonFormatter().format(record))

    assert data["message"] == "Tanı: İLAÇ"
    assert data["level"] == "INFO"
    assert "İLAÇ" in JsonFormatter().format(record)


def test_sync_performance_logging(caplog):
    @log_performance(logger, "Parsing")
    def work(value):
        return value * 2

    with caplog.at_level(logging.DEBUG, logger="tests.logging_utils"):
        assert work(21) == 42
    assert "Parsing completed" in caplog.text
    assert work.__name__ == "work"


@pytest.mark.asyncio
async def test_async_performance_logging(caplog):
    @log_performance(logger, "Loading")
    async def work():
        raise ValueError("boom")

    with caplog.at_level(logging.INFO, logger="tests.logging_utils"):
        with pytest.raises(ValueError):
            await work()
    assert "Loading failed" in caplog.text

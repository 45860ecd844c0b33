"""Unit tests for the logging utility."""

from __future__ import annotations

import json
import logging
import sys

from restaurant_auth.core.logger import JSONFormatter, configure_logging


def test_configure_logging_sets_level() -> None:
    """``configure_logging`` should set the root logger level."""

    # Act
    configure_logging("DEBUG")

    # Assert
    assert logging.getLogger().level == logging.DEBUG
    assert isinstance(logging.getLogger().handlers[0].formatter, JSONFormatter)


def test_json_formatter_includes_known_extras() -> None:
    record = logging.LogRecord("restaurant_auth", logging.INFO, __file__, 1, "auth.login.ok", None, None)
    record.event = "login"
    record.user_id = 3
    record.password = "should-not-appear"

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "auth.login.ok"
    assert payload["level"] == "INFO"
    assert payload["event"] == "login"
    assert payload["user_id"] == 3
    assert "password" not in payload


def test_json_formatter_renders_exceptions() -> None:
    try:
        raise ValueError("boom")
    except ValueError:
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())

    payload = json.loads(JSONFormatter().format(record))

    assert "ValueError: boom" in payload["exc_info"]

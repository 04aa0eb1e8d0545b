"""Unit tests for the logging utilities."""

from __future__ import annotations

import json
import logging

from commerce_auth.core.logger import JSONFormatter, configure_logging, log_event


def test_configure_logging_sets_level() -> None:
    """``configure_logging`` should set the root logger level."""

    # Act
    configure_logging("DEBUG")

    # Assert
    assert logging.getLogger().level == logging.DEBUG


def test_log_event_attaches_event_name(caplog) -> None:
    logger = logging.getLogger("tests.log_event")
    caplog.set_level(logging.INFO, logger="tests.log_event")

    log_event(logger, "auth.login.succeeded", user_id="u-1")

    record = caplog.records[-1]
    assert record.getMessage() == "auth.login.succeeded"
    assert record.event == "auth.login.succeeded"
    assert record.user_id == "u-1"


def test_json_formatter_promotes_known_extras() -> None:
    record = logging.LogRecord("auth", logging.WARNING, __file__, 1, "denied", None, None)
    record.event = "rate_limit.denied"
    record.rate_limit_key = "login:1.2.3.4"
    record.unrelated = "dropped"

    payload = json.loads(JSONFormatter().format(record))

    assert payload["level"] == "WARNING"
    assert payload["message"] == "denied"
    assert payload["event"] == "rate_limit.denied"
    assert payload["rate_limit_key"] == "login:1.2.3.4"
    assert "unrelated" not in payload

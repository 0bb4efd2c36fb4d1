"""Unit tests for the logging utility."""

from __future__ import annotations

import json
import logging

from fleetbook.core.logger import JSONFormatter, configure_logging


def test_configure_logging_sets_level() -> None:
    """``configure_logging`` should set the root logger level."""

    # Act
    configure_logging("DEBUG")

    # Assert
    assert logging.getLogger().level == logging.DEBUG


def test_json_formatter_keeps_known_extras_only() -> None:
    record = logging.LogRecord(
        "fleetbook.test", logging.INFO, __file__, 1, "vehicles.deleted", None, None
    )
    record.vehicle_id = 7
    record.cancelled_trips = 2
    record.password = "nope"

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "vehicles.deleted"
    assert payload["vehicle_id"] == 7
    assert payload["cancelled_trips"] == 2
    assert "password" not in payload
    assert payload["request_id"] is None

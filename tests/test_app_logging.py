"""Tests for logging configuration."""

import logging

from food_scoring.app_logging import _EventFormatter, configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger("food_scoring")
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging(debug=True)
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1
    assert logger.level == logging.DEBUG


def test_event_formatter_appends_event_name() -> None:
    formatter = _EventFormatter("%(levelname)s: %(message)s")
    record = logging.LogRecord(
        "food_scoring.services.scoring", logging.INFO, __file__, 1, "scored", None, None
    )
    record.event = "health_score"

    assert formatter.format(record) == "INFO: scored [event=health_score]"

"""Logging configuration helpers."""

import logging


class _EventFormatter(logging.Formatter):
    """Appends the structured event name when a record carries one."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        event = getattr(record, "event", None)
        if event:
            return f"{message} [event={event}]"
        return message


def configure_logging(debug: bool = False) -> None:
    """Configure package logging with a single stream handler."""
    logger = logging.getLogger("food_scoring")
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(_EventFormatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False

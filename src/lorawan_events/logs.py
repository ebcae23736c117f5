from __future__ import annotations

import logging


CONTEXT_FIELDS = ("path", "scope", "event", "status")


class StructuredFormatter(logging.Formatter):
    """Formatter that appends structured context passed through ``extra``."""

    def format(self, record: logging.LogRecord) -> str:
        context = " | ".join(
            f"{key}={getattr(record, key)}" for key in CONTEXT_FIELDS if hasattr(record, key)
        )
        message = f"{record.levelname}: {record.getMessage()}"
        return f"{message} | {context}" if context else message


def configure_logging(level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger("lorawan_events")
    logger.setLevel(level.upper())
    if not any(isinstance(h.formatter, StructuredFormatter) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
    return logger

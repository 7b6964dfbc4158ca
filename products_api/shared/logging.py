"""
Logging configuration for the application.

Sets up structured logging with a consistent format.
Logging must not change program behavior.
API keys that reach a log line are masked by RedactSecretsFilter before
any handler writes them; request bodies are never logged.
"""

import logging
import re
import sys

from products_api.domain.access.entities import mask_key

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Seeded keys (prod_key_..., dev_key_...) and issued keys (key_<hex>).
SECRET_PATTERN = re.compile(r"\b(?:[a-z]+_)?key_[0-9A-Za-z]*\d[0-9A-Za-z]*")

QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine")


class RedactSecretsFilter(logging.Filter):
    """Replaces API keys in the rendered message with their masked form."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = SECRET_PATTERN.sub(lambda m: mask_key(m.group(0)), message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def configure_logging(level: str = "INFO") -> None:
    """Configure structured logging for the application.

    Args:
        level: The log level string (DEBUG, INFO, WARNING, ERROR).
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )
    for handler in logging.getLogger().handlers:
        handler.addFilter(RedactSecretsFilter())

    # The request logger replaces uvicorn's own access log.
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

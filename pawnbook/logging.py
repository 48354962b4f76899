"""Logging setup for pawnbook, driven by ``EngineConfig``."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from pawnbook.config import EngineConfig, get_config

LOGGER_NAME = "pawnbook"
STANDARD_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Attributes every LogRecord carries; anything else came in through ``extra=``
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


def setup_logging(config: EngineConfig | None = None) -> logging.Logger:
    """Send pawnbook's logs to stdout with the configured level and format.

    Only the ``pawnbook`` logger is touched, so an application embedding the
    engine keeps its own root configuration. Calling it again replaces the
    handler instead of adding a second one.

    Parameters
    ----------
    config : EngineConfig | None
        Source of ``log_level`` and ``log_format``. Defaults to the
        process-wide config.

    Returns
    -------
    logging.Logger
        The configured ``pawnbook`` logger.
    """
    config = config or get_config()
    level = logging.getLevelName(config.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    if config.log_format == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(fmt=STANDARD_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    logger = logging.getLogger(LOGGER_NAME)
    for existing in logger.handlers[:]:
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


class JsonFormatter(logging.Formatter):
    """One JSON object per line, with ``extra=`` fields at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS and not key.startswith("_"):
                log_data[key] = value

        # Decimal amounts and dates are written as strings
        return json.dumps(log_data, default=str)

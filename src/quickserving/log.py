"""
=============================================================================
LOGGING SETUP
=============================================================================

Every module logs through ``logging.getLogger(__name__)``; this module only
decides where those records go and what they look like. It is called once
by the CLI. Library users (and the tests) can leave it alone and attach
their own handlers instead.

=============================================================================
LOG FORMATS
=============================================================================

    TEXT (default):
    ┌─────────────────────────────────────────────────────────────────────┐
    │ 2026-10-19 12:00:00 [INFO] quickserving.server: Requested path /   │
    └─────────────────────────────────────────────────────────────────────┘

    JSON (for log aggregators):
    ┌─────────────────────────────────────────────────────────────────────┐
    │ {"time": "2026-10-19T12:00:00+00:00", "level": "INFO",              │
    │  "logger": "quickserving.server", "message": "Requested path /"}    │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional, TextIO


TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class JsonFormatter(logging.Formatter):
    """Formats each record as a single-line JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def setup_logging(
    level: int = logging.INFO,
    fmt: str = "text",
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configure the ``quickserving`` logger.

    Args:
        level: Logging level (logging.INFO, ...).
        fmt: "text" or "json".
        stream: Where to write; defaults to stderr.

    Returns:
        The configured package logger.
    """
    handler = logging.StreamHandler(stream or sys.stderr)
    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT))

    logger = logging.getLogger("quickserving")
    # Replace handlers from an earlier call instead of stacking them
    for old in list(logger.handlers):
        logger.removeHandler(old)
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger

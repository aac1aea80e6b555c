"""
Logging utilities for the pair finder.

Every record is emitted as a single JSON line on stdout.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

ROOT_LOGGER_NAME = "pairfinder"
LOG_LEVEL_ENV = "PAIRFINDER_LOG_LEVEL"


class JSONFormatter(logging.Formatter):
    """Format a log record as one JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1]:
            log_data["error"] = str(record.exc_info[1])
            log_data["error_type"] = type(record.exc_info[1]).__name__
        return json.dumps(log_data)


def _configure_root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        level_name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
        root.setLevel(getattr(logging, level_name, logging.INFO))
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        root.addHandler(handler)
        root.propagate = False
    return root


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the application's root logger."""
    root = _configure_root()
    if not name or name == ROOT_LOGGER_NAME:
        return root
    if not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def set_log_level(level_name: str) -> None:
    """Change the level of the application's root logger."""
    _configure_root().setLevel(getattr(logging, level_name.upper(), logging.INFO))

"""Structured Logging — JSON formatter and setup for production observability.

Invariants:
    - All JSON logs include timestamp, level, logger, service and message
    - Extra fields (vehicle_id, operation, error_code, path, method) surfaced when present
    - JSON format in production, human-readable in development
    - setup_logging is idempotent: handlers it installed earlier are replaced

Design Decisions:
    - Optional per-level log files (info.log / warn.log / error.log) when log_dir is set
"""

import json
import logging
import os
from datetime import datetime, timezone

SERVICE_NAME = "Vehicle World API server"

_EXTRA_KEYS = ("vehicle_id", "operation", "error_code", "path", "method", "ruleset")

# Marks handlers installed by setup_logging so reconfiguration can remove them.
_HANDLER_FLAG = "_vehicle_api_handler"

_LEVEL_FILES = (
    ("info.log", logging.INFO),
    ("warn.log", logging.WARNING),
    ("error.log", logging.ERROR),
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def __init__(self, service: str = SERVICE_NAME):
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "service": self.service,
            "message": record.getMessage(),
        }
        for key in _EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def _make_formatter(fmt: str) -> logging.Formatter:
    if fmt == "json":
        return JSONFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")


def _install(handler: logging.Handler, formatter: logging.Formatter) -> None:
    handler.setFormatter(formatter)
    setattr(handler, _HANDLER_FLAG, True)
    logging.root.addHandler(handler)


def setup_logging(
    level: str = "INFO", fmt: str = "json", log_dir: str | None = None,
) -> None:
    """Configure logging for the application."""
    for handler in list(logging.root.handlers):
        if getattr(handler, _HANDLER_FLAG, False):
            logging.root.removeHandler(handler)
            handler.close()

    formatter = _make_formatter(fmt)
    _install(logging.StreamHandler(), formatter)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        for filename, file_level in _LEVEL_FILES:
            handler = logging.FileHandler(os.path.join(log_dir, filename))
            handler.setLevel(file_level)
            _install(handler, formatter)

    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))

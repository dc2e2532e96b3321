"""Structured JSON logging for the gateway.

Usage:
    from zeebe_ops.core.logging import configure_logging, get_logger

    configure_logging(level="INFO")
    logger = get_logger("services.instances")
    logger.info("Cancelling instance", extra={"structured": {"process_instance_key": 42}})
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from zeebe_ops import __version__

ROOT_LOGGER = "zeebe_ops"


class JSONFormatter(logging.Formatter):
    """Formats log records as JSON lines."""

    def __init__(self, service_name: str = "zeebe-ops") -> None:
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service.name": self.service_name,
            "service.version": __version__,
        }

        structured = getattr(record, "structured", None)
        if structured:
            entry.update(structured)

        if record.exc_info and record.exc_info[0] is not None:
            entry["exception.type"] = record.exc_info[0].__name__
            entry["exception.message"] = str(record.exc_info[1])

        return json.dumps(entry, default=str)


def configure_logging(level: str = "INFO", stream: Any = None,
                      service_name: str = "zeebe-ops") -> logging.Logger:
    """Configure the zeebe_ops logger with JSON output.

    Reconfiguring replaces the previous handler rather than stacking a new one.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    resolved = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(resolved)
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JSONFormatter(service_name=service_name))
    handler.setLevel(resolved)
    logger.addHandler(handler)
    return logger


def get_logger(name: str = "") -> logging.Logger:
    """Get a child logger under the zeebe_ops namespace."""
    if name:
        return logging.getLogger(f"{ROOT_LOGGER}.{name}")
    return logging.getLogger(ROOT_LOGGER)

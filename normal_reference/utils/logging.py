"""Structured logging utilities with JSON output."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

CONTEXT_FIELDS = (
    "component",
    "family",
    "n_samples",
    "iterations",
    "max_workers",
    "direction",
    "fraction",
    "segment",
    "wall_seconds",
    "cpu_seconds",
    "estimated_gb",
    "ram_gb",
)


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with any context fields set through ``extra``."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update({field: getattr(record, field) for field in CONTEXT_FIELDS if hasattr(record, field)})
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class ComponentFilter(logging.Filter):
    """Stamp ``component`` on records that did not set one."""

    def __init__(self, component: str) -> None:
        super().__init__()
        self.component = component

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if not hasattr(record, "component"):
            record.component = self.component
        return True


def configure_logging(component: Optional[str] = None, level: int = logging.INFO) -> None:
    """Send JSON records from the root logger to stderr, replacing existing handlers."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter())
    if component:
        handler.addFilter(ComponentFilter(component))

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    root.addHandler(handler)


def get_logger(name: str, component: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if component and not any(isinstance(f, ComponentFilter) for f in logger.filters):
        logger.addFilter(ComponentFilter(component))
    return logger

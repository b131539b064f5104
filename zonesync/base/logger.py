"""
Structured logging for Zonesync.

Provides a logging port that emits JSON-structured log records carrying
the change context (record, type, targets, action, resource id) so a
single reconciliation pass can be filtered in a log aggregation tool.
The port is injected into the provider and handed down to the workers;
nothing in the core logs through a module-level singleton.
"""

from __future__ import annotations

import json
import logging
from typing import Any

# Change fields copied from the LogRecord into the JSON line, in this order.
CHANGE_FIELDS = ("record", "content", "type", "ttl", "action", "id", "zone", "err", "count")


class StructuredFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in CHANGE_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                log_entry[key] = val
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = str(record.exc_info[1])
        return json.dumps(log_entry, default=str)


class ZonesyncLogger:
    """Convenience wrapper around :mod:`logging` carrying bound change fields."""

    def __init__(
        self,
        name: str = "zonesync",
        level: int = logging.INFO,
        *,
        fields: dict[str, Any] | None = None,
        _logger: logging.Logger | None = None,
    ) -> None:
        self.fields: dict[str, Any] = dict(fields or {})
        if _logger is not None:
            self.logger = _logger
            return
        self.logger = logging.getLogger(name)
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(handler)
            self.logger.setLevel(level)

    def bind(self, **fields: Any) -> ZonesyncLogger:
        """Return a logger that adds *fields* to every record it emits."""
        return ZonesyncLogger(fields={**self.fields, **fields}, _logger=self.logger)

    def log_change(
        self,
        level: int,
        message: str,
        *,
        exc_info: bool = False,
        **fields: Any,
    ) -> None:
        """Emit a structured log record with the bound and given change fields.

        Args:
            level: Logging level (e.g. logging.INFO).
            message: Human-readable message.
            exc_info: Whether to include exception info.
            **fields: Extra change fields; keys outside ``CHANGE_FIELDS``
                are attached to the record but not rendered as JSON.
        """
        extra = {**self.fields, **fields}
        self.logger.log(level, message, extra=extra, exc_info=exc_info)

    def info(self, message: str, **kwargs: Any) -> None:
        self.log_change(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self.log_change(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self.log_change(logging.ERROR, message, **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self.log_change(logging.DEBUG, message, **kwargs)

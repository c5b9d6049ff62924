"""JSON logging formatter used by the gateway logging setup.

:class:`JsonFormatter` serializes the standard record fields and hoists the
keys of JSON-encoded messages (as produced by ``log_event``) to the top level
so that emitted lines are not double-encoded.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

ISO = "%Y-%m-%dT%H:%M:%S.%fZ"

_RECORD_INTERNALS = frozenset(
    {
        "msg",
        "args",
        "levelname",
        "levelno",
        "name",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
    }
)


class JsonFormatter(logging.Formatter):
    """Lightweight JSON formatter for structured logs."""

    def format(self, record: logging.LogRecord) -> str:
        base = {
            "ts": datetime.now(timezone.utc).strftime(ISO),
            "level": record.levelname,
            "logger": record.name,
        }
        msg_text = record.getMessage()
        base["msg"] = msg_text
        try:
            parsed = json.loads(msg_text)
        except ValueError:
            parsed = None
        if isinstance(parsed, dict):
            base.update(parsed)
        for key, value in record.__dict__.items():
            if key.startswith("_") or key in _RECORD_INTERNALS:
                continue
            base.setdefault(key, value)
        if record.exc_info:
            base["exc"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False, default=str)


__all__ = ["JsonFormatter", "ISO"]

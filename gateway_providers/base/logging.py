"""Structured logging utilities for the gateway providers layer.

All modules log through the shared ``gateway`` logger. Events are emitted as a
single JSON line per call to :func:`log_event`; :func:`normalized_log_event`
adds the canonical keys (``structured``, ``phase``, ``attempt``,
``error_code``, ``emitted``, ``tokens``) so stream lifecycle events can be
aggregated the same way regardless of vendor.

The level is read from ``GATEWAY_LOG_LEVEL`` and overrides the ``level``
argument of :func:`get_logger`.
"""
from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict, Mapping

from ..config.defaults import GATEWAY_LOGGER_NAME
from ..config.env import get_stream_settings
from .log_support import JsonFormatter, LogContext

_BASE_LOGGER_ATTR = "_gateway_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_gateway_console_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Parse a logging level name into its integer constant.

    Unknown or empty values fall back to ``default``.
    """
    if not value:
        return default
    mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _make_formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Initialize and return the shared ``gateway`` logger."""
    logger = logging.getLogger(GATEWAY_LOGGER_NAME)
    desired_level = _parse_level(get_stream_settings().log_level, default=level)
    if getattr(logger, _BASE_LOGGER_ATTR, False):
        logger.setLevel(desired_level)
        for handler in logger.handlers:
            if not getattr(handler, _CONSOLE_HANDLER_ATTR, False):
                continue
            handler.setLevel(desired_level)
            if json_mode != isinstance(handler.formatter, JsonFormatter):
                handler.setFormatter(_make_formatter(json_mode))
            if hasattr(handler, "setStream"):
                handler.setStream(sys.stderr)
        return logger

    logger.setLevel(desired_level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(desired_level)
    handler.setFormatter(_make_formatter(json_mode))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    logger.handlers[:] = [handler]
    logger.propagate = False
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def get_logger(name: str = GATEWAY_LOGGER_NAME, json_mode: bool | None = None, level: int = logging.INFO) -> logging.Logger:
    """Return ``name`` as a child of the configured shared logger.

    ``json_mode`` defaults to the ``GATEWAY_LOG_JSON`` toggle (on when unset).

    Child loggers carry no handlers of their own and propagate to the shared
    ``gateway`` logger, which owns the single console handler.
    """
    if json_mode is None:
        json_mode = get_stream_settings().log_json
    base_logger = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == GATEWAY_LOGGER_NAME:
        return base_logger
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Emit a structured log event as one JSON line.

    Parameters
    ----------
    logger: logging.Logger
        Logger obtained from :func:`get_logger`.
    event: str
        Event name, e.g. ``stream.decode.start``.
    ctx: LogContext | None
        Provider/model context merged shallowly into the payload.
    level: int
        Logging level of the record.
    keep_none: bool
        Preserve keys whose values are ``None`` (encoded as JSON ``null``).
    **fields: Any
        Additional JSON-serializable key/value pairs.
    """
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    if keep_none:
        payload.update(fields)
    else:
        payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = (
    "structured",
    "phase",
    "attempt",
    "error_code",
    "emitted",
    "tokens",
)


def _coerce_tokens(tokens: Any) -> Any:
    """Coerce token usage info into a JSON-friendly mapping (or ``None``)."""
    if tokens is None:
        return None
    if isinstance(tokens, Mapping):
        return dict(tokens.items())
    to_dict = getattr(tokens, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return {"value": repr(tokens)}


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    attempt: int | None = None,
    error_code: str | None = None,
    emitted: bool | None = None,
    tokens: Any = None,
    structured: bool = True,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Emit a log event guaranteed to carry the normalized key set.

    ``error_code`` is omitted when ``None``; every other required key is
    present even when its value is unknown. ``extra_fields`` never overwrite a
    normalized value that is already set.
    """
    base_fields: Dict[str, Any] = {
        "structured": structured,
        "phase": phase,
        "attempt": attempt,
        "error_code": error_code,
        "emitted": emitted,
        "tokens": _coerce_tokens(tokens),
    }
    if error_code is None:
        base_fields.pop("error_code")
    for key, value in extra_fields.items():
        if value is None:
            continue
        if key in base_fields and base_fields[key] is not None:
            continue
        base_fields[key] = value
    log_event(logger, event, ctx, level=level, keep_none=True, **base_fields)


__all__ = [
    "LogContext",
    "get_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
]

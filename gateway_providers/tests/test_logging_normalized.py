"""Focused tests for gateway_providers.base.logging.

Covers:
- _parse_level string parsing
- log_event pruning of ``None`` values and context merge
- normalized_log_event required keys and token coercion
- JsonFormatter hoisting of JSON messages
"""
from __future__ import annotations

import json
import logging

from gateway_providers.base.logging import (
    REQUIRED_NORMALIZED_KEYS,
    _parse_level,  # type: ignore[attr-defined]
    get_logger,
    log_event,
    normalized_log_event,
)
from gateway_providers.base.log_support import JsonFormatter, LogContext
from gateway_providers.base.streaming import UsageInfo


class _ListHandler(logging.Handler):
    """Capture log messages into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())


def _logger(name: str):
    logger = get_logger(name, json_mode=False)
    handler = _ListHandler()
    logger.handlers[:] = [handler]
    logger.propagate = False
    return logger, handler


def test_parse_level_variants():
    assert _parse_level(None) == logging.INFO  # nosec B101
    assert _parse_level("debug") == logging.DEBUG  # nosec B101
    assert _parse_level("WARN") == logging.WARNING  # nosec B101
    assert _parse_level("unknown", default=logging.ERROR) == logging.ERROR  # nosec B101


def test_child_loggers_share_base_handler():
    child = get_logger("gateway.test.child")
    assert child.handlers == []  # nosec B101
    assert child.propagate is True  # nosec B101


def test_log_event_merges_context_and_prunes_none():
    logger, handler = _logger("gateway.test.log_event")
    ctx = LogContext(provider="openai", model="m", extra={"tenant": "t1", "skip": None})
    log_event(logger, "stream.decode.start", ctx, present=1, missing=None)

    payload = json.loads(handler.messages[-1])
    assert payload == {"event": "stream.decode.start", "provider": "openai", "model": "m", "tenant": "t1", "present": 1}  # nosec B101


def test_log_event_respects_level():
    logger, handler = _logger("gateway.test.level")
    logger.setLevel(logging.INFO)
    log_event(logger, "quiet", level=logging.DEBUG)
    assert handler.messages == []  # nosec B101


def test_normalized_log_event_emits_required_keys():
    logger, handler = _logger("gateway.test.normalized")
    normalized_log_event(
        logger,
        "stream.decode.error",
        LogContext(provider="p", model="m"),
        phase="finalize",
        error_code="rate_limit_exceeded",
        emitted=False,
        tokens={"prompt_tokens": 10},
        phase_extra="kept",
    )

    payload = json.loads(handler.messages[-1])
    for key in REQUIRED_NORMALIZED_KEYS:
        assert key in payload  # nosec B101
    assert payload["structured"] is True  # nosec B101
    assert payload["attempt"] is None  # nosec B101
    assert payload["phase_extra"] == "kept"  # nosec B101


def test_normalized_log_event_omits_missing_error_code_and_coerces_tokens():
    logger, handler = _logger("gateway.test.tokens")
    normalized_log_event(
        logger,
        "stream.decode.end",
        None,
        phase="finalize",
        tokens=UsageInfo.build(prompt=1, completion=2),
    )
    payload = json.loads(handler.messages[-1])
    assert "error_code" not in payload  # nosec B101
    assert payload["tokens"]["total_tokens"] == 3  # nosec B101


def test_extra_fields_never_override_normalized_values():
    logger, handler = _logger("gateway.test.override")
    normalized_log_event(logger, "e", phase="finalize", emitted=True, emitted_count=2)
    payload = json.loads(handler.messages[-1])
    assert payload["emitted"] is True  # nosec B101
    assert payload["emitted_count"] == 2  # nosec B101


def test_json_formatter_hoists_message_keys():
    record = logging.LogRecord("gateway", logging.INFO, __file__, 1, json.dumps({"event": "x", "n": 1}), None, None)
    line = json.loads(JsonFormatter().format(record))
    assert line["event"] == "x"  # nosec B101
    assert line["n"] == 1  # nosec B101
    assert line["level"] == "INFO"  # nosec B101
    assert line["logger"] == "gateway"  # nosec B101


def test_json_formatter_plain_message():
    record = logging.LogRecord("gateway", logging.WARNING, __file__, 1, "plain %s", ("text",), None)
    line = json.loads(JsonFormatter().format(record))
    assert line["msg"] == "plain text"  # nosec B101


def test_log_context_bind():
    base = LogContext(provider="openai", model="m")
    bound = base.bind(request_id="req_1", tenant="t", response_id=None)

    assert base.request_id is None  # nosec B101
    assert bound.to_dict() == {"provider": "openai", "model": "m", "request_id": "req_1", "tenant": "t"}  # nosec B101
    assert base.bind(request_id=None) is base  # nosec B101


def test_get_logger_follows_environment_settings(monkeypatch):
    monkeypatch.setenv("GATEWAY_LOG_LEVEL", "ERROR")
    monkeypatch.setenv("GATEWAY_LOG_JSON", "0")
    base = get_logger()
    console = [h for h in base.handlers if getattr(h, "_gateway_console_handler", False)]

    assert base.level == logging.ERROR  # nosec B101
    assert console and not isinstance(console[0].formatter, JsonFormatter)  # nosec B101

    monkeypatch.setenv("GATEWAY_LOG_JSON", "1")
    get_logger()
    assert isinstance(console[0].formatter, JsonFormatter)  # nosec B101

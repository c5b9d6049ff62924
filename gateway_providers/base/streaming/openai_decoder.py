"""Decoder for OpenAI-compatible chat completion streams (OpenAI, OpenRouter).

Record payloads look like::

    {"choices": [{"delta": {"content": "...",
                            "tool_calls": [{"index": 0, "id": "call_1",
                                            "function": {"name": "...", "arguments": "..."}}],
                            "reasoning_details": [...]},
                  "finish_reason": null}],
     "usage": {...}}

and the stream ends with ``data: [DONE]``. Only the first choice is decoded.
The protocol has no per-call end marker, so completed tool calls are detected
by ``finish_reason == "tool_calls"`` or, unless disabled, by their arguments
parsing as JSON.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, Mapping, Optional

from ...config.defaults import OPENAI_PROVIDER
from ..errors import error_info_from_envelope
from ..logging import LogContext
from .decode_support import BaseStreamDecoder, DecodeState, resolve_parse_heuristic
from .events import (
    ContentDelta,
    ErrorSignal,
    FinishSignal,
    ReasoningDelta,
    StreamEvent,
    ToolCallDelta,
    UsageSignal,
)
from .usage import usage_from_openai


def _first_choice(payload: Mapping[str, Any]) -> Mapping[str, Any]:
    choices = payload.get("choices")
    if isinstance(choices, list) and choices and isinstance(choices[0], Mapping):
        return choices[0]
    return {}


def _tool_call_delta(raw: Mapping[str, Any]) -> ToolCallDelta:
    function = raw.get("function")
    if not isinstance(function, Mapping):
        function = {}
    index = raw.get("index")
    name = function.get("name")
    arguments = function.get("arguments")
    return ToolCallDelta(
        index=index if isinstance(index, int) else None,
        id=raw.get("id") or None,
        name=name if isinstance(name, str) and name else None,
        args_fragment=arguments if isinstance(arguments, str) else None,
    )


def openai_events(payload: Mapping[str, Any]) -> Iterator[StreamEvent]:
    """Translate one OpenAI-style chunk into stream events.

    Events come out in the order content, reasoning, tool-call fragments,
    finish reason, usage, so a ``tool_calls`` finish applies after the
    fragments of the same chunk.
    """
    if payload.get("error"):
        yield ErrorSignal(error_info_from_envelope(payload))
        return

    choice = _first_choice(payload)
    delta = choice.get("delta")
    if isinstance(delta, Mapping):
        content = delta.get("content")
        if isinstance(content, str) and content:
            yield ContentDelta(content)
        details = delta.get("reasoning_details")
        if isinstance(details, list):
            for detail in details:
                if isinstance(detail, Mapping):
                    yield ReasoningDelta(dict(detail))
        tool_calls = delta.get("tool_calls")
        if isinstance(tool_calls, list):
            for raw in tool_calls:
                if isinstance(raw, Mapping):
                    yield _tool_call_delta(raw)

    finish_reason = choice.get("finish_reason")
    if isinstance(finish_reason, str) and finish_reason:
        yield FinishSignal(finish_reason)

    usage = payload.get("usage")
    if isinstance(usage, Mapping):
        yield UsageSignal(usage_from_openai(usage))


class OpenAIStreamDecoder(BaseStreamDecoder):
    """Streaming decoder for the OpenAI chat completions dialect.

    ``parse_heuristic`` defaults to on, unless ``GATEWAY_STREAM_PARSE_HEURISTIC``
    turns it off.
    """

    provider = OPENAI_PROVIDER
    tool_call_finish_reasons = frozenset({"tool_calls", "function_call"})

    def __init__(
        self,
        *,
        model: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
        ctx: Optional[LogContext] = None,
        parse_heuristic: Optional[bool] = None,
        provider: Optional[str] = None,
    ) -> None:
        if provider:
            self.provider = provider
        if parse_heuristic is None:
            parse_heuristic = resolve_parse_heuristic()
        super().__init__(model=model, logger=logger, ctx=ctx, parse_heuristic=parse_heuristic)

    def translate(self, payload: Dict[str, Any], state: DecodeState) -> Iterator[StreamEvent]:
        return openai_events(payload)


__all__ = ["OpenAIStreamDecoder", "openai_events"]

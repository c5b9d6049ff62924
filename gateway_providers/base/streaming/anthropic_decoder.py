"""Decoder for Anthropic Messages API streams.

Each record payload has a ``type``; the relevant ones are ``message_start``,
``content_block_start``/``_delta``/``_stop``, ``message_delta``,
``message_stop`` and ``error`` (``ping`` is ignored). ``event:`` lines are
redundant with ``type`` and dropped by the splitter.

Tool calls arrive as ``tool_use`` content blocks whose input is streamed as
``input_json_delta`` fragments; ``content_block_stop`` is an explicit
end-of-call signal, so the parse heuristic is off by default. Usage is split
over ``message_start`` (input side) and ``message_delta`` (output side) and is
merged key by key.
"""
from __future__ import annotations

from typing import Any, Dict, Iterator, Mapping

from ...config.defaults import ANTHROPIC_PROVIDER
from ..errors import error_info_from_envelope
from .decode_support import BaseStreamDecoder, DecodeState
from .events import (
    ContentDelta,
    DoneSignal,
    ErrorSignal,
    FinishSignal,
    ReasoningDelta,
    StreamEvent,
    ToolCallDelta,
    ToolCallEnd,
    UsageSignal,
)
from .usage import usage_from_anthropic

_BLOCKS = "anthropic_blocks"
_USAGE = "anthropic_usage"


def _merge_usage(state: DecodeState, raw: Any) -> Iterator[StreamEvent]:
    if not isinstance(raw, Mapping):
        return
    merged: Dict[str, Any] = state.scratch.setdefault(_USAGE, {})
    merged.update({k: v for k, v in raw.items() if v is not None})
    yield UsageSignal(usage_from_anthropic(merged))


def _block_start(payload: Mapping[str, Any], state: DecodeState) -> Iterator[StreamEvent]:
    index = payload.get("index")
    block = payload.get("content_block")
    if not isinstance(index, int) or not isinstance(block, Mapping):
        return
    kind = block.get("type")
    state.scratch.setdefault(_BLOCKS, {})[index] = kind
    if kind == "tool_use":
        yield ToolCallDelta(index=index, id=block.get("id") or None, name=block.get("name") or None)
    elif kind == "text" and block.get("text"):
        yield ContentDelta(block["text"])


def _block_delta(payload: Mapping[str, Any]) -> Iterator[StreamEvent]:
    index = payload.get("index")
    delta = payload.get("delta")
    if not isinstance(delta, Mapping):
        return
    kind = delta.get("type")
    if kind == "text_delta":
        text = delta.get("text")
        if isinstance(text, str):
            yield ContentDelta(text)
    elif kind == "input_json_delta":
        fragment = delta.get("partial_json")
        if isinstance(index, int) and isinstance(fragment, str):
            yield ToolCallDelta(index=index, args_fragment=fragment)
    elif kind == "thinking_delta":
        yield ReasoningDelta({"type": "thinking", "text": delta.get("thinking") or ""})
    elif kind == "signature_delta":
        yield ReasoningDelta({"type": "signature", "signature": delta.get("signature")})


def anthropic_events(payload: Mapping[str, Any], state: DecodeState) -> Iterator[StreamEvent]:
    """Translate one Messages API event into stream events."""
    kind = payload.get("type")
    if kind == "error" or (kind is None and payload.get("error")):
        yield ErrorSignal(error_info_from_envelope(payload))
    elif kind == "message_start":
        message = payload.get("message")
        if isinstance(message, Mapping):
            yield from _merge_usage(state, message.get("usage"))
    elif kind == "content_block_start":
        yield from _block_start(payload, state)
    elif kind == "content_block_delta":
        yield from _block_delta(payload)
    elif kind == "content_block_stop":
        index = payload.get("index")
        if isinstance(index, int) and state.scratch.get(_BLOCKS, {}).get(index) == "tool_use":
            yield ToolCallEnd(index)
    elif kind == "message_delta":
        delta = payload.get("delta")
        if isinstance(delta, Mapping) and isinstance(delta.get("stop_reason"), str):
            yield FinishSignal(delta["stop_reason"])
        yield from _merge_usage(state, payload.get("usage"))
    elif kind == "message_stop":
        yield DoneSignal()


class AnthropicStreamDecoder(BaseStreamDecoder):
    """Streaming decoder for the Anthropic Messages dialect."""

    provider = ANTHROPIC_PROVIDER
    tool_call_finish_reasons = frozenset({"tool_use"})
    default_parse_heuristic = False

    def translate(self, payload: Dict[str, Any], state: DecodeState) -> Iterator[StreamEvent]:
        return anthropic_events(payload, state)


__all__ = ["AnthropicStreamDecoder", "anthropic_events"]

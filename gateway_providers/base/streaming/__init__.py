"""Streaming response decoding.

Public surface of the streaming package: vendor decoders, the shared decode
loop, sinks, results, and the building blocks they are made of.
"""

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
from .usage import (
    FinishReason,
    UsageFinishExtractor,
    UsageInfo,
    normalize_finish_reason,
    usage_from_anthropic,
    usage_from_openai,
)
from .line_splitter import EventLineSplitter, SplitBatch, decode_json_payload
from .content import ContentAccumulator
from .reasoning import ReasoningAccumulator
from .tool_calls import ToolCallAssembler, ToolCallBuilder
from .sinks import StreamSinks
from .result import StreamDecodeOutcome, StreamResult
from .streaming_metrics import StreamMetrics
from .decode_support import BaseStreamDecoder, DecodeState
from .openai_decoder import OpenAIStreamDecoder, openai_events
from .anthropic_decoder import AnthropicStreamDecoder, anthropic_events
from .decoder_factory import UnknownProviderError, create_decoder, supported_providers

__all__ = [
    "ContentDelta",
    "DoneSignal",
    "ErrorSignal",
    "FinishSignal",
    "ReasoningDelta",
    "StreamEvent",
    "ToolCallDelta",
    "ToolCallEnd",
    "UsageSignal",
    "FinishReason",
    "UsageFinishExtractor",
    "UsageInfo",
    "normalize_finish_reason",
    "usage_from_anthropic",
    "usage_from_openai",
    "EventLineSplitter",
    "SplitBatch",
    "decode_json_payload",
    "ContentAccumulator",
    "ReasoningAccumulator",
    "ToolCallAssembler",
    "ToolCallBuilder",
    "StreamSinks",
    "StreamDecodeOutcome",
    "StreamResult",
    "StreamMetrics",
    "BaseStreamDecoder",
    "DecodeState",
    "OpenAIStreamDecoder",
    "openai_events",
    "AnthropicStreamDecoder",
    "anthropic_events",
    "UnknownProviderError",
    "create_decoder",
    "supported_providers",
]

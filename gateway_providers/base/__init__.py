"""
Providers Base Package

Exports the provider-agnostic building blocks of the gateway providers layer:

- Errors: classified :class:`ErrorInfo`, :class:`ErrorKind` taxonomy and the
  classifier/parsers that produce them
- DTOs: serialization-friendly objects handed to callers (:class:`ToolCall`)
- HTTP: transport readers and response metadata extraction
- Streaming: vendor stream decoders and their result types
"""

from .errors import (
    ErrorInfo,
    ErrorKind,
    HealthStatus,
    ProviderError,
    ProviderHealth,
    classify_error,
    classify_exception,
    error_info_from_envelope,
    error_info_from_exception,
    error_info_from_response,
    parse_error_response,
    provider_health,
)
from .dto import ToolCall
from .logging import LogContext, get_logger, log_event, normalized_log_event
from .http import HttpxStreamReader, IterableReader, TransportReader, extract_response_metadata
from .streaming import (
    AnthropicStreamDecoder,
    BaseStreamDecoder,
    FinishReason,
    OpenAIStreamDecoder,
    StreamDecodeOutcome,
    StreamMetrics,
    StreamResult,
    StreamSinks,
    UnknownProviderError,
    UsageInfo,
    create_decoder,
    normalize_finish_reason,
)

__all__ = [
    # Errors
    "ErrorInfo",
    "ErrorKind",
    "HealthStatus",
    "ProviderError",
    "ProviderHealth",
    "classify_error",
    "classify_exception",
    "error_info_from_envelope",
    "error_info_from_exception",
    "error_info_from_response",
    "parse_error_response",
    "provider_health",
    # DTOs
    "ToolCall",
    # Logging
    "LogContext",
    "get_logger",
    "log_event",
    "normalized_log_event",
    # HTTP
    "HttpxStreamReader",
    "IterableReader",
    "TransportReader",
    "extract_response_metadata",
    # Streaming
    "AnthropicStreamDecoder",
    "BaseStreamDecoder",
    "FinishReason",
    "OpenAIStreamDecoder",
    "StreamDecodeOutcome",
    "StreamMetrics",
    "StreamResult",
    "StreamSinks",
    "UnknownProviderError",
    "UsageInfo",
    "create_decoder",
    "normalize_finish_reason",
]

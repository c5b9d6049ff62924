"""gateway_providers package

Provider-integration layer of a vendor-neutral LLM gateway: decodes vendor
streaming responses into content, tool calls, usage and a finish reason, and
classifies vendor errors into a stable taxonomy.

Public API (re-exported):
    - Version: ``__version__``
    - Decoding: :func:`create_decoder`, :class:`OpenAIStreamDecoder`,
      :class:`AnthropicStreamDecoder`, :class:`StreamSinks`,
      :class:`StreamResult`
    - Readers: :class:`IterableReader`, :class:`HttpxStreamReader`
    - Errors: :class:`ErrorInfo`, :class:`ErrorKind`, :class:`ProviderError`,
      :func:`classify_error`, :func:`parse_error_response`

Typical use::

    decoder = create_decoder("openai", model="gpt-4o")
    content, err, result = decoder.decode(HttpxStreamReader(response), StreamSinks(on_content=print))
"""

from .base import (
    AnthropicStreamDecoder,
    ErrorInfo,
    ErrorKind,
    HttpxStreamReader,
    IterableReader,
    OpenAIStreamDecoder,
    ProviderError,
    StreamDecodeOutcome,
    StreamResult,
    StreamSinks,
    ToolCall,
    UsageInfo,
    classify_error,
    create_decoder,
    parse_error_response,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "AnthropicStreamDecoder",
    "ErrorInfo",
    "ErrorKind",
    "HttpxStreamReader",
    "IterableReader",
    "OpenAIStreamDecoder",
    "ProviderError",
    "StreamDecodeOutcome",
    "StreamResult",
    "StreamSinks",
    "ToolCall",
    "UsageInfo",
    "classify_error",
    "create_decoder",
    "parse_error_response",
]

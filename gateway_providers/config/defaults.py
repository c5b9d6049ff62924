"""gateway_providers.config.defaults
=================================

Central place for small, stable default values used by the streaming decoders
and the error parsing helpers. Only plain constants live here; nothing in this
module imports from other gateway packages.
"""

from __future__ import annotations

# ---- Server-sent event wire format ----

# Prefix of every payload-carrying record in an event stream.
SSE_DATA_PREFIX = "data:"
# Literal payload that ends the logical stream (OpenAI-compatible vendors).
SSE_DONE_MARKER = "[DONE]"

# ---- Error handling ----

# Maximum number of characters read from a streaming body when it turns out
# to be an error response instead of an event stream.
ERROR_BODY_READ_LIMIT = 4096
# Error messages are truncated to this length in log events.
ERROR_SNIPPET_MAX_CHARS = 260

# ---- Logging ----

# Name of the shared logger all gateway modules log through.
GATEWAY_LOGGER_NAME = "gateway"
# Default number of characters of a skipped record echoed in debug logs.
SKIPPED_RECORD_PREVIEW_CHARS = 120

# ---- Provider identifiers ----

OPENAI_PROVIDER = "openai"
OPENROUTER_PROVIDER = "openrouter"
ANTHROPIC_PROVIDER = "anthropic"

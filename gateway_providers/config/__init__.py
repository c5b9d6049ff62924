"""Configuration helpers for the gateway providers layer.

Exposes small, dependency-free constants (``defaults``) and environment
lookups (``env``) used by the streaming decoders and logging setup.
"""

from .defaults import (
    SSE_DATA_PREFIX,
    SSE_DONE_MARKER,
    ERROR_BODY_READ_LIMIT,
    ERROR_SNIPPET_MAX_CHARS,
)
from .env import StreamSettings, get_stream_settings, env_flag

__all__ = [
    "SSE_DATA_PREFIX",
    "SSE_DONE_MARKER",
    "ERROR_BODY_READ_LIMIT",
    "ERROR_SNIPPET_MAX_CHARS",
    "StreamSettings",
    "get_stream_settings",
    "env_flag",
]

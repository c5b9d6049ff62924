"""gateway_providers.config.env
============================

Environment variable lookups for runtime toggles of the providers layer.

Recognized variables
--------------------
- ``GATEWAY_LOG_LEVEL``: level name for the shared ``gateway`` logger.
- ``GATEWAY_LOG_JSON``: ``0``/``false`` switches logging to plain text.
- ``GATEWAY_STREAM_PARSE_HEURISTIC``: ``0``/``false`` disables the
  "arguments parse as JSON" completion heuristic of the OpenAI decoder so that
  tool calls are only emitted on ``finish_reason == "tool_calls"`` or at the
  end of the stream.

Helpers never raise on unset or malformed values; they fall back to defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def env_flag(name: str, default: bool) -> bool:
    """Return a boolean toggle read from the environment.

    Parameters
    ----------
    name: str
        Environment variable name.
    default: bool
        Value used when the variable is unset or not a recognized boolean.
    """
    raw: Optional[str] = os.environ.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return default


@dataclass(frozen=True)
class StreamSettings:
    """Runtime knobs for the streaming decoders."""

    parse_heuristic: bool = True
    log_json: bool = True
    log_level: Optional[str] = None


def get_stream_settings() -> StreamSettings:
    """Build :class:`StreamSettings` from the current process environment."""
    return StreamSettings(
        parse_heuristic=env_flag("GATEWAY_STREAM_PARSE_HEURISTIC", True),
        log_json=env_flag("GATEWAY_LOG_JSON", True),
        log_level=os.environ.get("GATEWAY_LOG_LEVEL") or None,
    )


__all__ = ["StreamSettings", "env_flag", "get_stream_settings"]

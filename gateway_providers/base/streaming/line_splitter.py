"""Event-stream record splitter.

Turns arbitrary text chunks into ``data:`` record payloads. Chunk boundaries
carry no meaning: a record may be split anywhere (even mid-payload) or many
records may arrive in one read. The trailing partial line is buffered until
its terminator arrives or :meth:`EventLineSplitter.flush` is called at the end
of input.

Before records are handed out, the complete text of the current feed is
scanned for an embedded vendor error envelope. When one is found the batch
carries only the error; records of the same feed are dropped because the
stream is aborted.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from ...config.defaults import SSE_DATA_PREFIX

_ERROR_ENVELOPE_RE = re.compile(r'data:[ \t]*(\{[^\n]*?"error"\s*:[^\n]*?)[ \t\r]*\n')


@dataclass(frozen=True)
class SplitBatch:
    """Result of one :meth:`EventLineSplitter.feed` call."""

    records: Tuple[str, ...] = ()
    error: Optional[Dict[str, Any]] = None


def decode_json_payload(payload: str) -> Optional[Dict[str, Any]]:
    """Parse a record payload; anything but a JSON object yields ``None``."""
    try:
        value = json.loads(payload)
    except ValueError:
        return None
    return value if isinstance(value, dict) else None


def _find_error_envelope(text: str) -> Optional[Dict[str, Any]]:
    for match in _ERROR_ENVELOPE_RE.finditer(text):
        envelope = decode_json_payload(match.group(1))
        if envelope is not None and isinstance(envelope.get("error"), dict):
            return envelope
    return None


class EventLineSplitter:
    """Incremental splitter for ``data: <payload>\\n`` records."""

    def __init__(self) -> None:
        self._buffer = ""

    @property
    def pending(self) -> str:
        """Buffered text of an unterminated record."""
        return self._buffer

    def feed(self, chunk: str) -> SplitBatch:
        if not chunk:
            return SplitBatch()
        text = self._buffer + chunk
        cut = text.rfind("\n")
        if cut < 0:
            self._buffer = text
            return SplitBatch()
        complete, self._buffer = text[: cut + 1], text[cut + 1 :]
        envelope = _find_error_envelope(complete)
        if envelope is not None:
            return SplitBatch(error=envelope)
        records: List[str] = []
        for line in complete.split("\n"):
            line = line.rstrip("\r")
            if not line.startswith(SSE_DATA_PREFIX):
                continue
            payload = line[len(SSE_DATA_PREFIX) :].strip()
            if payload:
                records.append(payload)
        return SplitBatch(records=tuple(records))

    def flush(self) -> SplitBatch:
        """Terminate and process a buffered final record, if any."""
        if not self._buffer:
            return SplitBatch()
        return self.feed("\n")


__all__ = ["SplitBatch", "EventLineSplitter", "decode_json_payload"]

"""Streaming metrics collected over one decode invocation.

Reported once in the finalize log event; never exported elsewhere.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class StreamMetrics:
    """Counters and timings of a single decode.

    Attributes:
        records: ``data:`` records handed to the vendor translator (DONE included).
        skipped_records: Records dropped because the payload was not a JSON object.
        content_deltas: Non-empty content deltas forwarded to ``on_content``.
        tool_calls_emitted: Tool calls forwarded to ``on_tool_call``.
        time_to_first_token_ms: Latency from decode start to the first content
            or tool-call output.
        total_duration_ms: Wall time of the decode.
    """

    records: int = 0
    skipped_records: int = 0
    content_deltas: int = 0
    tool_calls_emitted: int = 0
    time_to_first_token_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    started_at: float = field(default_factory=lambda: time.perf_counter(), repr=False)

    def _elapsed_ms(self) -> float:
        return (time.perf_counter() - self.started_at) * 1000.0

    def mark_output(self) -> None:
        """Record time to first token on the first observable output."""
        if self.time_to_first_token_ms is None:
            self.time_to_first_token_ms = self._elapsed_ms()

    def finish(self) -> None:
        self.total_duration_ms = self._elapsed_ms()

    @property
    def emitted(self) -> bool:
        return self.content_deltas > 0 or self.tool_calls_emitted > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "records": self.records,
            "skipped_records": self.skipped_records,
            "content_deltas": self.content_deltas,
            "tool_calls_emitted": self.tool_calls_emitted,
            "time_to_first_token_ms": self.time_to_first_token_ms,
            "total_duration_ms": self.total_duration_ms,
        }


__all__ = ["StreamMetrics"]

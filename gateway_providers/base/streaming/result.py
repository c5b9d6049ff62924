"""Aggregated outcome of a streaming decode."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, NamedTuple, Optional, Tuple

from ..dto import ToolCall
from ..errors import ErrorInfo, ProviderError
from .usage import FinishReason, UsageInfo, normalize_finish_reason


@dataclass(frozen=True)
class StreamResult:
    """Final immutable aggregate of one successful decode.

    ``finish_reason`` keeps the vendor's raw string; use
    :attr:`normalized_finish_reason` for the vendor-neutral value.
    """

    content: str
    finish_reason: Optional[str] = None
    usage: Optional[UsageInfo] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    tool_calls: Tuple[ToolCall, ...] = ()
    reasoning_details: Tuple[Dict[str, Any], ...] = ()

    @property
    def normalized_finish_reason(self) -> Optional[FinishReason]:
        return normalize_finish_reason(self.finish_reason)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "finish_reason": self.finish_reason,
            "usage": self.usage.to_dict() if self.usage else None,
            "metadata": dict(self.metadata),
            "tool_calls": [call.model_dump() for call in self.tool_calls],
            "reasoning_details": [dict(d) for d in self.reasoning_details],
        }


class StreamDecodeOutcome(NamedTuple):
    """``(content, error, result)`` triple returned by ``decode``.

    Exactly one of ``error`` and ``result`` is set.
    """

    content: Optional[str]
    error: Optional[ErrorInfo]
    result: Optional[StreamResult]

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self, provider: str, model: Optional[str] = None) -> StreamResult:
        """Return the result, or raise :class:`ProviderError` for a failed decode."""
        if self.error is not None:
            raise ProviderError(info=self.error, provider=provider, model=model)
        if self.result is None:
            raise RuntimeError("decode outcome carries neither a result nor an error")
        return self.result


__all__ = ["StreamResult", "StreamDecodeOutcome"]

"""Transient events decoded from individual stream records.

Vendor translators turn one parsed payload into zero or more of these; the
decoder dispatches each immediately. Events are never stored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from ..errors import ErrorInfo
from .usage import UsageInfo


@dataclass(frozen=True)
class ContentDelta:
    text: str


@dataclass(frozen=True)
class ToolCallDelta:
    """One fragment of a tool call; every field but ``index`` may be absent."""

    index: Optional[int]
    id: Optional[str] = None
    name: Optional[str] = None
    args_fragment: Optional[str] = None


@dataclass(frozen=True)
class ToolCallEnd:
    """Explicit end-of-call signal for the call at ``index``."""

    index: int


@dataclass(frozen=True)
class ReasoningDelta:
    """A reasoning detail record; ``text`` is forwarded to ``on_reasoning``."""

    detail: Dict[str, Any] = field(default_factory=dict)

    @property
    def text(self) -> Optional[str]:
        value = self.detail.get("text")
        return value if isinstance(value, str) else None


@dataclass(frozen=True)
class FinishSignal:
    reason: str


@dataclass(frozen=True)
class UsageSignal:
    usage: UsageInfo


@dataclass(frozen=True)
class ErrorSignal:
    info: ErrorInfo


@dataclass(frozen=True)
class DoneSignal:
    pass


StreamEvent = Union[
    ContentDelta,
    ToolCallDelta,
    ToolCallEnd,
    ReasoningDelta,
    FinishSignal,
    UsageSignal,
    ErrorSignal,
    DoneSignal,
]

__all__ = [
    "ContentDelta",
    "ToolCallDelta",
    "ToolCallEnd",
    "ReasoningDelta",
    "FinishSignal",
    "UsageSignal",
    "ErrorSignal",
    "DoneSignal",
    "StreamEvent",
]

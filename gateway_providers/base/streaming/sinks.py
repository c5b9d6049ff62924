"""Caller-supplied callbacks of a streaming decode.

Every sink is optional and defaults to a no-op. Sinks run inline on the
decoding thread in event order; an exception raised by a sink propagates out
of ``decode``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..dto import ToolCall
    from ..errors import ErrorInfo
    from .result import StreamResult


def _noop(*_args: Any) -> None:
    return None


@dataclass
class StreamSinks:
    """Callbacks receiving decoded output as it is produced.

    Attributes:
        on_content: Called with every non-empty content delta.
        on_tool_call: Called once per completed :class:`ToolCall`; the return
            value is ignored.
        on_reasoning: Called with the text of each reasoning detail.
        on_error: Called once with the :class:`ErrorInfo` of a failed decode.
        on_done: Called once with the :class:`StreamResult` of a successful decode.
    """

    on_content: Callable[[str], Any] = _noop
    on_tool_call: Callable[["ToolCall"], Any] = _noop
    on_reasoning: Callable[[str], Any] = _noop
    on_error: Callable[["ErrorInfo"], Any] = _noop
    on_done: Callable[["StreamResult"], Any] = _noop


__all__ = ["StreamSinks"]

"""Reasoning detail accumulation.

OpenRouter streams reasoning as ``delta.reasoning_details`` records
(``{"type": "reasoning.text", "text": ...}`` and friends) and Anthropic as
``thinking_delta`` blocks. Every record is kept for the final result; the text
of each one is forwarded to ``on_reasoning`` as it arrives.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Tuple

from .events import ReasoningDelta


class ReasoningAccumulator:
    def __init__(self, on_reasoning: Callable[[str], Any]) -> None:
        self._on_reasoning = on_reasoning
        self._details: List[Dict[str, Any]] = []

    def append(self, delta: ReasoningDelta) -> None:
        self._details.append(dict(delta.detail))
        if delta.text:
            self._on_reasoning(delta.text)

    @property
    def details(self) -> Tuple[Dict[str, Any], ...]:
        return tuple(self._details)


__all__ = ["ReasoningAccumulator"]

"""Content accumulation: in-order concatenation with immediate forwarding."""
from __future__ import annotations

from typing import Any, Callable, List


class ContentAccumulator:
    def __init__(self, on_content: Callable[[str], Any]) -> None:
        self._on_content = on_content
        self._parts: List[str] = []

    def append(self, text: str) -> None:
        if not text:
            return
        self._parts.append(text)
        self._on_content(text)

    @property
    def text(self) -> str:
        return "".join(self._parts)


__all__ = ["ContentAccumulator"]

"""
Structured provider error exception type.

Wraps a classified :class:`ErrorInfo` so callers that prefer exceptions over
``(content, err, result)`` tuples can raise and catch a single type.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_info import ErrorInfo
from .error_kind import ErrorKind


@dataclass
class ProviderError(Exception):
    """Exception carrying a classified vendor error.

    Attributes:
        info: The classified :class:`ErrorInfo`.
        provider: Provider key where the error originated (e.g. ``"openai"``).
        model: Optional model name associated with the failure.
        raw: Optional original exception for diagnostics.
    """

    info: ErrorInfo
    provider: str
    model: Optional[str] = None
    raw: Optional[BaseException] = None

    @property
    def kind(self) -> ErrorKind:
        return self.info.kind

    @property
    def message(self) -> str:
        return self.info.message

    def __str__(self) -> str:
        return f"{self.provider}:{self.model or '-'} {self.info.kind.value}: {self.info.message}"


__all__ = ["ProviderError"]

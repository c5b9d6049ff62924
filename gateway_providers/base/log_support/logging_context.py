"""Structured logging context carried through a decode invocation.

A decoder owns a base :class:`LogContext` (provider and model); each decode
binds the request identifier of the response it is reading, so every event of
one stream can be correlated.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional

_CORE_FIELDS = ("provider", "model", "request_id", "response_id")


@dataclass(frozen=True)
class LogContext:
    """Provider/model/request fields merged into every structured log event."""

    provider: Optional[str] = None
    model: Optional[str] = None
    request_id: Optional[str] = None
    response_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def bind(self, **values: Any) -> "LogContext":
        """Return a copy with ``values`` set; unknown keys go to ``extra``.

        ``None`` values leave the current value untouched.
        """
        core = {k: v for k, v in values.items() if k in _CORE_FIELDS and v is not None}
        extra = {k: v for k, v in values.items() if k not in _CORE_FIELDS and v is not None}
        if extra:
            core["extra"] = {**self.extra, **extra}
        return replace(self, **core) if core else self

    def to_dict(self) -> Dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "extra"}
        for key, value in self.extra.items():
            data.setdefault(key, value)
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]

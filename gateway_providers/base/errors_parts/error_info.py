"""
Immutable description of a classified vendor error.

:class:`ErrorInfo` is what the error classifier produces and what streaming
decoders hand to ``on_error`` and return as their error value.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .error_kind import ErrorKind


@dataclass(frozen=True)
class ErrorInfo:
    """A vendor error mapped onto the shared taxonomy.

    Attributes:
        kind: Normalized :class:`ErrorKind`.
        message: Human-readable message (vendor message when available).
        status_code: Transport status code, when the error came with one.
        vendor_code: Vendor ``error.code`` value (string or number).
        vendor_param: Vendor ``error.param`` value naming the offending field.
        vendor_type: Vendor ``error.type`` value (e.g. ``"rate_limit_error"``).
        request_id: Vendor request identifier from headers or body.
        detailed_message: Message of a nested upstream error (OpenRouter).
        metadata: Response metadata (headers, rate limits) for diagnostics.
    """

    kind: ErrorKind
    message: str
    status_code: Optional[int] = None
    vendor_code: Optional[Any] = None
    vendor_param: Optional[str] = None
    vendor_type: Optional[str] = None
    request_id: Optional[str] = None
    detailed_message: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable mapping, dropping unset fields."""
        data: Dict[str, Any] = {
            "kind": self.kind.value,
            "message": self.message,
            "status_code": self.status_code,
            "vendor_code": self.vendor_code,
            "vendor_param": self.vendor_param,
            "vendor_type": self.vendor_type,
            "request_id": self.request_id,
            "detailed_message": self.detailed_message,
        }
        if self.metadata:
            data["metadata"] = dict(self.metadata)
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["ErrorInfo"]

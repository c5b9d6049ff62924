"""
Normalized provider error kinds (taxonomy).

Defines the closed :class:`ErrorKind` enumeration shared by every vendor
integration. Values are lowercase snake_case and are a stable public contract
for logging and for callers that branch on the failure category.
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Enumerated error kinds representing failure categories."""

    INVALID_REQUEST = "invalid_request"
    AUTHENTICATION = "authentication_error"
    MODEL_NOT_FOUND = "model_error"
    RATE_LIMIT = "rate_limit_exceeded"
    CONTEXT_LENGTH_EXCEEDED = "context_length_exceeded"
    CONTENT_FILTERED = "content_filter"
    SERVER = "server_error"
    UNKNOWN = "unknown_error"


__all__ = ["ErrorKind"]

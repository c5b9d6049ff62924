"""
Error classification mapping vendor failures onto :class:`ErrorKind`.

Precedence of :func:`classify_error`:
    1. No status, message or vendor type at all -> ``SERVER``.
    2. HTTP status table, then ``>= 500`` -> ``SERVER``.
    3. Vendor ``error.type`` table when the status did not decide, else ``SERVER``.
    4. Message patterns, applied last and overriding steps 2-3. Some vendors
       answer context-length violations with a plain 400.
"""
from __future__ import annotations

import re
from typing import Dict, Optional, Pattern, Tuple

import httpx

from .error_kind import ErrorKind

_HTTP_STATUS_MAP: Dict[int, ErrorKind] = {
    400: ErrorKind.INVALID_REQUEST,
    401: ErrorKind.AUTHENTICATION,
    403: ErrorKind.AUTHENTICATION,
    404: ErrorKind.MODEL_NOT_FOUND,
    413: ErrorKind.INVALID_REQUEST,
    429: ErrorKind.RATE_LIMIT,
}

_VENDOR_TYPE_MAP: Dict[str, ErrorKind] = {
    "invalid_request_error": ErrorKind.INVALID_REQUEST,
    "request_too_large": ErrorKind.INVALID_REQUEST,
    "authentication_error": ErrorKind.AUTHENTICATION,
    "permission_error": ErrorKind.AUTHENTICATION,
    "not_found_error": ErrorKind.MODEL_NOT_FOUND,
    "rate_limit_error": ErrorKind.RATE_LIMIT,
    "api_error": ErrorKind.SERVER,
    "overloaded_error": ErrorKind.SERVER,
    "server_error": ErrorKind.SERVER,
}

_MESSAGE_PATTERNS: Tuple[Tuple[ErrorKind, Tuple[Pattern[str], ...]], ...] = (
    (
        ErrorKind.CONTEXT_LENGTH_EXCEEDED,
        (
            re.compile(r"context length"),
            re.compile(r"string too long"),
            re.compile(r"maximum.+tokens"),
        ),
    ),
    (
        ErrorKind.CONTENT_FILTERED,
        (
            re.compile(r"content policy"),
            re.compile(r"content filter"),
        ),
    ),
)


def _kind_from_message(message: Optional[str]) -> Optional[ErrorKind]:
    if not message:
        return None
    lowered = message.lower()
    for kind, patterns in _MESSAGE_PATTERNS:
        if any(p.search(lowered) for p in patterns):
            return kind
    return None


def _kind_from_status(status_code: Optional[int], vendor_type: Optional[str]) -> ErrorKind:
    if status_code is not None:
        if status_code in _HTTP_STATUS_MAP:
            return _HTTP_STATUS_MAP[status_code]
        if status_code >= 500:
            return ErrorKind.SERVER
    if vendor_type:
        mapped = _VENDOR_TYPE_MAP.get(vendor_type.strip().lower())
        if mapped is not None:
            return mapped
    return ErrorKind.SERVER


def classify_error(
    status_code: Optional[int] = None,
    message: Optional[str] = None,
    vendor_type: Optional[str] = None,
) -> ErrorKind:
    """Classify a vendor error into an :class:`ErrorKind`.

    Parameters:
        status_code: Transport status code, if any.
        message: Vendor error message, if any.
        vendor_type: Vendor ``error.type`` string, if any.

    Returns:
        The normalized kind. Never raises.
    """
    if status_code is None and not message and not vendor_type:
        return ErrorKind.SERVER
    kind = _kind_from_status(status_code, vendor_type)
    override = _kind_from_message(message)
    return override if override is not None else kind


def _extract_status(exc: BaseException) -> Optional[int]:
    """Attempt to extract an HTTP status code from a transport exception.

    Checks ``exc.status_code``, ``exc.status`` and ``exc.response.status_code``
    in that order; returns ``None`` if none holds a valid status.
    """
    for attr in ("status_code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


def classify_exception(exc: BaseException) -> ErrorKind:
    """Classify a transport exception raised while reading a stream.

    Timeouts and connection failures carry no vendor verdict and map to
    ``SERVER``; exceptions exposing a status code go through
    :func:`classify_error`.
    """
    if isinstance(exc, (TimeoutError, httpx.TimeoutException, httpx.TransportError, ConnectionError)):
        return ErrorKind.SERVER
    return classify_error(_extract_status(exc), str(exc) or None)


__all__ = [
    "classify_error",
    "classify_exception",
    "_extract_status",
    "_HTTP_STATUS_MAP",
    "_VENDOR_TYPE_MAP",
]

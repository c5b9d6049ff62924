"""
Builders turning vendor error payloads into :class:`ErrorInfo`.

Three entry points share one classifier:

- :func:`error_info_from_envelope` for an ``{"error": {...}}`` object found
  inside an event stream (no transport status, the HTTP call succeeded).
- :func:`parse_error_response` for a non-2xx HTTP response body.
- :func:`error_info_from_exception` for transport exceptions raised while
  reading.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional, Union

import httpx

from ...config.defaults import ERROR_BODY_READ_LIMIT
from ..http.response_metadata import HeadersLike, extract_response_metadata
from .classification import _extract_status, classify_error, classify_exception
from .error_info import ErrorInfo

_EMPTY_BODIES = ("", "no body")


def _status_from_code(code: Any) -> Optional[int]:
    """Some vendors (OpenRouter) put the HTTP status in ``error.code``."""
    if isinstance(code, int) and not isinstance(code, bool) and 100 <= code < 600:
        return code
    return None


def _nested_detail(error: Mapping[str, Any]) -> Dict[str, Any]:
    """Unpack OpenRouter's ``error.metadata.raw`` upstream error, if present."""
    meta = error.get("metadata")
    if not isinstance(meta, Mapping):
        return {}
    details: Dict[str, Any] = {}
    if meta.get("provider_name"):
        details["provider_name"] = meta["provider_name"]
    raw = meta.get("raw")
    if raw is None:
        return details
    details["nested_error"] = raw
    nested: Any = raw
    if isinstance(raw, str):
        try:
            nested = json.loads(raw)
        except ValueError:
            nested = None
    if isinstance(nested, Mapping):
        message = nested.get("message")
        inner = nested.get("error")
        if message is None and isinstance(inner, Mapping):
            message = inner.get("message")
        if isinstance(message, str):
            details["detailed_message"] = message
    return details


def error_info_from_envelope(
    envelope: Mapping[str, Any],
    *,
    status_code: Optional[int] = None,
    default_message: str = "Unknown vendor error",
    request_id: Optional[str] = None,
    metadata: Optional[Mapping[str, Any]] = None,
) -> ErrorInfo:
    """Classify a decoded ``{"error": {...}}`` envelope.

    ``envelope["error"]`` may also be a bare string, which becomes the message.
    """
    error = envelope.get("error")
    if isinstance(error, str):
        error = {"message": error}
    if not isinstance(error, Mapping):
        error = {}
    message = error.get("message")
    if not isinstance(message, str) or not message:
        message = default_message
    vendor_type = error.get("type") if isinstance(error.get("type"), str) else None
    code = error.get("code")
    status = status_code if status_code is not None else _status_from_code(code)
    meta: Dict[str, Any] = dict(metadata or {})
    nested = _nested_detail(error)
    detailed_message = nested.pop("detailed_message", None)
    meta.update(nested)
    body_request_id = envelope.get("request_id")
    if not request_id and isinstance(body_request_id, str):
        request_id = body_request_id
    param = error.get("param")
    return ErrorInfo(
        kind=classify_error(status, message, vendor_type),
        message=message,
        status_code=status,
        vendor_code=code,
        vendor_param=param if isinstance(param, str) else None,
        vendor_type=vendor_type,
        request_id=request_id or meta.get("request_id"),
        detailed_message=detailed_message,
        metadata=meta,
    )


def parse_error_response(
    status_code: Optional[int],
    headers: Optional[HeadersLike] = None,
    body: Union[str, bytes, None] = None,
    *,
    vendor_label: str = "Vendor",
) -> ErrorInfo:
    """Build an :class:`ErrorInfo` from a non-2xx HTTP response.

    Parameters:
        status_code: HTTP status; ``None`` or ``0`` means the connection failed.
        headers: Response headers, used for request id and rate-limit metadata.
        body: Raw response body; JSON error envelopes are decoded, anything
            else is ignored.
        vendor_label: Prefix of the fallback message (e.g. ``"OpenAI"``).
    """
    status = status_code or None
    metadata = extract_response_metadata(headers)
    fallback = f"{vendor_label} API error: {status if status is not None else 'connection failed'}"
    text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
    parsed: Any = None
    if text is not None and text.strip() not in _EMPTY_BODIES:
        try:
            parsed = json.loads(text)
        except ValueError:
            parsed = None
    if isinstance(parsed, Mapping) and parsed.get("error") is not None:
        return error_info_from_envelope(
            parsed,
            status_code=status,
            default_message=fallback,
            request_id=metadata.get("request_id"),
            metadata=metadata,
        )
    return ErrorInfo(
        kind=classify_error(status, fallback),
        message=fallback,
        status_code=status,
        request_id=metadata.get("request_id"),
        metadata=metadata,
    )


def error_info_from_response(response: httpx.Response, *, vendor_label: str = "Vendor") -> ErrorInfo:
    """Read at most ``ERROR_BODY_READ_LIMIT`` characters of an error response.

    Works for both buffered and streaming ``httpx`` responses; a body that
    cannot be read is treated as absent.
    """
    body: Optional[str]
    try:
        body = response.text
    except httpx.ResponseNotRead:
        parts = []
        size = 0
        try:
            for piece in response.iter_text():
                parts.append(piece)
                size += len(piece)
                if size >= ERROR_BODY_READ_LIMIT:
                    break
            body = "".join(parts)
        except httpx.HTTPError:
            body = None
    if body is not None:
        body = body[:ERROR_BODY_READ_LIMIT]
    return parse_error_response(
        response.status_code,
        response.headers,
        body,
        vendor_label=vendor_label,
    )


def error_info_from_exception(exc: BaseException) -> ErrorInfo:
    """Describe a transport exception raised by a stream reader."""
    message = str(exc) or exc.__class__.__name__
    return ErrorInfo(
        kind=classify_exception(exc),
        message=message,
        status_code=_extract_status(exc),
        metadata={"exception": exc.__class__.__name__},
    )


__all__ = [
    "error_info_from_envelope",
    "parse_error_response",
    "error_info_from_response",
    "error_info_from_exception",
]

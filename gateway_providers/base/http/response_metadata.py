"""Response metadata extraction from vendor HTTP headers.

Builds the mapping that seeds ``StreamResult.metadata`` and
``ErrorInfo.metadata``: request identifier, processing time, API version and
any rate-limit headers the vendor sends. Header lookup is case-insensitive
(``httpx.Headers``), so raw dicts from any transport can be passed in.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

import httpx

HeadersLike = Union[httpx.Headers, Mapping[str, str]]

_RATE_LIMIT_PREFIXES = ("x-ratelimit-", "anthropic-ratelimit-")


def _to_number(value: Optional[str]) -> Optional[Union[int, float]]:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        try:
            return float(value)
        except ValueError:
            return None


def _rate_limits(headers: httpx.Headers) -> Dict[str, Any]:
    limits: Dict[str, Any] = {}
    for name, value in headers.items():
        lowered = name.lower()
        for prefix in _RATE_LIMIT_PREFIXES:
            if lowered.startswith(prefix):
                key = lowered[len(prefix):].replace("-", "_")
                number = _to_number(value)
                limits[key] = number if number is not None else value
                break
    return limits


def extract_response_metadata(headers: Optional[HeadersLike]) -> Dict[str, Any]:
    """Return diagnostic metadata found in response ``headers``.

    Missing headers are omitted; an empty mapping is returned when
    ``headers`` is ``None`` or empty.
    """
    if not headers:
        return {}
    hdrs = headers if isinstance(headers, httpx.Headers) else httpx.Headers(dict(headers))
    metadata: Dict[str, Any] = {
        "request_id": hdrs.get("x-request-id") or hdrs.get("request-id"),
        "organization": hdrs.get("openai-organization"),
        "processing_ms": _to_number(hdrs.get("openai-processing-ms")),
        "version": hdrs.get("openai-version"),
    }
    metadata = {k: v for k, v in metadata.items() if v is not None}
    limits = _rate_limits(hdrs)
    if limits:
        metadata["rate_limits"] = limits
    return metadata


__all__ = ["extract_response_metadata", "HeadersLike"]

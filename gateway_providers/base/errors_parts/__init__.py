"""Errors parts package public surface.

Prefer importing from ``gateway_providers.base.errors`` for the stable surface.
"""

from .error_kind import ErrorKind
from .error_info import ErrorInfo
from .provider_error import ProviderError
from .classification import classify_error, classify_exception
from .http_errors import (
    error_info_from_envelope,
    error_info_from_exception,
    error_info_from_response,
    parse_error_response,
)
from .health import HealthStatus, ProviderHealth, provider_health

__all__ = [
    "ErrorKind",
    "ErrorInfo",
    "ProviderError",
    "classify_error",
    "classify_exception",
    "error_info_from_envelope",
    "error_info_from_exception",
    "error_info_from_response",
    "parse_error_response",
    "HealthStatus",
    "ProviderHealth",
    "provider_health",
]

"""Unified provider error taxonomy public surface.

Re-exports the one-class-per-file implementations under
``gateway_providers.base.errors_parts`` behind a stable import path.
"""

from .errors_parts.error_kind import ErrorKind
from .errors_parts.error_info import ErrorInfo
from .errors_parts.provider_error import ProviderError
from .errors_parts.classification import classify_error, classify_exception
from .errors_parts.http_errors import (
    error_info_from_envelope,
    error_info_from_exception,
    error_info_from_response,
    parse_error_response,
)
from .errors_parts.health import HealthStatus, ProviderHealth, provider_health

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

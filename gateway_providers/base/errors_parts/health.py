"""
Provider health derived from the outcome of a lightweight probe call.

A failed probe is not always an outage: rate limiting means the service is up
but busy, and 5xx answers mean it is reachable but struggling.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .error_info import ErrorInfo


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


@dataclass(frozen=True)
class ProviderHealth:
    status: HealthStatus
    message: str

    @property
    def ok(self) -> bool:
        return self.status is HealthStatus.HEALTHY


def provider_health(error: Optional[ErrorInfo], provider: str = "provider") -> ProviderHealth:
    """Map the error of a probe request (``None`` on success) to a health verdict."""
    if error is None:
        return ProviderHealth(HealthStatus.HEALTHY, f"{provider} API is responding normally")
    status = error.status_code
    if not status:
        return ProviderHealth(HealthStatus.UNHEALTHY, "Connection failed")
    if status == 429:
        return ProviderHealth(HealthStatus.DEGRADED, "Rate limited but service is available")
    if 500 <= status < 600:
        return ProviderHealth(HealthStatus.DEGRADED, "Service experiencing issues")
    return ProviderHealth(HealthStatus.UNHEALTHY, error.message or "Request failed")


__all__ = ["HealthStatus", "ProviderHealth", "provider_health"]

"""Resilience patterns for notification delivery.

Circuit breakers and the service that owns them.
"""

from leadnotify.resilience.circuit_breaker import (
    CircuitBreaker,
    CircuitEvent,
    CircuitState,
)
from leadnotify.resilience.service import ResilienceService, breaker_name_for

__all__ = [
    "CircuitBreaker",
    "CircuitEvent",
    "CircuitState",
    "ResilienceService",
    "breaker_name_for",
]

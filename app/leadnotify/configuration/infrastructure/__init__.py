"""Infrastructure settings __init__ - exports all infrastructure settings."""

from leadnotify.configuration.infrastructure.circuit_breaker import (
    CircuitBreakerSettings,
)
from leadnotify.configuration.infrastructure.notifications import (
    NotificationSettings,
)

__all__ = [
    "CircuitBreakerSettings",
    "NotificationSettings",
]

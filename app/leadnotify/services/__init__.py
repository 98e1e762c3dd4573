"""Process-scoped service providers."""

from leadnotify.services.providers import (
    get_notification_service,
    get_resilience_service,
    get_settings,
)

__all__ = [
    "get_settings",
    "get_resilience_service",
    "get_notification_service",
]

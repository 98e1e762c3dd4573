"""
Factory functions for dependency injection.

Provides process-scoped singleton providers for the delivery services.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from leadnotify.configuration import Settings

if TYPE_CHECKING:
    from leadnotify.notifications.service import NotificationService
    from leadnotify.resilience.service import ResilienceService


@lru_cache
def get_settings() -> Settings:
    """
    Get process-scoped settings singleton.

    The @lru_cache decorator ensures only ONE instance is created per process.

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_resilience_service() -> "ResilienceService":
    """
    Get process-scoped resilience service singleton.

    Returns:
        ResilienceService: Registry holding one circuit breaker per channel.
    """
    # Import here to avoid circular dependency with logging setup
    from leadnotify.resilience.service import ResilienceService

    return ResilienceService()


@lru_cache
def get_notification_service() -> "NotificationService":
    """
    Get process-scoped notification service singleton.

    Channels, circuit breakers and the rate limit come from settings.

    Returns:
        NotificationService: Cached service wrapping the router.
    """
    from leadnotify.notifications.service import NotificationService

    return NotificationService(
        settings=get_settings(),
        resilience_service=get_resilience_service(),
    )

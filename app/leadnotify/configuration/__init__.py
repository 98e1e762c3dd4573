"""Configuration module - public API.

Centralized configuration using Pydantic BaseSettings, organized by concern.

Exports:
    Settings: Main settings class
    NotificationSettings: Router settings (daily limit, channel order)
    CircuitBreakerSettings: Per-channel breaker settings

Example:
    ```python
    from leadnotify.services import get_settings

    settings = get_settings()
    order = settings.notifications.channel_order
    ```
"""

from leadnotify.configuration.settings import Settings
from leadnotify.configuration.infrastructure import (
    CircuitBreakerSettings,
    NotificationSettings,
)

__all__ = ["Settings", "NotificationSettings", "CircuitBreakerSettings"]

"""Lead notify configuration settings - main aggregator."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from leadnotify.configuration.infrastructure import (
    CircuitBreakerSettings,
    NotificationSettings,
)


class Settings(BaseSettings):
    """Application settings - main aggregator.

    Aggregates the per-concern settings into a single configuration object.

    Environment Variables:
        PREFIX: Environment prefix for non-production deployments
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)

    Example:
        ```python
        from leadnotify.services import get_settings

        settings = get_settings()

        limit = settings.notifications.max_per_lead_per_day
        if settings.circuit_breaker.enabled:
            threshold = settings.circuit_breaker.failure_threshold
        ```
    """

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"

    notifications: NotificationSettings
    circuit_breaker: CircuitBreakerSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production.

        Returns:
            True if PREFIX is empty (production), False otherwise.
        """
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            "notifications": NotificationSettings,
            "circuit_breaker": CircuitBreakerSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

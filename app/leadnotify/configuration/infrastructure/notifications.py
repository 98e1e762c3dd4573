"""Notification routing settings."""

from typing import List

from pydantic import Field, field_validator

from leadnotify.configuration.base import InfrastructureSettings


class NotificationSettings(InfrastructureSettings):
    """Notification router configuration.

    Environment Variables:
        NOTIFICATION_MAX_PER_LEAD_PER_DAY: Daily send attempts allowed per
            tenant + lead (default: 3)
        NOTIFICATION_CHANNEL_ORDER: JSON list of channel names, highest
            priority first (default: ["sms", "email"])
        NOTIFICATION_SMS_SIMULATE_FAILURE: Make the simulated SMS channel
            fail every send, for failover demos (default: False)

    Example:
        ```python
        from leadnotify.services import get_settings

        settings = get_settings()

        limit = settings.notifications.max_per_lead_per_day
        order = settings.notifications.channel_order
        ```
    """

    max_per_lead_per_day: int = Field(
        default=3,
        ge=1,
        alias="NOTIFICATION_MAX_PER_LEAD_PER_DAY",
        description="Maximum notification attempts per lead per day",
    )
    channel_order: List[str] = Field(
        default_factory=lambda: ["sms", "email"],
        alias="NOTIFICATION_CHANNEL_ORDER",
        description="Channel names in priority order (highest first)",
    )
    sms_simulate_failure: bool = Field(
        default=False,
        alias="NOTIFICATION_SMS_SIMULATE_FAILURE",
        description="Force the simulated SMS channel to fail",
    )

    @field_validator("channel_order")
    @classmethod
    def validate_channel_order(cls, v: List[str]) -> List[str]:
        """Normalize names and require at least one channel."""
        names = [name.strip().lower() for name in v if name and name.strip()]
        if not names:
            raise ValueError("NOTIFICATION_CHANNEL_ORDER cannot be empty")
        return names

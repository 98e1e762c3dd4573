"""Notification channel abstract base class.

All channel implementations (email, SMS, circuit guard) implement this
interface so the router can treat them interchangeably.
"""

from abc import ABC, abstractmethod
from leadnotify.notifications.models import (
    ChannelType,
    DeliveryOutcome,
    NotificationRequest,
)


class NotificationChannel(ABC):
    """Abstract base class for notification channels.

    Each channel delivers through one mechanism and declares which
    ChannelType values it can handle.

    Example Implementation:
        class PushChannel(NotificationChannel):

            @property
            def channel_name(self) -> str:
                return "push"

            def supports(self, channel_type: ChannelType) -> bool:
                return channel_type == ChannelType.PUSH

            def send(self, request: NotificationRequest) -> DeliveryOutcome:
                message_id = self._client.push(request.destination, request.body)
                return DeliveryOutcome.success("push-adapter", message_id)
    """

    @property
    @abstractmethod
    def channel_name(self) -> str:
        """Channel identifier (email, sms, ...) used for wiring and logging."""
        pass

    @abstractmethod
    def supports(self, channel_type: ChannelType) -> bool:
        """Check whether this channel can deliver the given type.

        Must be pure: no side effects, same answer for the same input.
        """
        pass

    @abstractmethod
    def send(self, request: NotificationRequest) -> DeliveryOutcome:
        """Deliver one notification.

        Must handle delivery errors gracefully and return a failed
        DeliveryOutcome rather than raising, including for a None request.

        Args:
            request: Notification to send

        Returns:
            DeliveryOutcome with a tracking id on success or an error on failure
        """
        pass

"""Simulated email channel.

Stands in for an email service provider: every accepted request succeeds
with a generated message id.
"""

import uuid
from typing import Optional

import structlog
from leadnotify.notifications.channels.base import NotificationChannel
from leadnotify.notifications.models import (
    ChannelType,
    DeliveryOutcome,
    NotificationRequest,
)

logger = structlog.get_logger()

VENDOR_NAME = "email-adapter"


class EmailChannel(NotificationChannel):
    """Email notification channel.

    Supports EMAIL and also SMS, delivering text messages through
    email-to-SMS carrier gateways when the SMS vendor is unavailable.
    """

    SUPPORTED_TYPES = frozenset({ChannelType.EMAIL, ChannelType.SMS})

    @property
    def channel_name(self) -> str:
        """Channel identifier."""
        return "email"

    def supports(self, channel_type: ChannelType) -> bool:
        return channel_type in self.SUPPORTED_TYPES

    def send(self, request: Optional[NotificationRequest]) -> DeliveryOutcome:
        if request is None:
            return DeliveryOutcome.failure(VENDOR_NAME, "notification request was null")

        if not self.supports(request.channel_type):
            return DeliveryOutcome.failure(
                VENDOR_NAME, f"unsupported type: {request.channel_type.name}"
            )

        message_id = f"email-{uuid.uuid4()}"
        logger.info(
            "email_sent",
            lead_id=request.lead_id,
            channel_type=request.channel_type.value,
            message_id=message_id,
        )
        return DeliveryOutcome.success(VENDOR_NAME, message_id)

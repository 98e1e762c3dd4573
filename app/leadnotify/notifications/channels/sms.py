"""Simulated SMS channel.

Stands in for an SMS vendor. Failure mode makes every send fail, which is
how vendor outages are exercised in demos and tests.
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

VENDOR_NAME = "sms-adapter"


class SMSChannel(NotificationChannel):
    """SMS notification channel.

    Args:
        simulate_failure: Return a vendor failure for every send.
    """

    def __init__(self, simulate_failure: bool = False):
        self.simulate_failure = simulate_failure
        logger.info("initialized_sms_channel", simulate_failure=simulate_failure)

    @property
    def channel_name(self) -> str:
        """Channel identifier."""
        return "sms"

    def supports(self, channel_type: ChannelType) -> bool:
        return channel_type == ChannelType.SMS

    def send(self, request: Optional[NotificationRequest]) -> DeliveryOutcome:
        """Send an SMS to request.destination.

        Args:
            request: Notification to send.

        Returns:
            DeliveryOutcome with an "sms-" message id, or a failure.
        """
        if request is None:
            return DeliveryOutcome.failure(VENDOR_NAME, "notification request was null")

        if not self.supports(request.channel_type):
            return DeliveryOutcome.failure(
                VENDOR_NAME, f"unsupported type: {request.channel_type.name}"
            )

        if self.simulate_failure:
            logger.error("sms_failed", lead_id=request.lead_id, simulated=True)
            return DeliveryOutcome.failure(VENDOR_NAME, "simulated SMS vendor failure")

        message_id = f"sms-{uuid.uuid4()}"
        logger.info("sms_sent", lead_id=request.lead_id, message_id=message_id)
        return DeliveryOutcome.success(VENDOR_NAME, message_id)

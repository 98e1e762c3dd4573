"""Notification delivery.

Routes one notification per call through priority-ordered channels with
per-lead daily rate limiting and per-channel circuit breakers.

Usage:
    from leadnotify.notifications import NotificationRequest
    from leadnotify.services import get_notification_service

    request = NotificationRequest.email(
        tenant_id="dealer-1",
        org_id="tenant-1",
        site_id="site-1",
        lead_id="lead-42",
        subject="Your quote",
        body="Your quote is ready",
        email="priya@example.com",
    )

    outcome = get_notification_service().route(request)
    if outcome.is_success:
        logger.info("lead_notified", tracking_id=outcome.tracking_id)
"""

# Models
from leadnotify.notifications.models import (
    ChannelType,
    DeliveryOutcome,
    DeliveryStatus,
    NotificationRequest,
)

# Channel interface and implementations
from leadnotify.notifications.channels import (
    EmailChannel,
    NotificationChannel,
    SMSChannel,
)

# Circuit guard, rate limiting, routing
from leadnotify.notifications.guarded import CircuitBreakerChannel
from leadnotify.notifications.rate_limit import DailyRateLimiter
from leadnotify.notifications.router import NotificationRouter
from leadnotify.notifications.service import NotificationService

__all__ = [
    # Models
    "ChannelType",
    "DeliveryOutcome",
    "DeliveryStatus",
    "NotificationRequest",
    # Channels
    "NotificationChannel",
    "EmailChannel",
    "SMSChannel",
    "CircuitBreakerChannel",
    # Routing
    "DailyRateLimiter",
    "NotificationRouter",
    "NotificationService",
]

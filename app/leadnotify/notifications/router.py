"""Notification router with rate limiting and priority failover.

Single entry point for delivering a notification:
- Reserves a per-lead daily rate-limit slot before any channel is tried
- Tries channels in priority order, skipping those that cannot deliver
  the requested type
- Returns the first success; releases the slot if every channel failed
- Never raises for delivery problems; every call yields a DeliveryOutcome

Usage Example:
    from leadnotify.notifications import (
        CircuitBreakerChannel,
        EmailChannel,
        NotificationRequest,
        NotificationRouter,
        SMSChannel,
    )
    from leadnotify.resilience import CircuitBreaker

    router = NotificationRouter(
        channels=[
            CircuitBreakerChannel(SMSChannel(), CircuitBreaker("notification_sms")),
            EmailChannel(),
        ],
    )

    outcome = router.route(request)
    if not outcome.is_success:
        logger.warning("lead_not_notified", error=outcome.error)
"""

from typing import Optional, Sequence, Tuple

import structlog
from leadnotify.clock import Clock, utc_now
from leadnotify.logging import bind_notification_context
from leadnotify.notifications.channels.base import NotificationChannel
from leadnotify.notifications.models import DeliveryOutcome, NotificationRequest
from leadnotify.notifications.rate_limit import DailyRateLimiter

logger = structlog.get_logger()

ROUTER_VENDOR = "router"
MAX_NOTIFICATIONS_PER_LEAD_PER_DAY = 3


class NotificationRouter:
    """Priority-ordered, rate-limited notification router.

    Safe to share between threads: the rate-limit ledger and any circuit
    breakers do their own locking, and no lock is held while a channel
    sends.

    Attributes:
        channels: Channels in priority order (highest first)
        rate_limiter: Daily ledger owned by this router

    Example:
        router = NotificationRouter(channels=[sms_channel, email_channel])
        outcome = router.route(request)
    """

    def __init__(
        self,
        channels: Sequence[NotificationChannel],
        max_per_lead_per_day: int = MAX_NOTIFICATIONS_PER_LEAD_PER_DAY,
        clock: Optional[Clock] = None,
    ):
        """Initialize notification router.

        Args:
            channels: Channels in priority order, highest priority first
            max_per_lead_per_day: Daily attempts allowed per tenant + lead
            clock: Time source for rate-limit days

        Raises:
            ValueError: If channels is None or empty
        """
        if not channels:
            raise ValueError("channels cannot be None or empty")

        self._channels: Tuple[NotificationChannel, ...] = tuple(channels)
        self.rate_limiter = DailyRateLimiter(
            max_per_day=max_per_lead_per_day, clock=clock or utc_now
        )

        logger.info(
            "initialized_notification_router",
            channels=[channel.channel_name for channel in self._channels],
            max_per_lead_per_day=max_per_lead_per_day,
        )

    @property
    def channels(self) -> Tuple[NotificationChannel, ...]:
        return self._channels

    @property
    def max_per_lead_per_day(self) -> int:
        return self.rate_limiter.max_per_day

    def route(self, request: Optional[NotificationRequest]) -> DeliveryOutcome:
        """Deliver a notification through the first channel that succeeds.

        Process:
        1. Reject a None request (rate limit untouched)
        2. Atomically reserve today's rate-limit slot for tenant + lead
        3. Try capable channels in priority order until one succeeds
        4. If none succeeded, release the slot and report the last failure

        Args:
            request: Notification to route

        Returns:
            The successful channel's DeliveryOutcome, or a failure outcome
            (vendor "router" for routing-level failures)
        """
        if request is None:
            logger.warning("notification_rejected", reason="null_request")
            return DeliveryOutcome.failure(
                ROUTER_VENDOR, "notification request was null"
            )

        with bind_notification_context(
            tenant_id=request.tenant_id,
            lead_id=request.lead_id,
            channel_type=request.channel_type.value,
        ):
            reservation = self.rate_limiter.try_reserve(
                request.tenant_id, request.lead_id
            )
            if reservation is None:
                logger.warning(
                    "notification_rate_limited",
                    max_per_day=self.rate_limiter.max_per_day,
                )
                return DeliveryOutcome.failure(
                    ROUTER_VENDOR,
                    f"rate limit exceeded (max {self.rate_limiter.max_per_day} "
                    "per lead per day)",
                )

            outcome = self._send_through_channels(request)
            if outcome is not None and outcome.is_success:
                return outcome

            self.rate_limiter.release(reservation)
            logger.debug(
                "rate_limit_slot_released", rate_limit_key=str(reservation)
            )

            if outcome is not None:
                logger.warning(
                    "notification_routing_failed",
                    vendor=outcome.vendor,
                    error=outcome.error,
                )
                return outcome

            logger.warning("no_channel_supports_type")
            return DeliveryOutcome.failure(
                ROUTER_VENDOR,
                f"no channel supports type: {request.channel_type.name}",
            )

    def _send_through_channels(
        self, request: NotificationRequest
    ) -> Optional[DeliveryOutcome]:
        """Try capable channels in order.

        A channel whose capability check or send raises counts as a failed
        channel.

        Returns:
            The first successful outcome, otherwise the last failure, or
            None if no channel supports the request's type.
        """
        last_failure: Optional[DeliveryOutcome] = None

        for channel in self._channels:
            try:
                if not channel.supports(request.channel_type):
                    logger.debug("channel_skipped", channel=channel.channel_name)
                    continue
                outcome = channel.send(request)
            except Exception as e:
                logger.error(
                    "channel_exception",
                    channel=channel.channel_name,
                    error=str(e),
                    exc_info=True,
                )
                outcome = DeliveryOutcome.failure(
                    channel.channel_name, f"channel exception: {e}"
                )

            if outcome.is_success:
                logger.info(
                    "notification_delivered",
                    channel=channel.channel_name,
                    vendor=outcome.vendor,
                    tracking_id=outcome.tracking_id,
                )
                return outcome

            logger.warning(
                "channel_send_failed",
                channel=channel.channel_name,
                vendor=outcome.vendor,
                error=outcome.error,
            )
            last_failure = outcome

        return last_failure

"""Notification service for dependency injection.

Builds the router from settings: channels in configured priority order,
each wrapped in its own circuit breaker.
"""

from typing import Callable, Dict, List, Optional, Sequence, TYPE_CHECKING

import structlog
from leadnotify.notifications.channels.base import NotificationChannel
from leadnotify.notifications.channels.email import EmailChannel
from leadnotify.notifications.channels.sms import SMSChannel
from leadnotify.notifications.guarded import CircuitBreakerChannel
from leadnotify.notifications.models import DeliveryOutcome, NotificationRequest
from leadnotify.notifications.router import NotificationRouter
from leadnotify.resilience.service import breaker_name_for

if TYPE_CHECKING:
    from leadnotify.clock import Clock
    from leadnotify.configuration import Settings
    from leadnotify.resilience.service import ResilienceService

logger = structlog.get_logger()


def _build_sms(settings: "Settings") -> NotificationChannel:
    return SMSChannel(simulate_failure=settings.notifications.sms_simulate_failure)


def _build_email(settings: "Settings") -> NotificationChannel:
    return EmailChannel()


CHANNEL_FACTORIES: Dict[str, Callable[["Settings"], NotificationChannel]] = {
    "sms": _build_sms,
    "email": _build_email,
}


class NotificationService:
    """Class-based notification service.

    Thin facade over NotificationRouter that owns the wiring.

    Usage:
        from leadnotify.services import get_notification_service

        service = get_notification_service()
        outcome = service.route(request)

        # Operator view of channel health
        service.get_circuit_states()   # {"sms": "open", "email": "closed"}
        service.reset_circuit("sms")
    """

    def __init__(
        self,
        settings: "Settings",
        channels: Optional[Sequence[NotificationChannel]] = None,
        router: Optional[NotificationRouter] = None,
        resilience_service: Optional["ResilienceService"] = None,
        clock: Optional["Clock"] = None,
    ):
        """Initialize notification service.

        Args:
            settings: Settings instance (required, passed from provider).
            channels: Optional channels in priority order. If not provided,
                     builds them from settings.notifications.channel_order.
            router: Optional pre-configured NotificationRouter instance.
            resilience_service: Breaker registry used to guard default
                     channels when circuit breakers are enabled.
            clock: Time source for the router's rate-limit days.

        Raises:
            ValueError: If a configured channel name is unknown
        """
        self._settings = settings

        if router is None:
            if channels is None:
                channels = self._build_channels(settings, resilience_service)

            router = NotificationRouter(
                channels=channels,
                max_per_lead_per_day=settings.notifications.max_per_lead_per_day,
                clock=clock,
            )

        self._router = router

    @staticmethod
    def _build_channels(
        settings: "Settings",
        resilience_service: Optional["ResilienceService"],
    ) -> List[NotificationChannel]:
        breaker_settings = settings.circuit_breaker
        channels: List[NotificationChannel] = []

        for name in settings.notifications.channel_order:
            factory = CHANNEL_FACTORIES.get(name)
            if factory is None:
                raise ValueError(
                    f"Unknown notification channel '{name}'. "
                    f"Available: {sorted(CHANNEL_FACTORIES)}"
                )
            channel = factory(settings)

            if breaker_settings.enabled and resilience_service is not None:
                breaker = resilience_service.get_or_create_circuit_breaker(
                    breaker_name_for(name),
                    failure_threshold=breaker_settings.failure_threshold,
                    timeout_seconds=breaker_settings.timeout_seconds,
                )
                channel = CircuitBreakerChannel(channel, breaker)

            channels.append(channel)

        logger.info(
            "notification_channels_built",
            channels=[channel.channel_name for channel in channels],
            circuit_breakers=breaker_settings.enabled
            and resilience_service is not None,
        )
        return channels

    def route(self, request: Optional[NotificationRequest]) -> DeliveryOutcome:
        """Route a notification. See NotificationRouter.route."""
        return self._router.route(request)

    def list_channels(self) -> List[str]:
        """Channel names in priority order."""
        return [channel.channel_name for channel in self._router.channels]

    def get_circuit_states(self) -> Dict[str, str]:
        """Circuit state per guarded channel, keyed by channel name."""
        return {
            channel.channel_name: channel.circuit_state.value
            for channel in self._router.channels
            if isinstance(channel, CircuitBreakerChannel)
        }

    def reset_circuit(self, channel_name: str) -> None:
        """Close the circuit guarding ``channel_name``.

        Raises:
            KeyError: If no guarded channel has that name
        """
        for channel in self._router.channels:
            if (
                isinstance(channel, CircuitBreakerChannel)
                and channel.channel_name == channel_name
            ):
                channel.circuit_breaker.reset()
                return
        raise KeyError(f"No circuit-guarded channel named '{channel_name}'")

    @property
    def router(self) -> NotificationRouter:
        """Access underlying NotificationRouter instance."""
        return self._router

"""Circuit breaker decorator for notification channels.

Wraps any NotificationChannel so calls fail fast once its breaker opens,
without the wrapped channel being contacted.
"""

from typing import Optional

import structlog
from leadnotify.notifications.channels.base import NotificationChannel
from leadnotify.notifications.models import (
    ChannelType,
    DeliveryOutcome,
    NotificationRequest,
)
from leadnotify.resilience.circuit_breaker import CircuitBreaker, CircuitState

logger = structlog.get_logger()

CIRCUIT_OPEN_ERROR = (
    "Circuit is OPEN - channel temporarily unavailable (will retry after timeout)"
)


class CircuitBreakerChannel(NotificationChannel):
    """Channel guarded by a circuit breaker.

    Composes a delegate channel with a breaker; the router sees it as an
    ordinary channel.

    Args:
        delegate: Channel that performs the actual delivery
        circuit_breaker: Breaker owned by this guard

    Example:
        guarded = CircuitBreakerChannel(
            SMSChannel(),
            CircuitBreaker("notification_sms", failure_threshold=3),
        )
        router = NotificationRouter([guarded, EmailChannel()])
    """

    def __init__(
        self,
        delegate: NotificationChannel,
        circuit_breaker: CircuitBreaker,
    ):
        if delegate is None:
            raise ValueError("delegate cannot be None")
        if circuit_breaker is None:
            raise ValueError("circuit_breaker cannot be None")

        self._delegate = delegate
        self._circuit_breaker = circuit_breaker

    @property
    def channel_name(self) -> str:
        return self._delegate.channel_name

    @property
    def delegate(self) -> NotificationChannel:
        return self._delegate

    @property
    def circuit_breaker(self) -> CircuitBreaker:
        return self._circuit_breaker

    @property
    def circuit_state(self) -> CircuitState:
        return self._circuit_breaker.state

    def supports(self, channel_type: ChannelType) -> bool:
        return self._delegate.supports(channel_type)

    def send(self, request: Optional[NotificationRequest]) -> DeliveryOutcome:
        """Send through the delegate unless the circuit is open.

        The delegate's outcome is recorded on the breaker and returned
        unchanged. An exception from the delegate counts as a failure and
        is re-raised.
        """
        if not self._circuit_breaker.allow_request():
            logger.warning(
                "channel_circuit_open",
                channel=self.channel_name,
                circuit_breaker=self._circuit_breaker.name,
            )
            return DeliveryOutcome.failure(
                f"{self._circuit_breaker.name}-circuit-breaker",
                CIRCUIT_OPEN_ERROR,
            )

        try:
            outcome = self._delegate.send(request)
        except Exception:
            self._circuit_breaker.record_failure()
            raise

        if outcome.is_success:
            self._circuit_breaker.record_success()
        else:
            self._circuit_breaker.record_failure()
        return outcome

"""Registry of the circuit breakers guarding notification channels.

One breaker per channel, shared by every router built in the process, so
operators can see which vendors are failing and close a circuit by hand.
"""

import threading
from typing import Any, Dict, List, Optional

import structlog
from leadnotify.clock import Clock, utc_now
from leadnotify.resilience.circuit_breaker import (
    CircuitBreaker,
    CircuitState,
)

logger = structlog.get_logger()

CHANNEL_BREAKER_PREFIX = "notification_"


def breaker_name_for(channel_name: str) -> str:
    """Registry name of the breaker guarding ``channel_name``."""
    return f"{CHANNEL_BREAKER_PREFIX}{channel_name}"


class ResilienceService:
    """Named circuit breakers sharing one clock.

    Usage:
        from leadnotify.services import get_resilience_service

        resilience = get_resilience_service()
        breaker = resilience.get_or_create_circuit_breaker(
            breaker_name_for("sms"), failure_threshold=3
        )

        resilience.get_open_circuit_breakers()   # ["notification_sms"]
        resilience.reset_circuit_breaker("notification_sms")
    """

    def __init__(self, clock: Optional[Clock] = None):
        self._clock = clock or utc_now
        self._breakers: Dict[str, CircuitBreaker] = {}
        self._lock = threading.Lock()

    def create_circuit_breaker(
        self,
        name: str,
        failure_threshold: int = 3,
        timeout_seconds: float = 30,
    ) -> CircuitBreaker:
        """Register a breaker under ``name``.

        Raises:
            ValueError: If ``name`` is already registered
        """
        with self._lock:
            if name in self._breakers:
                raise ValueError(f"Circuit breaker '{name}' already exists")
            return self._register(name, failure_threshold, timeout_seconds)

    def get_circuit_breaker(self, name: str) -> Optional[CircuitBreaker]:
        with self._lock:
            return self._breakers.get(name)

    def get_or_create_circuit_breaker(
        self,
        name: str,
        failure_threshold: int = 3,
        timeout_seconds: float = 30,
    ) -> CircuitBreaker:
        """Return the breaker registered under ``name``, creating it if needed.

        The threshold and timeout only apply when the breaker is created;
        an existing breaker keeps its own configuration.
        """
        with self._lock:
            breaker = self._breakers.get(name)
            if breaker is None:
                breaker = self._register(name, failure_threshold, timeout_seconds)
            return breaker

    def get_all_circuit_breaker_stats(self) -> Dict[str, Dict[str, Any]]:
        """``get_stats()`` of every breaker, keyed by name."""
        return {name: breaker.get_stats() for name, breaker in self._snapshot()}

    def get_open_circuit_breakers(self) -> List[str]:
        """Names of breakers currently failing fast."""
        return [
            name
            for name, breaker in self._snapshot()
            if breaker.state == CircuitState.OPEN
        ]

    def reset_circuit_breaker(self, name: str) -> None:
        """Force the named breaker back to CLOSED.

        Raises:
            KeyError: If no breaker is registered under ``name``
        """
        breaker = self.get_circuit_breaker(name)
        if breaker is None:
            raise KeyError(f"Circuit breaker '{name}' not found")
        breaker.reset()

    def list_circuit_breakers(self) -> List[str]:
        """Registered names in creation order."""
        return [name for name, _ in self._snapshot()]

    def _snapshot(self) -> List[tuple]:
        with self._lock:
            return list(self._breakers.items())

    def _register(
        self, name: str, failure_threshold: int, timeout_seconds: float
    ) -> CircuitBreaker:
        breaker = CircuitBreaker(
            name=name,
            failure_threshold=failure_threshold,
            timeout_seconds=timeout_seconds,
            clock=self._clock,
        )
        self._breakers[name] = breaker
        logger.info(
            "circuit_breaker_registered",
            name=name,
            failure_threshold=failure_threshold,
            timeout_seconds=timeout_seconds,
        )
        return breaker

"""Circuit breaker for notification channel resilience.

The circuit breaker pattern prevents hammering a failing channel:
1. CLOSED state: Normal operation, requests pass through
2. OPEN state: Fast-fail requests without calling the channel
3. HALF_OPEN state: Probe requests test whether the channel recovered

State transitions:
- CLOSED -> OPEN: After failure_threshold consecutive failures
- OPEN -> HALF_OPEN: On the first permission check after the timeout expires
- HALF_OPEN -> CLOSED: After a successful probe
- HALF_OPEN -> OPEN: If a probe fails

Callers ask ``allow_request()`` before each attempt and report the result
with ``record_success()`` / ``record_failure()``.
"""

import threading
from enum import Enum
from datetime import datetime, timedelta
from typing import Dict, Optional, Tuple

from leadnotify.clock import Clock, as_utc, utc_now
from leadnotify.logging import get_module_logger

logger = get_module_logger()


class CircuitState(Enum):
    """Circuit breaker states."""

    CLOSED = "closed"  # Normal operation
    OPEN = "open"  # Failing, reject requests immediately
    HALF_OPEN = "half_open"  # Testing recovery


class CircuitEvent(Enum):
    """Events that move the breaker between states."""

    THRESHOLD_REACHED = "threshold_reached"
    TIMEOUT_ELAPSED = "timeout_elapsed"
    PROBE_SUCCEEDED = "probe_succeeded"
    PROBE_FAILED = "probe_failed"


TRANSITIONS: Dict[Tuple[CircuitState, CircuitEvent], CircuitState] = {
    (CircuitState.CLOSED, CircuitEvent.THRESHOLD_REACHED): CircuitState.OPEN,
    (CircuitState.OPEN, CircuitEvent.TIMEOUT_ELAPSED): CircuitState.HALF_OPEN,
    (CircuitState.HALF_OPEN, CircuitEvent.PROBE_SUCCEEDED): CircuitState.CLOSED,
    (CircuitState.HALF_OPEN, CircuitEvent.PROBE_FAILED): CircuitState.OPEN,
}


class CircuitBreaker:
    """Circuit breaker guarding a single notification channel.

    Args:
        name: Name of the circuit (typically the channel name)
        failure_threshold: Number of consecutive failures before opening
        timeout_seconds: Seconds to stay OPEN before allowing a probe
        clock: Time source used for the OPEN timeout
    """

    def __init__(
        self,
        name: str,
        failure_threshold: int = 3,
        timeout_seconds: float = 30,
        clock: Optional[Clock] = None,
    ):
        if failure_threshold < 1:
            raise ValueError("failure_threshold must be at least 1")
        if timeout_seconds < 0:
            raise ValueError("timeout_seconds cannot be negative")

        self.name = name
        self.failure_threshold = failure_threshold
        self.timeout_seconds = timeout_seconds
        self._timeout = timedelta(seconds=timeout_seconds)
        self._clock = clock or utc_now

        # State management
        self._state = CircuitState.CLOSED
        self._failure_count = 0
        self._success_count = 0
        self._last_failure_time: Optional[datetime] = None

        # Thread safety
        self._lock = threading.Lock()

    @property
    def state(self) -> CircuitState:
        """Get current circuit state."""
        with self._lock:
            return self._state

    @property
    def failure_count(self) -> int:
        """Get current consecutive failure count."""
        with self._lock:
            return self._failure_count

    @property
    def last_failure_time(self) -> Optional[datetime]:
        with self._lock:
            return self._last_failure_time

    def allow_request(self) -> bool:
        """Decide whether a call may be attempted right now.

        An OPEN circuit whose timeout has elapsed moves to HALF_OPEN and
        lets the call through as a probe. HALF_OPEN does not limit how many
        probes run concurrently.

        Returns:
            True if the caller should attempt the call, False to fail fast
        """
        with self._lock:
            if self._state != CircuitState.OPEN:
                return True

            if self._timeout_elapsed():
                self._fire(CircuitEvent.TIMEOUT_ELAPSED)
                return True

            elapsed = (self._now() - self._last_failure_time).total_seconds()
            logger.debug(
                "circuit_breaker_rejected",
                name=self.name,
                failure_count=self._failure_count,
                retry_in_seconds=int(self.timeout_seconds - elapsed),
            )
            return False

    def record_success(self) -> None:
        """Record a successful call.

        Closes a HALF_OPEN circuit; clears the failure streak when CLOSED.
        Has no effect while OPEN, since no call was permitted.
        """
        with self._lock:
            if self._state == CircuitState.OPEN:
                return

            self._success_count += 1
            if self._state == CircuitState.HALF_OPEN:
                logger.info(
                    "circuit_breaker_success_half_open",
                    name=self.name,
                )
                self._fire(CircuitEvent.PROBE_SUCCEEDED)
            elif self._failure_count > 0:
                logger.debug(
                    "circuit_breaker_failure_count_reset",
                    name=self.name,
                    previous_failures=self._failure_count,
                )
                self._failure_count = 0

    def record_failure(self) -> None:
        """Record a failed call.

        A failed probe reopens a HALF_OPEN circuit immediately. In CLOSED the
        failure streak grows and the circuit opens once it reaches the
        threshold. Ignored while OPEN.
        """
        with self._lock:
            if self._state == CircuitState.OPEN:
                return

            self._last_failure_time = self._now()

            if self._state == CircuitState.HALF_OPEN:
                logger.warning("circuit_breaker_recovery_failed", name=self.name)
                self._fire(CircuitEvent.PROBE_FAILED)
                return

            self._failure_count += 1
            if self._failure_count >= self.failure_threshold:
                logger.error(
                    "circuit_breaker_threshold_exceeded",
                    name=self.name,
                    failure_count=self._failure_count,
                    threshold=self.failure_threshold,
                )
                self._fire(CircuitEvent.THRESHOLD_REACHED)
            else:
                logger.warning(
                    "circuit_breaker_failure",
                    name=self.name,
                    failure_count=self._failure_count,
                    threshold=self.failure_threshold,
                )

    def reset(self) -> None:
        """Manually reset circuit breaker (operator/admin action)."""
        with self._lock:
            logger.info("circuit_breaker_manual_reset", name=self.name)
            self._enter(CircuitState.CLOSED)

    def get_stats(self) -> dict:
        """Get circuit breaker statistics."""
        with self._lock:
            return {
                "name": self.name,
                "state": self._state.value,
                "failure_count": self._failure_count,
                "success_count": self._success_count,
                "failure_threshold": self.failure_threshold,
                "timeout_seconds": self.timeout_seconds,
                "last_failure_time": (
                    self._last_failure_time.isoformat()
                    if self._last_failure_time
                    else None
                ),
            }

    # Callers must hold self._lock for everything below.

    def _now(self) -> datetime:
        return as_utc(self._clock())

    def _timeout_elapsed(self) -> bool:
        if self._last_failure_time is None:
            return True
        return self._now() - self._last_failure_time >= self._timeout

    def _fire(self, event: CircuitEvent) -> None:
        target = TRANSITIONS.get((self._state, event))
        if target is None:
            logger.debug(
                "circuit_breaker_event_ignored",
                name=self.name,
                state=self._state.value,
                circuit_event=event.value,
            )
            return
        self._enter(target)

    def _enter(self, target: CircuitState) -> None:
        if target == CircuitState.CLOSED:
            logger.info("circuit_breaker_closed", name=self.name)
            self._failure_count = 0
            self._success_count = 0
        elif target == CircuitState.OPEN:
            logger.error(
                "circuit_breaker_opened",
                name=self.name,
                timeout_seconds=self.timeout_seconds,
            )
        else:
            logger.info("circuit_breaker_half_open", name=self.name)
            self._success_count = 0
        self._state = target

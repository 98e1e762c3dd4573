"""Tests for circuit breaker functionality."""

import pytest
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

from leadnotify.resilience.circuit_breaker import (
    TRANSITIONS,
    CircuitBreaker,
    CircuitEvent,
    CircuitState,
)


def trip(cb: CircuitBreaker) -> None:
    for _ in range(cb.failure_threshold):
        cb.record_failure()


@pytest.mark.unit
class TestCircuitBreakerStates:
    """Test circuit breaker state transitions."""

    def test_circuit_breaker_starts_closed(self, fake_clock):
        """Test that circuit starts in CLOSED state."""
        cb = CircuitBreaker("test", clock=fake_clock)

        assert cb.state == CircuitState.CLOSED
        assert cb.failure_count == 0
        assert cb.allow_request()

    def test_defaults(self):
        cb = CircuitBreaker("test")

        assert cb.failure_threshold == 3
        assert cb.timeout_seconds == 30

    @pytest.mark.parametrize(
        "kwargs", [{"failure_threshold": 0}, {"timeout_seconds": -1}]
    )
    def test_rejects_invalid_configuration(self, kwargs):
        with pytest.raises(ValueError):
            CircuitBreaker("test", **kwargs)

    def test_circuit_breaker_opens_after_threshold(self, fake_clock):
        """Test that circuit opens after threshold consecutive failures."""
        cb = CircuitBreaker("test", failure_threshold=3, clock=fake_clock)

        cb.record_failure()
        cb.record_failure()
        assert cb.state == CircuitState.CLOSED

        cb.record_failure()
        assert cb.state == CircuitState.OPEN

    def test_circuit_breaker_rejects_when_open(self, fake_clock):
        """Test that requests are rejected when circuit is OPEN."""
        cb = CircuitBreaker("test", failure_threshold=2, clock=fake_clock)
        trip(cb)

        assert not cb.allow_request()

    def test_success_resets_failure_streak(self, fake_clock):
        """Failures must be consecutive to open the circuit."""
        cb = CircuitBreaker("test", failure_threshold=3, clock=fake_clock)

        cb.record_failure()
        cb.record_failure()
        cb.record_success()
        cb.record_failure()
        cb.record_failure()

        assert cb.state == CircuitState.CLOSED
        assert cb.failure_count == 2

    def test_stays_open_until_timeout(self, fake_clock):
        cb = CircuitBreaker("test", timeout_seconds=30, clock=fake_clock)
        trip(cb)

        fake_clock.advance(seconds=29)

        assert not cb.allow_request()
        assert cb.state == CircuitState.OPEN

    def test_moves_to_half_open_after_timeout(self, fake_clock):
        """Test the first permission check after the timeout admits a probe."""
        cb = CircuitBreaker("test", timeout_seconds=30, clock=fake_clock)
        trip(cb)

        fake_clock.advance(seconds=30)

        assert cb.allow_request()
        assert cb.state == CircuitState.HALF_OPEN

    def test_circuit_breaker_half_open_recovery(self, fake_clock):
        """Test recovery through HALF_OPEN state."""
        cb = CircuitBreaker("test", timeout_seconds=30, clock=fake_clock)
        trip(cb)
        fake_clock.advance(seconds=31)
        cb.allow_request()

        cb.record_success()

        assert cb.state == CircuitState.CLOSED
        assert cb.failure_count == 0

    def test_circuit_breaker_half_open_failure(self, fake_clock):
        """Test that a failed probe reopens the circuit immediately."""
        cb = CircuitBreaker("test", failure_threshold=3, clock=fake_clock)
        trip(cb)
        fake_clock.advance(seconds=31)
        cb.allow_request()

        cb.record_failure()

        assert cb.state == CircuitState.OPEN
        assert not cb.allow_request()

    def test_reopened_circuit_waits_full_timeout_again(self, fake_clock):
        cb = CircuitBreaker("test", timeout_seconds=30, clock=fake_clock)
        trip(cb)
        fake_clock.advance(seconds=31)
        cb.allow_request()
        cb.record_failure()

        fake_clock.advance(seconds=20)
        assert not cb.allow_request()

        fake_clock.advance(seconds=10)
        assert cb.allow_request()

    def test_half_open_admits_concurrent_probes(self, fake_clock):
        cb = CircuitBreaker("test", clock=fake_clock)
        trip(cb)
        fake_clock.advance(seconds=31)

        assert cb.allow_request()
        assert cb.allow_request()
        assert cb.state == CircuitState.HALF_OPEN

    def test_results_ignored_while_open(self, fake_clock):
        """Outcomes reported while OPEN do not change the circuit."""
        cb = CircuitBreaker("test", clock=fake_clock)
        trip(cb)
        stats_before = cb.get_stats()

        cb.record_success()
        cb.record_failure()

        assert cb.state == CircuitState.OPEN
        assert cb.get_stats() == stats_before

    def test_zero_timeout_probes_immediately(self, fake_clock):
        cb = CircuitBreaker("test", timeout_seconds=0, clock=fake_clock)
        trip(cb)

        assert cb.allow_request()
        assert cb.state == CircuitState.HALF_OPEN


@pytest.mark.unit
class TestCircuitBreakerTransitions:
    """The transition table is the only source of state changes."""

    def test_transition_table(self):
        assert TRANSITIONS == {
            (CircuitState.CLOSED, CircuitEvent.THRESHOLD_REACHED): CircuitState.OPEN,
            (CircuitState.OPEN, CircuitEvent.TIMEOUT_ELAPSED): CircuitState.HALF_OPEN,
            (
                CircuitState.HALF_OPEN,
                CircuitEvent.PROBE_SUCCEEDED,
            ): CircuitState.CLOSED,
            (CircuitState.HALF_OPEN, CircuitEvent.PROBE_FAILED): CircuitState.OPEN,
        }

    def test_no_direct_open_to_closed_without_reset(self):
        targets_from_open = {
            target
            for (state, _), target in TRANSITIONS.items()
            if state == CircuitState.OPEN
        }

        assert targets_from_open == {CircuitState.HALF_OPEN}


@pytest.mark.unit
class TestCircuitBreakerReset:
    """Test manual circuit breaker reset."""

    def test_manual_reset_closes_open_circuit(self, fake_clock):
        """Test that manual reset closes the circuit."""
        cb = CircuitBreaker("test", clock=fake_clock)
        trip(cb)

        cb.reset()

        assert cb.state == CircuitState.CLOSED
        assert cb.failure_count == 0
        assert cb.allow_request()

    def test_reset_from_half_open(self, fake_clock):
        cb = CircuitBreaker("test", clock=fake_clock)
        trip(cb)
        fake_clock.advance(seconds=31)
        cb.allow_request()

        cb.reset()

        assert cb.state == CircuitState.CLOSED


@pytest.mark.unit
class TestCircuitBreakerStats:
    """Test circuit breaker statistics."""

    def test_get_stats(self, fake_clock):
        """Test getting circuit breaker statistics."""
        cb = CircuitBreaker(
            "notification_sms", failure_threshold=5, timeout_seconds=60, clock=fake_clock
        )
        cb.record_success()
        cb.record_failure()

        stats = cb.get_stats()

        assert stats == {
            "name": "notification_sms",
            "state": "closed",
            "failure_count": 1,
            "success_count": 1,
            "failure_threshold": 5,
            "timeout_seconds": 60,
            "last_failure_time": "2024-05-01T09:00:00+00:00",
        }

    def test_last_failure_time_none_initially(self, fake_clock):
        cb = CircuitBreaker("test", clock=fake_clock)

        assert cb.last_failure_time is None
        assert cb.get_stats()["last_failure_time"] is None


@pytest.mark.unit
class TestCircuitBreakerConcurrency:
    """Breaker state stays consistent under concurrent reporting."""

    def test_concurrent_failures_open_circuit_once(self, fake_clock):
        cb = CircuitBreaker("test", failure_threshold=3, clock=fake_clock)

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda _: cb.record_failure(), range(50)))

        assert cb.state == CircuitState.OPEN
        assert cb.failure_count == 3

    def test_concurrent_successes_keep_circuit_closed(self, fake_clock):
        cb = CircuitBreaker("test", clock=fake_clock)

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda _: cb.record_success(), range(50)))

        assert cb.state == CircuitState.CLOSED
        assert cb.get_stats()["success_count"] == 50


@pytest.mark.unit
class TestCircuitBreakerClock:
    """The breaker only accepts timezone-aware clock readings."""

    def test_naive_clock_is_rejected(self):
        cb = CircuitBreaker("test", clock=lambda: datetime(2024, 5, 1, 9, 0))

        with pytest.raises(ValueError, match="naive"):
            cb.record_failure()

    def test_non_utc_offset_clock_times_out_normally(self, fake_clock):
        fake_clock.now = datetime.fromisoformat("2024-05-01T04:00:00-05:00")
        cb = CircuitBreaker("test", timeout_seconds=30, clock=fake_clock)
        trip(cb)

        fake_clock.advance(seconds=30)

        assert cb.allow_request()
        assert cb.get_stats()["last_failure_time"] == "2024-05-01T09:00:00+00:00"

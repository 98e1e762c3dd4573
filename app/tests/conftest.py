import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Ensure the application package root is on sys.path so importing
# `leadnotify` works during pytest collection regardless of invocation.
project_root = str(Path(__file__).resolve().parents[1])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import pytest
import structlog


class FakeClock:
    """Manually advanced clock for breaker timeouts and rate-limit days."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta) -> None:
        self.now += timedelta(**delta)


@pytest.fixture
def fake_clock():
    """Clock frozen at 2024-05-01 09:00 UTC until advanced.

    Example:
        breaker = CircuitBreaker("sms", timeout_seconds=30, clock=fake_clock)
        fake_clock.advance(seconds=30)
    """
    return FakeClock(datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture(autouse=True)
def clear_logging_context():
    """Keep structlog context vars from leaking between tests."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()

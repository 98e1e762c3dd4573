"""Wall-clock source shared by the rate limiter and circuit breakers.

A clock is any zero-argument callable returning a timezone-aware datetime.
Tests inject their own to control rate-limit days and breaker timeouts.
"""

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


def as_utc(moment: datetime) -> datetime:
    """Convert a clock reading to UTC.

    Raises:
        ValueError: If ``moment`` is naive; clocks must return aware datetimes
    """
    if moment.tzinfo is None or moment.utcoffset() is None:
        raise ValueError(f"clock returned a naive datetime: {moment!r}")
    return moment.astimezone(timezone.utc)

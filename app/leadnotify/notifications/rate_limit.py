"""Per-lead daily rate limiting.

In-memory ledger of send attempts keyed by tenant, lead and calendar day.
Entries are created lazily and never expire; one process, one ledger.
"""

import threading
from datetime import date
from typing import Dict, NamedTuple, Optional

from leadnotify.clock import Clock, as_utc, utc_now


class LedgerKey(NamedTuple):
    """Identifies one tenant + lead quota for one UTC day."""

    tenant_id: str
    lead_id: str
    day: date

    def __str__(self) -> str:
        return f"{self.tenant_id}:{self.lead_id}:{self.day.isoformat()}"


class DailyRateLimiter:
    """Counts notification attempts per tenant + lead + day.

    Slots are reserved before delivery is attempted and released again if
    the attempt fails on every channel, so only attempts that may have
    reached the lead use up quota.

    Args:
        max_per_day: Attempts allowed per tenant + lead per day
        clock: Time source deciding the current day (UTC date)
    """

    def __init__(self, max_per_day: int = 3, clock: Optional[Clock] = None):
        if max_per_day < 1:
            raise ValueError("max_per_day must be at least 1")
        self.max_per_day = max_per_day
        self._clock = clock or utc_now
        self._counts: Dict[LedgerKey, int] = {}
        self._lock = threading.Lock()

    def key_for(self, tenant_id: str, lead_id: str) -> LedgerKey:
        """Ledger key for today; renders as ``dealer-1:lead-42:2024-05-01``."""
        return LedgerKey(tenant_id, lead_id, as_utc(self._clock()).date())

    def try_reserve(self, tenant_id: str, lead_id: str) -> Optional[LedgerKey]:
        """Atomically check the limit and reserve a slot.

        Returns:
            The key the slot was reserved under, or None if the limit is
            already reached (the count is left unchanged).
        """
        key = self.key_for(tenant_id, lead_id)
        with self._lock:
            count = self._counts.get(key, 0)
            if count >= self.max_per_day:
                return None
            self._counts[key] = count + 1
        return key

    def release(self, key: LedgerKey) -> None:
        """Give back a slot reserved under ``key``; never goes below zero."""
        with self._lock:
            self._counts[key] = max(self._counts.get(key, 0) - 1, 0)

    def count(self, tenant_id: str, lead_id: str) -> int:
        """Attempts counted today for a tenant + lead."""
        key = self.key_for(tenant_id, lead_id)
        with self._lock:
            return self._counts.get(key, 0)

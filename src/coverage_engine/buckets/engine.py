"""Assignment of accounts to employee, ARR and touch-timing buckets."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from ..core.spec import EngineSpec, TimingSpec
from ..normalize.normalizer import parse_iso_date

EARLY = "Early"
MEDIUM = "Medium"
LATE = "Late"
NEVER_TOUCHED = "Never touched"
TIMING_BUCKETS: Tuple[str, ...] = (EARLY, MEDIUM, LATE, NEVER_TOUCHED)

_SECONDS_PER_DAY = 86400


def days_to_touch(signup_date: Optional[str], first_touch: Optional[str]) -> Optional[int]:
    """Whole days from signup to first touch, floored.

    ``None`` when either date is missing or malformed.  Negative values
    (touch before signup) are returned unchanged.
    """

    signup = parse_iso_date(signup_date)
    touch = parse_iso_date(first_touch)
    if signup is None or touch is None:
        return None
    return math.floor((touch - signup).total_seconds() / _SECONDS_PER_DAY)


def timing_bucket(
    days: Optional[int], touched: bool, timing: TimingSpec = TimingSpec()
) -> str:
    """Map a day count onto Early/Medium/Late.

    No recorded touch, and a touch whose day count could not be computed,
    both fall back to ``"Never touched"``.  Negative counts fall through to
    whichever band they satisfy, i.e. ``Early``.
    """

    if not touched or days is None:
        return NEVER_TOUCHED
    if days <= timing.early_max_days:
        return EARLY
    if days <= timing.medium_max_days:
        return MEDIUM
    return LATE


@dataclass(frozen=True)
class BucketingEngine:
    """Applies the configured bucket tables to single values."""

    spec: EngineSpec

    def employee(self, employee_count: Optional[float]) -> Optional[str]:
        return self.spec.employee_buckets.assign(employee_count)

    def arr(self, arr: Optional[float]) -> Optional[str]:
        return self.spec.arr_buckets.assign(arr)

    def timing(self, signup_date: Optional[str], first_touch: Optional[str]) -> Tuple[str, Optional[int]]:
        """Return ``(timing_bucket, days)``; ``days`` is ``None`` for Never touched."""

        if first_touch is None:
            return NEVER_TOUCHED, None
        days = days_to_touch(signup_date, first_touch)
        bucket = timing_bucket(days, True, self.spec.timing)
        return bucket, (days if bucket != NEVER_TOUCHED else None)

"""Bucket definitions and the default tables."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class Bucket:
    """Closed numeric range ``min <= v <= max``; ``max=None`` is open-ended."""

    label: str
    min: float
    max: Optional[float] = None

    def contains(self, value: float, next_min: Optional[float] = None) -> bool:
        """``next_min`` widens the range up to (excluding) the following bucket."""

        if value < self.min:
            return False
        if self.max is None or value <= self.max:
            return True
        return next_min is not None and value < next_min


@dataclass(frozen=True)
class BucketTable:
    """Ordered, non-overlapping buckets for one dimension.

    Gaps between consecutive buckets (``10 < v < 11``) belong to the lower
    bucket, so the table covers every value from the first ``min`` up to the
    last ``max``.
    """

    name: str
    buckets: Tuple[Bucket, ...]

    def __post_init__(self) -> None:
        _validate(self.name, self.buckets)

    @property
    def labels(self) -> List[str]:
        return [b.label for b in self.buckets]

    def assign(self, value: Optional[float]) -> Optional[str]:
        """Return the label of the unique bucket holding ``value``.

        Missing and non-finite values, and values below the first bucket or
        above a closed last bucket, map to ``None``.
        """

        if value is None or isinstance(value, bool):
            return None
        try:
            v = float(value)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(v):
            return None
        for idx, bucket in enumerate(self.buckets):
            following = self.buckets[idx + 1] if idx + 1 < len(self.buckets) else None
            if bucket.contains(v, following.min if following else None):
                return bucket.label
        return None


def _validate(name: str, buckets: Sequence[Bucket]) -> None:
    if not buckets:
        raise ValueError(f"bucket table {name!r} is empty")
    labels = [b.label for b in buckets]
    if len(set(labels)) != len(labels):
        raise ValueError(f"bucket table {name!r} has duplicate labels")
    for idx, bucket in enumerate(buckets):
        if bucket.max is not None and bucket.max < bucket.min:
            raise ValueError(f"bucket {bucket.label!r} has min > max")
        if bucket.max is None and idx != len(buckets) - 1:
            raise ValueError(f"open-ended bucket {bucket.label!r} must be last")
        if idx:
            prev = buckets[idx - 1]
            if prev.max is None or bucket.min <= prev.max:
                raise ValueError(
                    f"buckets {prev.label!r} and {bucket.label!r} overlap or are out of order"
                )


def make_table(name: str, rows: Iterable[Tuple[str, float, Optional[float]]]) -> BucketTable:
    return BucketTable(name=name, buckets=tuple(Bucket(label, lo, hi) for label, lo, hi in rows))


EMPLOYEE_BUCKETS = make_table(
    "employee_count",
    [
        ("1–10", 1, 10),
        ("11–25", 11, 25),
        ("26–50", 26, 50),
        ("51–100", 51, 100),
        ("101–250", 101, 250),
        ("251–500", 251, 500),
        ("501–1000", 501, 1000),
        ("1001–2000", 1001, 2000),
        ("2001–3000", 2001, 3000),
        ("3001–4000", 3001, 4000),
        ("4001–5000", 4001, 5000),
        ("5001+", 5001, None),
    ],
)

ARR_BUCKETS = make_table(
    "arr",
    [(f"{i * 10000}–{(i + 1) * 10000 - 1}", i * 10000, (i + 1) * 10000 - 1) for i in range(20)]
    + [("200000+", 200000, None)],
)

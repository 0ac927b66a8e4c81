"""Estimator helpers for grouped statistics.

Every estimator works on the finite, non-null subset of its input.  An empty
subset yields ``None`` (never ``0``, ``NaN`` or ``Infinity``).
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class AggregateStat:
    count: int
    avg: Optional[float]
    median: Optional[float]
    min: Optional[float]
    max: Optional[float]


EMPTY_STAT = AggregateStat(count=0, avg=None, median=None, min=None, max=None)


def finite_values(values: Iterable[Any]) -> List[float]:
    """Return the finite numeric values, dropping ``None``, ``NaN``, bools and text."""

    out: List[float] = []
    for v in values:
        if v is None or isinstance(v, (bool, np.bool_, str)):
            continue
        try:
            f = float(v)
        except (TypeError, ValueError):
            continue
        if math.isfinite(f):
            out.append(f)
    return out


def mean(values: Iterable[Any]) -> Optional[float]:
    nums = finite_values(values)
    if not nums:
        return None
    return sum(nums) / len(nums)


def median(values: Iterable[Any]) -> Optional[float]:
    """Middle value for odd counts, mean of the two middle values for even counts."""

    nums = sorted(finite_values(values))
    n = len(nums)
    if n == 0:
        return None
    mid = n // 2
    if n % 2 == 0:
        return (nums[mid - 1] + nums[mid]) / 2
    return nums[mid]


def aggregate_stat(values: Iterable[Any]) -> AggregateStat:
    """Return count/avg/median/min/max of the contributing values.

    ``count`` is the number of contributing (finite) values.
    """

    nums = sorted(finite_values(values))
    if not nums:
        return EMPTY_STAT
    return AggregateStat(
        count=len(nums),
        avg=mean(nums),
        median=median(nums),
        min=nums[0],
        max=nums[-1],
    )


def win_counts(outcomes: Iterable[Optional[bool]]) -> Tuple[int, int]:
    """Return ``(wins, known)``; outcomes other than ``True``/``False`` are unknown."""

    wins = 0
    known = 0
    for outcome in outcomes:
        if not isinstance(outcome, (bool, np.bool_)):
            continue
        known += 1
        if outcome:
            wins += 1
    return wins, known


def win_rate(outcomes: Iterable[Optional[bool]]) -> Optional[float]:
    """Percentage of known outcomes that are wins; unknowns are not losses."""

    wins, known = win_counts(outcomes)
    if known == 0:
        return None
    return wins / known * 100


def pct(part: int, total: int) -> float:
    """Share of ``total`` in percent, ``0.0`` for an empty total."""

    return part / total * 100 if total else 0.0


def weighted_mean(pairs: Iterable[Tuple[Optional[float], int]]) -> Optional[float]:
    """Weight-averaged value over ``(value, weight)`` pairs with a finite value."""

    total_weight = 0
    acc = 0.0
    for value, weight in pairs:
        if value is None or not math.isfinite(value):
            continue
        total_weight += weight
        acc += value * weight
    if not total_weight:
        return None
    return acc / total_weight


__all__ = [
    "AggregateStat",
    "EMPTY_STAT",
    "finite_values",
    "mean",
    "median",
    "aggregate_stat",
    "win_counts",
    "win_rate",
    "pct",
    "weighted_mean",
]

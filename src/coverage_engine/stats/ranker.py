"""Winner selection and lift between aggregate values."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from ..core.spec import RankingSpec
from ..engagement.classifier import TOUCHED_TIERS, Tier

NO_COMPARISON = "no comparison available"


class Winner(str, Enum):
    BASELINE = "baseline"
    CHALLENGER = "challenger"
    NONE = "none"


def pick_winner(
    baseline: Optional[float],
    challenger: Optional[float],
    ranking: RankingSpec = RankingSpec(),
) -> Winner:
    """Decide which side to highlight.

    A difference counts only when it clears the absolute threshold or the
    percentage threshold (relative to ``baseline``).  When one side is absent
    the other wins without any threshold.
    """

    if baseline is None and challenger is None:
        return Winner.NONE
    if challenger is None:
        return Winner.BASELINE
    if baseline is None:
        return Winner.CHALLENGER
    delta = challenger - baseline
    pct = abs(delta) / abs(baseline) * 100 if baseline != 0 else 0.0
    significant = abs(delta) >= ranking.abs_threshold or pct >= ranking.pct_threshold
    if not significant:
        return Winner.NONE
    if delta > 0:
        return Winner.CHALLENGER
    if delta < 0:
        return Winner.BASELINE
    return Winner.NONE


@dataclass(frozen=True)
class Lift:
    available: bool
    absolute: Optional[float] = None
    pct: Optional[float] = None

    def display(self) -> str:
        return format_lift(self)


def compute_lift(baseline: Optional[float], challenger: Optional[float]) -> Lift:
    """Signed difference ``challenger - baseline`` and its percentage of ``baseline``.

    Returns an unavailable lift when either side is missing; ``pct`` is
    ``None`` when the baseline is zero.
    """

    if baseline is None or challenger is None:
        return Lift(available=False)
    delta = challenger - baseline
    pct = delta / baseline * 100 if baseline != 0 else None
    return Lift(available=True, absolute=delta, pct=pct)


def format_k(value: Optional[float]) -> str:
    """Render a currency amount in thousands: ``1.2K``, ``150K``."""

    if value is None:
        return "(none)"
    k = value / 1000
    return f"{k:.0f}K" if k >= 100 else f"{k:.1f}K"


def format_lift(lift: Lift) -> str:
    if not lift.available or lift.absolute is None:
        return NO_COMPARISON
    if lift.absolute == 0:
        return "+0"
    sign = "+" if lift.absolute > 0 else "-"
    text = f"{sign}{format_k(abs(lift.absolute))}"
    if lift.pct is not None:
        text += f" ({'+' if lift.pct > 0 else ''}{lift.pct:.0f}%)"
    return text


def best_tier(
    averages: Sequence[Tuple[Tier, Optional[float]]],
) -> Optional[Tuple[Tier, float]]:
    """Tier with the highest average among tiers that have one.

    Candidates are considered in declaration order (Sent, Opened, Clicked,
    Replied) regardless of input order; the first maximum wins ties.
    """

    by_tier = dict(averages)
    best: Optional[Tuple[Tier, float]] = None
    for tier in TOUCHED_TIERS:
        value = by_tier.get(tier)
        if value is None:
            continue
        if best is None or value > best[1]:
            best = (tier, value)
    return best


def spread_pct(low: Optional[float], high: Optional[float]) -> float:
    """Relative spread ``(high - low) / high`` in percent; 0 when undefined."""

    if low is None or high is None or high == 0:
        return 0.0
    return (high - low) / high * 100


__all__ = [
    "NO_COMPARISON",
    "Winner",
    "pick_winner",
    "Lift",
    "compute_lift",
    "format_k",
    "format_lift",
    "best_tier",
    "spread_pct",
]

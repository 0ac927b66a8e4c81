"""Average ARR per employee band, untouched vs best touched tier."""
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from ..api.schemas import EmployeeBucketRow, EmployeeBucketTable, LiftView
from ..engagement.classifier import TIER_ORDER, TOUCHED_TIERS, Tier
from ..stats.aggregator import group_stats
from ..stats.ranker import Winner, best_tier, compute_lift, pick_winner, spread_pct
from .pipeline import Pipeline

_WINNER_LABELS = {
    Winner.BASELINE: "untouched",
    Winner.CHALLENGER: "touched",
    Winner.NONE: None,
}


def _row(
    bucket: str,
    averages: Dict[Tier, Optional[float]],
    pipeline: Pipeline,
) -> EmployeeBucketRow:
    untouched_avg = averages.get(Tier.UNTOUCHED)
    tier_avgs: List[Tuple[Tier, Optional[float]]] = [(t, averages.get(t)) for t in TOUCHED_TIERS]
    present = [v for _, v in tier_avgs if v is not None]
    best = best_tier(tier_avgs)
    best_avg = best[1] if best else None

    lift = compute_lift(untouched_avg, best_avg)
    candidates = [v for v in (untouched_avg, best_avg) if v is not None]
    touched_min = min(present) if present else None
    touched_max = max(present) if present else None
    spread = spread_pct(touched_min, touched_max)
    ranking = pipeline.spec.ranking
    return EmployeeBucketRow(
        bucket=bucket,
        untouched_avg=untouched_avg,
        touched_best_avg=best_avg,
        touched_min_avg=touched_min,
        touched_max_avg=touched_max,
        touched_best_tier_label=best[0].display if best else None,
        winner=_WINNER_LABELS[pick_winner(untouched_avg, best_avg, ranking)],
        lift=LiftView(
            available=lift.available,
            absolute=lift.absolute,
            pct=lift.pct,
            display=lift.display(),
        ),
        best_value=max(candidates) if candidates else None,
        touched_range_spread_pct=spread,
        # strictly above the configured spread
        show_touched_range=touched_min is not None and spread > ranking.range_spread_pct,
    )


def compute_employee_bucket_arr(pipeline: Pipeline) -> EmployeeBucketTable:
    """Accounts without an employee band are left out of this table."""

    labels = pipeline.spec.employee_buckets.labels
    order = [(label, tier.value) for label in labels for tier in TIER_ORDER]
    stats = group_stats(pipeline.frame, ["employee_bucket", "tier"], columns=("arr",), order=order)

    per_bucket: Dict[str, Dict[Tier, Optional[float]]] = {label: {} for label in labels}
    for g in stats:
        label, tier_value = g.key
        per_bucket[label][Tier(tier_value)] = g.avg("arr")

    return EmployeeBucketTable(rows=[_row(label, per_bucket[label], pipeline) for label in labels])

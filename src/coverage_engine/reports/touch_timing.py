"""Cohorts by time from signup to first outbound touch."""
from __future__ import annotations

from ..api.schemas import TouchTiming, TouchTimingRow
from ..buckets.engine import NEVER_TOUCHED, TIMING_BUCKETS
from ..stats.aggregator import group_stats
from ..stats.estimators import pct
from .pipeline import Pipeline


def compute_touch_timing(pipeline: Pipeline) -> TouchTiming:
    frame = pipeline.frame
    total = int(len(frame))
    stats = group_stats(
        frame, "timing_bucket", columns=("arr", "days_to_touch"), order=TIMING_BUCKETS
    )
    rows = []
    for g in stats:
        bucket = g.key[0]
        rows.append(
            TouchTimingRow(
                bucket=bucket,
                count=g.account_count,
                pct=pct(g.account_count, total),
                avg_days_to_touch=None if bucket == NEVER_TOUCHED else g.avg("days_to_touch"),
                avg_arr=g.avg("arr"),
                win_rate_pct=g.win_rate,
            )
        )
    return TouchTiming(total_accounts=total, buckets=rows)

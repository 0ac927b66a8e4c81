"""Touched vs untouched account coverage."""
from __future__ import annotations

from ..api.schemas import ArrStats, CoverageSummary
from ..stats.estimators import AggregateStat, aggregate_stat, pct
from .pipeline import Pipeline


def _arr_stats(stat: AggregateStat) -> ArrStats:
    return ArrStats(count=stat.count, avg=stat.avg, min=stat.min, max=stat.max, median=stat.median)


def compute_coverage(pipeline: Pipeline) -> CoverageSummary:
    """An account is touched when its domain has at least one outbound event.

    ``count`` in the ARR stats is the number of accounts with an ARR value.
    """

    frame = pipeline.frame
    total = int(len(frame))
    touched = frame[frame["touched"]] if total else frame
    untouched = frame[~frame["touched"]] if total else frame
    return CoverageSummary(
        total_accounts=total,
        touched_count=int(len(touched)),
        untouched_count=int(len(untouched)),
        coverage_pct=pct(len(touched), total),
        touched_arr_stats=_arr_stats(aggregate_stat(touched["arr"].tolist())),
        untouched_arr_stats=_arr_stats(aggregate_stat(untouched["arr"].tolist())),
    )

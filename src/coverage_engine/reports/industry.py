"""Industry × engagement-tier cross-tab and the KPI roll-up built on it."""
from __future__ import annotations

from typing import List, Optional

from loguru import logger

from ..api.schemas import IndustryEngagementRow, IndustryMetrics, MetricsKpis, TierWinRate
from ..engagement.classifier import TIER_ORDER, Tier
from ..stats.aggregator import group_stats
from ..stats.estimators import mean, pct, weighted_mean
from .pipeline import Pipeline

_TIER_RANK = {tier.value: idx for idx, tier in enumerate(TIER_ORDER)}
MAX_INSIGHTS = 3


def compute_industry_metrics(
    pipeline: Pipeline,
    region: Optional[str] = None,
    employee_bucket: Optional[str] = None,
) -> IndustryMetrics:
    """Cross-tab of industry and tier, optionally restricted to one region
    and/or one employee band.

    ``regions`` always lists every region in the dataset so callers can build
    a filter control from an already filtered response.
    """

    frame = pipeline.frame
    regions = sorted({r for r in frame["region"].tolist() if r})
    subset = frame
    if region:
        subset = subset[subset["region"] == region]
    if employee_bucket:
        subset = subset[subset["employee_bucket"] == employee_bucket]
    logger.debug(
        f"Industry metrics: region={region!r} employee_bucket={employee_bucket!r} rows={len(subset)}"
    )

    stats = group_stats(
        subset,
        ["industry", "tier"],
        columns=("arr", "logins_last_30d", "feature_event_count"),
    )
    stats.sort(key=lambda g: (str(g.key[0]), _TIER_RANK[g.key[1]]))
    rows = [
        IndustryEngagementRow(
            industry=g.key[0],
            engagement_tier=g.key[1],
            account_count=g.account_count,
            avg_arr=g.avg("arr"),
            win_rate_pct=g.win_rate,
            avg_logins=g.avg("logins_last_30d"),
            avg_feature_events=g.avg("feature_event_count"),
        )
        for g in stats
    ]
    return IndustryMetrics(
        industry_stats=rows,
        regions=regions,
        employee_buckets=pipeline.spec.employee_buckets.labels,
    )


def summarise_kpis(metrics: IndustryMetrics) -> MetricsKpis:
    """Touched vs untouched roll-up of the cross-tab.

    Averages are weighted by each row's account count over the rows where the
    metric exists; per-tier win rates are the plain mean over industries.
    """

    rows = metrics.industry_stats
    untouched = [r for r in rows if r.engagement_tier == Tier.UNTOUCHED.value]
    touched = [r for r in rows if r.engagement_tier != Tier.UNTOUCHED.value]
    touched_count = sum(r.account_count for r in touched)
    untouched_count = sum(r.account_count for r in untouched)

    def _weighted(group: List[IndustryEngagementRow], attr: str) -> Optional[float]:
        return weighted_mean((getattr(r, attr), r.account_count) for r in group)

    kpis = MetricsKpis(
        coverage_pct=pct(touched_count, touched_count + untouched_count),
        touched_accounts=touched_count,
        untouched_accounts=untouched_count,
        avg_arr_touched=_weighted(touched, "avg_arr"),
        avg_arr_untouched=_weighted(untouched, "avg_arr"),
        win_rate_touched=_weighted(touched, "win_rate_pct"),
        win_rate_untouched=_weighted(untouched, "win_rate_pct"),
        avg_logins_touched=_weighted(touched, "avg_logins"),
        avg_logins_untouched=_weighted(untouched, "avg_logins"),
        win_rate_by_tier=[
            TierWinRate(
                tier=tier.value,
                win_rate_pct=mean(r.win_rate_pct for r in rows if r.engagement_tier == tier.value),
            )
            for tier in TIER_ORDER
        ],
    )
    kpis.insights = _insights(kpis, rows)
    return kpis


def _insights(kpis: MetricsKpis, rows: List[IndustryEngagementRow]) -> List[str]:
    out: List[str] = []
    if kpis.avg_arr_touched and kpis.avg_arr_untouched:
        lift_pct = (kpis.avg_arr_touched - kpis.avg_arr_untouched) / kpis.avg_arr_untouched * 100
        if lift_pct > 10:
            out.append(f"Touched accounts show +{lift_pct:.0f}% higher ARR than untouched.")
    if kpis.win_rate_touched and kpis.win_rate_untouched:
        lift_pts = kpis.win_rate_touched - kpis.win_rate_untouched
        if lift_pts > 5:
            out.append(f"Win rate lift of +{lift_pts:.1f} pts for touched vs untouched.")
    replied = [r for r in rows if r.engagement_tier == Tier.REPLIED.value and r.win_rate_pct is not None]
    if replied:
        top = max(replied, key=lambda r: r.win_rate_pct)
        out.append(f"{top.industry} shows strongest replied win rate ({top.win_rate_pct:.0f}%).")
    return out[:MAX_INSIGHTS]

"""Distinct-domain counts, average ARR and win rate per engagement tier."""
from __future__ import annotations

import re
from typing import Iterable, List, Optional, Tuple

from ..api.schemas import EngagementCoverage, EngagementGroup
from ..engagement.classifier import Tier, domains_by_tier
from ..stats.estimators import mean, win_rate
from .pipeline import Pipeline

_NON_ALNUM = re.compile(r"[^a-z0-9]+")

UNTOUCHED_LABEL = "Untouched"
TOUCHED_LABEL = "Touched (all)"


def group_key(label: str) -> str:
    return _NON_ALNUM.sub("-", label.lower())


def _domain_values(pipeline: Pipeline, domain: str) -> Tuple[Optional[float], Optional[bool]]:
    """ARR and outcome for a domain.

    Engaged domains use the representative values of their engagement
    aggregate; untouched domains use their own account record.
    """

    agg = pipeline.index.engagement_for(domain)
    if agg is not None:
        return agg.arr, agg.deal_won
    acc = pipeline.index.account_for(domain)
    if acc is not None:
        return acc.arr, acc.deal_won
    return None, None


def _group(pipeline: Pipeline, label: str, domains: Iterable[str]) -> EngagementGroup:
    members = list(domains)
    values = [_domain_values(pipeline, d) for d in members]
    return EngagementGroup(
        key=group_key(label),
        label=label,
        account_count=len(members),
        avg_arr=mean(arr for arr, _ in values),
        win_rate_pct=win_rate(won for _, won in values),
    )


def compute_engagement_coverage(pipeline: Pipeline) -> EngagementCoverage:
    engagement = pipeline.index.engagement
    by_tier = domains_by_tier(engagement)
    untouched = [d for d in pipeline.index.accounts if not pipeline.index.is_touched(d)]
    groups: List[EngagementGroup] = [
        _group(pipeline, UNTOUCHED_LABEL, untouched),
        _group(pipeline, TOUCHED_LABEL, engagement.keys()),
    ]
    for tier in (Tier.REPLIED, Tier.CLICKED, Tier.OPENED, Tier.SENT):
        groups.append(_group(pipeline, tier.display, by_tier[tier]))
    return EngagementCoverage(groups=groups, total_accounts=len(pipeline.accounts))

"""Engagement tier classification.

The tier is chosen by precedence over the OR-reduced flags of all of a
domain's events, not by replaying them in order.  A domain with one row
flagged ``replied`` and never ``opened`` is still ``Replied``.
"""
from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from ..index.domain_index import EngagementAggregate


class Tier(str, Enum):
    UNTOUCHED = "Untouched"
    SENT = "Sent"
    OPENED = "Opened"
    CLICKED = "Clicked"
    REPLIED = "Replied"

    @property
    def display(self) -> str:
        return "Sent only" if self is Tier.SENT else self.value


# Declaration order, shallowest first.
TIER_ORDER: Tuple[Tier, ...] = (Tier.UNTOUCHED, Tier.SENT, Tier.OPENED, Tier.CLICKED, Tier.REPLIED)
TOUCHED_TIERS: Tuple[Tier, ...] = TIER_ORDER[1:]

_Rule = Tuple[Callable[[EngagementAggregate], bool], Tier]

# Evaluated top to bottom; first match wins.
TIER_RULES: Tuple[_Rule, ...] = (
    (lambda agg: agg.ever_replied, Tier.REPLIED),
    (lambda agg: agg.ever_clicked, Tier.CLICKED),
    (lambda agg: agg.ever_opened, Tier.OPENED),
    (lambda agg: agg.event_count > 0, Tier.SENT),
)


def classify(agg: Optional[EngagementAggregate]) -> Tier:
    """Return the deepest tier reached; ``Untouched`` when there is no aggregate."""

    if agg is None:
        return Tier.UNTOUCHED
    for predicate, tier in TIER_RULES:
        if predicate(agg):
            return tier
    return Tier.UNTOUCHED


def first_touch(agg: Optional[EngagementAggregate]) -> Optional[str]:
    """Earliest well-formed send date for the domain, if any."""

    return agg.earliest_send_date if agg is not None else None


def domains_by_tier(engagement: Mapping[str, EngagementAggregate]) -> Dict[Tier, List[str]]:
    """Group engaged domains by tier, keeping first-seen order within a tier."""

    out: Dict[Tier, List[str]] = {tier: [] for tier in TOUCHED_TIERS}
    for domain, agg in engagement.items():
        out[classify(agg)].append(domain)
    return out


__all__ = [
    "Tier",
    "TIER_ORDER",
    "TOUCHED_TIERS",
    "TIER_RULES",
    "classify",
    "first_touch",
    "domains_by_tier",
]

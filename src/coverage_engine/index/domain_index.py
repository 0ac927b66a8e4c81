"""Domain keyed join structures.

The normalised company domain is the only join key between the account roster
and the outbound log.  Both lookups built here use "last write wins":

* ``accounts_by_domain`` keeps the last account seen for a duplicated domain.
* :class:`EngagementAggregate` keeps the last non-null ``account_arr`` and
  ``account_deal_won`` seen across a domain's events, in event order.  Values
  are not averaged or checked for consistency.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from loguru import logger

from ..core.models import Account, EngagementEvent
from ..normalize.normalizer import normalize_domain, parse_iso_date


@dataclass(frozen=True)
class EngagementAggregate:
    """Union of every event sharing one domain."""

    domain: str
    event_count: int
    ever_opened: bool
    ever_clicked: bool
    ever_replied: bool
    earliest_send_date: Optional[str]
    arr: Optional[float]
    deal_won: Optional[bool]


def accounts_by_domain(accounts: Iterable[Account]) -> Dict[str, Account]:
    """Map normalised domain to account; blank domains are skipped."""

    lookup: Dict[str, Account] = {}
    for acc in accounts:
        domain = normalize_domain(acc.domain)
        if not domain:
            continue
        lookup[domain] = acc
    return lookup


def earliest_date(values: Iterable[Optional[str]]) -> Optional[str]:
    """Return the lexicographically smallest well-formed ISO date string.

    Blank and malformed values are skipped rather than treated as epoch 0.
    """

    best: Optional[str] = None
    for value in values:
        if not value:
            continue
        text = str(value).strip()
        if parse_iso_date(text) is None:
            logger.debug(f"Skipping malformed send_date {text!r}")
            continue
        if best is None or text < best:
            best = text
    return best


def aggregate_events(events: Iterable[EngagementEvent]) -> Dict[str, EngagementAggregate]:
    """OR-reduce engagement flags per domain, preserving first-seen domain order."""

    grouped: Dict[str, List[EngagementEvent]] = {}
    for ev in events:
        domain = normalize_domain(ev.company_domain)
        if not domain:
            continue
        grouped.setdefault(domain, []).append(ev)

    out: Dict[str, EngagementAggregate] = {}
    for domain, rows in grouped.items():
        arr: Optional[float] = None
        won: Optional[bool] = None
        for ev in rows:
            if ev.account_arr is not None:
                arr = ev.account_arr
            if ev.account_deal_won is not None:
                won = ev.account_deal_won
        out[domain] = EngagementAggregate(
            domain=domain,
            event_count=len(rows),
            ever_opened=any(ev.opened for ev in rows),
            ever_clicked=any(ev.clicked for ev in rows),
            ever_replied=any(ev.replied for ev in rows),
            earliest_send_date=earliest_date(ev.send_date for ev in rows),
            arr=arr,
            deal_won=won,
        )
    return out


@dataclass(frozen=True)
class DomainIndex:
    """Account and engagement lookups keyed by normalised domain."""

    accounts: Mapping[str, Account]
    engagement: Mapping[str, EngagementAggregate]

    @classmethod
    def build(cls, accounts: Sequence[Account], events: Sequence[EngagementEvent]) -> "DomainIndex":
        index = cls(accounts=accounts_by_domain(accounts), engagement=aggregate_events(events))
        matched = sum(1 for d in index.engagement if d in index.accounts)
        logger.info(
            f"Domain index built: {len(index.accounts)} account domains, "
            f"{len(index.engagement)} engaged domains, {matched} matched"
        )
        return index

    def account_for(self, domain: str) -> Optional[Account]:
        return self.accounts.get(normalize_domain(domain))

    def engagement_for(self, domain: str) -> Optional[EngagementAggregate]:
        return self.engagement.get(normalize_domain(domain))

    def is_touched(self, domain: str) -> bool:
        return self.engagement_for(domain) is not None

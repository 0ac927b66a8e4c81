"""Joined account frame and grouped statistics.

:func:`build_account_frame` produces one row per input account (input order)
carrying its engagement tier and bucket labels.  :func:`group_stats` then
groups that frame by one or more label columns.  Rows whose key contains
``None`` (e.g. no employee bucket) are excluded from that grouping; requested
keys with no rows still produce a group with ``account_count == 0`` and
``None`` statistics.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Optional, Sequence, Tuple

import pandas as pd

from ..buckets.engine import BucketingEngine
from ..core.models import Account
from ..engagement.classifier import classify, first_touch
from ..index.domain_index import DomainIndex
from .estimators import EMPTY_STAT, AggregateStat, aggregate_stat, win_rate

FRAME_COLUMNS = [
    "domain",
    "company_name",
    "region",
    "industry",
    "employee_count",
    "arr",
    "logins_last_30d",
    "feature_event_count",
    "deal_won",
    "signup_date",
    "tier",
    "touched",
    "employee_bucket",
    "arr_bucket",
    "first_touch",
    "days_to_touch",
    "timing_bucket",
]
_OBJECT_COLUMNS = ("deal_won", "employee_bucket", "arr_bucket", "first_touch", "days_to_touch")


def build_account_frame(
    accounts: Sequence[Account], index: DomainIndex, engine: BucketingEngine
) -> pd.DataFrame:
    """Join accounts with engagement and assign every bucket dimension."""

    records: List[Dict[str, Any]] = []
    for acc in accounts:
        agg = index.engagement_for(acc.domain) if acc.domain else None
        tier = classify(agg)
        touch = first_touch(agg)
        timing, days = engine.timing(acc.signup_date, touch)
        records.append(
            {
                "domain": acc.domain,
                "company_name": acc.company_name,
                "region": acc.region,
                "industry": acc.industry,
                "employee_count": acc.employee_count,
                "arr": acc.arr,
                "logins_last_30d": acc.logins_last_30d,
                "feature_event_count": acc.feature_event_count,
                "deal_won": acc.deal_won,
                "signup_date": acc.signup_date,
                "tier": tier.value,
                "touched": agg is not None,
                "employee_bucket": engine.employee(acc.employee_count),
                "arr_bucket": engine.arr(acc.arr),
                "first_touch": touch,
                "days_to_touch": days,
                "timing_bucket": timing,
            }
        )
    frame = pd.DataFrame.from_records(records, columns=FRAME_COLUMNS)
    # keep the tri-state outcome and optional values as python objects (None, not NaN)
    for col in _OBJECT_COLUMNS:
        frame[col] = pd.Series([r[col] for r in records], index=frame.index, dtype=object)
    return frame


@dataclass(frozen=True)
class GroupStat:
    key: Tuple[Hashable, ...]
    account_count: int
    stats: Dict[str, AggregateStat] = field(default_factory=dict)
    win_rate: Optional[float] = None

    def stat(self, column: str) -> AggregateStat:
        return self.stats.get(column, EMPTY_STAT)

    def avg(self, column: str) -> Optional[float]:
        return self.stat(column).avg


def summarise(
    frame: pd.DataFrame, key: Tuple[Hashable, ...], columns: Sequence[str] = ("arr",)
) -> GroupStat:
    """Statistics for one group of rows."""

    stats = {col: aggregate_stat(frame[col].tolist()) for col in columns}
    return GroupStat(
        key=key,
        account_count=int(len(frame)),
        stats=stats,
        win_rate=win_rate(frame["deal_won"].tolist()),
    )


def _as_key(value: Any) -> Tuple[Hashable, ...]:
    return value if isinstance(value, tuple) else (value,)


def split_groups(frame: pd.DataFrame, by: Sequence[str]) -> Dict[Tuple[Hashable, ...], pd.DataFrame]:
    """Partition rows by ``by`` in first-seen order, dropping rows with a null key."""

    if frame.empty:
        return {}
    mask = frame[list(by)].notna().all(axis=1)
    subset = frame[mask]
    if subset.empty:
        return {}
    return {
        _as_key(key): group
        for key, group in subset.groupby(list(by), sort=False, dropna=True)
    }


def group_stats(
    frame: pd.DataFrame,
    by: str | Sequence[str],
    columns: Sequence[str] = ("arr",),
    order: Optional[Sequence[Any]] = None,
) -> List[GroupStat]:
    """Group ``frame`` and summarise each group.

    With ``order`` the result follows it exactly (one entry per requested key,
    empty groups included); without it, groups come in first-seen order.
    """

    keys = [by] if isinstance(by, str) else list(by)
    groups = split_groups(frame, keys)
    if order is None:
        return [summarise(g, key, columns) for key, g in groups.items()]
    empty = frame.iloc[0:0]
    out: List[GroupStat] = []
    for wanted in order:
        key = _as_key(wanted)
        out.append(summarise(groups.get(key, empty), key, columns))
    return out


__all__ = [
    "FRAME_COLUMNS",
    "GroupStat",
    "build_account_frame",
    "summarise",
    "split_groups",
    "group_stats",
]

"""API response models.

Field names are snake_case in Python and camelCase on the wire.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Model(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class ArrStats(_Model):
    count: int
    avg: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None
    median: Optional[float] = None


class CoverageSummary(_Model):
    total_accounts: int
    touched_count: int
    untouched_count: int
    coverage_pct: float
    touched_arr_stats: ArrStats
    untouched_arr_stats: ArrStats


class EngagementGroup(_Model):
    key: str
    label: str
    account_count: int
    avg_arr: Optional[float] = None
    win_rate_pct: Optional[float] = None


class EngagementCoverage(_Model):
    groups: List[EngagementGroup]
    total_accounts: int


class LiftView(_Model):
    available: bool
    absolute: Optional[float] = None
    pct: Optional[float] = None
    display: str


class EmployeeBucketRow(_Model):
    bucket: str
    untouched_avg: Optional[float] = None
    touched_best_avg: Optional[float] = None
    touched_min_avg: Optional[float] = None
    touched_max_avg: Optional[float] = None
    touched_best_tier_label: Optional[str] = None
    winner: Optional[str] = None
    lift: LiftView
    best_value: Optional[float] = None
    touched_range_spread_pct: float = 0.0
    show_touched_range: bool = False


class EmployeeBucketTable(_Model):
    rows: List[EmployeeBucketRow]


class TouchTimingRow(_Model):
    bucket: str
    count: int
    pct: float
    avg_days_to_touch: Optional[float] = None
    avg_arr: Optional[float] = None
    win_rate_pct: Optional[float] = None


class TouchTiming(_Model):
    total_accounts: int
    buckets: List[TouchTimingRow]


class IndustryEngagementRow(_Model):
    industry: str
    engagement_tier: str
    account_count: int
    avg_arr: Optional[float] = None
    win_rate_pct: Optional[float] = None
    avg_logins: Optional[float] = None
    avg_feature_events: Optional[float] = None


class IndustryMetrics(_Model):
    industry_stats: List[IndustryEngagementRow]
    regions: List[str]
    employee_buckets: List[str]


class TierWinRate(_Model):
    tier: str
    win_rate_pct: Optional[float] = None


class MetricsKpis(_Model):
    coverage_pct: float
    touched_accounts: int
    untouched_accounts: int
    avg_arr_touched: Optional[float] = None
    avg_arr_untouched: Optional[float] = None
    win_rate_touched: Optional[float] = None
    win_rate_untouched: Optional[float] = None
    avg_logins_touched: Optional[float] = None
    avg_logins_untouched: Optional[float] = None
    win_rate_by_tier: List[TierWinRate] = Field(default_factory=list)
    insights: List[str] = Field(default_factory=list)


class AccountBrowse(_Model):
    total: int
    page: int
    page_size: int
    rows: List[Dict[str, Any]]
    distinct: Dict[str, List[str]] = Field(default_factory=dict)


class FullReport(_Model):
    coverage: CoverageSummary
    engagement_coverage: EngagementCoverage
    employee_buckets: EmployeeBucketTable
    touch_timing: TouchTiming
    industry_metrics: IndustryMetrics
    kpis: MetricsKpis


class ErrorResponse(_Model):
    error: str

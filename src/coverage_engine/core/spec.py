"""Engine configuration models.

Bucket tables, touch-timing cut-offs and ranking thresholds are plain frozen
dataclasses handed to the pipeline, so tests can substitute smaller tables.
A JSON file with the same structure can be loaded with :func:`load_spec`;
omitted sections fall back to the defaults.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import json
from pathlib import Path
from typing import Any, Mapping, Sequence

from ..buckets.tables import ARR_BUCKETS, EMPLOYEE_BUCKETS, Bucket, BucketTable


@dataclass(frozen=True)
class TimingSpec:
    """Upper bounds (inclusive, in days) of the Early and Medium bands."""

    early_max_days: int = 30
    medium_max_days: int = 90

    def __post_init__(self) -> None:
        if self.medium_max_days < self.early_max_days:
            raise ValueError("timing.medium_max_days must be >= timing.early_max_days")


@dataclass(frozen=True)
class RankingSpec:
    """Significance thresholds used when highlighting a winner."""

    abs_threshold: float = 2000.0
    pct_threshold: float = 5.0
    range_spread_pct: float = 15.0


@dataclass(frozen=True)
class EngineSpec:
    employee_buckets: BucketTable = EMPLOYEE_BUCKETS
    arr_buckets: BucketTable = ARR_BUCKETS
    timing: TimingSpec = field(default_factory=TimingSpec)
    ranking: RankingSpec = field(default_factory=RankingSpec)


# ---------------------------------------------------------------------------


def _parse_table(name: str, raw: Sequence[Mapping[str, Any]]) -> BucketTable:
    if not isinstance(raw, (list, tuple)):
        raise ValueError(f"bucket table {name!r}: expected a list of buckets")
    buckets = []
    for entry in raw:
        try:
            hi = entry.get("max")
            bucket = Bucket(
                label=str(entry["label"]),
                min=float(entry["min"]),
                max=None if hi is None else float(hi),
            )
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"bucket table {name!r}: invalid entry {entry!r}") from exc
        buckets.append(bucket)
    return BucketTable(name=name, buckets=tuple(buckets))


def _parse_section(name: str, raw: Any, defaults: Mapping[str, Any]) -> dict:
    """Coerce one scalar section onto the types of its ``defaults``."""

    raw = raw or {}
    if not isinstance(raw, Mapping):
        raise ValueError(f"{name}: expected an object, got {raw!r}")
    out = {}
    for key, default in defaults.items():
        value = raw.get(key, default)
        try:
            out[key] = type(default)(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"{name}.{key}: invalid value {value!r}") from exc
    return out


def _parse_spec(raw: Mapping[str, Any]) -> EngineSpec:
    """Build an :class:`EngineSpec` from an in-memory mapping."""

    if not isinstance(raw, Mapping):
        raise ValueError("engine spec must be a JSON object")

    employee = EMPLOYEE_BUCKETS
    if raw.get("employee_buckets") is not None:
        employee = _parse_table("employee_count", raw["employee_buckets"])
    arr = ARR_BUCKETS
    if raw.get("arr_buckets") is not None:
        arr = _parse_table("arr", raw["arr_buckets"])

    timing = TimingSpec(
        **_parse_section("timing", raw.get("timing"), {"early_max_days": 30, "medium_max_days": 90})
    )
    ranking = RankingSpec(
        **_parse_section(
            "ranking",
            raw.get("ranking"),
            {"abs_threshold": 2000.0, "pct_threshold": 5.0, "range_spread_pct": 15.0},
        )
    )
    return EngineSpec(
        employee_buckets=employee,
        arr_buckets=arr,
        timing=timing,
        ranking=ranking,
    )


def load_spec(path: str | Path) -> EngineSpec:
    """Load an :class:`EngineSpec` instance from a JSON file."""

    raw = json.loads(Path(path).read_text())
    return _parse_spec(raw)


def spec_from_dict(raw: Mapping[str, Any]) -> EngineSpec:
    """Public helper to build an :class:`EngineSpec` from a JSON-compatible dict."""

    return _parse_spec(raw)


def default_spec() -> EngineSpec:
    return EngineSpec()

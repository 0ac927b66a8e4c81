"""Paged, filterable listings of the cleaned account and outbound rows."""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..api.schemas import AccountBrowse
from ..buckets.tables import BucketTable
from .pipeline import Pipeline

DEFAULT_PAGE_SIZE = 100
MAX_DISTINCT = 2000

# numeric account columns filtered by bucket label rather than exact value
BUCKETED_COLUMNS = {"employee_count": "employee_bucket", "arr": "arr_bucket"}


def cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def account_rows(pipeline: Pipeline) -> List[Dict[str, Any]]:
    """Cleaned account records plus their bucket labels and engagement tier."""

    frame = pipeline.frame
    rows: List[Dict[str, Any]] = []
    for acc, emp, arr, tier in zip(
        pipeline.accounts,
        frame["employee_bucket"].tolist(),
        frame["arr_bucket"].tolist(),
        frame["tier"].tolist(),
    ):
        rec = acc.to_record()
        rec["employee_bucket"] = emp
        rec["arr_bucket"] = arr
        rec["engagement_tier"] = tier
        rows.append(rec)
    return rows


def outbound_rows(pipeline: Pipeline) -> List[Dict[str, Any]]:
    return [ev.to_record() for ev in pipeline.events]


def _matches(row: Mapping[str, Any], filters: Mapping[str, str], bucketed: Mapping[str, str]) -> bool:
    for col, wanted in filters.items():
        if not wanted:
            continue
        col = bucketed.get(col, col)
        if cell_text(row.get(col)) != wanted:
            return False
    return True


def distinct_values(
    rows: Sequence[Mapping[str, Any]],
    columns: Sequence[str],
    bucket_tables: Optional[Mapping[str, BucketTable]] = None,
) -> Dict[str, List[str]]:
    """Sorted non-empty values per column.

    Columns listed in ``bucket_tables`` report the bucket labels present,
    in table order.
    """

    bucket_tables = bucket_tables or {}
    out: Dict[str, List[str]] = {}
    for col in columns:
        table = bucket_tables.get(col)
        if table is not None:
            seen = {cell_text(r.get(BUCKETED_COLUMNS[col])) for r in rows}
            out[col] = [label for label in table.labels if label in seen]
            continue
        values = {cell_text(r.get(col)) for r in rows}
        values.discard("")
        out[col] = sorted(values)[:MAX_DISTINCT]
    return out


def browse(
    rows: Sequence[Mapping[str, Any]],
    filters: Optional[Mapping[str, str]] = None,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
    bucket_tables: Optional[Mapping[str, BucketTable]] = None,
) -> AccountBrowse:
    """Filter ``rows`` and return one page of them.

    ``page`` is 1-based; distinct values are computed over the unfiltered
    rows so every filter choice stays available.
    """

    filters = dict(filters or {})
    bucketed = {col: BUCKETED_COLUMNS[col] for col in (bucket_tables or {})}
    filtered = [r for r in rows if _matches(r, filters, bucketed)]
    start = (max(page, 1) - 1) * page_size
    columns = list(rows[0].keys()) if rows else []
    return AccountBrowse(
        total=len(filtered),
        page=page,
        page_size=page_size,
        rows=[dict(r) for r in filtered[start : start + page_size]],
        distinct=distinct_values(rows, columns, bucket_tables),
    )


def browse_accounts(
    pipeline: Pipeline,
    filters: Optional[Mapping[str, str]] = None,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> AccountBrowse:
    """``employee_count`` and ``arr`` filters take a bucket label."""

    tables = {
        "employee_count": pipeline.spec.employee_buckets,
        "arr": pipeline.spec.arr_buckets,
    }
    return browse(account_rows(pipeline), filters, page, page_size, bucket_tables=tables)


def browse_outbound(
    pipeline: Pipeline,
    filters: Optional[Mapping[str, str]] = None,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> AccountBrowse:
    return browse(outbound_rows(pipeline), filters, page, page_size)

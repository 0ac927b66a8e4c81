"""Utilities to persist report results."""
from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict

import pandas as pd

from ..api.schemas import FullReport, IndustryEngagementRow, IndustryMetrics

REPORT_FILE = "report.json"
INDUSTRY_FILE = "industry_metrics.parquet"


def write_summary(path: str | Path, summary: Dict[str, Any]) -> None:
    Path(path).write_text(json.dumps(summary, indent=2))


def industry_frame(metrics: IndustryMetrics) -> pd.DataFrame:
    columns = list(IndustryEngagementRow.model_fields)
    rows = [r.model_dump() for r in metrics.industry_stats]
    return pd.DataFrame(rows, columns=columns)


def write_industry_table(path: str | Path, metrics: IndustryMetrics) -> None:
    """Persist the industry cross-tab to a Parquet file."""

    industry_frame(metrics).to_parquet(path, index=False)


def write_report(out_dir: str | Path, report: FullReport) -> Dict[str, Path]:
    """Write the full report as JSON and the cross-tab as Parquet."""

    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    paths = {"report": out / REPORT_FILE, "industry": out / INDUSTRY_FILE}
    write_summary(paths["report"], report.to_payload())
    write_industry_table(paths["industry"], report.industry_metrics)
    return paths

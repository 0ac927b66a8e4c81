"""Run every report over one pair of dataset snapshots."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from loguru import logger

from ..api.schemas import FullReport
from ..config import Settings, get_settings
from ..core.dataset import load_datasets
from ..core.spec import EngineSpec, default_spec, load_spec
from ..io.artifacts import write_report
from .coverage import compute_coverage
from .employee_arr import compute_employee_bucket_arr
from .engagement_coverage import compute_engagement_coverage
from .industry import compute_industry_metrics, summarise_kpis
from .pipeline import Pipeline, build_pipeline
from .touch_timing import compute_touch_timing


def resolve_spec(settings: Settings | None = None) -> EngineSpec:
    """Engine configuration from ``CE_ENGINE_SPEC`` or the defaults."""

    settings = settings or get_settings()
    if settings.engine_spec_path:
        return load_spec(settings.engine_spec_path)
    return default_spec()


def load_pipeline(
    accounts_path: str | Path | None = None,
    outbound_path: str | Path | None = None,
    spec: EngineSpec | None = None,
    settings: Settings | None = None,
) -> Pipeline:
    settings = settings or get_settings()
    data = load_datasets(accounts_path, outbound_path, settings=settings)
    return build_pipeline(data.accounts, data.events, spec or resolve_spec(settings))


def build_report(pipeline: Pipeline) -> FullReport:
    metrics = compute_industry_metrics(pipeline)
    return FullReport(
        coverage=compute_coverage(pipeline),
        engagement_coverage=compute_engagement_coverage(pipeline),
        employee_buckets=compute_employee_bucket_arr(pipeline),
        touch_timing=compute_touch_timing(pipeline),
        industry_metrics=metrics,
        kpis=summarise_kpis(metrics),
    )


def run_report(
    accounts_path: str | Path | None = None,
    outbound_path: str | Path | None = None,
    spec: EngineSpec | None = None,
    out_dir: Optional[str | Path] = None,
) -> FullReport:
    pipeline = load_pipeline(accounts_path, outbound_path, spec)
    report = build_report(pipeline)
    logger.info(
        f"Report: {report.coverage.total_accounts} accounts, "
        f"{report.coverage.coverage_pct:.1f}% touched"
    )
    if out_dir is not None:
        paths = write_report(out_dir, report)
        logger.info(f"Artifacts written to {paths['report'].parent}")
    return report

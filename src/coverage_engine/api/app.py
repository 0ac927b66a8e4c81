"""Report helpers and their FastAPI wrappers.

The synchronous helpers take an already built :class:`Pipeline` (or load one
from the configured datasets) so the test suite can call them directly, while
the FastAPI application exposes the same reports over HTTP.  Datasets are
re-read on every request; there is no cache between calls.
"""
from __future__ import annotations

from typing import Dict, Optional

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse
from loguru import logger

from ..core.dataset import DatasetError
from ..observability import configure_logging
from ..reports import browser
from ..reports.coverage import compute_coverage
from ..reports.employee_arr import compute_employee_bucket_arr
from ..reports.engagement_coverage import compute_engagement_coverage
from ..reports.industry import compute_industry_metrics, summarise_kpis
from ..reports.pipeline import Pipeline
from ..reports.runner import load_pipeline
from ..reports.touch_timing import compute_touch_timing
from . import schemas

_PAGING_PARAMS = {"page", "page_size", "pageSize"}


def _resolve(pipeline: Optional[Pipeline]) -> Pipeline:
    return pipeline if pipeline is not None else load_pipeline()


def coverage(pipeline: Optional[Pipeline] = None) -> schemas.CoverageSummary:
    return compute_coverage(_resolve(pipeline))


def engagement_coverage(pipeline: Optional[Pipeline] = None) -> schemas.EngagementCoverage:
    return compute_engagement_coverage(_resolve(pipeline))


def employee_buckets(pipeline: Optional[Pipeline] = None) -> schemas.EmployeeBucketTable:
    return compute_employee_bucket_arr(_resolve(pipeline))


def touch_timing(pipeline: Optional[Pipeline] = None) -> schemas.TouchTiming:
    return compute_touch_timing(_resolve(pipeline))


def industry_metrics(
    region: Optional[str] = None,
    employee_bucket: Optional[str] = None,
    pipeline: Optional[Pipeline] = None,
) -> schemas.IndustryMetrics:
    return compute_industry_metrics(_resolve(pipeline), region=region, employee_bucket=employee_bucket)


def kpis(
    region: Optional[str] = None,
    employee_bucket: Optional[str] = None,
    pipeline: Optional[Pipeline] = None,
) -> schemas.MetricsKpis:
    return summarise_kpis(industry_metrics(region, employee_bucket, pipeline))


def accounts(
    filters: Optional[Dict[str, str]] = None,
    page: int = 1,
    page_size: int = browser.DEFAULT_PAGE_SIZE,
    pipeline: Optional[Pipeline] = None,
) -> schemas.AccountBrowse:
    return browser.browse_accounts(_resolve(pipeline), filters, page, page_size)


def outbound(
    filters: Optional[Dict[str, str]] = None,
    page: int = 1,
    page_size: int = browser.DEFAULT_PAGE_SIZE,
    pipeline: Optional[Pipeline] = None,
) -> schemas.AccountBrowse:
    return browser.browse_outbound(_resolve(pipeline), filters, page, page_size)


def _column_filters(request: Request) -> Dict[str, str]:
    return {k: v for k, v in request.query_params.items() if k not in _PAGING_PARAMS and v}


# ---------------------------------------------------------------------------
# FastAPI application


configure_logging()
fastapi_app = FastAPI(title="Coverage Engine API", version="0.1.0")


@fastapi_app.exception_handler(DatasetError)
def dataset_error_handler(request: Request, exc: DatasetError) -> JSONResponse:
    logger.error(f"{request.url.path}: {exc}")
    return JSONResponse(status_code=500, content=schemas.ErrorResponse(error=str(exc)).to_payload())


@fastapi_app.get('/health')
def health_endpoint() -> Dict[str, str]:
    return {"status": "ok"}


@fastapi_app.get('/coverage', response_model=schemas.CoverageSummary, response_model_by_alias=True)
def coverage_endpoint() -> schemas.CoverageSummary:
    """Touched vs untouched counts and ARR statistics."""

    return coverage()


@fastapi_app.get('/engagement-coverage', response_model=schemas.EngagementCoverage, response_model_by_alias=True)
def engagement_coverage_endpoint() -> schemas.EngagementCoverage:
    return engagement_coverage()


@fastapi_app.get('/employee-buckets', response_model=schemas.EmployeeBucketTable, response_model_by_alias=True)
def employee_buckets_endpoint() -> schemas.EmployeeBucketTable:
    """Untouched vs best-touched-tier ARR per employee band."""

    return employee_buckets()


@fastapi_app.get('/touch-timing', response_model=schemas.TouchTiming, response_model_by_alias=True)
def touch_timing_endpoint() -> schemas.TouchTiming:
    return touch_timing()


@fastapi_app.get('/metrics', response_model=schemas.IndustryMetrics, response_model_by_alias=True)
def metrics_endpoint(
    region: Optional[str] = None,
    emp_bucket: Optional[str] = Query(None, alias="empBucket"),
) -> schemas.IndustryMetrics:
    """Industry × engagement-tier cross-tab."""

    return industry_metrics(region=region or None, employee_bucket=emp_bucket or None)


@fastapi_app.get('/metrics/kpis', response_model=schemas.MetricsKpis, response_model_by_alias=True)
def kpis_endpoint(
    region: Optional[str] = None,
    emp_bucket: Optional[str] = Query(None, alias="empBucket"),
) -> schemas.MetricsKpis:
    return kpis(region=region or None, employee_bucket=emp_bucket or None)


@fastapi_app.get('/accounts', response_model=schemas.AccountBrowse, response_model_by_alias=True)
def accounts_endpoint(
    request: Request,
    page: int = Query(1, ge=1),
    page_size: int = Query(browser.DEFAULT_PAGE_SIZE, ge=1, le=1000),
) -> schemas.AccountBrowse:
    """Cleaned accounts; any other query parameter filters on that column."""

    return accounts(_column_filters(request), page=page, page_size=page_size)


@fastapi_app.get('/outbound', response_model=schemas.AccountBrowse, response_model_by_alias=True)
def outbound_endpoint(
    request: Request,
    page: int = Query(1, ge=1),
    page_size: int = Query(browser.DEFAULT_PAGE_SIZE, ge=1, le=1000),
) -> schemas.AccountBrowse:
    return outbound(_column_filters(request), page=page, page_size=page_size)


app = fastapi_app

"""Command line interface entry points."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, NoReturn, Optional

import typer

from ..config import get_settings
from ..core import cleaning
from ..core import spec as spec_module
from ..core.dataset import DatasetError, load_accounts, read_rows, write_records
from ..observability import configure_logging

app = typer.Typer()


@app.callback()
def main() -> None:
    """Account coverage and outbound engagement reports."""

    configure_logging()


def _echo_json(payload: Dict[str, Any]) -> None:
    typer.echo(json.dumps(payload, indent=2))


def _fail(exc: Exception) -> NoReturn:
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(1)


@app.command("clean-accounts")
def clean_accounts(
    input_path: Path = typer.Option(..., "--input", help="Raw account CSV export"),
    output: Optional[Path] = typer.Option(None, "--output"),
) -> None:
    """Normalise the raw account export and write the cleaned JSON snapshot."""

    try:
        rows = read_rows(input_path)
    except DatasetError as exc:
        _fail(exc)
    accounts = cleaning.clean_accounts(rows)
    target = output or get_settings().resolved_accounts_path()
    write_records(target, [acc.to_record() for acc in accounts])
    _echo_json(cleaning.account_summary(rows, accounts))


@app.command("clean-outbound")
def clean_outbound(
    input_path: Path = typer.Option(..., "--input", help="Raw outbound CSV export"),
    accounts_path: Optional[Path] = typer.Option(
        None, "--accounts", help="Accounts used for enrichment (raw CSV or cleaned JSON)"
    ),
    output: Optional[Path] = typer.Option(None, "--output"),
) -> None:
    """Normalise the outbound log, enrich it with account fields and write it."""

    settings = get_settings()
    try:
        accounts = load_accounts(accounts_path or settings.resolved_accounts_path())
        rows = read_rows(input_path)
    except DatasetError as exc:
        _fail(exc)
    events = cleaning.clean_outbound(rows, accounts)
    target = output or settings.resolved_outbound_path()
    write_records(target, [ev.to_record() for ev in events])
    _echo_json(cleaning.outbound_summary(events))


@app.command("report")
def report(
    accounts_path: Optional[Path] = typer.Option(None, "--accounts"),
    outbound_path: Optional[Path] = typer.Option(None, "--outbound"),
    spec: Optional[Path] = typer.Option(None, "--spec", exists=True, file_okay=True, dir_okay=False),
    out_dir: Optional[Path] = typer.Option(None, "--out-dir"),
) -> None:
    """Run every report and print them as one JSON document."""

    from ..reports.runner import run_report  # local import to keep startup light

    try:
        engine_spec = spec_module.load_spec(spec) if spec else None
    except ValueError as exc:
        _fail(exc)
    try:
        result = run_report(accounts_path, outbound_path, spec=engine_spec, out_dir=out_dir)
    except DatasetError as exc:
        _fail(exc)
    _echo_json(result.to_payload())


@app.command("metrics")
def metrics(
    accounts_path: Optional[Path] = typer.Option(None, "--accounts"),
    outbound_path: Optional[Path] = typer.Option(None, "--outbound"),
    region: Optional[str] = typer.Option(None, "--region"),
    emp_bucket: Optional[str] = typer.Option(None, "--emp-bucket"),
    kpis: bool = typer.Option(False, "--kpis/--no-kpis", help="Print the KPI roll-up instead"),
) -> None:
    """Print the industry × engagement-tier cross-tab."""

    from ..reports.industry import compute_industry_metrics, summarise_kpis
    from ..reports.runner import load_pipeline

    try:
        pipeline = load_pipeline(accounts_path, outbound_path)
    except DatasetError as exc:
        _fail(exc)
    result = compute_industry_metrics(pipeline, region=region, employee_bucket=emp_bucket)
    if kpis:
        _echo_json(summarise_kpis(result).to_payload())
    else:
        _echo_json(result.to_payload())


if __name__ == "__main__":
    app()

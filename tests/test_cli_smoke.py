import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

pytest.importorskip("typer")

DATA_DIR = Path(__file__).parent / "data"
PYTHONPATH = str(Path(__file__).resolve().parents[1] / "src")


def _run(*args, env_extra=None):
    env = {**os.environ, "PYTHONPATH": PYTHONPATH, "CE_LOG_LEVEL": "WARNING", **(env_extra or {})}
    return subprocess.run(
        [sys.executable, "-m", "coverage_engine.cli.main", *args],
        capture_output=True,
        text=True,
        env=env,
    )


def test_cli_clean_then_report(tmp_path):
    env = {"CE_DATA_DIR": str(tmp_path)}
    result = _run("clean-accounts", "--input", str(DATA_DIR / "accounts_raw.csv"), env_extra=env)
    assert result.returncode == 0, result.stderr
    assert json.loads(result.stdout)["total_rows"] == 4
    assert (tmp_path / "cleaned_assessment_account_data.json").exists()

    result = _run("clean-outbound", "--input", str(DATA_DIR / "outbound_raw.csv"), env_extra=env)
    assert result.returncode == 0, result.stderr
    assert json.loads(result.stdout)["match_rate"] == 75.0

    out_dir = tmp_path / "artifacts"
    result = _run("report", "--out-dir", str(out_dir), env_extra=env)
    assert result.returncode == 0, result.stderr
    report = json.loads(result.stdout)
    assert report["coverage"]["coveragePct"] == 50
    assert (out_dir / "report.json").exists()
    assert (out_dir / "industry_metrics.parquet").exists()

    result = _run("metrics", "--kpis", "--region", "Europe", env_extra=env)
    assert result.returncode == 0, result.stderr
    assert json.loads(result.stdout)["touchedAccounts"] == 1


def test_cli_missing_dataset(tmp_path):
    result = _run("report", env_extra={"CE_DATA_DIR": str(tmp_path)})
    assert result.returncode == 1
    assert "Error" in result.stderr

from pathlib import Path

import pytest

from coverage_engine.api import app
from coverage_engine.config import reset_settings_cache

DATA_DIR = Path(__file__).parent / "data"


def _point_at_fixtures(monkeypatch):
    monkeypatch.setenv("CE_ACCOUNTS_PATH", str(DATA_DIR / "accounts_raw.csv"))
    monkeypatch.setenv("CE_OUTBOUND_PATH", str(DATA_DIR / "outbound_raw.csv"))
    reset_settings_cache()


def test_helpers_with_pipeline(pipeline):
    assert app.coverage(pipeline).touched_count == 2
    assert len(app.engagement_coverage(pipeline).groups) == 6
    assert app.kpis(region="Europe", pipeline=pipeline).touched_accounts == 1
    assert app.accounts({"region": "Europe"}, pipeline=pipeline).total == 2


def test_helpers_load_configured_datasets(monkeypatch):
    _point_at_fixtures(monkeypatch)
    assert app.touch_timing().total_accounts == 4
    assert app.outbound().total == 4


def test_http_endpoints(monkeypatch):
    pytest.importorskip("httpx")
    from fastapi.testclient import TestClient

    _point_at_fixtures(monkeypatch)
    client = TestClient(app.app)
    assert client.get("/health").json() == {"status": "ok"}

    payload = client.get("/coverage").json()
    assert payload["totalAccounts"] == 4
    assert payload["touchedArrStats"]["count"] == 2

    rows = client.get("/employee-buckets").json()["rows"]
    assert rows[0]["bucket"] == "1–10"
    assert rows[0]["lift"]["display"] == "no comparison available"

    metrics = client.get("/metrics", params={"region": "Europe"}).json()
    assert len(metrics["industryStats"]) == 2
    assert metrics["regions"] == ["Europe", "North America"]

    kpis = client.get("/metrics/kpis", params={"empBucket": "1–10"}).json()
    assert kpis["touchedAccounts"] == 1
    assert kpis["untouchedAccounts"] == 0

    accounts = client.get("/accounts", params={"employee_count": "11–25", "page_size": 10}).json()
    assert accounts["total"] == 1
    assert accounts["pageSize"] == 10


def test_http_dataset_error(monkeypatch, tmp_path):
    pytest.importorskip("httpx")
    from fastapi.testclient import TestClient

    monkeypatch.setenv("CE_DATA_DIR", str(tmp_path))
    reset_settings_cache()
    client = TestClient(app.app)
    resp = client.get("/touch-timing")
    assert resp.status_code == 500
    assert "error" in resp.json()


def test_openapi_documents_response_models(monkeypatch):
    pytest.importorskip("httpx")
    from fastapi.testclient import TestClient

    _point_at_fixtures(monkeypatch)
    client = TestClient(app.app)
    spec = client.get("/openapi.json").json()
    ok = spec["paths"]["/employee-buckets"]["get"]["responses"]["200"]["content"]["application/json"]
    assert ok["schema"]["$ref"].endswith("/EmployeeBucketTable")
    assert "showTouchedRange" in spec["components"]["schemas"]["EmployeeBucketRow"]["properties"]

    row = client.get("/employee-buckets").json()["rows"][0]
    assert "showTouchedRange" in row
    assert "show_touched_range" not in row

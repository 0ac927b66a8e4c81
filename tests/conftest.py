from pathlib import Path

import pytest

from coverage_engine.config import reset_settings_cache
from coverage_engine.core.dataset import load_accounts, load_engagements
from coverage_engine.reports.pipeline import build_pipeline

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    for name in ("CE_DATA_DIR", "CE_ACCOUNTS_PATH", "CE_OUTBOUND_PATH", "CE_ENGINE_SPEC"):
        monkeypatch.delenv(name, raising=False)
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture
def accounts():
    return load_accounts(DATA_DIR / "accounts_raw.csv")


@pytest.fixture
def events(accounts):
    return load_engagements(DATA_DIR / "outbound_raw.csv", accounts)


@pytest.fixture
def pipeline(accounts, events):
    return build_pipeline(accounts, events)

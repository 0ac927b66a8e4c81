import json
from pathlib import Path

import pytest

from coverage_engine.config import reset_settings_cache
from coverage_engine.core import cleaning
from coverage_engine.core.dataset import (
    DatasetError,
    load_accounts,
    load_datasets,
    load_engagements,
    read_rows,
    write_records,
)

DATA_DIR = Path(__file__).parent / "data"


def test_clean_accounts_from_csv(accounts):
    acme = accounts[0]
    assert acme.domain == "acme.com"
    assert acme.company_name == "Acme Cloud"
    assert acme.location == "United States"
    assert acme.region == "North America"
    assert acme.industry == "Software & Technology"
    assert acme.deal_stage == "Closed"
    assert acme.deal_won is True
    assert acme.contacts_in_account == 3
    assert accounts[2].contacts_in_account is None
    assert accounts[2].deal_won is None
    assert accounts[2].deal_stage == "Negotiation"


def test_clean_outbound_enriches_matches(events):
    assert [ev.matched_account for ev in events] == [True, True, True, False]
    first = events[0]
    assert first.email == "ann@acme.com"
    assert first.opened is True and first.clicked is False
    assert first.account_arr == 1000
    assert first.account_deal_won is True
    assert events[3].account_arr is None
    assert cleaning.outbound_summary(events) == {
        "total_rows": 4,
        "matched_rows": 3,
        "match_rate": 75.0,
        "unique_domains": 3,
        "matched_unique_domains": 2,
    }


def test_account_summary(accounts):
    rows = read_rows(DATA_DIR / "accounts_raw.csv")
    summary = cleaning.account_summary(rows, accounts)
    assert summary["total_rows"] == 4
    assert summary["distinct_raw_industries"] == 4
    assert summary["industry_buckets"]["Financial Services"] == 1
    assert summary["buckets_defined"][-1] == "Other / Unknown"


def test_cleaned_json_snapshot_is_not_renormalised(tmp_path, accounts, events):
    acc_path = tmp_path / "accounts.json"
    out_path = tmp_path / "outbound.json"
    write_records(acc_path, [a.to_record() for a in accounts])
    write_records(out_path, [e.to_record() for e in events])

    reloaded = load_accounts(acc_path)
    assert reloaded == accounts
    # "Retail & Consumer" would re-bucket as software if it were normalised again
    assert reloaded[3].industry == "Retail & Consumer"
    assert json.loads(acc_path.read_text())[1]["deal_won"] == "False"

    reloaded_events = load_engagements(out_path, reloaded)
    assert reloaded_events == events


def test_load_datasets_uses_settings(tmp_path, monkeypatch, accounts, events):
    write_records(tmp_path / "cleaned_assessment_account_data.json", [a.to_record() for a in accounts])
    write_records(tmp_path / "cleaned_outbound_data.json", [e.to_record() for e in events])
    monkeypatch.setenv("CE_DATA_DIR", str(tmp_path))
    reset_settings_cache()
    data = load_datasets()
    assert len(data.accounts) == 4
    assert len(data.events) == 4


def test_missing_and_malformed_files_raise(tmp_path):
    with pytest.raises(DatasetError):
        load_accounts(tmp_path / "missing.json")
    bad = tmp_path / "bad.json"
    bad.write_text("{not json")
    with pytest.raises(DatasetError):
        load_accounts(bad)
    obj = tmp_path / "obj.json"
    obj.write_text('{"rows": []}')
    with pytest.raises(DatasetError):
        read_rows(obj)


def test_bad_field_in_cleaned_snapshot_raises(tmp_path):
    acc = tmp_path / "accounts.json"
    acc.write_text(json.dumps([{"domain": "a.com"}, {"domain": 123, "arr": 5}]))
    with pytest.raises(DatasetError, match="record 1"):
        load_accounts(acc)
    out = tmp_path / "outbound.json"
    out.write_text(json.dumps([{"company_domain": ["x.com"]}]))
    with pytest.raises(DatasetError):
        load_engagements(out, [])

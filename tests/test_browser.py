from coverage_engine.reports import browser


def test_account_rows_carry_derived_columns(pipeline):
    rows = browser.account_rows(pipeline)
    assert rows[0]["employee_bucket"] == "1–10"
    assert rows[0]["arr_bucket"] == "0–9999"
    assert rows[0]["engagement_tier"] == "Opened"
    assert rows[1]["engagement_tier"] == "Untouched"


def test_browse_accounts_filters_by_bucket_label(pipeline):
    page = browser.browse_accounts(pipeline, {"employee_count": "51–100"})
    assert page.total == 1
    assert page.rows[0]["domain"] == "gamma.io"

    page = browser.browse_accounts(pipeline, {"arr": "40000–49999", "region": "North America"})
    assert [r["domain"] for r in page.rows] == ["delta.co"]

    page = browser.browse_accounts(pipeline, {"engagement_tier": "Untouched", "deal_won": "True"})
    assert [r["domain"] for r in page.rows] == ["delta.co"]


def test_browse_distinct_values(pipeline):
    page = browser.browse_accounts(pipeline, {"region": "Europe"})
    assert page.distinct["region"] == ["Europe", "North America"]
    assert page.distinct["employee_count"] == ["1–10", "11–25", "51–100", "101–250"]
    assert page.distinct["arr"][0] == "0–9999"


def test_browse_paging(pipeline):
    page = browser.browse_accounts(pipeline, page=2, page_size=3)
    assert page.total == 4
    assert [r["domain"] for r in page.rows] == ["delta.co"]


def test_browse_outbound(pipeline):
    page = browser.browse_outbound(pipeline, {"matched_account": "False"})
    assert page.total == 1
    assert page.rows[0]["company_domain"] == "unknown.org"
    assert page.distinct["outbound_campaign_id"] == ["c1", "c2"]


def test_cell_text():
    assert browser.cell_text(None) == ""
    assert browser.cell_text(True) == "True"
    assert browser.cell_text(5.0) == "5"
    assert browser.cell_text(2.5) == "2.5"

import pandas as pd

from coverage_engine.stats.aggregator import FRAME_COLUMNS, group_stats, split_groups


def _frame():
    return pd.DataFrame(
        {
            "employee_bucket": ["1–10", "1–10", None, "11–25"],
            "tier": ["Opened", "Untouched", "Opened", "Opened"],
            "arr": [1000.0, None, 7000.0, 3000.0],
            "deal_won": [True, None, False, False],
        }
    )


def test_account_frame_columns(pipeline):
    frame = pipeline.frame
    assert list(frame.columns) == FRAME_COLUMNS
    assert frame["domain"].tolist() == ["acme.com", "beta.com", "gamma.io", "delta.co"]
    assert frame["tier"].tolist() == ["Opened", "Untouched", "Replied", "Untouched"]
    assert frame["timing_bucket"].tolist() == ["Early", "Never touched", "Late", "Never touched"]
    assert frame["days_to_touch"].tolist() == [14, None, 121, None]


def test_split_groups_drops_null_keys():
    groups = split_groups(_frame(), ["employee_bucket"])
    assert list(groups) == [("1–10",), ("11–25",)]
    assert len(groups[("1–10",)]) == 2


def test_group_stats_with_order_keeps_empty_groups():
    stats = group_stats(
        _frame(),
        ["employee_bucket", "tier"],
        order=[("1–10", "Untouched"), ("1–10", "Opened"), ("26–50", "Opened")],
    )
    assert [g.key for g in stats] == [("1–10", "Untouched"), ("1–10", "Opened"), ("26–50", "Opened")]
    untouched, opened, empty = stats
    assert untouched.account_count == 1
    assert untouched.avg("arr") is None
    assert untouched.win_rate is None
    assert opened.avg("arr") == 1000
    assert opened.win_rate == 100
    assert empty.account_count == 0
    assert empty.stat("arr").count == 0


def test_group_stats_first_seen_order():
    stats = group_stats(_frame(), "tier")
    assert [g.key for g in stats] == [("Opened",), ("Untouched",)]
    opened = stats[0]
    assert opened.account_count == 3
    assert opened.stat("arr").median == 3000
    assert round(opened.win_rate, 2) == 33.33

from pathlib import Path

import pytest

from coverage_engine.core import spec

DATA_DIR = Path(__file__).parent / "data"


def test_load_spec():
    sp = spec.load_spec(DATA_DIR / "engine_spec.json")
    assert sp.employee_buckets.labels == ["small", "large"]
    assert sp.employee_buckets.assign(500) == "large"
    assert sp.timing.early_max_days == 7
    assert sp.ranking.abs_threshold == 500
    # omitted sections keep their defaults
    assert sp.ranking.pct_threshold == 5.0
    assert sp.arr_buckets.labels[-1] == "200000+"


def test_default_spec():
    sp = spec.default_spec()
    assert sp.employee_buckets.labels[0] == "1–10"
    assert sp.timing.medium_max_days == 90
    assert sp.ranking.range_spread_pct == 15.0


def test_spec_from_dict_rejects_bad_tables():
    with pytest.raises(ValueError):
        spec.spec_from_dict({"employee_buckets": [{"label": "a", "min": 10, "max": 1}]})
    with pytest.raises(ValueError):
        spec.spec_from_dict({"timing": {"early_max_days": 50, "medium_max_days": 10}})


def test_malformed_entries_raise_value_error():
    for bad in (
        {"employee_buckets": [{"min": 1, "max": 10}]},
        {"employee_buckets": [{"label": "a"}]},
        {"employee_buckets": [{"label": "a", "min": [1]}]},
        {"arr_buckets": [{"label": "a", "min": "lots"}]},
        {"arr_buckets": "0-10"},
        {"arr_buckets": ["a"]},
        {"timing": {"early_max_days": "soon"}},
        {"ranking": {"abs_threshold": None}},
        {"ranking": 5},
    ):
        with pytest.raises(ValueError):
            spec.spec_from_dict(bad)
    with pytest.raises(ValueError):
        spec.spec_from_dict([])

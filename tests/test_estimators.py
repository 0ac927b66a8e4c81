import math

import numpy as np

from coverage_engine.stats import estimators


def test_median_odd_and_even():
    assert estimators.median([30, 10, 20]) == 20
    assert estimators.median([10, 20, 30, 40]) == 25
    assert estimators.median([]) is None


def test_mean_ignores_missing_values():
    assert estimators.mean([10, None, float("nan"), 20]) == 15
    assert estimators.mean([None, "x", True]) is None


def test_aggregate_stat():
    stat = estimators.aggregate_stat([5000, None, 1000, 3000])
    assert stat.count == 3
    assert stat.avg == 3000
    assert stat.median == 3000
    assert (stat.min, stat.max) == (1000, 5000)
    assert estimators.aggregate_stat([None]) == estimators.EMPTY_STAT


def test_win_rate_excludes_unknown():
    assert estimators.win_rate([True, False, None]) == 50
    assert estimators.win_rate([np.bool_(True), True]) == 100
    assert estimators.win_rate([None, None]) is None
    assert estimators.win_rate([]) is None
    assert estimators.win_counts([True, False, "True", 1]) == (1, 2)


def test_pct_and_weighted_mean():
    assert estimators.pct(1, 4) == 25
    assert estimators.pct(0, 0) == 0.0
    assert estimators.weighted_mean([(10.0, 1), (None, 5), (40.0, 2)]) == 30
    assert estimators.weighted_mean([(None, 3)]) is None
    assert math.isclose(estimators.weighted_mean([(1.0, 1), (2.0, 2)]), 5 / 3)

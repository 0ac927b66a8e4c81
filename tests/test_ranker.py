from coverage_engine.core.spec import RankingSpec
from coverage_engine.engagement.classifier import Tier
from coverage_engine.stats.ranker import (
    NO_COMPARISON,
    Winner,
    best_tier,
    compute_lift,
    format_k,
    pick_winner,
    spread_pct,
)


def test_pick_winner_thresholds():
    # below both thresholds: 1000 abs and 1%
    assert pick_winner(100000, 101000) is Winner.NONE
    # clears the absolute threshold
    assert pick_winner(100000, 102000) is Winner.CHALLENGER
    # clears the percentage threshold only
    assert pick_winner(1000, 1100) is Winner.CHALLENGER
    assert pick_winner(1100, 1000) is Winner.BASELINE
    assert pick_winner(500, 500) is Winner.NONE


def test_pick_winner_missing_sides():
    assert pick_winner(None, 100) is Winner.CHALLENGER
    assert pick_winner(100, None) is Winner.BASELINE
    assert pick_winner(None, None) is Winner.NONE


def test_pick_winner_custom_ranking():
    strict = RankingSpec(abs_threshold=10000, pct_threshold=50)
    assert pick_winner(100000, 102000, strict) is Winner.NONE


def test_lift_sentinel_when_side_missing():
    lift = compute_lift(None, 100)
    assert not lift.available
    assert lift.display() == NO_COMPARISON
    assert compute_lift(100, None).display() == NO_COMPARISON


def test_lift_display():
    assert compute_lift(1000, 1500).display() == "+0.5K (+50%)"
    assert compute_lift(200000, 50000).display() == "-150K (-75%)"
    assert compute_lift(1000, 1000).display() == "+0"
    zero_base = compute_lift(0, 2500)
    assert zero_base.pct is None
    assert zero_base.display() == "+2.5K"


def test_format_k():
    assert format_k(None) == "(none)"
    assert format_k(150000) == "150K"
    assert format_k(1200) == "1.2K"


def test_best_tier_tie_breaks_in_declaration_order():
    averages = [(Tier.REPLIED, 500.0), (Tier.OPENED, 500.0), (Tier.SENT, None)]
    assert best_tier(averages) == (Tier.OPENED, 500.0)
    assert best_tier([(Tier.CLICKED, 10.0), (Tier.REPLIED, 20.0)]) == (Tier.REPLIED, 20.0)
    assert best_tier([(Tier.SENT, None)]) is None


def test_spread_pct():
    assert spread_pct(85, 100) == 15
    assert spread_pct(None, 100) == 0.0
    assert spread_pct(0, 0) == 0.0

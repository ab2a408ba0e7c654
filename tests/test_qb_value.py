import pytest

from qb_window.config import CURRENT_CAP
from qb_window.modules.qb_value import (
    cap_value_score,
    compare_value_to_contract,
    describe_value,
    effective_cap_hit_percent,
    estimate_performance_value,
    normalize_metric,
    quality_score,
    value_tier,
)
from qb_window.modules.window_types import PerformanceMetrics


def test_quality_score_unproven_without_metrics():
    assert quality_score(None) == 40
    assert quality_score(PerformanceMetrics()) == 40


def test_quality_score_weighted_composite():
    metrics = PerformanceMetrics(epa_per_play=0.1, cpoe=2.0, qbr=60.0, pff_grade=80.0)
    # 60 * .30 + 66.6 * .30 + 54.6 * .25 + 63.7 * .15
    assert quality_score(metrics) == pytest.approx(61.2)


def test_quality_score_saturates():
    great = PerformanceMetrics(epa_per_play=1.0, cpoe=20.0, qbr=100.0, pff_grade=100.0)
    awful = PerformanceMetrics(epa_per_play=-1.0, cpoe=-20.0, qbr=1.0, pff_grade=1.0)
    assert quality_score(great) == 100.0
    assert quality_score(awful) == 0.0


def test_normalize_metric_is_clamped():
    assert normalize_metric(0.1, -0.1, 0.3) == pytest.approx(50.0)
    assert normalize_metric(5.0, -0.1, 0.3) == 100.0
    assert normalize_metric(-5.0, -0.1, 0.3) == 0.0


def test_performance_value_spans_dollar_range():
    best = PerformanceMetrics(epa_per_play=0.3, cpoe=8.0, qbr=80.0, wins=14, playoff_wins=4)
    worst = PerformanceMetrics(epa_per_play=-0.1, cpoe=-5.0, qbr=30.0, wins=3, playoff_wins=0)
    assert estimate_performance_value(best) == 65_000_000
    assert estimate_performance_value(worst) == 5_000_000


def test_performance_value_does_not_extrapolate():
    absurd = PerformanceMetrics(epa_per_play=3.0, cpoe=80.0, qbr=150.0, wins=20, playoff_wins=9)
    assert estimate_performance_value(absurd) == 65_000_000


@pytest.mark.parametrize(
    "value,cap_hit,expected",
    [
        (60_000_000, 40_000_000, "surplus"),
        (30_000_000, 40_000_000, "overpay"),
        (44_000_000, 40_000_000, "fair"),
        (47_000_000, 40_000_000, "fair"),
        (10_000_000, 0, "surplus"),
        (0, 0, "fair"),
    ],
)
def test_compare_value_to_contract(value, cap_hit, expected):
    assert compare_value_to_contract(value, cap_hit) == expected


def test_cap_value_score_bands():
    assert cap_value_score(2.0) == 100
    assert cap_value_score(13.9) == 55
    assert cap_value_score(25.0) == 10


def test_value_tier():
    assert value_tier(65_000_000) == "Elite"
    assert value_tier(45_000_000) == "Above Average"
    assert value_tier(10_000_000) == "Replacement"


def test_effective_cap_hit_credits_half_the_gap():
    assert effective_cap_hit_percent(10.0, CURRENT_CAP * 0.2) == pytest.approx(5.0)
    assert effective_cap_hit_percent(10.0, 0) == pytest.approx(15.0)
    assert effective_cap_hit_percent(2.0, CURRENT_CAP) == 0.0


def test_describe_value_mentions_surplus():
    text = describe_value(3.4, 60_000_000, 9_400_000)
    assert text.startswith("Elite performance at 3.4% cap hit.")
    assert "$50.6M in surplus value" in text

from pathlib import Path

import pytest

from qb_window.data_access.league_data import load_snapshot
from qb_window.models.history import DEFAULT_WINNERS_AVG_CAP_HIT, historical_comparison, zone_distribution

FIXTURE = Path(__file__).parent / "fixtures" / "sample_league.json"


@pytest.fixture
def history():
    return load_snapshot(str(FIXTURE)).historical


def test_historical_comparison_within_tolerance(history):
    result = historical_comparison(history, 5.0)
    assert [w["qbName"] for w in result["similar_winners"]] == ["Jalen Hurts", "Nick Foles"]
    assert result["avg_winners_cap_hit"] == DEFAULT_WINNERS_AVG_CAP_HIT


def test_historical_comparison_uses_recorded_average(history):
    enriched = dict(history, analysisMetrics={"sbWinnersAvgCapHitPercent": 10.3})
    result = historical_comparison(enriched, 16.0, tolerance=0.5)
    assert [w["season"] for w in result["similar_winners"]] == [2023]
    assert result["avg_winners_cap_hit"] == 10.3


def test_historical_comparison_empty_history():
    result = historical_comparison({}, 8.0)
    assert result["similar_winners"] == []
    assert result["avg_winners_cap_hit"] == 7.8


def test_zone_distribution(history):
    df = zone_distribution(history)
    assert df["ZONE"].tolist() == ["ELITE", "CAUTION", "CLOSED"]
    assert df["WINNERS"].tolist() == [3, 1, 1]
    assert df.loc[0, "AVG_CAP_HIT_PCT"] == pytest.approx(3.97)


def test_zone_distribution_empty():
    df = zone_distribution({})
    assert df.empty
    assert list(df.columns) == ["ZONE", "WINNERS", "AVG_CAP_HIT_PCT"]

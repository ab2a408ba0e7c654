import pytest

from qb_window.modules.window_types import StatusType, ZoneType
from qb_window.modules.zone_classifier import classify, window_status, zone_color, zone_type


@pytest.mark.parametrize(
    "pct,expected",
    [
        (-3.0, ZoneType.ELITE),
        (0.0, ZoneType.ELITE),
        (5.99, ZoneType.ELITE),
        (6.0, ZoneType.FAVORABLE),
        (9.99, ZoneType.FAVORABLE),
        (10.0, ZoneType.CAUTION),
        (12.99, ZoneType.CAUTION),
        (13.0, ZoneType.DANGER),
        (14.99, ZoneType.DANGER),
        (15.0, ZoneType.CLOSED),
        (250.0, ZoneType.CLOSED),
    ],
)
def test_classify_boundaries(pct, expected):
    assert classify(pct).zone == expected
    assert zone_type(pct) == expected


def test_classify_carries_display_fields():
    zone = classify(3.0)
    assert zone.label == "CHAMPIONSHIP WINDOW WIDE OPEN"
    assert zone.color == zone_color(3.0) == "#00ff88"
    assert "Super Bowl" in zone.historical_win_rate


@pytest.mark.parametrize(
    "score,expected",
    [
        (100, StatusType.WIDE_OPEN),
        (80, StatusType.WIDE_OPEN),
        (79, StatusType.OPEN),
        (65, StatusType.OPEN),
        (64, StatusType.CLOSING),
        (50, StatusType.CLOSING),
        (49, StatusType.SOFT_CLOSED),
        (35, StatusType.SOFT_CLOSED),
        (34, StatusType.HARD_CLOSED),
        (0, StatusType.HARD_CLOSED),
    ],
)
def test_window_status_bands(score, expected):
    assert window_status(score).status == expected

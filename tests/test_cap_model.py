import pytest

from qb_window.config import CURRENT_CAP, CURRENT_YEAR
from qb_window.modules.cap_model import cap_hit_percent, project_cap, projected_caps, round_half_up


def test_current_year_is_current_cap():
    assert project_cap(CURRENT_YEAR) == CURRENT_CAP == 279_200_000


def test_next_year_compounds_growth():
    assert project_cap(CURRENT_YEAR + 1) == 302_932_000


def test_projection_is_monotonic():
    caps = [project_cap(CURRENT_YEAR + i) for i in range(10)]
    assert caps == sorted(caps)
    assert len(set(caps)) == len(caps)


def test_past_year_contracts_cap():
    assert project_cap(CURRENT_YEAR - 1) < CURRENT_CAP
    assert project_cap(CURRENT_YEAR - 10) > 0


def test_projected_caps_horizon():
    assert projected_caps(3) == [project_cap(CURRENT_YEAR), project_cap(CURRENT_YEAR + 1), project_cap(CURRENT_YEAR + 2)]
    assert projected_caps(0) == []


@pytest.mark.parametrize(
    "value,digits,expected",
    [
        (2.5, 0, 3),
        (76.5, 0, 77),
        (76.49, 0, 76),
        (1.25, 1, 1.3),
    ],
)
def test_round_half_up(value, digits, expected):
    assert round_half_up(value, digits) == pytest.approx(expected)


def test_cap_hit_percent():
    assert cap_hit_percent(5_584_000) == pytest.approx(2.0)
    assert cap_hit_percent(30_293_200, CURRENT_YEAR + 1) == pytest.approx(10.0)

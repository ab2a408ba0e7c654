import pytest

from qb_window.modules.trajectory import (
    describe_trajectory,
    find_threshold_cross_year,
    flexibility_assessment,
    peak_cap_hit,
    project_series,
    restructure_simulation,
    trajectory_direction,
    trend_slope,
    years_until_threshold,
)
from qb_window.modules.window_types import CapHitYear, QBContract


def _contract(*cap_hits, contract_type="veteran"):
    return QBContract(
        player_id="test-qb",
        player_name="Test QB",
        team_id="TST",
        contract_type=contract_type,
        years_remaining=len(cap_hits),
        cap_hits=list(cap_hits),
    )


@pytest.fixture
def escalating():
    return _contract(
        CapHitYear(2025, 20_000_000, base_salary=10_000_000, signing_bonus=10_000_000),
        CapHitYear(2026, 45_900_000),
        CapHitYear(2027, 53_000_000),
    )


@pytest.fixture
def expensive():
    return _contract(
        CapHitYear(2025, 46_000_000, base_salary=30_000_000, signing_bonus=16_000_000),
        CapHitYear(2026, 48_000_000, base_salary=32_000_000, signing_bonus=16_000_000),
    )


def test_threshold_cross_year_and_years_until(escalating):
    assert find_threshold_cross_year(escalating) == 2026
    assert years_until_threshold(escalating) == 1


def test_years_until_threshold_capped_at_five():
    cheap = _contract(*[CapHitYear(year, 5_000_000) for year in range(2025, 2033)])
    assert find_threshold_cross_year(cheap) is None
    assert years_until_threshold(cheap) == 5


def test_years_until_threshold_ends_with_contract():
    short = _contract(CapHitYear(2025, 9_400_000), CapHitYear(2026, 10_300_000))
    assert years_until_threshold(short) == 2


def test_already_over_threshold(expensive):
    assert find_threshold_cross_year(expensive) == 2025
    assert years_until_threshold(expensive) == 0


def test_void_and_past_years_are_skipped():
    contract = _contract(
        CapHitYear(2024, 90_000_000),
        CapHitYear(2025, 10_000_000),
        CapHitYear(2026, 0, is_void_year=True, dead_money_if_cut=30_000_000),
    )
    assert find_threshold_cross_year(contract) is None
    assert years_until_threshold(contract) == 1


def test_project_series_void_point_carries_dead_money():
    contract = _contract(
        CapHitYear(2025, 21_500_000),
        CapHitYear(2026, 45_900_000),
        CapHitYear(2029, 0, is_void_year=True, dead_money_if_cut=12_000_000),
    )
    points = project_series(contract)

    assert [p.year for p in points] == [2025, 2026, 2029]
    assert points[0].cap_hit_percent == pytest.approx(7.7)
    assert points[0].is_projected is False
    assert points[1].is_projected is True

    void = points[-1]
    assert void.is_void_year
    assert void.cap_hit_percent == 0.0
    assert void.cap_hit_amount == 12_000_000
    assert void.is_projected is True


def test_project_series_horizon(escalating):
    assert [p.year for p in project_series(escalating, horizon_years=1)] == [2025]


def test_peak_cap_hit(escalating):
    peak = peak_cap_hit(escalating)
    assert peak.year == 2027
    assert peak.amount == 53_000_000
    assert 16.0 < peak.percent < 16.2


def test_trend_slope(escalating, expensive):
    assert trend_slope(escalating) > 0
    assert trend_slope(expensive) < 0
    assert trend_slope(_contract(CapHitYear(2025, 20_000_000))) == 0.0


def test_trajectory_direction(escalating):
    assert trajectory_direction(escalating) == 15
    falling = _contract(CapHitYear(2025, 30_000_000), CapHitYear(2026, 20_000_000))
    assert trajectory_direction(falling) == 90
    flat = _contract(CapHitYear(2025, 30_000_000), CapHitYear(2026, 33_000_000))
    assert trajectory_direction(flat) == 70
    assert trajectory_direction(_contract(CapHitYear(2026, 30_000_000))) == 0


def test_describe_trajectory(escalating, expensive):
    assert describe_trajectory(escalating, 5.0) == "Elite territory now. Crosses 13% threshold in 1 year (2026)."
    assert describe_trajectory(expensive, 16.48) == (
        "Already past 16% of the cap. Would need restructure to create flexibility."
    )
    assert describe_trajectory(expensive, 14.0) == (
        "Already past 13% threshold. Would need restructure to create flexibility."
    )
    cheap = _contract(CapHitYear(2025, 5_000_000))
    assert describe_trajectory(cheap, 1.8) == "Elite territory. No threshold crossing projected through contract."


def test_restructure_simulation_prorates_without_mutating(expensive):
    restructured = restructure_simulation(expensive, 10_000_000)

    current = restructured.cap_hit_for(2025)
    assert current.amount == 38_000_000
    assert current.base_salary == 20_000_000
    assert current.signing_bonus == 18_000_000
    assert restructured.cap_hit_for(2026).amount == 50_000_000

    assert expensive.cap_hit_for(2025).amount == 46_000_000
    assert expensive.cap_hit_for(2026).amount == 48_000_000


def test_restructure_simulation_without_current_year():
    contract = _contract(CapHitYear(2026, 30_000_000))
    assert restructure_simulation(contract, 5_000_000).cap_hits == contract.cap_hits


@pytest.mark.parametrize(
    "base_salary,has_room,max_amount,prefix",
    [
        (30_000_000, True, 28_500_000, "Significant restructure room ($28.5M)"),
        (10_000_000, True, 8_500_000, "Limited restructure room ($8.5M)"),
        (1_500_000, False, 0, "No restructure room"),
        (1_000_000, False, 0, "No restructure room"),
    ],
)
def test_flexibility_assessment(base_salary, has_room, max_amount, prefix):
    contract = _contract(CapHitYear(2025, base_salary + 5_000_000, base_salary=base_salary))
    result = flexibility_assessment(contract)
    assert result.has_restructure_room is has_room
    assert result.max_restructure_amount == max_amount
    assert result.recommendation.startswith(prefix)


def test_flexibility_assessment_without_current_year():
    result = flexibility_assessment(_contract(CapHitYear(2027, 30_000_000)))
    assert not result.has_restructure_room
    assert result.recommendation == "No current year cap hit data available."


@pytest.mark.parametrize("years", [0, -1])
def test_restructure_simulation_rejects_non_positive_proration(expensive, years):
    with pytest.raises(ValueError, match="years_to_prorate must be positive"):
        restructure_simulation(expensive, 10_000_000, years_to_prorate=years)


def test_years_until_threshold_counts_known_years_not_calendar_gap():
    # the void 2026 year is skipped, so the 2027 crossing is one counted year away
    contract = _contract(
        CapHitYear(2025, 10_000_000),
        CapHitYear(2026, 0, is_void_year=True, dead_money_if_cut=20_000_000),
        CapHitYear(2027, 60_000_000),
    )
    assert find_threshold_cross_year(contract) == 2027
    assert years_until_threshold(contract) == 1

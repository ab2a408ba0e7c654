from datetime import datetime, timezone

from qb_window.dashboard.dashboard_logic import build_factor_breakdown, build_score_pills, build_zone_counts
from qb_window.modules.window_score import compute_score
from qb_window.modules.window_types import CapHitYear, QBContract, Team, ZoneType


def _score(years=4):
    contract = QBContract(
        player_id="qb",
        player_name="QB",
        team_id="WAS",
        contract_type="rookie",
        years_remaining=years,
        cap_hits=[CapHitYear(2025 + i, 9_400_000) for i in range(years)],
    )
    return compute_score(Team(id="WAS", name="Commanders"), contract, clock=lambda: datetime(2025, 9, 1, tzinfo=timezone.utc))


def test_factor_breakdown_order_and_values():
    breakdown = build_factor_breakdown(_score())
    assert [label for label, _ in breakdown] == [
        "QB Cap Efficiency",
        "QB Quality",
        "Non-QB Surplus",
        "Trajectory",
        "Sustainability",
        "Core Health",
    ]
    assert dict(breakdown)["QB Quality"] == 40
    assert dict(breakdown)["Trajectory"] == 80


def test_zone_counts_group_zones():
    counts = build_zone_counts({
        ZoneType.ELITE: ["a", "b"],
        ZoneType.FAVORABLE: ["c"],
        ZoneType.DANGER: ["d"],
        ZoneType.CLOSED: ["e", "f", "g"],
    })
    assert counts == {"open": 3, "closing": 1, "closed": 3}


def test_score_pills():
    pills = build_score_pills(_score(years=6))
    assert pills["qb_cap_hit_pct"] == "3.37%"
    assert pills["years_until_threshold"] == "5+"
    assert pills["zone"] == "CHAMPIONSHIP WINDOW WIDE OPEN"
    assert build_score_pills(_score(years=2))["years_until_threshold"] == "2"

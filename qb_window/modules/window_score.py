"""
Window Score Engine
===================
Scores a team's championship window from its QB contract, season result and
non-QB surplus.

Overall score (0-100), five banded factors:
  - Team success:       up to 35 (wins band + playoff bonuses), default 10
  - QB cap hit %:       up to 25
  - Head coach quality: up to 20 (tier input), default 10
  - Window length:      up to 15 (years until the 13% threshold)
  - QB production:      up to 10 (tier input), default 4

The six component scores (cap, quality, surplus, trajectory, sustainability,
core) are a separate display breakdown and do not feed the overall score.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from qb_window.config import CURRENT_CAP, CURRENT_YEAR, DANGER_THRESHOLD, DEFAULT_QB_AGE
from qb_window.models.scoring_config import get_default_scoring_config
from qb_window.modules.cap_model import project_cap, round_half_up
from qb_window.modules.qb_value import quality_score
from qb_window.modules.trajectory import years_until_threshold
from qb_window.modules.window_types import (
    ComponentScores,
    InvalidTeamError,
    NonQBSurplusResult,
    QBContract,
    SeasonResult,
    Team,
    TeamWindowScore,
)
from qb_window.modules.zone_classifier import NO_DATA_ZONE, classify, window_status

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


# ========== Component scores (display breakdown) ==========

def cap_subscore(qb_cap_hit_percent: float) -> float:
    """0% cap hit = 100 points, 20% = 0."""
    return _clamp(100 - qb_cap_hit_percent * 5)


def trajectory_subscore(years: int) -> float:
    return _clamp(years * 20)


def sustainability_subscore(years: int) -> float:
    return _clamp(years * 25)


def surplus_subscore(total_surplus: float) -> float:
    return _clamp(total_surplus / 50_000_000 * 100)


def core_health_subscore(qb_age: float = DEFAULT_QB_AGE, key_injuries: int = 0) -> float:
    score = 100.0
    if qb_age > 30:
        score -= (qb_age - 30) * 5
    score -= key_injuries * 10
    return _clamp(score)


# ========== Overall score (banded point tables) ==========

def _points_at_least(value: float, bands, floor: float) -> float:
    for minimum, points in bands:
        if value >= minimum:
            return float(points)
    return float(floor)


def _points_below(value: float, bands, floor: float) -> float:
    for upper, points in bands:
        if value < upper:
            return float(points)
    return float(floor)


def _tier_points(tier: Optional[float], table: Dict[str, Any]) -> float:
    # a zero tier counts as missing
    if not tier:
        return float(table["default"])
    return _clamp(float(tier), 0.0, float(table["max"]))


def team_success_points(season_result: Optional[SeasonResult], config: Dict[str, Any]) -> float:
    table = config["overall_score"]["team_success"]
    if season_result is None:
        return float(table["default"])

    points = _points_at_least(season_result.wins, table["win_bands"], table["win_floor"])
    if season_result.made_playoffs:
        points += table["made_playoffs"]
    points += season_result.playoff_wins * table["per_playoff_win"]
    if season_result.conf_championship:
        points += table["conf_championship"]
    if season_result.super_bowl_appearance:
        points += table["super_bowl_appearance"]
    if season_result.super_bowl_win:
        points += table["super_bowl_win"]

    return min(float(table["max"]), points)


def overall_score(
    qb_cap_hit_percent: float,
    years_until: int,
    season_result: Optional[SeasonResult] = None,
    config: Optional[Dict[str, Any]] = None,
) -> int:
    cfg = config or get_default_scoring_config()
    tables = cfg["overall_score"]

    total = team_success_points(season_result, cfg)
    total += _points_below(qb_cap_hit_percent, tables["cap_hit"]["bands"], tables["cap_hit"]["floor"])
    total += _tier_points(season_result.coach_tier if season_result else None, tables["coach"])
    total += _points_at_least(years_until, tables["window_length"]["bands"], tables["window_length"]["floor"])
    total += _tier_points(season_result.qb_production_tier if season_result else None, tables["qb_production"])

    return int(_clamp(round_half_up(total)))


# ========== Team score ==========

def compute_score(
    team: Team,
    contract: Optional[QBContract],
    surplus: Optional[NonQBSurplusResult] = None,
    qb_age: float = DEFAULT_QB_AGE,
    season_result: Optional[SeasonResult] = None,
    injuries: int = 0,
    config: Optional[Dict[str, Any]] = None,
    clock: Optional[Clock] = None,
    flag_missing_cap_hit: bool = False,
) -> TeamWindowScore:
    """
    Full window score for one team.

    A missing contract or current-year cap hit scores as a 0% cap hit, which
    lands in the ELITE zone. With flag_missing_cap_hit=True the zone is
    reported as NO_DATA instead.
    """
    if team is None or not getattr(team, "id", None):
        raise InvalidTeamError("compute_score requires a team with an id")

    cfg = config or get_default_scoring_config()
    surplus = surplus or NonQBSurplusResult()
    clock = clock or utc_now

    current = contract.cap_hit_for(CURRENT_YEAR) if contract else None
    qb_cap_hit = current.amount if current else 0
    qb_cap_hit_percent = qb_cap_hit / CURRENT_CAP * 100

    years = years_until_threshold(contract, DANGER_THRESHOLD) if contract else 0

    components = ComponentScores(
        cap=cap_subscore(qb_cap_hit_percent),
        quality=quality_score(contract.performance_metrics if contract else None, cfg),
        surplus=surplus_subscore(surplus.total_surplus),
        trajectory=trajectory_subscore(years),
        sustainability=sustainability_subscore(surplus.sustainability_years),
        core=core_health_subscore(qb_age, injuries),
    )

    score = overall_score(qb_cap_hit_percent, years, season_result, cfg)

    has_cap_data = current is not None
    if flag_missing_cap_hit and not has_cap_data:
        zone = NO_DATA_ZONE
    else:
        zone = classify(qb_cap_hit_percent, cfg)

    return TeamWindowScore(
        team_id=team.id,
        overall_score=score,
        components=components,
        qb_cap_hit=qb_cap_hit,
        qb_cap_hit_percent=round(qb_cap_hit_percent, 2),
        salary_cap=CURRENT_CAP,
        years_until_threshold=years,
        window_zone=zone,
        window_status=window_status(score, cfg),
        updated_at=clock(),
        non_qb_surplus=surplus.total_surplus,
        has_cap_data=has_cap_data,
    )


def dead_money_penalty(contract: QBContract, projected_caps: List[float]) -> float:
    """
    Multiplier in [0.5, 1.0] for contracts that push dead money into void years.

    Each void year whose dead money tops 5% of that year's cap costs 10%, and
    another 20% above 10%. Not used by overall_score.
    """
    penalty = 1.0

    for cap_hit in contract.cap_hits:
        if not (cap_hit.is_void_year and cap_hit.dead_money_if_cut):
            continue
        index = cap_hit.year - CURRENT_YEAR
        projected_cap = None
        if 0 <= index < len(projected_caps):
            projected_cap = projected_caps[index]
        projected_cap = projected_cap or project_cap(cap_hit.year)

        dead_money_pct = cap_hit.dead_money_if_cut / projected_cap * 100
        if dead_money_pct > 5:
            penalty *= 0.9
        if dead_money_pct > 10:
            penalty *= 0.8

    return max(0.5, penalty)


class WindowScoreEngine:
    """Scores teams with a fixed config and clock."""

    def __init__(self, scoring_config=None, clock: Optional[Clock] = None, flag_missing_cap_hit: bool = False):
        self.scoring_config = scoring_config or get_default_scoring_config()
        self.clock = clock or utc_now
        self.flag_missing_cap_hit = flag_missing_cap_hit

    def score(
        self,
        team: Team,
        contract: Optional[QBContract],
        surplus: Optional[NonQBSurplusResult] = None,
        qb_age: float = DEFAULT_QB_AGE,
        season_result: Optional[SeasonResult] = None,
        injuries: int = 0,
    ) -> TeamWindowScore:
        return compute_score(
            team,
            contract,
            surplus=surplus,
            qb_age=qb_age,
            season_result=season_result,
            injuries=injuries,
            config=self.scoring_config,
            clock=self.clock,
            flag_missing_cap_hit=self.flag_missing_cap_hit,
        )

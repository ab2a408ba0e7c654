"""
Trajectory Module
=================
Projects a QB contract's cap-hit percentage forward against the projected cap.

Features:
• Yearly projection series for charts (void years carry dead money at 0%)
• First year over the danger threshold, years until then
• Peak cap hit and trend slope
• Restructure simulation and restructure room
"""

from __future__ import annotations

import copy
from dataclasses import replace
from typing import List, Optional

import numpy as np

from qb_window.config import CLOSED_THRESHOLD, CURRENT_YEAR, DANGER_THRESHOLD, MIN_RESERVED_SALARY
from qb_window.modules.cap_model import project_cap
from qb_window.modules.window_types import (
    CapHitYear,
    CapProjectionPoint,
    PeakCapHit,
    QBContract,
    RestructureAssessment,
)

MAX_YEARS_UNTIL_THRESHOLD = 5


def _forward_cap_hits(contract: QBContract, current_year: int = CURRENT_YEAR) -> List[CapHitYear]:
    """Non-void cap hits from the current year on, in year order."""
    return sorted(
        (h for h in contract.cap_hits if h.year >= current_year and not h.is_void_year),
        key=lambda h: h.year,
    )


def _percent_of_projected(cap_hit: CapHitYear) -> float:
    return cap_hit.amount / project_cap(cap_hit.year) * 100


def project_series(contract: QBContract, horizon_years: int = 6, current_year: int = CURRENT_YEAR) -> List[CapProjectionPoint]:
    points: List[CapProjectionPoint] = []

    for year in range(current_year, current_year + horizon_years):
        cap_hit = contract.cap_hit_for(year)
        if cap_hit is None:
            continue
        projected_cap = project_cap(year)

        if cap_hit.is_void_year:
            points.append(
                CapProjectionPoint(
                    year=year,
                    cap_hit_percent=0.0,
                    cap_hit_amount=cap_hit.dead_money_if_cut or 0,
                    projected_cap=projected_cap,
                    is_projected=True,
                    is_void_year=True,
                )
            )
        else:
            points.append(
                CapProjectionPoint(
                    year=year,
                    cap_hit_percent=round(cap_hit.amount / projected_cap * 100, 2),
                    cap_hit_amount=cap_hit.amount,
                    projected_cap=projected_cap,
                    is_projected=year > current_year,
                )
            )

    return points


def find_threshold_cross_year(contract: QBContract, threshold: float = DANGER_THRESHOLD) -> Optional[int]:
    for cap_hit in _forward_cap_hits(contract):
        if _percent_of_projected(cap_hit) >= threshold:
            return cap_hit.year
    return None


def years_until_threshold(contract: QBContract, threshold: float = DANGER_THRESHOLD) -> int:
    """
    Known non-void contract years before the cap hit reaches `threshold`.

    0 means already there, 5 means 5+. Void or missing years are not counted,
    so this can be less than the calendar gap to the crossing year.
    """
    years = 0
    for cap_hit in _forward_cap_hits(contract):
        if years >= MAX_YEARS_UNTIL_THRESHOLD:
            break
        if _percent_of_projected(cap_hit) >= threshold:
            break
        years += 1
    return min(years, MAX_YEARS_UNTIL_THRESHOLD)


def peak_cap_hit(contract: QBContract, current_year: int = CURRENT_YEAR) -> PeakCapHit:
    """Worst-case cap hit with no restructures."""
    peak = PeakCapHit(year=current_year, amount=0, percent=0.0)

    for cap_hit in _forward_cap_hits(contract, current_year):
        percent = _percent_of_projected(cap_hit)
        if percent > peak.percent:
            peak = PeakCapHit(year=cap_hit.year, amount=cap_hit.amount, percent=round(percent, 2))

    return peak


def trend_slope(contract: QBContract, window: int = 4) -> float:
    """Least-squares slope of cap-hit % per year index. Positive means a growing burden."""
    points = project_series(contract, window)
    if len(points) < 2:
        return 0.0

    x = np.arange(len(points), dtype=float)
    y = np.array([p.cap_hit_percent for p in points], dtype=float)
    slope = np.polyfit(x, y, 1)[0]
    return round(float(slope), 2)


def trajectory_direction(contract: QBContract, current_year: int = CURRENT_YEAR) -> int:
    """
    Year-over-year direction score.

    90 = cap hit dropping, 70 = stable, 50/30 = rising, 15 = cap cliff.
    """
    current = contract.cap_hit_for(current_year)
    following = contract.cap_hit_for(current_year + 1)
    current_hit = current.amount if current else 0
    next_hit = following.amount if following else 0

    if current_hit == 0:
        return 0

    increase = (next_hit - current_hit) / current_hit * 100
    if increase < 0:
        return 90
    if increase < 20:
        return 70
    if increase < 50:
        return 50
    if increase < 100:
        return 30
    return 15


def describe_trajectory(contract: QBContract, current_cap_hit_percent: float, current_year: int = CURRENT_YEAR) -> str:
    trend = trend_slope(contract)
    cross_year = find_threshold_cross_year(contract)

    if current_cap_hit_percent < 6:
        if cross_year:
            years_until = cross_year - current_year
            plural = "s" if years_until > 1 else ""
            return (
                f"Elite territory now. Crosses {DANGER_THRESHOLD}% threshold in "
                f"{years_until} year{plural} ({cross_year})."
            )
        return "Elite territory. No threshold crossing projected through contract."

    if current_cap_hit_percent >= DANGER_THRESHOLD:
        if trend > 1:
            return f"Already past {DANGER_THRESHOLD}% threshold and cap hit still climbing. Window closed."
        if current_cap_hit_percent >= CLOSED_THRESHOLD:
            return f"Already past {CLOSED_THRESHOLD}% of the cap. Would need restructure to create flexibility."
        return f"Already past {DANGER_THRESHOLD}% threshold. Would need restructure to create flexibility."

    if cross_year:
        years_until = cross_year - current_year
        if years_until <= 1:
            return f"Crosses {DANGER_THRESHOLD}% threshold next year. Window closing rapidly."
        return f"{years_until} years until {DANGER_THRESHOLD}% threshold ({cross_year}). Moderate runway."

    return "Cap hit remains manageable through contract."


def restructure_simulation(
    contract: QBContract,
    amount_to_convert: float,
    years_to_prorate: int = 5,
    current_year: int = CURRENT_YEAR,
) -> QBContract:
    """
    Convert current-year base salary into prorated signing bonus.

    The bonus is spread over `years_to_prorate` contract years starting with the
    current one. Returns a new contract; the input is left untouched.
    """
    if years_to_prorate <= 0:
        raise ValueError(f"years_to_prorate must be positive, got {years_to_prorate}")

    cap_hits = sorted(copy.deepcopy(contract.cap_hits), key=lambda h: h.year)
    current_index = next((i for i, h in enumerate(cap_hits) if h.year == current_year), None)
    if current_index is None:
        return replace(contract, cap_hits=cap_hits)

    per_year_bonus = amount_to_convert / years_to_prorate

    current = cap_hits[current_index]
    cap_hits[current_index] = replace(
        current,
        amount=current.amount - amount_to_convert,
        base_salary=current.base_salary - amount_to_convert,
    )

    for target in range(current_index, min(current_index + years_to_prorate, len(cap_hits))):
        hit = cap_hits[target]
        cap_hits[target] = replace(
            hit,
            amount=hit.amount + per_year_bonus,
            signing_bonus=hit.signing_bonus + per_year_bonus,
        )

    return replace(contract, cap_hits=cap_hits)


def flexibility_assessment(contract: QBContract, current_year: int = CURRENT_YEAR) -> RestructureAssessment:
    current = contract.cap_hit_for(current_year)
    if current is None:
        return RestructureAssessment(
            has_restructure_room=False,
            max_restructure_amount=0,
            recommendation="No current year cap hit data available.",
        )

    # Only base salary above the vet minimum can be converted
    has_room = current.base_salary > MIN_RESERVED_SALARY
    max_amount = max(0, current.base_salary - MIN_RESERVED_SALARY)

    if not has_room:
        recommendation = "No restructure room. Base salary already at minimum."
    elif max_amount > 20_000_000:
        recommendation = (
            f"Significant restructure room (${max_amount / 1_000_000:.1f}M). Could create short-term "
            f"relief but pushes cap burden to future years."
        )
    else:
        recommendation = f"Limited restructure room (${max_amount / 1_000_000:.1f}M). Minor relief possible."

    return RestructureAssessment(
        has_restructure_room=has_room,
        max_restructure_amount=max_amount,
        recommendation=recommendation,
    )

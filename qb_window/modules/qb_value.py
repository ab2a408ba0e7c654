"""
QB Value Model
==============
Turns QB performance metrics into a dollar value and a 0-100 quality score.

Two separate composites:
  • performance value: EPA 35%, CPOE 15%, QBR 15%, wins 20%, playoff wins 15%,
    mapped onto $5M-$65M
  • quality score: EPA 30%, PFF 30%, QBR 25%, CPOE 15%, with a fixed
    "unproven" score when no meaningful stats exist
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from qb_window.config import CURRENT_CAP
from qb_window.models.scoring_config import get_default_scoring_config
from qb_window.modules.window_types import PerformanceMetrics


# Performance value tiers (whole dollars)
QB_VALUE_TIERS = [
    (60_000_000, "Elite"),          # Top 5 QB
    (50_000_000, "Pro Bowl"),       # Top 10 QB
    (40_000_000, "Above Average"),  # Top 15 QB
    (30_000_000, "Average"),        # Top 20 QB
    (20_000_000, "Below Average"),  # Serviceable starter
]

# QB cap-hit % bands for the value score: [upper %, score]
CAP_VALUE_BANDS = [
    (3, 100),   # rookie deal territory
    (6, 90),
    (10, 75),
    (14, 55),   # fair market
    (18, 35),
    (22, 20),
]


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def normalize_metric(value: float, floor: float, ceiling: float, out_min: float = 0.0, out_max: float = 100.0) -> float:
    """Linear map of [floor, ceiling] onto [out_min, out_max], saturating at both ends."""
    scaled = (value - floor) / (ceiling - floor) * (out_max - out_min) + out_min
    return _clamp(scaled, out_min, out_max)


def estimate_performance_value(metrics: PerformanceMetrics, config: Optional[Dict[str, Any]] = None) -> int:
    cfg = (config or get_default_scoring_config())["performance_value"]
    ranges = cfg["ranges"]
    weights = cfg["weights"]

    epa_score = normalize_metric(metrics.epa_per_play, *ranges["epa_per_play"])
    cpoe_score = normalize_metric(metrics.cpoe, *ranges["cpoe"])
    qbr_score = normalize_metric(metrics.qbr, *ranges["qbr"])
    win_score = normalize_metric(metrics.wins, *ranges["wins"])
    playoff_score = _clamp(metrics.playoff_wins * float(cfg["playoff_win_points"]))

    composite = (
        epa_score * weights["epa_per_play"] +
        cpoe_score * weights["cpoe"] +
        qbr_score * weights["qbr"] +
        win_score * weights["wins"] +
        playoff_score * weights["playoffs"]
    )

    min_value, max_value = (float(v) for v in cfg["dollar_range"])
    return int(round(min_value + _clamp(composite) / 100 * (max_value - min_value)))


def quality_score(metrics: Optional[PerformanceMetrics], config: Optional[Dict[str, Any]] = None) -> float:
    """
    QB quality (0-100) used for the quality component score.

    Missing or all-zero metrics return the "unproven" score (40): an
    uncertainty penalty, not a measured zero.
    """
    cfg = (config or get_default_scoring_config())["quality_score"]
    if metrics is None or metrics.is_unproven():
        return float(cfg["unproven"])

    scales = cfg["scales"]
    weights = cfg["weights"]

    def _scaled(key: str, value: float) -> float:
        offset, factor = scales[key]
        return _clamp((value + float(offset)) * float(factor))

    score = (
        _scaled("epa_per_play", metrics.epa_per_play) * weights["epa_per_play"] +
        _scaled("pff_grade", metrics.pff_grade) * weights["pff_grade"] +
        _scaled("qbr", metrics.qbr) * weights["qbr"] +
        _scaled("cpoe", metrics.cpoe) * weights["cpoe"]
    )
    return round(score, 1)


def compare_value_to_contract(performance_value: float, actual_cap_hit: float) -> str:
    """Returns "surplus", "fair" or "overpay" by the ±20% deviation from the cap hit."""
    if actual_cap_hit <= 0:
        return "surplus" if performance_value > 0 else "fair"

    surplus_pct = (performance_value - actual_cap_hit) / actual_cap_hit * 100
    if surplus_pct > 20:
        return "surplus"
    if surplus_pct < -20:
        return "overpay"
    return "fair"


def cap_value_score(cap_hit_percent: float) -> int:
    for upper, score in CAP_VALUE_BANDS:
        if cap_hit_percent < upper:
            return score
    return 10  # cap albatross


def qb_surplus_value(performance_value: float, actual_cap_hit: float) -> float:
    return performance_value - actual_cap_hit


def surplus_percent_of_cap(surplus: float) -> float:
    return surplus / CURRENT_CAP * 100


def value_tier(performance_value: float) -> str:
    for threshold, tier in QB_VALUE_TIERS:
        if performance_value >= threshold:
            return tier
    return "Replacement"


def effective_cap_hit_percent(actual_cap_hit_percent: float, performance_value: float) -> float:
    """
    Cap hit % adjusted for play: a QB outplaying the deal costs less in effect.

    Half of the gap between the value-implied % and the actual % is credited.
    """
    expected_pct = performance_value / CURRENT_CAP * 100
    gap = expected_pct - actual_cap_hit_percent
    return max(0.0, actual_cap_hit_percent - gap * 0.5)


def describe_value(cap_hit_percent: float, performance_value: float, actual_cap_hit: float) -> str:
    comparison = compare_value_to_contract(performance_value, actual_cap_hit)
    tier = value_tier(performance_value)
    surplus_m = abs(performance_value - actual_cap_hit) / 1_000_000

    if comparison == "surplus":
        return (
            f"{tier} performance at {cap_hit_percent:.1f}% cap hit. "
            f"Providing ${surplus_m:.1f}M in surplus value."
        )
    if comparison == "overpay":
        return (
            f"{tier} performance at {cap_hit_percent:.1f}% cap hit. "
            f"Overpaid by ${surplus_m:.1f}M relative to production."
        )
    return f"{tier} performance at {cap_hit_percent:.1f}% cap hit. Fair market value."

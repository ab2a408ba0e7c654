"""
Non-visual dashboard logic helpers.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from qb_window.modules.window_types import TeamWindowScore, ZoneType


def build_factor_breakdown(score: TeamWindowScore) -> List[Tuple[str, float]]:
    c = score.components
    return [
        ("QB Cap Efficiency", c.cap),
        ("QB Quality", c.quality),
        ("Non-QB Surplus", c.surplus),
        ("Trajectory", c.trajectory),
        ("Sustainability", c.sustainability),
        ("Core Health", c.core),
    ]


def build_zone_counts(zones: Dict[ZoneType, List[TeamWindowScore]]) -> Dict[str, int]:
    def _count(*names: ZoneType) -> int:
        return sum(len(zones.get(n, [])) for n in names)

    return {
        "open": _count(ZoneType.ELITE, ZoneType.FAVORABLE),
        "closing": _count(ZoneType.CAUTION, ZoneType.DANGER),
        "closed": _count(ZoneType.CLOSED),
    }


def build_score_pills(score: TeamWindowScore) -> Dict[str, str]:
    return {
        "overall": f"{score.overall_score}",
        "status": score.window_status.label,
        "zone": score.window_zone.label,
        "qb_cap_hit_pct": f"{score.qb_cap_hit_percent:.2f}%",
        "years_until_threshold": f"{score.years_until_threshold}+" if score.years_until_threshold >= 5 else f"{score.years_until_threshold}",
    }

"""
Non-QB Surplus Module
=====================
Estimates the market value of non-QB stars on rookie contracts and the surplus
they give a team on top of their cap hit.

Features:
• Market value from position benchmarks and PFF grade
• Surplus aggregation (only > $5M counts)
• Sustainability: years until the median star is extension eligible
• Effective QB cost after crediting half the surplus
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

import numpy as np
import pandas as pd

from qb_window.config import CURRENT_CAP, CURRENT_YEAR, SURPLUS_SIGNIFICANCE
from qb_window.models.scoring_config import get_default_scoring_config
from qb_window.modules.window_types import EffectiveCost, NonQBSurplusResult, QualifiedRookieStar, RookieStar


def estimate_market_value(position: str, pff_grade: float, config: Optional[Dict[str, Any]] = None) -> int:
    market = (config or get_default_scoring_config())["market_value"]
    benchmarks = market["benchmarks"].get(position)
    if not benchmarks:
        return int(market["unknown_position_value"])

    for min_grade, tier in market["grade_tiers"]:
        if pff_grade >= float(min_grade):
            return int(benchmarks[tier])
    return int(round(benchmarks["average"] * float(market["below_average_factor"])))


def rookie_surplus(player: RookieStar, config: Optional[Dict[str, Any]] = None) -> float:
    return estimate_market_value(player.position, player.pff_grade, config) - player.current_year_cap_hit


def extension_year(draft_year: int, draft_round: int) -> int:
    """First-rounders carry the fifth-year option, so they extend a year later."""
    if draft_round == 1:
        return draft_year + 4
    return draft_year + 3


def sustainability_years(extension_years: Iterable[int], current_year: int = CURRENT_YEAR) -> int:
    """Years until the median star is extension eligible (lower middle on even counts)."""
    years = sorted(int(y) for y in extension_years)
    if not years:
        return 0
    median_year = years[(len(years) - 1) // 2]
    return max(0, median_year - current_year)


def aggregate_surplus(
    players: Iterable[RookieStar],
    config: Optional[Dict[str, Any]] = None,
    current_year: int = CURRENT_YEAR,
) -> NonQBSurplusResult:
    total_surplus = 0.0
    qualifying: List[QualifiedRookieStar] = []

    for player in players:
        market_value = estimate_market_value(player.position, player.pff_grade, config)
        surplus = market_value - player.current_year_cap_hit
        if surplus > SURPLUS_SIGNIFICANCE:
            total_surplus += surplus
            qualifying.append(
                QualifiedRookieStar(player=player, estimated_market_value=market_value, surplus_value=surplus)
            )

    qualifying.sort(key=lambda q: q.surplus_value, reverse=True)
    return NonQBSurplusResult(
        total_surplus=total_surplus,
        star_rookies=qualifying,
        sustainability_years=sustainability_years(
            (q.player.extension_eligible_year for q in qualifying), current_year
        ),
        surplus_as_percent_of_cap=round(total_surplus / CURRENT_CAP * 100, 1),
    )


def adjusted_effective_cost(qb_cap_hit_percent: float, surplus: NonQBSurplusResult) -> EffectiveCost:
    """
    Effective QB cost after giving 50% credit for non-QB surplus.

    This is how a team can compete with an expensive QB: cheap stars elsewhere
    carry part of the load, until their extensions come due.
    """
    surplus_offset = surplus.surplus_as_percent_of_cap * 0.5
    effective_cost = max(0.0, qb_cap_hit_percent - surplus_offset)

    if surplus_offset > 5:
        explanation = (
            f"QB at {qb_cap_hit_percent:.1f}% but {len(surplus.star_rookies)} rookie stars provide "
            f"${surplus.total_surplus / 1_000_000:.0f}M in surplus value. "
            f"Effective QB cost: {effective_cost:.1f}%. "
        )
        if surplus.sustainability_years <= 2:
            explanation += (
                f"Warning: Window closes in ~{surplus.sustainability_years} years when extensions come due."
            )
    else:
        explanation = f"QB at {qb_cap_hit_percent:.1f}% cap hit. Limited non-QB surplus value."

    return EffectiveCost(
        raw_qb_cap_hit_percent=qb_cap_hit_percent,
        effective_qb_cost=round(effective_cost, 1),
        surplus_offset=round(surplus_offset, 1),
        explanation=explanation,
    )


def sustainability_warning(surplus: NonQBSurplusResult, current_year: int = CURRENT_YEAR) -> Optional[str]:
    if surplus.total_surplus < 20_000_000:
        return None

    total_m = surplus.total_surplus / 1_000_000
    if surplus.sustainability_years <= 1:
        due = ", ".join(
            q.player.player_name
            for q in surplus.star_rookies
            if q.player.extension_eligible_year <= current_year + 1
        )
        return f"CRITICAL: ${total_m:.0f}M surplus evaporates this/next year. Extensions due: {due}"

    if surplus.sustainability_years <= 2:
        return (
            f"WARNING: Non-QB surplus (${total_m:.0f}M) expires in "
            f"{surplus.sustainability_years} years. Window is NOW."
        )

    return None


class SurplusModule:
    """Rookie-contract surplus analysis over a candidates DataFrame."""

    def __init__(self, scoring_config=None):
        self.scoring_config = scoring_config or get_default_scoring_config()

    def analyze(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Input columns: POSITION, PFF_GRADE, CAP_HIT (team id in TEAM_ID is optional)
        Adds: MARKET_VALUE, SURPLUS_VALUE, QUALIFIES
        """
        df = df.copy()

        df['MARKET_VALUE'] = df.apply(
            lambda row: estimate_market_value(row['POSITION'], row['PFF_GRADE'], self.scoring_config),
            axis=1,
        )
        df['SURPLUS_VALUE'] = df['MARKET_VALUE'] - df['CAP_HIT']
        df['QUALIFIES'] = np.where(df['SURPLUS_VALUE'] > SURPLUS_SIGNIFICANCE, True, False)

        return df

    def team_summary(self, df: pd.DataFrame) -> pd.DataFrame:
        """Qualifying surplus per team, largest first."""
        if 'TEAM_ID' not in df.columns:
            return pd.DataFrame()

        qualified = df[df['QUALIFIES']]
        summary = qualified.groupby('TEAM_ID').agg(
            TOTAL_SURPLUS=('SURPLUS_VALUE', 'sum'),
            NUM_STARS=('SURPLUS_VALUE', 'count'),
        )
        summary['SURPLUS_PCT_OF_CAP'] = (summary['TOTAL_SURPLUS'] / CURRENT_CAP * 100).round(1)

        return summary.sort_values('TOTAL_SURPLUS', ascending=False)

    @staticmethod
    def to_frame(players: Iterable[RookieStar]) -> pd.DataFrame:
        return pd.DataFrame(
            [
                {
                    'PLAYER_NAME': p.player_name,
                    'TEAM_ID': p.team_id,
                    'POSITION': p.position,
                    'PFF_GRADE': p.pff_grade,
                    'CAP_HIT': p.current_year_cap_hit,
                    'EXTENSION_YEAR': p.extension_eligible_year,
                }
                for p in players
            ],
            columns=['PLAYER_NAME', 'TEAM_ID', 'POSITION', 'PFF_GRADE', 'CAP_HIT', 'EXTENSION_YEAR'],
        )

"""
Salary cap projection.

Future caps compound the current cap by a fixed annual growth rate.
"""

from __future__ import annotations

import math
from typing import List, Optional

from qb_window.config import CAP_GROWTH_RATE, CURRENT_CAP, CURRENT_YEAR


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves upward. round() would send 2.5 to 2."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def project_cap(
    year: int,
    current_cap: float = CURRENT_CAP,
    growth_rate: float = CAP_GROWTH_RATE,
    current_year: int = CURRENT_YEAR,
) -> int:
    """Projected league cap for `year`. Years before `current_year` contract the cap."""
    years_out = year - current_year
    return int(round_half_up(current_cap * (1 + growth_rate) ** years_out))


def projected_caps(horizon: int, start_year: int = CURRENT_YEAR) -> List[int]:
    return [project_cap(start_year + i) for i in range(horizon)]


def cap_hit_percent(amount: float, year: Optional[int] = None) -> float:
    cap = CURRENT_CAP if year is None else project_cap(year)
    return amount / cap * 100

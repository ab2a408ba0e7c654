"""
QB cap-hit zone classifier.

The dominant signal: teams under 10% of the cap win championships, teams over
15% do not. Bands come from the scoring config and are closed below, so 6.0 is
FAVORABLE and 15.0 is CLOSED.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from qb_window.models.scoring_config import get_default_scoring_config
from qb_window.modules.window_types import StatusType, WindowStatus, WindowZone, ZoneType


NO_DATA_ZONE = WindowZone(
    zone=ZoneType.NO_DATA,
    color="#888888",
    label="NO CAP DATA",
    description="No current-year cap hit on file for this QB.",
    historical_win_rate="n/a",
)


def _zone_from_band(band: Dict[str, Any]) -> WindowZone:
    return WindowZone(
        zone=ZoneType(band["zone"]),
        color=band["color"],
        label=band["label"],
        description=band["description"],
        historical_win_rate=band["historical_win_rate"],
    )


def classify(cap_hit_percent: float, config: Optional[Dict[str, Any]] = None) -> WindowZone:
    bands = (config or get_default_scoring_config())["zones"]
    for band in bands[:-1]:
        if cap_hit_percent < float(band["upper"]):
            return _zone_from_band(band)
    return _zone_from_band(bands[-1])


def window_status(score: float, config: Optional[Dict[str, Any]] = None) -> WindowStatus:
    bands = (config or get_default_scoring_config())["status_bands"]
    chosen = bands[-1]
    for band in bands[:-1]:
        if score >= float(band["min"]):
            chosen = band
            break
    return WindowStatus(status=StatusType(chosen["status"]), color=chosen["color"], label=chosen["label"])


def zone_color(cap_hit_percent: float, config: Optional[Dict[str, Any]] = None) -> str:
    return classify(cap_hit_percent, config).color


def zone_type(cap_hit_percent: float, config: Optional[Dict[str, Any]] = None) -> ZoneType:
    return classify(cap_hit_percent, config).zone

"""
Historical comparison against past Super Bowl winners' QB cap hits.
"""

from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd

from qb_window.modules.zone_classifier import zone_type

DEFAULT_WINNERS_AVG_CAP_HIT = 7.8


def _winners(history: Dict[str, Any]) -> List[Dict[str, Any]]:
    return list(history.get("superBowlWinners", []) or [])


def historical_comparison(history: Dict[str, Any], qb_cap_hit_percent: float, tolerance: float = 2) -> Dict[str, object]:
    """Super Bowl winners whose QB cap hit was within `tolerance` points of the given %."""
    similar = [
        w for w in _winners(history)
        if abs(float(w["qbCapHitPercent"]) - qb_cap_hit_percent) <= tolerance
    ]
    metrics = history.get("analysisMetrics") or {}
    avg = metrics.get("sbWinnersAvgCapHitPercent") or DEFAULT_WINNERS_AVG_CAP_HIT
    return {
        "similar_winners": similar,
        "avg_winners_cap_hit": float(avg),
    }


def zone_distribution(history: Dict[str, Any]) -> pd.DataFrame:
    """Count of Super Bowl winners per cap-hit zone."""
    df = pd.DataFrame(_winners(history))
    if df.empty:
        return pd.DataFrame(columns=['ZONE', 'WINNERS', 'AVG_CAP_HIT_PCT'])

    df['ZONE'] = df['qbCapHitPercent'].apply(lambda pct: zone_type(float(pct)).value)
    summary = df.groupby('ZONE').agg(
        WINNERS=('qbCapHitPercent', 'count'),
        AVG_CAP_HIT_PCT=('qbCapHitPercent', 'mean'),
    ).round(2).reset_index()
    return summary.sort_values('AVG_CAP_HIT_PCT').reset_index(drop=True)

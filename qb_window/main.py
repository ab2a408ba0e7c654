"""
QB Championship Window - entry point
====================================

Pipeline:
  1. Load the league snapshot
  2. Non-QB surplus per team (rookie-contract stars)
  3. Window score per team, ranked
  4. Alerts

Output: text report on stdout. Nothing is written to disk.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

import pandas as pd

from qb_window.config import CURRENT_CAP, CURRENT_YEAR
from qb_window.data_access.league_data import LeagueSnapshot, load_snapshot
from qb_window.dashboard.dashboard_logic import build_zone_counts
from qb_window.models.history import zone_distribution
from qb_window.modules.surplus_module import SurplusModule
from qb_window.modules.window_score import WindowScoreEngine
from qb_window.modules.window_types import TeamWindowScore
from qb_window.pipeline.league_board import (
    all_window_scores,
    available_seasons,
    scatter_points_for_season,
    scores_frame,
    season_info,
    teams_by_zone,
    window_alerts,
)

DEFAULT_DATA_PATH = "data/league_snapshot.json"


def surplus_report(snapshot: LeagueSnapshot) -> pd.DataFrame:
    module = SurplusModule()
    df = SurplusModule.to_frame(snapshot.rookie_stars)
    if df.empty:
        return pd.DataFrame()
    df = module.analyze(df)
    return module.team_summary(df)


def run_pipeline(data_path: str = DEFAULT_DATA_PATH, top: int = 10,
                 engine: Optional[WindowScoreEngine] = None) -> List[TeamWindowScore]:
    print("=" * 70)
    print(f"QB Championship Window - {CURRENT_YEAR} (cap ${CURRENT_CAP / 1_000_000:.1f}M)")
    print("=" * 70)

    print("\n[1/4] Loading league snapshot...")
    snapshot = load_snapshot(data_path)

    print("\n[2/4] Non-QB surplus...")
    summary = surplus_report(snapshot)
    if summary.empty:
        print("  no qualifying rookie-contract stars")
    else:
        for team_id, row in summary.iterrows():
            print(f"  {team_id:<4} ${row['TOTAL_SURPLUS'] / 1_000_000:>5.1f}M  "
                  f"{int(row['NUM_STARS'])} stars  {row['SURPLUS_PCT_OF_CAP']:.1f}% of cap")

    print("\n[3/4] Window scores...")
    engine = engine or WindowScoreEngine()
    scores = all_window_scores(snapshot, engine)
    zones = build_zone_counts(teams_by_zone(snapshot, scores))
    print(f"  open: {zones['open']}  closing: {zones['closing']}  closed: {zones['closed']}")

    ranking = scores_frame(scores)
    if not ranking.empty:
        cols = ['RANK', 'TEAM_ID', 'OVERALL_SCORE', 'STATUS', 'ZONE', 'QB_CAP_HIT_PCT', 'YEARS_UNTIL_THRESHOLD']
        print(ranking[cols].head(top).to_string(index=False))

    print("\n[4/4] Alerts...")
    alerts = window_alerts(snapshot, scores, engine=engine)
    for alert in alerts:
        print(f"  [{alert.type.value:<8}] {alert.team_id}: {alert.message}")
    if not alerts:
        print("  none")

    history = zone_distribution(snapshot.historical)
    if not history.empty:
        print("\nSuper Bowl winners by QB cap-hit zone:")
        print(history.to_string(index=False))

    finished = [s for s in available_seasons(snapshot) if not s.in_progress]
    if finished:
        print("\nPlayoff history:")
        for season in finished:
            info = season_info(snapshot, season.year)
            charted = scatter_points_for_season(snapshot, season.year, engine)
            print(f"  {season.label or season.year}: {info.sb_winner} beat {info.sb_loser} ({len(charted)} teams charted)")

    return scores


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Rank NFL championship windows by QB cap hit")
    parser.add_argument("--data", default=DEFAULT_DATA_PATH, help="league snapshot JSON")
    parser.add_argument("--top", type=int, default=10, help="teams to show in the ranking")
    args = parser.parse_args(argv)

    try:
        run_pipeline(args.data, top=args.top)
    except Exception as exc:
        print(f"[qb-window] ERROR: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

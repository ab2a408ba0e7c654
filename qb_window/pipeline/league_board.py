"""
League-wide window board.

Scores every team with a QB contract on file and derives the rankings, zone
groups, alerts and chart series the dashboard reads. Nothing is cached: each
call recomputes from the snapshot.
"""

from __future__ import annotations

from typing import Dict, List, Optional

import pandas as pd

from qb_window.data_access.league_data import LeagueSnapshot
from qb_window.models.alert_rules import AlertRuleset
from qb_window.modules.alerts import generate_alerts, rank_teams
from qb_window.modules.surplus_module import aggregate_surplus
from qb_window.modules.trajectory import project_series
from qb_window.modules.window_score import WindowScoreEngine
from qb_window.modules.window_types import (
    CapProjectionPoint,
    PlayoffSeason,
    ScatterPoint,
    SeasonInfo,
    SeasonResult,
    TeamWindowScore,
    WindowAlert,
    ZoneType,
)
from qb_window.modules.zone_classifier import classify


def _log(msg: str) -> None:
    print(f"[board] {msg}")


def all_window_scores(snapshot: LeagueSnapshot, engine: Optional[WindowScoreEngine] = None) -> List[TeamWindowScore]:
    engine = engine or WindowScoreEngine()
    scores = []

    for team in snapshot.teams:
        contract = snapshot.contract_by_team(team.id)
        if contract is None:
            continue

        surplus = aggregate_surplus(snapshot.rookie_stars_for(team.id), engine.scoring_config)
        scores.append(
            engine.score(
                team,
                contract,
                surplus=surplus,
                qb_age=snapshot.qb_age_for(contract.player_id),
                season_result=snapshot.season_result_for(team.id),
            )
        )

    _log(f"scored {len(scores)} of {len(snapshot.teams)} teams")
    return rank_teams(scores)


def window_alerts(
    snapshot: LeagueSnapshot,
    scores: Optional[List[TeamWindowScore]] = None,
    ruleset: Optional[AlertRuleset] = None,
    engine: Optional[WindowScoreEngine] = None,
) -> List[WindowAlert]:
    engine = engine or WindowScoreEngine()
    if scores is None:
        scores = all_window_scores(snapshot, engine)
    return generate_alerts(scores, snapshot.contracts_by_team(), ruleset=ruleset, clock=engine.clock)


def top_teams(snapshot: LeagueSnapshot, limit: int = 10, engine: Optional[WindowScoreEngine] = None) -> List[TeamWindowScore]:
    return all_window_scores(snapshot, engine)[:limit]


def teams_by_zone(
    snapshot: LeagueSnapshot,
    scores: Optional[List[TeamWindowScore]] = None,
    engine: Optional[WindowScoreEngine] = None,
) -> Dict[ZoneType, List[TeamWindowScore]]:
    if scores is None:
        scores = all_window_scores(snapshot, engine)
    zones: Dict[ZoneType, List[TeamWindowScore]] = {
        ZoneType.ELITE: [],
        ZoneType.FAVORABLE: [],
        ZoneType.CAUTION: [],
        ZoneType.DANGER: [],
        ZoneType.CLOSED: [],
    }
    for score in scores:
        zones.setdefault(score.window_zone.zone, []).append(score)
    return zones


def playoff_round(result: Optional[SeasonResult]) -> int:
    """0 = missed, 1 = wild card, 2 = divisional, 3 = conference, 4 = SB loss, 5 = SB win."""
    if result is None:
        return 0
    if result.super_bowl_win:
        return 5
    if result.super_bowl_appearance:
        return 4
    if result.conf_championship:
        return 3
    if result.playoff_wins > 0:
        return 2
    if result.made_playoffs:
        return 1
    return 0


def scatter_points(
    snapshot: LeagueSnapshot,
    scores: Optional[List[TeamWindowScore]] = None,
    engine: Optional[WindowScoreEngine] = None,
) -> List[ScatterPoint]:
    if scores is None:
        scores = all_window_scores(snapshot, engine)

    points = []
    for score in scores:
        team = snapshot.team_by_id(score.team_id)
        contract = snapshot.contract_by_team(score.team_id)
        if team is None or contract is None:
            continue
        points.append(
            ScatterPoint(
                team_id=score.team_id,
                team_name=team.name,
                qb_name=contract.player_name,
                qb_cap_hit_percent=score.qb_cap_hit_percent,
                playoff_round=playoff_round(snapshot.season_result_for(score.team_id)),
                window_zone=score.window_zone.zone,
                color=score.window_zone.color,
            )
        )
    return points


def available_seasons(snapshot: LeagueSnapshot) -> List[PlayoffSeason]:
    """Seasons with playoff results, newest first."""
    return sorted(snapshot.playoff_results.values(), key=lambda s: s.year, reverse=True)


def scatter_points_for_season(
    snapshot: LeagueSnapshot,
    year: int,
    engine: Optional[WindowScoreEngine] = None,
) -> List[ScatterPoint]:
    """
    Cap hit vs. playoff round for one past season.

    Zones come from the cap hit recorded that season. The QB name is the
    current starter on file, which may not be who started that year.
    """
    season = snapshot.playoff_season(year)
    if season is None:
        return []

    config = engine.scoring_config if engine is not None else None
    points = []
    for entry in season.teams:
        team = snapshot.team_by_id(entry.team_id)
        if team is None:
            continue
        contract = snapshot.contract_by_team(entry.team_id)
        zone = classify(entry.qb_cap_hit_percent, config)
        points.append(
            ScatterPoint(
                team_id=entry.team_id,
                team_name=team.name,
                qb_name=contract.player_name if contract is not None else "Unknown QB",
                qb_cap_hit_percent=entry.qb_cap_hit_percent,
                playoff_round=entry.result,
                window_zone=zone.zone,
                color=zone.color,
            )
        )
    return points


def season_info(snapshot: LeagueSnapshot, year: int) -> Optional[SeasonInfo]:
    season = snapshot.playoff_season(year)
    if season is None:
        return None
    return SeasonInfo(sb_winner=season.sb_winner, sb_loser=season.sb_loser, in_progress=season.in_progress)


def cap_projection(snapshot: LeagueSnapshot, team_id: str, horizon_years: int = 6) -> List[CapProjectionPoint]:
    contract = snapshot.contract_by_team(team_id)
    if contract is None:
        return []
    return project_series(contract, horizon_years)


def scores_frame(scores: List[TeamWindowScore]) -> pd.DataFrame:
    """Ranking table, one row per team in the given order."""
    rows = [
        {
            'RANK': i + 1,
            'TEAM_ID': s.team_id,
            'OVERALL_SCORE': s.overall_score,
            'STATUS': s.window_status.label,
            'ZONE': s.window_zone.zone.value,
            'QB_CAP_HIT': s.qb_cap_hit,
            'QB_CAP_HIT_PCT': s.qb_cap_hit_percent,
            'YEARS_UNTIL_THRESHOLD': s.years_until_threshold,
            'CAP_SCORE': s.components.cap,
            'QUALITY_SCORE': s.components.quality,
            'SURPLUS_SCORE': s.components.surplus,
            'TRAJECTORY_SCORE': s.components.trajectory,
            'SUSTAINABILITY_SCORE': s.components.sustainability,
            'CORE_SCORE': s.components.core,
        }
        for i, s in enumerate(scores)
    ]
    return pd.DataFrame(rows)

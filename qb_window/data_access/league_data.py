"""
League snapshot loading.

A snapshot is one JSON document holding every record the engine reads:

    {
      "teams": [...],
      "qbContracts": [...],
      "seasonResults": {"PHI": {...}},
      "rookieStars": [...],
      "qbAges": {"jalen-hurts": 26},
      "historical": {"superBowlWinners": [...]},
      "playoffResults": {"seasons": {"2024": {"sbWinner": "PHI", "teams": [...]}}}
    }

Lookups return None / [] for unknown ids; the engine substitutes defaults.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from qb_window.config import DEFAULT_QB_AGE
from qb_window.modules.window_types import (
    CapHitYear,
    PerformanceMetrics,
    PlayoffSeason,
    PlayoffSeasonTeam,
    QBContract,
    RookieStar,
    SeasonResult,
    Team,
)


class SnapshotError(ValueError):
    pass


def _log(msg: str) -> None:
    print(f"[snapshot] {msg}")


def _require(record: Any, keys: List[str], what: str, label: Optional[str] = None) -> None:
    if not isinstance(record, dict):
        raise SnapshotError(f"{what} {label or '?'} must be an object, got {type(record).__name__}")
    missing = [k for k in keys if k not in record]
    if missing:
        label = label or record.get("id") or record.get("playerId") or "?"
        raise SnapshotError(f"{what} {label} missing keys: {missing}")


def parse_team(raw: Dict[str, Any]) -> Team:
    _require(raw, ["id", "name"], "team")
    return Team(
        id=raw["id"],
        name=raw["name"],
        city=raw.get("city", ""),
        conference=raw.get("conference", ""),
        division=raw.get("division", ""),
        primary_color=raw.get("primaryColor", ""),
        secondary_color=raw.get("secondaryColor", ""),
    )


def parse_cap_hit(raw: Dict[str, Any]) -> CapHitYear:
    _require(raw, ["year", "amount"], "cap hit")
    return CapHitYear(
        year=int(raw["year"]),
        amount=float(raw["amount"]),
        base_salary=float(raw.get("baseSalary", 0)),
        signing_bonus=float(raw.get("signingBonus", 0)),
        is_void_year=bool(raw.get("isVoidYear", False)),
        dead_money_if_cut=raw.get("deadMoneyIfCut"),
        is_fifth_year_option=bool(raw.get("isFifthYearOption", False)),
    )


def parse_metrics(raw: Optional[Dict[str, Any]]) -> Optional[PerformanceMetrics]:
    if not raw:
        return None
    _require(raw, [], "performance metrics")
    return PerformanceMetrics(
        epa_per_play=float(raw.get("epaPerPlay", 0)),
        cpoe=float(raw.get("cpoe", 0)),
        qbr=float(raw.get("qbr", 0)),
        pff_grade=float(raw.get("pffGrade", 0)),
        wins=float(raw.get("wins", 0)),
        playoff_wins=float(raw.get("playoffWins", 0)),
    )


def parse_contract(raw: Dict[str, Any]) -> QBContract:
    _require(raw, ["playerId", "playerName", "teamId", "contractType", "capHits"], "contract")
    return QBContract(
        player_id=raw["playerId"],
        player_name=raw["playerName"],
        team_id=raw["teamId"],
        contract_type=raw["contractType"],
        total_value=float(raw.get("totalValue", 0)),
        aav=float(raw.get("aav", 0)),
        guaranteed_money=float(raw.get("guaranteedMoney", 0)),
        years_remaining=int(raw.get("yearsRemaining", 0)),
        cap_hits=sorted((parse_cap_hit(h) for h in raw["capHits"] or []), key=lambda h: h.year),
        performance_metrics=parse_metrics(raw.get("performanceMetrics")),
    )


def parse_season_result(raw: Dict[str, Any], team_id: str = "?") -> SeasonResult:
    _require(raw, [], "season result", team_id)
    return SeasonResult(
        wins=int(raw.get("wins", 0)),
        losses=int(raw.get("losses", 0)),
        made_playoffs=bool(raw.get("madePlayoffs", False)),
        playoff_wins=int(raw.get("playoffWins", 0)),
        conf_championship=bool(raw.get("confChampionship", False)),
        super_bowl_appearance=bool(raw.get("superBowlAppearance", False)),
        super_bowl_win=bool(raw.get("superBowlWin", False)),
        coach_tier=raw.get("coachTier"),
        qb_production_tier=raw.get("qbProductionTier"),
    )


def parse_rookie_star(raw: Dict[str, Any]) -> RookieStar:
    _require(
        raw,
        ["playerId", "playerName", "position", "currentYearCapHit", "pffGrade", "extensionEligibleYear"],
        "rookie star",
    )
    return RookieStar(
        player_id=raw["playerId"],
        player_name=raw["playerName"],
        position=raw["position"],
        current_year_cap_hit=float(raw["currentYearCapHit"]),
        pff_grade=float(raw["pffGrade"]),
        extension_eligible_year=int(raw["extensionEligibleYear"]),
        draft_year=int(raw.get("draftYear", 0)),
        draft_round=int(raw.get("draftRound", 0)),
        team_id=raw.get("teamId", ""),
    )


def parse_playoff_season(year: str, raw: Dict[str, Any]) -> PlayoffSeason:
    try:
        season_year = int(year)
    except ValueError as exc:
        raise SnapshotError(f"playoff season key must be a year, got {year!r}") from exc
    _require(raw, ["teams"], "playoff season", year)
    teams = []
    for entry in raw["teams"] or []:
        _require(entry, ["teamId", "qbCapPct", "result"], "playoff result", year)
        teams.append(
            PlayoffSeasonTeam(
                team_id=entry["teamId"],
                qb_cap_hit_percent=float(entry["qbCapPct"]),
                result=int(entry["result"]),
                note=entry.get("note", ""),
            )
        )
    return PlayoffSeason(
        year=season_year,
        label=raw.get("label", ""),
        in_progress=bool(raw.get("inProgress", False)),
        sb_winner=raw.get("sbWinner"),
        sb_loser=raw.get("sbLoser"),
        teams=teams,
    )


@dataclass
class LeagueSnapshot:
    teams: List[Team] = field(default_factory=list)
    contracts: List[QBContract] = field(default_factory=list)
    season_results: Dict[str, SeasonResult] = field(default_factory=dict)
    rookie_stars: List[RookieStar] = field(default_factory=list)
    qb_ages: Dict[str, float] = field(default_factory=dict)
    historical: Dict[str, Any] = field(default_factory=dict)
    playoff_results: Dict[int, PlayoffSeason] = field(default_factory=dict)

    def team_by_id(self, team_id: str) -> Optional[Team]:
        return next((t for t in self.teams if t.id == team_id), None)

    def contract_by_team(self, team_id: str) -> Optional[QBContract]:
        return next((c for c in self.contracts if c.team_id == team_id), None)

    def contracts_by_team(self) -> Dict[str, QBContract]:
        result: Dict[str, QBContract] = {}
        for contract in self.contracts:
            result.setdefault(contract.team_id, contract)
        return result

    def season_result_for(self, team_id: str) -> Optional[SeasonResult]:
        return self.season_results.get(team_id)

    def rookie_stars_for(self, team_id: str) -> List[RookieStar]:
        return [p for p in self.rookie_stars if p.team_id == team_id]

    def qb_age_for(self, player_id: str) -> float:
        return self.qb_ages.get(player_id, DEFAULT_QB_AGE)

    def playoff_season(self, year: int) -> Optional[PlayoffSeason]:
        return self.playoff_results.get(year)


def _parse_playoff_results(raw: Dict[str, Any]) -> Dict[int, PlayoffSeason]:
    _require(raw, [], "playoff results")
    seasons = raw.get("seasons") or {}
    _require(seasons, [], "playoff seasons")
    parsed = [parse_playoff_season(year, season) for year, season in seasons.items()]
    return {season.year: season for season in parsed}


def build_snapshot(payload: Dict[str, Any]) -> LeagueSnapshot:
    if not isinstance(payload, dict):
        raise SnapshotError("snapshot must be a JSON object")

    season_results = payload.get("seasonResults") or {}
    _require(season_results, [], "season results")
    qb_ages = payload.get("qbAges") or {}
    _require(qb_ages, [], "qb ages")

    return LeagueSnapshot(
        teams=[parse_team(t) for t in payload.get("teams") or []],
        contracts=[parse_contract(c) for c in payload.get("qbContracts") or []],
        season_results={
            team_id: parse_season_result(r, team_id) for team_id, r in season_results.items()
        },
        rookie_stars=[parse_rookie_star(p) for p in payload.get("rookieStars") or []],
        qb_ages={k: float(v) for k, v in qb_ages.items()},
        historical=payload.get("historical") or {},
        playoff_results=_parse_playoff_results(payload.get("playoffResults") or {}),
    )


def load_snapshot(path: str = "data/league_snapshot.json") -> LeagueSnapshot:
    p = Path(path)
    if not p.exists():
        raise SnapshotError(f"snapshot not found: {p}")

    with p.open("r", encoding="utf-8") as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as exc:
            raise SnapshotError(f"snapshot is not valid JSON: {p}: {exc}") from exc

    snapshot = build_snapshot(payload)
    _log(f"loaded {len(snapshot.teams)} teams, {len(snapshot.contracts)} contracts from {p}")
    return snapshot

"""
Window ranking and alert rules.

Rules per team, first match wins:
1. Team override from the ruleset (always a warning)
2. Rookie QB under 4% with 3+ years left -> positive
3. Favorable veteran under 13% -> positive
4. Cheap QB about to escalate more than 3 points next season -> warning
5. 10-15% (not a favorable veteran) -> warning
6. 15%+ -> danger ("disaster" at 25%+)
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from qb_window.config import CURRENT_YEAR, MAX_ALERTS
from qb_window.models.alert_rules import AlertRuleset, get_default_alert_rules
from qb_window.modules.cap_model import project_cap
from qb_window.modules.window_score import Clock, utc_now
from qb_window.modules.window_types import AlertType, QBContract, TeamWindowScore, WindowAlert

ALERT_ORDER = {AlertType.POSITIVE: 0, AlertType.WARNING: 1, AlertType.DANGER: 2}


def rank_teams(scores: Iterable[TeamWindowScore]) -> List[TeamWindowScore]:
    """Highest overall score first; a cheaper QB wins ties."""
    return sorted(scores, key=lambda s: (-s.overall_score, s.qb_cap_hit_percent))


def next_season_percent(contract: QBContract, current_year: int = CURRENT_YEAR) -> Optional[float]:
    cap_hit = contract.cap_hit_for(current_year + 1)
    if cap_hit is None:
        return None
    return cap_hit.amount / project_cap(current_year + 1) * 100


def _alert_message(score: TeamWindowScore, contract: QBContract, ruleset: AlertRuleset) -> Optional[tuple]:
    pct = score.qb_cap_hit_percent
    name = contract.player_name
    is_favorable_vet = ruleset.is_favorable_vet(contract.player_id)
    years_remaining = contract.years_remaining

    override = ruleset.override_for(score.team_id)
    if override:
        message = override.format(
            player=name,
            percent=f"{pct:.2f}",
            surplus_m=f"{score.non_qb_surplus / 1_000_000:.0f}",
        )
        return AlertType.WARNING, message

    if contract.is_rookie_deal and pct < 4 and years_remaining >= 3:
        return AlertType.POSITIVE, f"{name} at {pct:.2f}%. Window WIDE OPEN for {years_remaining}+ years."

    if is_favorable_vet and pct < 13:
        return AlertType.POSITIVE, f"{name} at {pct:.2f}%. Window FAVORABLE."

    escalation_candidate = (
        not ruleset.is_bridge_qb(contract.player_id)
        and not ruleset.suppresses_warnings(score.team_id)
        and not is_favorable_vet
        and pct < 10
        and score.years_until_threshold <= 2
        and years_remaining >= 2
    )
    if escalation_candidate:
        next_pct = next_season_percent(contract)
        if next_pct is not None and next_pct > pct + 3:
            return (
                AlertType.WARNING,
                f"{name} at {pct:.2f}% now, escalates to {next_pct:.2f}% in {CURRENT_YEAR + 1}. Clock is ticking.",
            )

    if not is_favorable_vet and 10 <= pct < 15:
        years_left = score.years_until_threshold
        if years_left > 0:
            plural = "" if years_left == 1 else "s"
            return AlertType.WARNING, f"{name} at {pct:.2f}%. Window closing - {years_left} year{plural} until threshold."
        return AlertType.WARNING, f"{name} at {pct:.2f}%. Window closing."

    if pct >= 15:
        if pct >= 25:
            return AlertType.DANGER, f"{name} at {pct:.2f}%. DISASTER - worst contract situation in NFL."
        return AlertType.DANGER, f"{name} at {pct:.2f}%. Championship window CLOSED."

    return None


def evaluate_team_alert(
    score: TeamWindowScore,
    contract: QBContract,
    ruleset: Optional[AlertRuleset] = None,
    clock: Optional[Clock] = None,
) -> Optional[WindowAlert]:
    result = _alert_message(score, contract, ruleset or get_default_alert_rules())
    if result is None:
        return None
    alert_type, message = result
    return WindowAlert(team_id=score.team_id, type=alert_type, message=message, timestamp=(clock or utc_now)())


def generate_alerts(
    scores: Iterable[TeamWindowScore],
    contracts: Dict[str, QBContract],
    ruleset: Optional[AlertRuleset] = None,
    clock: Optional[Clock] = None,
    limit: int = MAX_ALERTS,
) -> List[WindowAlert]:
    """At most one alert per team; positives, then warnings, then dangers; capped at `limit`."""
    ruleset = ruleset or get_default_alert_rules()
    alerts = []

    for score in scores:
        contract = contracts.get(score.team_id)
        if contract is None:
            continue
        alert = evaluate_team_alert(score, contract, ruleset, clock)
        if alert is not None:
            alerts.append(alert)

    alerts.sort(key=lambda a: ALERT_ORDER[a.type])
    return alerts[:limit]

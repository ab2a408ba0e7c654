"""
Curated alert ruleset: which QBs and teams get special treatment.

The lists are time-sensitive (bridge QBs, reigning champion, favorable veteran
deals), so they live in config_data/rules/<name>.yaml instead of the engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Dict, FrozenSet, Optional

import yaml

from qb_window.models.scoring_config import ScoringConfigError, _hash_config, _require_keys


RULES_DIR = Path(__file__).resolve().parents[1] / "config_data" / "rules"
DEFAULT_RULES_NAME = "default"


@dataclass(frozen=True)
class AlertRuleset:
    name: str = "empty"
    bridge_qbs: FrozenSet[str] = frozenset()
    favorable_vets: FrozenSet[str] = frozenset()
    no_warning_teams: FrozenSet[str] = frozenset()
    overrides: Dict[str, str] = field(default_factory=dict)
    config_hash: str = ""

    def is_bridge_qb(self, player_id: str) -> bool:
        return player_id in self.bridge_qbs

    def is_favorable_vet(self, player_id: str) -> bool:
        return player_id in self.favorable_vets

    def suppresses_warnings(self, team_id: str) -> bool:
        return team_id in self.no_warning_teams

    def override_for(self, team_id: str) -> Optional[str]:
        return self.overrides.get(team_id)


def _string_list(raw, prefix: str) -> FrozenSet[str]:
    if raw is None:
        return frozenset()
    if not isinstance(raw, list) or not all(isinstance(v, str) for v in raw):
        raise ScoringConfigError(f"{prefix} must be a list of strings")
    return frozenset(raw)


def build_ruleset(raw: Dict) -> AlertRuleset:
    _require_keys(raw, {"name", "bridge_qbs", "favorable_vets", "no_warning_teams", "overrides"}, "rules")
    overrides = raw["overrides"] or {}
    if not isinstance(overrides, dict):
        raise ScoringConfigError("rules.overrides must be a mapping of team id to message")
    return AlertRuleset(
        name=str(raw["name"]),
        bridge_qbs=_string_list(raw["bridge_qbs"], "rules.bridge_qbs"),
        favorable_vets=_string_list(raw["favorable_vets"], "rules.favorable_vets"),
        no_warning_teams=_string_list(raw["no_warning_teams"], "rules.no_warning_teams"),
        overrides={str(k): str(v) for k, v in overrides.items()},
        config_hash=_hash_config(raw),
    )


@lru_cache(maxsize=8)
def load_alert_rules(name: str = DEFAULT_RULES_NAME, rules_dir: Optional[Path] = None) -> AlertRuleset:
    path = Path(rules_dir or RULES_DIR) / f"{name}.yaml"
    if not path.exists():
        raise ScoringConfigError(f"rules not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    return build_ruleset(raw)


def get_default_alert_rules() -> AlertRuleset:
    return load_alert_rules(DEFAULT_RULES_NAME)

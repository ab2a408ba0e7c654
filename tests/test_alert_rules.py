import pytest
import yaml

from qb_window.models.alert_rules import RULES_DIR, AlertRuleset, build_ruleset, load_alert_rules
from qb_window.models.scoring_config import ScoringConfigError


def _raw(**overrides):
    raw = {
        "name": "test",
        "bridge_qbs": ["bridge-qb"],
        "favorable_vets": [],
        "no_warning_teams": ["PHI"],
        "overrides": {},
    }
    raw.update(overrides)
    return raw


def test_default_rules_membership():
    rules = load_alert_rules("default")
    assert rules.is_bridge_qb("justin-fields")
    assert rules.is_favorable_vet("baker-mayfield")
    assert rules.suppresses_warnings("PHI")
    assert "{player}" in rules.override_for("LAR")
    assert rules.override_for("KC") is None
    assert len(rules.config_hash) == 12


def test_empty_ruleset_matches_nothing():
    rules = AlertRuleset()
    assert not rules.is_bridge_qb("justin-fields")
    assert not rules.suppresses_warnings("PHI")
    assert rules.override_for("LAR") is None


def test_build_ruleset_accepts_null_lists():
    rules = build_ruleset(_raw(favorable_vets=None, overrides=None))
    assert rules.favorable_vets == frozenset()
    assert rules.overrides == {}


def test_build_ruleset_missing_key_raises():
    raw = _raw()
    raw.pop("bridge_qbs")
    with pytest.raises(ScoringConfigError, match="missing keys"):
        build_ruleset(raw)


def test_build_ruleset_rejects_non_list():
    with pytest.raises(ScoringConfigError, match="list of strings"):
        build_ruleset(_raw(bridge_qbs="aaron-rodgers"))


def test_load_rules_from_custom_dir(tmp_path):
    (tmp_path / "custom.yaml").write_text(yaml.safe_dump(_raw(name="custom")), encoding="utf-8")
    rules = load_alert_rules("custom", tmp_path)
    assert rules.name == "custom"
    assert rules.is_bridge_qb("bridge-qb")


def test_load_missing_rules_raises(tmp_path):
    with pytest.raises(ScoringConfigError):
        load_alert_rules("nope", tmp_path)


def test_default_rules_ship_inside_package(tmp_path, monkeypatch):
    assert RULES_DIR.parts[-3:] == ("qb_window", "config_data", "rules")
    monkeypatch.chdir(tmp_path)
    load_alert_rules.cache_clear()
    assert load_alert_rules("default").is_bridge_qb("aaron-rodgers")

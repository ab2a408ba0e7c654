"""
Scoring configuration loader and validator.
"""

from __future__ import annotations

import hashlib
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


CONFIG_DIR = Path(__file__).resolve().parents[1] / "config_data" / "scoring"
DEFAULT_CONFIG_NAME = "default"

ZONE_ORDER = ["ELITE", "FAVORABLE", "CAUTION", "DANGER", "CLOSED"]
STATUS_ORDER = ["wide_open", "open", "closing", "soft_closed", "hard_closed"]


class ScoringConfigError(ValueError):
    pass


def _require_keys(obj: Dict[str, Any], keys: set, prefix: str) -> None:
    if not isinstance(obj, dict):
        raise ScoringConfigError(f"{prefix} must be a mapping")
    missing = [k for k in keys if k not in obj]
    extra = [k for k in obj.keys() if k not in keys]
    if missing:
        raise ScoringConfigError(f"{prefix} missing keys: {missing}")
    if extra:
        raise ScoringConfigError(f"{prefix} unknown keys: {extra}")


def _require_weights(weights: Dict[str, Any], keys: set, prefix: str) -> None:
    _require_keys(weights, keys, prefix)
    if round(sum(float(v) for v in weights.values()), 6) != 1.0:
        raise ScoringConfigError(f"{prefix} must sum to 1.0")


def _require_monotonic(pairs, prefix: str, descending: bool) -> None:
    bounds = [float(p[0]) for p in pairs]
    ordered = sorted(bounds, reverse=descending)
    if bounds != ordered or len(set(bounds)) != len(bounds):
        direction = "descending" if descending else "ascending"
        raise ScoringConfigError(f"{prefix} bounds must be strictly {direction}")


def _validate_bands(bands, bound_key: str, name_key: str, order, prefix: str, descending: bool) -> None:
    if not isinstance(bands, list) or not bands:
        raise ScoringConfigError(f"{prefix} must be a non-empty list")
    names = [b.get(name_key) for b in bands]
    if names != order:
        raise ScoringConfigError(f"{prefix} must list {order} in order, got {names}")
    if bands[-1].get(bound_key) is not None:
        raise ScoringConfigError(f"{prefix} last band must be open-ended ({bound_key}: null)")
    _require_monotonic([[b[bound_key]] for b in bands[:-1]], prefix, descending)


def _validate_config(config: Dict[str, Any]) -> None:
    _require_keys(
        config,
        {"name", "zones", "status_bands", "overall_score", "performance_value", "quality_score", "market_value"},
        "root",
    )

    for band in config["zones"]:
        _require_keys(band, {"upper", "zone", "color", "label", "description", "historical_win_rate"}, "zones[]")
    _validate_bands(config["zones"], "upper", "zone", ZONE_ORDER, "zones", descending=False)

    for band in config["status_bands"]:
        _require_keys(band, {"min", "status", "color", "label"}, "status_bands[]")
    _validate_bands(config["status_bands"], "min", "status", STATUS_ORDER, "status_bands", descending=True)

    overall = config["overall_score"]
    _require_keys(overall, {"team_success", "cap_hit", "coach", "window_length", "qb_production"}, "overall_score")
    _require_keys(
        overall["team_success"],
        {
            "win_bands", "win_floor", "made_playoffs", "per_playoff_win", "conf_championship",
            "super_bowl_appearance", "super_bowl_win", "max", "default",
        },
        "overall_score.team_success",
    )
    _require_monotonic(overall["team_success"]["win_bands"], "overall_score.team_success.win_bands", descending=True)
    _require_keys(overall["cap_hit"], {"bands", "floor"}, "overall_score.cap_hit")
    _require_monotonic(overall["cap_hit"]["bands"], "overall_score.cap_hit.bands", descending=False)
    _require_keys(overall["coach"], {"max", "default"}, "overall_score.coach")
    _require_keys(overall["window_length"], {"bands", "floor"}, "overall_score.window_length")
    _require_monotonic(overall["window_length"]["bands"], "overall_score.window_length.bands", descending=True)
    _require_keys(overall["qb_production"], {"max", "default"}, "overall_score.qb_production")

    perf = config["performance_value"]
    _require_keys(perf, {"ranges", "playoff_win_points", "weights", "dollar_range"}, "performance_value")
    _require_keys(perf["ranges"], {"epa_per_play", "cpoe", "qbr", "wins"}, "performance_value.ranges")
    for key, (low, high) in perf["ranges"].items():
        if float(high) <= float(low):
            raise ScoringConfigError(f"performance_value.ranges.{key} ceiling must exceed floor")
    _require_weights(
        perf["weights"], {"epa_per_play", "cpoe", "qbr", "wins", "playoffs"}, "performance_value.weights"
    )

    quality = config["quality_score"]
    _require_keys(quality, {"unproven", "scales", "weights"}, "quality_score")
    _require_keys(quality["scales"], {"epa_per_play", "cpoe", "qbr", "pff_grade"}, "quality_score.scales")
    _require_weights(quality["weights"], {"epa_per_play", "cpoe", "qbr", "pff_grade"}, "quality_score.weights")

    market = config["market_value"]
    _require_keys(
        market, {"grade_tiers", "below_average_factor", "unknown_position_value", "benchmarks"}, "market_value"
    )
    _require_monotonic(market["grade_tiers"], "market_value.grade_tiers", descending=True)
    for position, tiers in market["benchmarks"].items():
        _require_keys(tiers, {"elite", "good", "average"}, f"market_value.benchmarks.{position}")


def _hash_config(config: Dict[str, Any]) -> str:
    content = yaml.safe_dump(config, sort_keys=True).encode("utf-8")
    return hashlib.sha256(content).hexdigest()[:12]


@lru_cache(maxsize=8)
def load_scoring_config(name: str = DEFAULT_CONFIG_NAME, config_dir: Optional[Path] = None) -> Dict[str, Any]:
    path = Path(config_dir or CONFIG_DIR) / f"{name}.yaml"
    if not path.exists():
        raise ScoringConfigError(f"config not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    _validate_config(config)
    config["meta"] = {
        "name": config["name"],
        "hash": _hash_config(config),
        "path": str(path),
    }
    return config


def get_default_scoring_config() -> Dict[str, Any]:
    return load_scoring_config(DEFAULT_CONFIG_NAME)

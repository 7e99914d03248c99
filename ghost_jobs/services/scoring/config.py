from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml


LOGGER = logging.getLogger(__name__)


def _defaults() -> dict[str, Any]:
    return {
        "base": 20,
        "status": {"ok": 15, "not_ok": -15},
        "word_count": {
            "thin_below": 300,
            "thin": -10,
            "solid_below": 800,
            "solid": 10,
            "rich_below": 2000,
            "rich": 18,
            "bloated": -5,
        },
        "evergreen": {
            "phrases": [
                "always looking",
                "talent community",
                "may be filled at any time",
                "join our network",
                "future opportunities",
            ],
            "penalty": -8,
        },
        "call_to_action": {
            "terms": ["apply", "application"],
            "present": 8,
            "absent": -12,
        },
        "hiring_phrases": [
            "urgently hiring",
            "actively hiring",
            "hiring now",
            "hiring multiple candidates",
        ],
        "outbound_apply": {
            "phrases": [
                "apply on company site",
                "apply on employer site",
                "apply now",
                "external job",
                'rel="nofollow',
            ],
            "bonus": 8,
        },
        "freshness": {
            "fresh_days": 45,
            "aging_days": 90,
            "fresh": 6,
            "aging": 0,
            "stale": -10,
        },
        "entropy": {"range": 11, "aggregator_range": 17},
        "variation": {"range": 7},
        "clamp": {"min": 5, "max": 95},
        "aggregator": {"floor": 18, "ceiling": 72},
        "degraded_score": 30,
        "signals": {"stale_below": 40, "weak_below_words": 400},
    }


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as fp:
            loaded = yaml.safe_load(fp) or {}
    except (OSError, yaml.YAMLError) as exc:
        LOGGER.warning("Ignoring unreadable scoring config %s: %s", path, exc)
        return {}
    if not isinstance(loaded, dict):
        LOGGER.warning("Ignoring scoring config %s: expected a mapping", path)
        return {}
    return loaded


@lru_cache()
def get_scoring_config(path: str | None = None) -> dict[str, Any]:
    """Return the weight and phrase tables, merged with an optional YAML override."""
    defaults = _defaults()
    if not path:
        return defaults

    config_path = Path(path)
    if not config_path.exists():
        LOGGER.warning("Scoring config %s not found; using defaults", config_path)
        return defaults
    return _deep_merge(defaults, _load_yaml(config_path))

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from ghost_jobs.services.detection.boards import (
    BoardProfile,
    description_structure_delta,
    has_outbound_apply_link,
)
from ghost_jobs.services.detection.job_id import first_digit_run

from .hashing import entropy_term, variation_term


@dataclass(slots=True)
class PageEvidence:
    """Everything the composer needs about a fetched posting."""

    url: str
    hostname: str
    path: str
    status: int | None
    lower_markup: str
    lower_text: str
    word_count: int
    profile: BoardProfile
    canonical_job_id: str | None = None
    age_days: int | None = None


@dataclass(slots=True)
class ScoreResult:
    score: int
    features: Dict[str, int] = field(default_factory=dict)


def clamp_score(value: int, minimum: int = 5, maximum: int = 95) -> int:
    return max(minimum, min(int(value), maximum))


def status_delta(status: int | None, cfg: dict[str, Any]) -> int:
    return int(cfg["status"]["ok"] if status == 200 else cfg["status"]["not_ok"])


def word_count_delta(word_count: int, cfg: dict[str, Any], *, waive_thin: bool = False) -> int:
    buckets = cfg["word_count"]
    if word_count < buckets["thin_below"]:
        return 0 if waive_thin else int(buckets["thin"])
    if word_count < buckets["solid_below"]:
        return int(buckets["solid"])
    if word_count < buckets["rich_below"]:
        return int(buckets["rich"])
    return int(buckets["bloated"])


def evergreen_delta(lower_text: str, cfg: dict[str, Any]) -> int:
    """Cumulative penalty, once per stock phrase present."""
    hits = sum(1 for phrase in cfg["evergreen"]["phrases"] if phrase in lower_text)
    return hits * int(cfg["evergreen"]["penalty"])


def call_to_action_delta(lower_text: str, cfg: dict[str, Any]) -> int:
    cta = cfg["call_to_action"]
    if any(term in lower_text for term in cta["terms"]):
        return int(cta["present"])
    return int(cta["absent"])


def freshness_delta(age_days: int | None, cfg: dict[str, Any]) -> int:
    if age_days is None:
        return 0
    fresh = cfg["freshness"]
    if age_days <= fresh["fresh_days"]:
        return int(fresh["fresh"])
    if age_days <= fresh["aging_days"]:
        return int(fresh["aging"])
    return int(fresh["stale"])


def entropy_seed(url: str, path: str, canonical_job_id: str | None) -> str:
    digits = first_digit_run(path)
    seed = canonical_job_id or url
    return f"{seed}{digits}" if digits else seed


def score_page(evidence: PageEvidence, cfg: dict[str, Any]) -> ScoreResult:
    """Deterministic weighted sum over the page heuristics.

    Returns the clamped score together with a feature -> contribution map of the
    terms that fired.
    """
    profile = evidence.profile
    softened = profile.softened
    lower_text = evidence.lower_text

    features: dict[str, int] = {"base": int(cfg["base"])}

    features["status"] = status_delta(evidence.status, cfg)
    features["word_count"] = word_count_delta(evidence.word_count, cfg, waive_thin=softened)

    markers = profile.marker_count(evidence.lower_markup)
    features[f"structure:{profile.name}"] = description_structure_delta(profile, markers, evidence.word_count)

    # Board-specific secondary heuristics
    if profile.hiring_phrase_bonus and any(phrase in lower_text for phrase in cfg["hiring_phrases"]):
        features["hiring_phrase"] = profile.hiring_phrase_bonus
    if profile.structural_uncertainty_penalty:
        features["structural_uncertainty"] = profile.structural_uncertainty_penalty

    features["freshness"] = freshness_delta(evidence.age_days, cfg)

    if not softened:
        features["evergreen"] = evergreen_delta(lower_text, cfg)
        features["call_to_action"] = call_to_action_delta(lower_text, cfg)
    elif has_outbound_apply_link(evidence.lower_markup, cfg["outbound_apply"]["phrases"]):
        features["outbound_apply"] = int(cfg["outbound_apply"]["bonus"])

    if profile.trust_bonus:
        features["trust"] = profile.trust_bonus

    entropy_range = cfg["entropy"]["aggregator_range"] if softened else cfg["entropy"]["range"]
    seed = entropy_seed(evidence.url, evidence.path, evidence.canonical_job_id)
    features["entropy"] = entropy_term(seed, int(entropy_range))
    features["variation"] = variation_term(
        evidence.hostname,
        evidence.word_count,
        len(evidence.url),
        int(cfg["variation"]["range"]),
    )

    total = sum(features.values())
    if softened:
        total = clamp_score(total, cfg["aggregator"]["floor"], cfg["aggregator"]["ceiling"])
    final_score = clamp_score(total, cfg["clamp"]["min"], cfg["clamp"]["max"])
    return ScoreResult(score=final_score, features=features)


def score_description(lower_text: str, word_count: int, cfg: dict[str, Any]) -> ScoreResult:
    """Score pasted text: no status, board, freshness or hashing terms apply."""
    features: dict[str, int] = {
        "base": int(cfg["base"]),
        "word_count": word_count_delta(word_count, cfg),
        "evergreen": evergreen_delta(lower_text, cfg),
        "call_to_action": call_to_action_delta(lower_text, cfg),
    }
    final_score = clamp_score(sum(features.values()), cfg["clamp"]["min"], cfg["clamp"]["max"])
    return ScoreResult(score=final_score, features=features)

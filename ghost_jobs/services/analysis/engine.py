from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from ghost_jobs.core.enums import FailureKind
from ghost_jobs.services.detection.boards import classify_host
from ghost_jobs.services.detection.job_id import extract_canonical_job_id
from ghost_jobs.services.detection.posting_age import detect_posting_age
from ghost_jobs.services.fetch.base import FetchOutcome
from ghost_jobs.services.intake.validation import HostResolutionError, JobLink
from ghost_jobs.services.scoring.assembler import (
    AnalysisResult,
    DetectedFacts,
    assemble_degraded_result,
    assemble_description_result,
    assemble_page_result,
)
from ghost_jobs.services.scoring.composer import PageEvidence, score_description, score_page
from ghost_jobs.services.scoring.config import get_scoring_config
from ghost_jobs.services.sources.normalize import normalize_text


LOGGER = logging.getLogger(__name__)


def analyze_description(description: str, *, config: dict[str, Any] | None = None) -> AnalysisResult:
    """Score pasted posting text; no page facts can be detected on this path."""
    cfg = config or get_scoring_config()
    text = normalize_text(description)
    result = score_description(text.lower_text, text.word_count, cfg)
    LOGGER.debug("Description scored %s from %s", result.score, result.features)
    return assemble_description_result(score=result.score, word_count=text.word_count, cfg=cfg)


def analyze_page(
    link: JobLink,
    outcome: FetchOutcome,
    *,
    config: dict[str, Any] | None = None,
    now: datetime | None = None,
) -> AnalysisResult:
    """Turn a fetch outcome for ``link`` into a scored result.

    Raises HostResolutionError when the host did not resolve; every other
    fetch failure yields a low-confidence result instead.
    """
    cfg = config or get_scoring_config()
    hostname = link.hostname
    canonical_job_id = extract_canonical_job_id(link.parts)

    if outcome.failure_kind is FailureKind.DNS_FAILURE:
        raise HostResolutionError(hostname)

    if outcome.failure_kind in (FailureKind.TIMEOUT, FailureKind.BLOCKED, FailureKind.OTHER):
        LOGGER.info("Degraded analysis for %s (%s)", hostname, outcome.failure_kind)
        return assemble_degraded_result(
            detected=DetectedFacts(employer_source=hostname, canonical_job_id=canonical_job_id),
            failure_kind=outcome.failure_kind,
            cfg=cfg,
        )

    now = now or datetime.now(timezone.utc)
    text = normalize_text(outcome.body)
    lower_markup = outcome.body.lower()
    profile = classify_host(hostname)
    age = detect_posting_age(outcome.body, text.lower_text, now=now, last_modified=outcome.last_modified)

    evidence = PageEvidence(
        url=link.url,
        hostname=hostname,
        path=link.path,
        status=outcome.status,
        lower_markup=lower_markup,
        lower_text=text.lower_text,
        word_count=text.word_count,
        profile=profile,
        canonical_job_id=canonical_job_id,
        age_days=age.days if age else None,
    )
    result = score_page(evidence, cfg)
    LOGGER.debug("Scored %s as %s (board=%s) from %s", hostname, result.score, profile.name, result.features)

    return assemble_page_result(
        score=result.score,
        detected=DetectedFacts(
            posting_age=age.label if age else None,
            employer_source=hostname,
            canonical_job_id=canonical_job_id,
        ),
        word_count=text.word_count,
        status=outcome.status,
        cfg=cfg,
    )

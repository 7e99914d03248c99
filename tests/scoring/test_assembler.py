from ghost_jobs.core.enums import FailureKind
from ghost_jobs.services.scoring.assembler import (
    DESCRIPTION_DELAYS,
    URL_DELAYS,
    DetectedFacts,
    assemble_degraded_result,
    assemble_description_result,
    assemble_page_result,
)
from ghost_jobs.services.scoring.config import get_scoring_config


CFG = get_scoring_config()


def test_page_result_flags() -> None:
    detected = DetectedFacts(posting_age="Posted 2 days ago", employer_source="jobs.lever.co", canonical_job_id="abc")
    result = assemble_page_result(score=72, detected=detected, word_count=650, status=200, cfg=CFG)

    assert result.score == 72
    assert result.detected is detected
    assert result.signals.stale.result is False
    assert result.signals.stale.info == "Posted 2 days ago"
    assert result.signals.weak.result is False
    assert result.signals.inactivity.result is False
    assert result.signals.inactivity.info == "HTTP 200"
    assert (
        result.signals.stale.delay,
        result.signals.weak.delay,
        result.signals.inactivity.delay,
    ) == URL_DELAYS


def test_page_result_low_score_thin_and_inactive() -> None:
    result = assemble_page_result(
        score=39,
        detected=DetectedFacts(employer_source="example.com"),
        word_count=399,
        status=404,
        cfg=CFG,
    )
    assert result.signals.stale.result is True
    assert result.signals.stale.info == "No posting date detected"
    assert result.signals.weak.result is True
    assert result.signals.inactivity.result is True


def test_page_result_without_status_is_inactive() -> None:
    result = assemble_page_result(score=50, detected=DetectedFacts(), word_count=500, status=None, cfg=CFG)
    assert result.signals.inactivity.result is True
    assert result.signals.inactivity.info is None


def test_description_result() -> None:
    result = assemble_description_result(score=46, word_count=900, cfg=CFG)
    assert result.detected == DetectedFacts()
    assert result.detected.posting_age is None
    assert result.signals.stale.result is False
    assert result.signals.stale.info == "No posting date detected"
    assert result.signals.weak.result is False
    assert result.signals.inactivity.result is True
    assert (
        result.signals.stale.delay,
        result.signals.weak.delay,
        result.signals.inactivity.delay,
    ) == DESCRIPTION_DELAYS


def test_degraded_result() -> None:
    detected = DetectedFacts(employer_source="www.linkedin.com", canonical_job_id="3791234567")
    result = assemble_degraded_result(detected=detected, failure_kind=FailureKind.BLOCKED, cfg=CFG)

    assert result.score == 30
    assert result.detected.posting_age is None
    assert result.detected.canonical_job_id == "3791234567"
    assert result.signals.stale.result is True
    assert "blocked" in result.signals.stale.info
    assert result.signals.weak.result is True
    assert result.signals.inactivity.result is False


def test_degraded_info_per_failure() -> None:
    timeout = assemble_degraded_result(detected=DetectedFacts(), failure_kind=FailureKind.TIMEOUT, cfg=CFG)
    other = assemble_degraded_result(detected=DetectedFacts(), failure_kind=FailureKind.OTHER, cfg=CFG)
    assert "too long" in timeout.signals.stale.info
    assert "network error" in other.signals.stale.info

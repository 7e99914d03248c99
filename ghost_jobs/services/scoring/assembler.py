from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ghost_jobs.core.enums import FailureKind


# (stale, weak, inactivity) reveal delays in milliseconds, used for client-side pacing only.
URL_DELAYS = (1000, 2200, 3400)
DESCRIPTION_DELAYS = (900, 2000, 3200)

NO_DATE_INFO = "No posting date detected"
FAILURE_INFO = {
    FailureKind.TIMEOUT: "The job page took too long to respond, so no posting date could be checked.",
    FailureKind.BLOCKED: "The job site blocked automated access, so no posting date could be checked.",
    FailureKind.OTHER: "A network error prevented loading the job page, so no posting date could be checked.",
}


@dataclass(frozen=True, slots=True)
class SignalFlag:
    result: bool
    delay: int
    info: str | None = None


@dataclass(frozen=True, slots=True)
class DetectedFacts:
    posting_age: str | None = None
    employer_source: str | None = None
    canonical_job_id: str | None = None


@dataclass(frozen=True, slots=True)
class Signals:
    stale: SignalFlag
    weak: SignalFlag
    inactivity: SignalFlag


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    score: int
    detected: DetectedFacts
    signals: Signals


def _word_info(word_count: int) -> str:
    return "1 word in posting" if word_count == 1 else f"{word_count} words in posting"


def assemble_page_result(
    *,
    score: int,
    detected: DetectedFacts,
    word_count: int,
    status: int | None,
    cfg: dict[str, Any],
) -> AnalysisResult:
    stale_delay, weak_delay, inactivity_delay = URL_DELAYS
    thresholds = cfg["signals"]
    return AnalysisResult(
        score=score,
        detected=detected,
        signals=Signals(
            stale=SignalFlag(
                result=score < thresholds["stale_below"],
                delay=stale_delay,
                info=detected.posting_age or NO_DATE_INFO,
            ),
            weak=SignalFlag(
                result=word_count < thresholds["weak_below_words"],
                delay=weak_delay,
                info=_word_info(word_count),
            ),
            inactivity=SignalFlag(
                result=status != 200,
                delay=inactivity_delay,
                info=f"HTTP {status}" if status is not None else None,
            ),
        ),
    )


def assemble_description_result(*, score: int, word_count: int, cfg: dict[str, Any]) -> AnalysisResult:
    stale_delay, weak_delay, inactivity_delay = DESCRIPTION_DELAYS
    thresholds = cfg["signals"]
    return AnalysisResult(
        score=score,
        detected=DetectedFacts(),
        signals=Signals(
            stale=SignalFlag(result=score < thresholds["stale_below"], delay=stale_delay, info=NO_DATE_INFO),
            weak=SignalFlag(
                result=word_count < thresholds["weak_below_words"],
                delay=weak_delay,
                info=_word_info(word_count),
            ),
            inactivity=SignalFlag(
                result=True,
                delay=inactivity_delay,
                info="No link provided, so page activity was not checked.",
            ),
        ),
    )


def assemble_degraded_result(
    *,
    detected: DetectedFacts,
    failure_kind: FailureKind,
    cfg: dict[str, Any],
) -> AnalysisResult:
    stale_delay, weak_delay, inactivity_delay = URL_DELAYS
    score = int(cfg["degraded_score"])
    return AnalysisResult(
        score=score,
        detected=detected,
        signals=Signals(
            stale=SignalFlag(
                result=score < cfg["signals"]["stale_below"],
                delay=stale_delay,
                info=FAILURE_INFO.get(failure_kind, FAILURE_INFO[FailureKind.OTHER]),
            ),
            weak=SignalFlag(result=True, delay=weak_delay, info="Page content unavailable"),
            inactivity=SignalFlag(result=False, delay=inactivity_delay, info=None),
        ),
    )

import asyncio
from datetime import datetime, timezone

import httpx
import pytest

from ghost_jobs.core.enums import FailureKind
from ghost_jobs.services.analysis import analyze_description, analyze_page
from ghost_jobs.services.fetch.base import FetchOutcome
from ghost_jobs.services.fetch.client import PageFetcher
from ghost_jobs.services.intake import HostResolutionError, parse_link


NOW = datetime(2024, 1, 11, tzinfo=timezone.utc)


def test_greenhouse_page(load_fixture) -> None:
    link = parse_link("https://boards.greenhouse.io/testorg/jobs/12345?gh_jid=12345")
    outcome = FetchOutcome(status=200, body=load_fixture("greenhouse_job.html"))

    result = analyze_page(link, outcome, now=NOW)

    assert 5 <= result.score <= 95
    assert result.detected.posting_age == "Posted 10 days ago"
    assert result.detected.employer_source == "boards.greenhouse.io"
    assert result.detected.canonical_job_id == "12345"
    assert result.signals.stale.info == "Posted 10 days ago"
    assert result.signals.weak.result is True
    assert result.signals.inactivity.result is False


def test_inline_age_fallback(load_fixture) -> None:
    link = parse_link("https://www.indeed.com/viewjob?jk=abc123def456")
    outcome = FetchOutcome(status=200, body=load_fixture("indeed_job.html"))

    result = analyze_page(link, outcome, now=NOW)

    assert result.detected.posting_age == "Posted 5 days ago"
    assert result.detected.canonical_job_id == "abc123def456"


def test_last_modified_used_when_page_has_no_date() -> None:
    link = parse_link("https://careers.example.com/jobs/1")
    outcome = FetchOutcome(
        status=200,
        body="<html><body><p>Apply for this role.</p></body></html>",
        last_modified="Sun, 31 Dec 2023 00:00:00 GMT",
    )
    result = analyze_page(link, outcome, now=NOW)
    assert result.detected.posting_age == "Posted 11 days ago"


def test_repeated_runs_are_identical(load_fixture) -> None:
    link = parse_link("https://jobs.lever.co/testorg/5f1c2a9e-1b2c-4d5e-8f90-123456789abc")
    outcome = FetchOutcome(status=200, body=load_fixture("greenhouse_job.html"))

    first = analyze_page(link, outcome, now=NOW)
    second = analyze_page(link, outcome, now=NOW)

    assert first == second


def test_non_200_status_marks_inactivity(load_fixture) -> None:
    link = parse_link("https://boards.greenhouse.io/testorg/jobs/12345")
    ok = analyze_page(link, FetchOutcome(status=200, body=load_fixture("greenhouse_job.html")), now=NOW)
    gone = analyze_page(link, FetchOutcome(status=410, body=load_fixture("greenhouse_job.html")), now=NOW)

    assert gone.signals.inactivity.result is True
    assert gone.signals.inactivity.info == "HTTP 410"
    assert gone.score < ok.score


def test_dns_failure_raises_with_hostname() -> None:
    link = parse_link("https://this-domain-does-not-exist-zzz.invalid/job")
    outcome = FetchOutcome(failure_kind=FailureKind.DNS_FAILURE)

    with pytest.raises(HostResolutionError) as exc_info:
        analyze_page(link, outcome, now=NOW)

    assert exc_info.value.hostname == "this-domain-does-not-exist-zzz.invalid"
    assert "this-domain-does-not-exist-zzz.invalid" in str(exc_info.value)


@pytest.mark.parametrize("failure_kind", [FailureKind.TIMEOUT, FailureKind.BLOCKED, FailureKind.OTHER])
def test_fetch_failures_degrade(failure_kind: FailureKind) -> None:
    link = parse_link("https://www.linkedin.com/jobs/view/3791234567/")
    outcome = FetchOutcome(status=403 if failure_kind is FailureKind.BLOCKED else None, failure_kind=failure_kind)

    result = analyze_page(link, outcome, now=NOW)

    assert result.score == 30
    assert result.detected.posting_age is None
    assert result.detected.employer_source == "www.linkedin.com"
    assert result.detected.canonical_job_id == "3791234567"
    assert result.signals.weak.result is True
    assert result.signals.inactivity.result is False
    assert result.signals.stale.info != "No posting date detected"


def test_description_path_has_no_detected_facts(make_words) -> None:
    result = analyze_description(f"Apply today. {make_words(600)}")
    assert result.detected.posting_age is None
    assert result.detected.employer_source is None
    assert result.detected.canonical_job_id is None
    assert result.score == 20 + 10 + 8


def test_description_with_posted_phrase_still_has_no_age(make_words) -> None:
    result = analyze_description(f"Posted 2 days ago. Apply today. {make_words(100)}")
    assert result.detected.posting_age is None


def test_description_length_and_evergreen_ordering(make_words) -> None:
    short = analyze_description(f"Apply here. {make_words(48)}")
    long = analyze_description(f"Apply here. {make_words(898)}")
    assert short.score < long.score

    plain = analyze_description(f"Apply here. {make_words(400)}")
    evergreen = analyze_description(f"Apply here. Join our talent community. {make_words(400)}")
    assert evergreen.score < plain.score


def test_custom_config_is_respected(make_words) -> None:
    from ghost_jobs.services.scoring.config import get_scoring_config
    import copy

    cfg = copy.deepcopy(get_scoring_config())
    cfg["degraded_score"] = 25
    link = parse_link("https://example.com/jobs/1")
    result = analyze_page(link, FetchOutcome(failure_kind=FailureKind.TIMEOUT), config=cfg, now=NOW)
    assert result.score == 25


def test_posting_with_captcha_form_is_scored_not_degraded(test_settings, load_fixture) -> None:
    captcha_form = "<form><div class=\"g-recaptcha\" data-sitekey=\"abc\"></div></form>"
    body = load_fixture("greenhouse_job.html").replace("</body>", captcha_form + "</body>")

    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text=body)

    async def _fetch():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await PageFetcher(test_settings, client=client).fetch(
                "https://boards.greenhouse.io/testorg/jobs/12345"
            )

    outcome = asyncio.run(_fetch())
    result = analyze_page(parse_link("https://boards.greenhouse.io/testorg/jobs/12345"), outcome, now=NOW)

    assert outcome.failure_kind is FailureKind.NONE
    assert result.detected.posting_age == "Posted 10 days ago"
    assert result.signals.weak.info != "Page content unavailable"
    assert result.signals.inactivity.info == "HTTP 200"

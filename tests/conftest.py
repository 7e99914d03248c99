import sys
from pathlib import Path
from typing import Callable, Optional

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import httpx
import pytest

from ghost_jobs.config import Settings
from ghost_jobs.core.enums import FailureKind
from ghost_jobs.services.fetch.base import FetchOutcome

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def load_fixture() -> Callable[[str], str]:
    def _loader(filename: str) -> str:
        return (FIXTURES_DIR / filename).read_text(encoding="utf-8")

    return _loader


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        ENVIRONMENT="test",
        DEBUG=False,
        LOG_LEVEL="DEBUG",
        REQUEST_TIMEOUT_SECONDS=2,
        FETCH_USER_AGENT="GhostJobChecker/test",
    )


@pytest.fixture
def mock_transport_factory(load_fixture: Callable[[str], str]):
    def _factory(overrides: Optional[dict[str, httpx.Response]] = None) -> httpx.MockTransport:
        greenhouse = load_fixture("greenhouse_job.html")
        indeed = load_fixture("indeed_job.html")

        async def handler(request: httpx.Request) -> httpx.Response:
            if overrides and request.url.path in overrides:
                return overrides[request.url.path]

            if request.url.path == "/testorg/jobs/12345":
                return httpx.Response(
                    200,
                    text=greenhouse,
                    headers={
                        "Content-Type": "text/html",
                        "Last-Modified": "Mon, 01 Jan 2024 00:00:00 GMT",
                    },
                )
            if request.url.path == "/viewjob":
                return httpx.Response(200, text=indeed, headers={"Content-Type": "text/html"})
            if request.url.path == "/old-link":
                return httpx.Response(301, headers={"Location": "https://boards.greenhouse.io/testorg/jobs/12345"})
            return httpx.Response(404, text="<html><body>Not found</body></html>")

        return httpx.MockTransport(handler)

    return _factory


class StubFetcher:
    """Page source returning a canned outcome and recording requested URLs."""

    def __init__(self, outcome: FetchOutcome) -> None:
        self.outcome = outcome
        self.calls: list[str] = []

    async def fetch(self, url: str) -> FetchOutcome:
        self.calls.append(url)
        return self.outcome


@pytest.fixture
def stub_fetcher_factory() -> Callable[..., StubFetcher]:
    def _factory(
        body: str = "",
        status: Optional[int] = 200,
        failure_kind: FailureKind = FailureKind.NONE,
        last_modified: Optional[str] = None,
    ) -> StubFetcher:
        return StubFetcher(
            FetchOutcome(
                status=status,
                body=body,
                failure_kind=failure_kind,
                last_modified=last_modified,
            )
        )

    return _factory


def words(count: int, word: str = "lorem") -> str:
    return " ".join([word] * count)


@pytest.fixture
def make_words() -> Callable[..., str]:
    return words

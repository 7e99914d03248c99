from __future__ import annotations

import asyncio
import logging
import re
import socket

import httpx

from ghost_jobs.config import Settings
from ghost_jobs.core.enums import FailureKind
from ghost_jobs.services.fetch.base import FetchOutcome, PageSource
from ghost_jobs.services.sources.normalize import normalize_text


LOGGER = logging.getLogger(__name__)

BLOCKED_STATUSES = {403, 429, 999}
# Body markers only count on an interstitial: a 503, or a page with almost no text.
CHALLENGE_MARKERS = (
    "cf-chl-",
    "captcha-delivery",
    "px-captcha",
    "checking your browser",
    "are you a robot",
    "verify you are human",
)
CHALLENGE_TITLES = (
    "just a moment",
    "attention required",
    "access denied",
    "are you a robot",
    "security check",
)
TITLE_RE = re.compile(r"<title[^>]*>(.*?)</title>", re.S | re.IGNORECASE)
INTERSTITIAL_MAX_WORDS = 50
RESOLVER_ERROR_HINTS = (
    "name or service not known",
    "nodename nor servname",
    "getaddrinfo failed",
    "temporary failure in name resolution",
    "no address associated",
    "name resolution",
)
CHALLENGE_SCAN_CHARS = 20000


def is_dns_error(exc: BaseException) -> bool:
    """Walk the exception chain looking for a resolver failure."""
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, socket.gaierror):
            return True
        message = str(current).lower()
        if any(hint in message for hint in RESOLVER_ERROR_HINTS):
            return True
        current = current.__cause__ or current.__context__
    return False


def is_blocked(status: int, body: str) -> bool:
    """True for refusal statuses and bot-challenge interstitials.

    Captcha widgets and CDN scripts on an otherwise complete posting do not count.
    """
    if status in BLOCKED_STATUSES:
        return True
    head = body[:CHALLENGE_SCAN_CHARS]
    title_match = TITLE_RE.search(head)
    if title_match:
        title = title_match.group(1).strip().lower()
        if any(title.startswith(prefix) for prefix in CHALLENGE_TITLES):
            return True

    lowered = head.lower()
    if not any(marker in lowered for marker in CHALLENGE_MARKERS):
        return False
    return status == 503 or normalize_text(body).word_count < INTERSTITIAL_MAX_WORDS


class PageFetcher(PageSource):
    """Single-attempt page fetch bounded by a timeout."""

    def __init__(
        self,
        settings: Settings,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.timeout_seconds = settings.request_timeout_seconds
        self.user_agent = settings.fetch_user_agent
        # Created on first fetch so requests that never fetch open no connections.
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout_seconds),
                follow_redirects=True,
                headers={"User-Agent": self.user_agent},
            )
        return self._client

    async def __aenter__(self) -> "PageFetcher":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch(self, url: str) -> FetchOutcome:
        try:
            response = await asyncio.wait_for(
                self._get_client().get(url, follow_redirects=True),
                timeout=self.timeout_seconds,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            LOGGER.info("Fetch timed out after %.1fs: %s", self.timeout_seconds, url)
            return FetchOutcome(failure_kind=FailureKind.TIMEOUT)
        except httpx.ConnectError as exc:
            if is_dns_error(exc):
                LOGGER.info("Host did not resolve for %s: %s", url, exc)
                return FetchOutcome(failure_kind=FailureKind.DNS_FAILURE)
            LOGGER.warning("Connection failed for %s: %s", url, exc)
            return FetchOutcome(failure_kind=FailureKind.OTHER)
        except httpx.HTTPError as exc:
            LOGGER.warning("Fetch failed for %s: %s", url, exc)
            return FetchOutcome(failure_kind=FailureKind.OTHER)

        body = response.text
        failure_kind = FailureKind.NONE
        if is_blocked(response.status_code, body):
            LOGGER.info("Fetch of %s looks blocked (HTTP %s)", url, response.status_code)
            failure_kind = FailureKind.BLOCKED

        return FetchOutcome(
            status=response.status_code,
            body=body,
            failure_kind=failure_kind,
            last_modified=response.headers.get("last-modified"),
            final_url=str(response.url),
        )

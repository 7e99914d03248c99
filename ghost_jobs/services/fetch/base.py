from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from ghost_jobs.core.enums import FailureKind


@dataclass(frozen=True, slots=True)
class FetchOutcome:
    """Result of a single page fetch; ``failure_kind`` is NONE when a response arrived."""

    status: int | None = None
    body: str = ""
    failure_kind: FailureKind = FailureKind.NONE
    last_modified: str | None = None
    final_url: str | None = None

    @property
    def ok(self) -> bool:
        return self.failure_kind is FailureKind.NONE


class PageSource(Protocol):
    """Anything able to fetch a posting page."""

    async def fetch(self, url: str) -> FetchOutcome:
        """Fetch ``url`` once, classifying failures instead of raising."""

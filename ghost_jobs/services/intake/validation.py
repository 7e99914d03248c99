from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import SplitResult, urlsplit

from ghost_jobs.core.enums import InputKind


ALLOWED_SCHEMES = {"http", "https"}

MISSING_INPUT_MESSAGE = "Provide a job link or a job description."
INVALID_LINK_MESSAGE = "This is not a valid link. Paste the full job URL, starting with https://"


class AnalysisError(ValueError):
    """Base class for request problems reported back to the caller."""

    status_code = 400


class InputValidationError(AnalysisError):
    """Raised when the request payload cannot be analysed."""


class HostResolutionError(AnalysisError):
    """Raised when the posting's host name does not resolve."""

    def __init__(self, hostname: str) -> None:
        self.hostname = hostname
        super().__init__(
            f"Could not reach {hostname}. Check the link for typos or make sure the site is online."
        )


@dataclass(frozen=True, slots=True)
class JobLink:
    url: str
    parts: SplitResult

    @property
    def hostname(self) -> str:
        return self.parts.hostname or ""

    @property
    def path(self) -> str:
        return self.parts.path


@dataclass(frozen=True, slots=True)
class AnalysisInput:
    link: JobLink | None = None
    description: str | None = None

    @property
    def kind(self) -> InputKind:
        return InputKind.URL if self.link is not None else InputKind.DESCRIPTION


def _clean(value: object) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()


def parse_link(raw_url: str) -> JobLink:
    try:
        parts = urlsplit(raw_url)
        # Accessing the port validates it; urlsplit alone does not.
        parts.port
    except ValueError as exc:
        raise InputValidationError(INVALID_LINK_MESSAGE) from exc

    scheme = parts.scheme.lower()
    if not scheme or not parts.netloc:
        raise InputValidationError(INVALID_LINK_MESSAGE)
    if scheme not in ALLOWED_SCHEMES:
        raise InputValidationError(
            f"Unsupported protocol \"{scheme}\". Only http:// and https:// links are supported."
        )
    if not parts.hostname:
        raise InputValidationError(INVALID_LINK_MESSAGE)
    return JobLink(url=raw_url, parts=parts)


def normalize_input(url: object = None, description: object = None) -> AnalysisInput:
    """Trim both candidate fields and pick the analysis path.

    A non-empty URL always wins over a description.
    """
    cleaned_url = _clean(url)
    cleaned_description = _clean(description)

    if cleaned_url:
        return AnalysisInput(link=parse_link(cleaned_url))
    if cleaned_description:
        return AnalysisInput(description=cleaned_description)
    raise InputValidationError(MISSING_INPUT_MESSAGE)

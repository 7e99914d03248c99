from __future__ import annotations

import html
import json
import logging
import math
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, Iterator

from dateutil import parser as date_parser

from ghost_jobs.core.enums import AgeSource


LOGGER = logging.getLogger(__name__)

LD_JSON_RE = re.compile(
    r"<script[^>]+type\s*=\s*[\"']application/ld\+json[\"'][^>]*>(.*?)</script>",
    re.S | re.IGNORECASE,
)
TIME_TAG_RE = re.compile(
    r"<time\b[^>]*\bdatetime\s*=\s*[\"']([^\"']+)[\"'][^>]*>",
    re.IGNORECASE,
)
META_TAG_RE = re.compile(r"<meta\b[^>]*>", re.IGNORECASE)
ATTRIBUTE_RE = re.compile(r"([\w:.\-]+)\s*=\s*(?:\"([^\"]*)\"|'([^']*)')")
LOOSE_DATE_RE = re.compile(
    r"[\"']?(?:date_?posted|posted_?date|date-posted|posted-date)[\"']?\s*[:=]\s*[\"']?"
    r"(\d{4}-\d{2}-\d{2}(?:[T ][0-9:.]+(?:Z|[+-]\d{2}:?\d{2})?)?)",
    re.IGNORECASE,
)

STRUCTURED_DATE_KEYS = ("datePosted", "dateCreated")
META_DATE_KEYS = {
    "article:published_time",
    "article:modified_time",
    "og:article:published_time",
    "og:published_time",
    "date",
    "pubdate",
    "publishdate",
    "publish_date",
    "publish-date",
    "dateposted",
    "datecreated",
    "datepublished",
    "datemodified",
}
META_HINT_RE = re.compile(r"publish|posted|modified|date|created")
TIME_CONTEXT_WINDOW = 250
FUTURE_TOLERANCE = timedelta(hours=6)

_UNIT = r"(hour|hr|day|week)s?"
INLINE_TODAY_PHRASES = ("just posted", "posted today")
INLINE_YESTERDAY_RE = re.compile(r"posted\s+yesterday")
INLINE_BOARD_RE = re.compile(
    r"(?:re)?posted\s*[·•|:\-–—,]+\s*(\d+)\+?\s*" + _UNIT + r"\s+ago"
)
INLINE_GENERIC_RE = re.compile(r"posted\s*(?:on\s*)?[:\-–]?\s*(\d+)\+?\s*" + _UNIT + r"\s+ago")
INLINE_BARE_RE = re.compile(r"\b(\d+)\+?\s*" + _UNIT + r"\s+ago")

PARTIAL_DATE_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))

STRPTIME_PATTERNS = (
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%Y/%m/%d",
)


@dataclass(frozen=True, slots=True)
class PostingAge:
    posted_at: datetime
    label: str
    source: AgeSource
    days: int


def parse_date(value: Any) -> datetime | None:
    """Parse a metadata date value; naive results are assumed to be UTC."""
    if not isinstance(value, str) or not value.strip():
        return None
    value = value.strip()

    parsed: datetime | None = None
    for candidate in (value, value.replace("Z", "+00:00")):
        try:
            parsed = datetime.fromisoformat(candidate)
            break
        except ValueError:
            continue

    if parsed is None:
        for pattern in STRPTIME_PATTERNS:
            try:
                parsed = datetime.strptime(value, pattern)
                break
            except ValueError:
                continue

    if parsed is None:
        try:
            parsed = date_parser.parse(value, default=PARTIAL_DATE_DEFAULTS[0])
            alternate = date_parser.parse(value, default=PARTIAL_DATE_DEFAULTS[1])
        except (ValueError, OverflowError) as exc:
            LOGGER.debug("Unparseable date %r: %s", value, exc)
            return None
        # A missing day falls back to the first of the month; a missing year or month is rejected.
        if (parsed.year, parsed.month) != (alternate.year, alternate.month):
            LOGGER.debug("Ignoring partial date %r", value)
            return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_age(posted_at: datetime, now: datetime) -> str | None:
    """Render a posting date relative to ``now``.

    Dates more than six hours ahead of ``now`` are rejected.
    """
    delta = now - posted_at
    if delta < -FUTURE_TOLERANCE:
        return None

    seconds = delta.total_seconds()
    days = math.floor(seconds / 86400)
    hours = math.floor(seconds / 3600)

    if days <= 0 and hours <= 0:
        return "Posted today"
    if days <= 0:
        return "Posted 1 hour ago" if hours == 1 else f"Posted {hours} hours ago"
    if days == 1:
        return "Posted 1 day ago"
    return f"Posted {days} days ago"


def _build_age(posted_at: datetime, now: datetime, source: AgeSource) -> PostingAge | None:
    label = format_age(posted_at, now)
    if label is None:
        LOGGER.debug("Discarding future %s date %s", source, posted_at.isoformat())
        return None
    days = max(0, math.floor((now - posted_at).total_seconds() / 86400))
    return PostingAge(posted_at=posted_at, label=label, source=source, days=days)


def _resolve(candidates: Iterable[str], now: datetime, source: AgeSource) -> PostingAge | None:
    """The first parseable candidate decides the tier."""
    for raw in candidates:
        parsed = parse_date(raw)
        if parsed is not None:
            return _build_age(parsed, now, source)
    return None


# Tier 1: structured job-posting metadata ------------------------------------ #


def _is_job_posting(node: dict[str, Any]) -> bool:
    marker = node.get("@type")
    if isinstance(marker, str):
        return marker.lower() == "jobposting"
    if isinstance(marker, list):
        return any(isinstance(item, str) and item.lower() == "jobposting" for item in marker)
    return False


def _walk_dates(node: Any) -> Iterator[tuple[str, bool]]:
    if isinstance(node, dict):
        for key in STRUCTURED_DATE_KEYS:
            value = node.get(key)
            if isinstance(value, str) and value.strip():
                yield value, _is_job_posting(node)
                break
        for value in node.values():
            yield from _walk_dates(value)
    elif isinstance(node, list):
        for item in node:
            yield from _walk_dates(item)


def structured_data_candidates(markup: str) -> list[str]:
    matches: list[tuple[str, bool]] = []
    for block in LD_JSON_RE.finditer(markup):
        raw = block.group(1).strip()
        if not raw:
            continue
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            try:
                data = json.loads(html.unescape(raw))
            except json.JSONDecodeError as exc:
                LOGGER.debug("Skipping malformed structured-data block: %s", exc)
                continue
        matches.extend(_walk_dates(data))

    preferred = [value for value, is_posting in matches if is_posting]
    others = [value for value, is_posting in matches if not is_posting]
    return preferred + others


# Tier 2: <time> and <meta> tags, loose key/value text ----------------------- #


def _attributes(tag: str) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for name, double_quoted, single_quoted in ATTRIBUTE_RE.findall(tag):
        attrs[name.lower()] = double_quoted if double_quoted else single_quoted
    return attrs


def _is_date_meta_key(key: str) -> bool:
    return key in META_DATE_KEYS or key.startswith("dc.date") or key.startswith("dcterms.")


def meta_candidates(markup: str) -> list[str]:
    candidates: list[str] = []
    lowered = markup.lower()

    for match in TIME_TAG_RE.finditer(markup):
        start = max(0, match.start() - TIME_CONTEXT_WINDOW)
        window = lowered[start : match.end() + TIME_CONTEXT_WINDOW]
        if "posted" in window:
            candidates.append(match.group(1))

    for match in META_TAG_RE.finditer(markup):
        tag = match.group(0)
        attrs = _attributes(tag)
        content = attrs.get("content")
        if not content:
            continue
        keys = [attrs.get(name, "").lower() for name in ("property", "name", "itemprop")]
        if any(key and _is_date_meta_key(key) for key in keys) and META_HINT_RE.search(tag.lower()):
            candidates.append(content)

    candidates.extend(match.group(1) for match in LOOSE_DATE_RE.finditer(markup))
    return candidates


# Tier 3: relative phrases in visible text ----------------------------------- #


def _unit_delta(amount: int, unit: str) -> timedelta:
    if unit.startswith("h"):
        return timedelta(hours=amount)
    if unit.startswith("w"):
        return timedelta(weeks=amount)
    return timedelta(days=amount)


def inline_text_delta(lower_text: str) -> timedelta | None:
    for phrase in INLINE_TODAY_PHRASES:
        if phrase in lower_text:
            return timedelta(0)
    if INLINE_YESTERDAY_RE.search(lower_text):
        return timedelta(days=1)
    for pattern in (INLINE_BOARD_RE, INLINE_GENERIC_RE, INLINE_BARE_RE):
        match = pattern.search(lower_text)
        if match:
            return _unit_delta(int(match.group(1)), match.group(2))
    return None


def detect_posting_age(
    markup: str,
    lower_text: str,
    *,
    now: datetime,
    last_modified: str | None = None,
) -> PostingAge | None:
    """Run the detection tiers in order; each runs only if the previous found nothing."""
    age = _resolve(structured_data_candidates(markup), now, AgeSource.STRUCTURED_DATA)
    if age is not None:
        return age

    age = _resolve(meta_candidates(markup), now, AgeSource.META)
    if age is not None:
        return age

    delta = inline_text_delta(lower_text)
    if delta is not None:
        age = _build_age(now - delta, now, AgeSource.INLINE_TEXT)
        if age is not None:
            return age

    if last_modified:
        return _resolve([last_modified], now, AgeSource.LAST_MODIFIED)
    return None

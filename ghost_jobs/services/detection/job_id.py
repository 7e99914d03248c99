from __future__ import annotations

import re
from urllib.parse import SplitResult, parse_qsl


# Checked in order; keys are compared case-insensitively.
JOB_ID_QUERY_KEYS = (
    "gh_jid",
    "jk",
    "vjk",
    "currentjobid",
    "jobid",
    "job_id",
    "job-id",
    "jid",
    "reqid",
    "req_id",
    "requisitionid",
    "postingid",
    "posting_id",
)

SLUG_RE = re.compile(r"^[A-Za-z0-9-]{8,}$")
DIGIT_RUN_RE = re.compile(r"\d{5,}")


def _query_job_id(query: str) -> str | None:
    values: dict[str, str] = {}
    for key, value in parse_qsl(query, keep_blank_values=True):
        values.setdefault(key.lower(), value.strip())
    for key in JOB_ID_QUERY_KEYS:
        if values.get(key):
            return values[key]
    return None


def first_digit_run(path: str) -> str | None:
    """Return the first run of five or more digits in a URL path."""
    match = DIGIT_RUN_RE.search(path)
    return match.group(0) if match else None


def extract_canonical_job_id(parts: SplitResult) -> str | None:
    job_id = _query_job_id(parts.query)
    if job_id:
        return job_id

    segments = [segment for segment in parts.path.split("/") if segment]
    if segments and SLUG_RE.match(segments[-1]):
        return segments[-1]

    return first_digit_run(parts.path)

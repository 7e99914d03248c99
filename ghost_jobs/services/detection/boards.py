from __future__ import annotations

from dataclasses import dataclass

from ghost_jobs.core.enums import BoardCategory


@dataclass(frozen=True, slots=True)
class BoardProfile:
    """Detection rules and score adjustments for one job-board family."""

    name: str
    category: BoardCategory
    host_suffixes: tuple[str, ...]
    description_markers: tuple[str, ...]
    strong_word_threshold: int = 250
    moderate_word_threshold: int = 120
    strong_bonus: int = 12
    moderate_bonus: int = 6
    missing_penalty: int = -10
    trust_bonus: int = 10
    hiring_phrase_bonus: int = 0
    structural_uncertainty_penalty: int = 0
    softened: bool = False

    def matches(self, hostname: str) -> bool:
        host = hostname.lower().rstrip(".")
        return any(host == suffix or host.endswith("." + suffix) for suffix in self.host_suffixes)

    def marker_count(self, lower_markup: str) -> int:
        return sum(1 for marker in self.description_markers if marker in lower_markup)


BOARD_PROFILES: tuple[BoardProfile, ...] = (
    BoardProfile(
        name="greenhouse",
        category=BoardCategory.ATS,
        host_suffixes=("greenhouse.io",),
        description_markers=(
            'id="content"',
            "job__description",
            'id="app_body"',
            "job-post",
            "application--form",
            'id="application"',
        ),
    ),
    BoardProfile(
        name="lever",
        category=BoardCategory.ATS,
        host_suffixes=("lever.co",),
        description_markers=(
            "posting-page",
            "posting-headline",
            "section-wrapper",
            "posting-categories",
            'data-qa="job-description"',
        ),
    ),
    BoardProfile(
        name="workday",
        category=BoardCategory.ATS,
        host_suffixes=("myworkdayjobs.com", "myworkdaysite.com", "workday.com"),
        description_markers=(
            'data-automation-id="jobpostingdescription"',
            'data-automation-id="jobpostingheader"',
            "jobpostingdescription",
            "wd-popup",
        ),
        # Workday renders most content client-side, so fetched pages are short.
        strong_word_threshold=150,
        moderate_word_threshold=60,
        structural_uncertainty_penalty=-4,
    ),
    BoardProfile(
        name="ashby",
        category=BoardCategory.ATS,
        host_suffixes=("ashbyhq.com",),
        description_markers=(
            "ashby-job-posting",
            "_descriptiontext",
            "__appdata",
            "jobposting",
        ),
        strong_word_threshold=150,
        moderate_word_threshold=60,
    ),
    BoardProfile(
        name="smartrecruiters",
        category=BoardCategory.ATS,
        host_suffixes=("smartrecruiters.com",),
        description_markers=(
            "job-sections",
            "jobad",
            'itemprop="description"',
            "job-description",
        ),
    ),
    BoardProfile(
        name="icims",
        category=BoardCategory.ATS,
        host_suffixes=("icims.com",),
        description_markers=(
            "icims_jobcontent",
            "icims_infomsg_job",
            "icims_expandable_text",
            "iframe_content",
        ),
        structural_uncertainty_penalty=-4,
    ),
    BoardProfile(
        name="linkedin",
        category=BoardCategory.JOB_BOARD,
        host_suffixes=("linkedin.com",),
        description_markers=(
            "show-more-less-html",
            "description__text",
            "jobs-description",
            "top-card-layout",
        ),
        hiring_phrase_bonus=5,
        structural_uncertainty_penalty=-6,
    ),
    BoardProfile(
        name="indeed",
        category=BoardCategory.JOB_BOARD,
        host_suffixes=("indeed.com", "indeed.co.uk", "indeed.ca", "indeed.com.au"),
        description_markers=(
            "jobsearch-jobdescriptiontext",
            "jobdescriptiontext",
            "jobsearch-viewjobpage",
            "jobsearch-jobinfoheader",
        ),
        hiring_phrase_bonus=5,
        structural_uncertainty_penalty=-6,
    ),
    BoardProfile(
        name="glassdoor",
        category=BoardCategory.JOB_BOARD,
        host_suffixes=("glassdoor.com", "glassdoor.co.uk", "glassdoor.ca"),
        description_markers=(
            "jobdescriptioncontent",
            "jobdetails",
            "jobviewmaincontent",
        ),
        structural_uncertainty_penalty=-4,
    ),
    BoardProfile(
        name="aggregator",
        category=BoardCategory.AGGREGATOR,
        host_suffixes=(
            "ziprecruiter.com",
            "simplyhired.com",
            "talent.com",
            "jooble.org",
            "adzuna.com",
            "adzuna.co.uk",
            "careerjet.com",
        ),
        description_markers=(
            "job_description",
            "jobdescription",
            "job-body",
            "job_details",
        ),
        strong_word_threshold=200,
        moderate_word_threshold=80,
        strong_bonus=8,
        moderate_bonus=4,
        missing_penalty=-4,
        trust_bonus=6,
        softened=True,
    ),
)

UNKNOWN_BOARD = BoardProfile(
    name="unknown",
    category=BoardCategory.UNKNOWN,
    host_suffixes=(),
    description_markers=(
        "job description",
        "responsibilities",
        "qualifications",
        "requirements",
        "about the role",
        "what you'll do",
    ),
    strong_bonus=8,
    moderate_bonus=4,
    missing_penalty=-6,
    trust_bonus=0,
)


def classify_host(hostname: str, profiles: tuple[BoardProfile, ...] = BOARD_PROFILES) -> BoardProfile:
    """Return the first profile matching ``hostname``, else the unknown-board default."""
    for profile in profiles:
        if profile.matches(hostname):
            return profile
    return UNKNOWN_BOARD


def description_structure_delta(profile: BoardProfile, marker_count: int, word_count: int) -> int:
    if marker_count >= 2 and word_count > profile.strong_word_threshold:
        return profile.strong_bonus
    if marker_count >= 1 and word_count > profile.moderate_word_threshold:
        return profile.moderate_bonus
    if profile.softened and marker_count >= 1:
        # Thin shells still carry the board's container; the low word count is expected.
        return 0
    return profile.missing_penalty


def has_outbound_apply_link(lower_markup: str, phrases: tuple[str, ...] | list[str]) -> bool:
    return any(phrase in lower_markup for phrase in phrases)

from .boards import BOARD_PROFILES, UNKNOWN_BOARD, BoardProfile, classify_host
from .job_id import extract_canonical_job_id
from .posting_age import PostingAge, detect_posting_age

__all__ = [
    "BOARD_PROFILES",
    "UNKNOWN_BOARD",
    "BoardProfile",
    "PostingAge",
    "classify_host",
    "detect_posting_age",
    "extract_canonical_job_id",
]

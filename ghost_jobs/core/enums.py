from enum import Enum


class StrEnum(str, Enum):
    def __str__(self) -> str:
        return str(self.value)


class FailureKind(StrEnum):
    NONE = "none"
    TIMEOUT = "timeout"
    DNS_FAILURE = "dns_failure"
    BLOCKED = "blocked"
    OTHER = "other"


class BoardCategory(StrEnum):
    ATS = "ats"
    JOB_BOARD = "job_board"
    AGGREGATOR = "aggregator"
    UNKNOWN = "unknown"


class AgeSource(StrEnum):
    STRUCTURED_DATA = "structured_data"
    META = "meta"
    INLINE_TEXT = "inline_text"
    LAST_MODIFIED = "last_modified"


class InputKind(StrEnum):
    URL = "url"
    DESCRIPTION = "description"

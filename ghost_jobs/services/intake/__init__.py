from .validation import (
    AnalysisError,
    AnalysisInput,
    HostResolutionError,
    InputValidationError,
    JobLink,
    normalize_input,
    parse_link,
)

__all__ = [
    "AnalysisError",
    "AnalysisInput",
    "HostResolutionError",
    "InputValidationError",
    "JobLink",
    "normalize_input",
    "parse_link",
]

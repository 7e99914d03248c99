from .assembler import AnalysisResult, DetectedFacts, SignalFlag, Signals
from .composer import PageEvidence, ScoreResult, score_description, score_page
from .config import get_scoring_config
from .hashing import HASH_VERSION, stable_hash

__all__ = [
    "AnalysisResult",
    "DetectedFacts",
    "HASH_VERSION",
    "PageEvidence",
    "ScoreResult",
    "SignalFlag",
    "Signals",
    "get_scoring_config",
    "score_description",
    "score_page",
    "stable_hash",
]

from .base import FetchOutcome, PageSource
from .client import PageFetcher

__all__ = ["FetchOutcome", "PageFetcher", "PageSource"]

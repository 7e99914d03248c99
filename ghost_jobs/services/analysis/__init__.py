from .engine import analyze_description, analyze_page

__all__ = ["analyze_description", "analyze_page"]

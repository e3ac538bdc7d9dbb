"""News data source implementations."""

from .base_news_source import BaseNewsSource
from .html_page_source import HtmlPageNewsSource, extract_candidates
from .models import (
    CandidateArticle,
    NewsAnalysis,
    RawCandidate,
    ScoredNewsItem,
    SentimentLabel,
    SentimentProfile,
)

__all__ = [
    "CandidateArticle",
    "NewsAnalysis",
    "RawCandidate",
    "ScoredNewsItem",
    "SentimentLabel",
    "SentimentProfile",
    "BaseNewsSource",
    "HtmlPageNewsSource",
    "extract_candidates",
]

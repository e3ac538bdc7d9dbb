"""Configuration models for the data pipeline module."""

from typing import List

from pydantic import BaseModel, Field

DEFAULT_NEWS_SOURCES: List[str] = [
    "https://finance.yahoo.com/news/",
    "https://www.marketwatch.com/latest-news",
    "https://seekingalpha.com/news",
    "https://www.benzinga.com/news",
    "https://www.fool.com/investing/",
]

DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


class AggregatorConfig(BaseModel):
    """Configuration for per-symbol news aggregation.

    Attributes:
        sources: Source page URLs fetched for every symbol
        fetch_workers: Maximum concurrent source fetches
        fetch_timeout_seconds: Per-source fetch timeout
        max_candidates_per_source: Cap on candidates extracted from one page
        min_relevance_score: Items scoring at or below this are dropped
        max_items: Number of items kept after ranking
        max_keywords: Number of keyword themes reported
        deduplicate_titles: Drop candidates whose normalized title was already seen
    """

    sources: List[str] = Field(default_factory=lambda: list(DEFAULT_NEWS_SOURCES))
    fetch_workers: int = Field(default=10, ge=1)
    fetch_timeout_seconds: float = Field(default=10.0, gt=0)
    max_candidates_per_source: int = Field(default=50, ge=1)
    min_relevance_score: float = 0.3
    max_items: int = Field(default=20, ge=0)
    max_keywords: int = Field(default=10, ge=0)
    deduplicate_titles: bool = True
    user_agent: str = DEFAULT_USER_AGENT


class MarketDataConfig(BaseModel):
    """Market data source configuration.

    Attributes:
        base_url: Chart endpoint; the symbol is appended to it
        timeout_seconds: Request timeout
    """

    base_url: str = "https://query1.finance.yahoo.com/v8/finance/chart/"
    timeout_seconds: float = Field(default=10.0, gt=0)
    user_agent: str = DEFAULT_USER_AGENT

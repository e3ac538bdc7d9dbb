"""Shared fixtures for stock advisor tests."""

from datetime import datetime
from typing import Dict, List, Sequence, Union

import pytest

from stock_advisor.data_pipeline.sources.news.base_news_source import BaseNewsSource
from stock_advisor.data_pipeline.sources.news.models import (
    CandidateArticle,
    NewsAnalysis,
    RawCandidate,
    ScoredNewsItem,
    SentimentLabel,
    SentimentProfile,
)
from stock_advisor.models.recommendation import Recommendation, RecommendationType


class StaticNewsSource(BaseNewsSource):
    """In-memory news source keyed by source URL.

    A value may be a list of candidates or an exception instance to raise.
    """

    def __init__(self, pages: Dict[str, Union[Sequence[RawCandidate], Exception]]):
        self.pages = pages
        self.calls: List[tuple] = []

    @property
    def source_name(self) -> str:
        return "Static"

    async def fetch_candidates(self, source_url, symbol):
        self.calls.append((source_url, symbol))
        page = self.pages.get(source_url, [])
        if isinstance(page, Exception):
            raise page
        return list(page)


def make_item(
    title: str,
    body: str = "",
    relevance: float = 0.5,
    sentiment: SentimentLabel = SentimentLabel.NEUTRAL,
    source: str = "https://news.example/",
) -> ScoredNewsItem:
    return ScoredNewsItem(
        article=CandidateArticle(title=title, body=body, source=source),
        relevance_score=relevance,
        sentiment=sentiment,
    )


def make_analysis(
    symbol: str = "AAPL",
    labels: Sequence[SentimentLabel] = (),
    keywords: Sequence[str] = (),
    item_count: int = None,
) -> NewsAnalysis:
    """Build an analysis whose profile is derived from the given labels."""
    labels = list(labels)
    if item_count is not None and item_count > len(labels):
        labels += [SentimentLabel.NEUTRAL] * (item_count - len(labels))
    items = tuple(
        make_item(f"{symbol} headline {i}", sentiment=label, source=f"https://source{i % 2}.example/")
        for i, label in enumerate(labels)
    )
    return NewsAnalysis(
        symbol=symbol,
        company_name=f"{symbol} Corporation",
        items=items,
        keywords=tuple(keywords),
        sentiment=SentimentProfile.from_labels(labels),
        analyzed_at=datetime(2024, 3, 1, 21, 0, 0),
    )


def make_recommendation(
    symbol: str = "AAPL",
    recommendation: RecommendationType = RecommendationType.BUY,
    current_price: float = 100.0,
    generated_at: datetime = None,
) -> Recommendation:
    return Recommendation(
        symbol=symbol,
        company_name=f"{symbol} Corporation",
        current_price=current_price,
        previous_close=current_price * 0.98,
        target_price=current_price * 1.08,
        stop_loss=current_price * 0.92,
        recommendation=recommendation,
        reasoning="Based on recent news analysis: Positive sentiment detected in recent news. ",
        risk_level=4.0,
        key_keywords=("earnings", "growth"),
        news_sources=("https://finance.yahoo.com/news/",),
        generated_at=generated_at or datetime(2024, 3, 1, 21, 5, 0),
        analysis_date=datetime(2024, 3, 1, 21, 0, 0),
    )


@pytest.fixture
def sample_recommendations():
    return [
        make_recommendation("AAPL", RecommendationType.STRONG_BUY, 190.0),
        make_recommendation("MSFT", RecommendationType.HOLD, 410.0),
        make_recommendation("TSLA", RecommendationType.SELL, 175.0),
    ]

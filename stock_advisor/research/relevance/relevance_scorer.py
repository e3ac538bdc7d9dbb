"""Relevance scorer for news articles."""

import logging
from typing import Optional

from stock_advisor.data_pipeline.sources.news.models import CandidateArticle

from ..config import ScoringConfig

logger = logging.getLogger(__name__)


class RelevanceScorer:
    """Score news text for topical relevance to a symbol."""

    def __init__(self, config: Optional[ScoringConfig] = None):
        """Initialize relevance scorer.

        Args:
            config: Scoring configuration
        """
        self.config = config or ScoringConfig()
        self.financial_keywords = tuple(dict.fromkeys(kw.lower() for kw in self.config.financial_keywords))

    def score(self, title: str, body: str, symbol: str) -> float:
        """Score a unit of text for relevance.

        Args:
            title: Article title
            body: Article body text
            symbol: Target symbol

        Returns:
            Relevance score (0 to 1)
        """
        text = f"{title or ''} {body or ''}".lower()
        score = 0.0

        if symbol and symbol.lower() in text:
            score += self.config.symbol_match_score

        for keyword in self.financial_keywords:
            if keyword in text:
                score += self.config.keyword_match_score

        return min(score, 1.0)

    def score_article(self, article: CandidateArticle, symbol: str) -> float:
        """Score a single candidate article."""
        return self.score(article.title, article.body, symbol)

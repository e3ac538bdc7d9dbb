"""Text scoring facade: relevance, sentiment and keyword themes."""

import logging
from typing import Dict, Iterable, List, Optional

from stock_advisor.data_pipeline.sources.news.models import CandidateArticle, ScoredNewsItem, SentimentLabel

from .config import ScoringConfig
from .relevance.relevance_scorer import RelevanceScorer
from .sentiment.keyword_analyzer import KeywordSentimentAnalyzer

logger = logging.getLogger(__name__)


class TextScorer:
    """Pure scoring functions over news text.

    Holds no mutable state; one instance is shared across concurrent
    aggregation tasks.
    """

    def __init__(self, config: Optional[ScoringConfig] = None):
        """Initialize text scorer.

        Args:
            config: Lexicons and thresholds (defaults to the built-in lexicons)
        """
        self.config = config or ScoringConfig()
        self.relevance_scorer = RelevanceScorer(self.config)
        self.sentiment_analyzer = KeywordSentimentAnalyzer(self.config)
        self.important_terms = tuple(dict.fromkeys(term.lower() for term in self.config.important_terms))

    def relevance(self, title: str, body: str, symbol: str) -> float:
        """Relevance of title+body to a symbol, in [0, 1]."""
        return self.relevance_scorer.score(title, body, symbol)

    def sentiment(self, text: str) -> SentimentLabel:
        """Sentiment label for a unit of text."""
        return self.sentiment_analyzer.analyze(text)

    def score(self, article: CandidateArticle, symbol: str) -> ScoredNewsItem:
        """Score a candidate article for a symbol.

        Args:
            article: Candidate to score
            symbol: Target symbol

        Returns:
            Immutable scored item
        """
        return ScoredNewsItem(
            article=article,
            relevance_score=self.relevance_scorer.score_article(article, symbol),
            sentiment=self.sentiment_analyzer.analyze_article(article),
        )

    def extract_keywords(self, items: Iterable[ScoredNewsItem], limit: Optional[int] = None) -> List[str]:
        """Rank important terms by the number of items mentioning them.

        Args:
            items: Scored items to summarise
            limit: Maximum number of terms (defaults to config.max_keywords)

        Returns:
            Terms by descending document count, ties in first-seen order
        """
        limit = self.config.max_keywords if limit is None else limit
        counts: Dict[str, int] = {}

        for item in items:
            text = item.article.text.lower()
            for term in self.important_terms:
                if term in text:
                    counts[term] = counts.get(term, 0) + 1

        # counts preserves first-seen order; sorted is stable
        ranked = sorted(counts, key=lambda term: -counts[term])
        return ranked[:limit]

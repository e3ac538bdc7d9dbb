"""Lexicon-counting sentiment analyzer."""

from typing import Iterable, Optional, Tuple

from stock_advisor.data_pipeline.sources.news.models import SentimentLabel

from ..config import ScoringConfig
from .base_analyzer import BaseSentimentAnalyzer


def count_occurrences(text: str, term: str) -> int:
    """Count occurrences of ``term`` in ``text`` by splitting on it.

    Splitting yields the number of non-overlapping, left-to-right matches,
    the same rule for every lexicon.
    """
    if not term:
        return 0
    return len(text.split(term)) - 1


class KeywordSentimentAnalyzer(BaseSentimentAnalyzer):
    """Classify text by comparing bullish and bearish keyword counts."""

    def __init__(self, config: Optional[ScoringConfig] = None):
        """Initialize analyzer.

        Args:
            config: Scoring configuration holding the lexicons
        """
        self.config = config or ScoringConfig()
        self.bullish_terms = tuple(term.lower() for term in self.config.bullish_terms)
        self.bearish_terms = tuple(term.lower() for term in self.config.bearish_terms)
        self.ratio = self.config.sentiment_ratio

    @staticmethod
    def _count(text: str, terms: Iterable[str]) -> int:
        return sum(count_occurrences(text, term) for term in terms)

    def keyword_counts(self, text: str) -> Tuple[int, int]:
        """Return (bullish_count, bearish_count) for the text."""
        lower_text = (text or "").lower()
        return self._count(lower_text, self.bullish_terms), self._count(lower_text, self.bearish_terms)

    def analyze(self, text: str) -> SentimentLabel:
        bullish, bearish = self.keyword_counts(text)

        if bullish > bearish * self.ratio:
            return SentimentLabel.POSITIVE
        if bearish > bullish * self.ratio:
            return SentimentLabel.NEGATIVE
        return SentimentLabel.NEUTRAL

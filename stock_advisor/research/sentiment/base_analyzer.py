"""Abstract base class for sentiment analyzers."""

from abc import ABC, abstractmethod

from stock_advisor.data_pipeline.sources.news.models import CandidateArticle, SentimentLabel


class BaseSentimentAnalyzer(ABC):
    """Abstract base class for sentiment analyzers."""

    @abstractmethod
    def analyze(self, text: str) -> SentimentLabel:
        """Analyze sentiment of text.

        Args:
            text: Text to analyze

        Returns:
            SentimentLabel for the text
        """

    def analyze_article(self, article: CandidateArticle) -> SentimentLabel:
        """Analyze sentiment of a candidate article's title and body."""
        return self.analyze(article.text)

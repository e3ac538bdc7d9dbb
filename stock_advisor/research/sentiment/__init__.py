"""Sentiment analysis for financial news.

The keyword analyzer is imported from its module directly; it depends on
``research.config``, which itself reads the lexicons defined here.
"""

from .base_analyzer import BaseSentimentAnalyzer
from .financial_lexicon import BEARISH_TERMS, BULLISH_TERMS, FINANCIAL_KEYWORDS, IMPORTANT_TERMS

__all__ = [
    "BaseSentimentAnalyzer",
    "BULLISH_TERMS",
    "BEARISH_TERMS",
    "IMPORTANT_TERMS",
    "FINANCIAL_KEYWORDS",
]

"""Configuration models for research module."""

from typing import Tuple

from pydantic import BaseModel, ConfigDict

from .sentiment.financial_lexicon import BEARISH_TERMS, BULLISH_TERMS, FINANCIAL_KEYWORDS, IMPORTANT_TERMS


class ScoringConfig(BaseModel):
    """Static lexicons and thresholds used by the text scorer.

    Frozen so one instance can be shared by concurrent scoring tasks.
    """

    model_config = ConfigDict(frozen=True)

    bullish_terms: Tuple[str, ...] = BULLISH_TERMS
    bearish_terms: Tuple[str, ...] = BEARISH_TERMS
    important_terms: Tuple[str, ...] = IMPORTANT_TERMS
    financial_keywords: Tuple[str, ...] = FINANCIAL_KEYWORDS

    symbol_match_score: float = 0.5
    keyword_match_score: float = 0.1
    sentiment_ratio: float = 1.5
    max_keywords: int = 10

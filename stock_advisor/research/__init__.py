"""News research: relevance, sentiment and keyword scoring."""

from .config import ScoringConfig
from .text_scorer import TextScorer

__all__ = ["ScoringConfig", "TextScorer"]

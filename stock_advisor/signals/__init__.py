"""Recommendation generation from news analysis."""

from .config import RecommendationConfig
from .recommendation_engine import RecommendationEngine

__all__ = ["RecommendationConfig", "RecommendationEngine"]

"""Core data models."""

from .recommendation import Recommendation, RecommendationType, StoredRecommendation, price_change_pct

__all__ = ["Recommendation", "RecommendationType", "StoredRecommendation", "price_change_pct"]

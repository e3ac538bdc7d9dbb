"""Relevance scoring for news articles."""

from .relevance_scorer import RelevanceScorer

__all__ = ["RelevanceScorer"]

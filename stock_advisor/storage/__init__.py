"""Storage module for generated recommendations."""

from .base_store import BaseRecommendationStore
from .sqlite_store import SQLiteRecommendationStore

__all__ = ['BaseRecommendationStore', 'SQLiteRecommendationStore']

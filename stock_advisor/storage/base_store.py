"""Abstract base class for recommendation storage."""

from abc import ABC, abstractmethod
from typing import List, Sequence

from stock_advisor.models.recommendation import Recommendation, RecommendationType, StoredRecommendation


class BaseRecommendationStore(ABC):
    """Abstract interface for recommendation persistence."""

    @abstractmethod
    def initialize(self) -> None:
        """Initialize the database schema."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Close database connection."""
        pass

    @abstractmethod
    def save_all(self, recommendations: Sequence[Recommendation]) -> List[int]:
        """Append a batch of recommendations. Returns the assigned ids."""
        pass

    @abstractmethod
    def get_latest_batch(self) -> List[StoredRecommendation]:
        """Get every recommendation from the most recently saved batch."""
        pass

    @abstractmethod
    def get_latest(self, limit: int = 10) -> List[StoredRecommendation]:
        """Get the most recently generated recommendations."""
        pass

    @abstractmethod
    def get_by_symbol(self, symbol: str) -> List[StoredRecommendation]:
        """Get recommendations for a symbol, newest first."""
        pass

    @abstractmethod
    def get_by_type(self, recommendation: RecommendationType) -> List[StoredRecommendation]:
        """Get recommendations of one type, newest first."""
        pass

"""Abstract base class for news page sources."""

from abc import ABC, abstractmethod
from typing import List

from .models import RawCandidate


class BaseNewsSource(ABC):
    """Fetches a source page and extracts candidate articles from it."""

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return the name of this news source."""
        pass

    @abstractmethod
    async def fetch_candidates(self, source_url: str, symbol: str) -> List[RawCandidate]:
        """Fetch a source page and extract candidate articles.

        Args:
            source_url: Page to fetch
            symbol: Symbol the candidates are being collected for

        Returns:
            Bounded list of (title, body, url) candidates

        Raises:
            DataFetchError: If the page cannot be fetched or parsed
        """
        pass

    async def close(self) -> None:
        """Release any network resources held by the source."""
        return None

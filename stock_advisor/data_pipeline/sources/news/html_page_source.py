"""HTML news page source backed by aiohttp and BeautifulSoup."""

import logging
from typing import List, Optional
from urllib.parse import urljoin

import aiohttp
from bs4 import BeautifulSoup
from bs4.element import Tag

from stock_advisor.data_pipeline.config import AggregatorConfig
from stock_advisor.data_pipeline.exceptions import DataFetchError

from .base_news_source import BaseNewsSource
from .models import RawCandidate

logger = logging.getLogger(__name__)

ARTICLE_SELECTOR = "article, .article, .news-item, .story"
TITLE_SELECTOR = "h1, h2, h3, .title, .headline"
BODY_SELECTOR = "p, .content, .summary"


def _first_text(element: Tag, selector: str) -> str:
    for match in element.select(selector):
        text = match.get_text(" ", strip=True)
        if text:
            return text
    return ""


def _first_href(element: Tag) -> str:
    for anchor in element.select("a"):
        href = anchor.get("href")
        if href:
            return str(href)
    return ""


def extract_candidates(html: str, base_url: str = "", limit: Optional[int] = None) -> List[RawCandidate]:
    """Extract candidate articles from a news listing page.

    Args:
        html: Raw page content
        base_url: Page URL used to resolve relative links
        limit: Maximum number of candidates to return

    Returns:
        Candidates in document order; elements without a title are skipped
    """
    soup = BeautifulSoup(html, "html.parser")
    candidates: List[RawCandidate] = []

    for element in soup.select(ARTICLE_SELECTOR):
        if limit is not None and len(candidates) >= limit:
            break
        try:
            title = _first_text(element, TITLE_SELECTOR)
            if not title:
                continue
            body = _first_text(element, BODY_SELECTOR)
            href = _first_href(element)
            url = urljoin(base_url, href) if href and base_url else href
            candidates.append(RawCandidate(title=title, body=body, url=url))
        except (AttributeError, TypeError, ValueError) as e:
            logger.debug(f"Skipping malformed article element on {base_url}: {e}")
            continue

    return candidates


class HtmlPageNewsSource(BaseNewsSource):
    """Scrapes public news listing pages."""

    def __init__(self, config: Optional[AggregatorConfig] = None):
        """Initialize the page source.

        Args:
            config: Aggregator configuration (timeout, user agent, candidate cap)
        """
        self.config = config or AggregatorConfig()
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def source_name(self) -> str:
        return "HtmlPage"

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"User-Agent": self.config.user_agent},
                timeout=aiohttp.ClientTimeout(total=self.config.fetch_timeout_seconds),
            )
        return self._session

    async def close(self) -> None:
        """Close aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def _fetch_html(self, source_url: str) -> str:
        session = await self._get_session()
        try:
            async with session.get(source_url) as response:
                if response.status != 200:
                    raise DataFetchError(
                        f"HTTP {response.status} fetching {source_url}",
                        source=source_url,
                        source_type=self.source_name,
                    )
                return await response.text()
        except aiohttp.ClientError as e:
            raise DataFetchError(f"Error fetching {source_url}: {e}", source=source_url, source_type=self.source_name) from e

    async def fetch_candidates(self, source_url: str, symbol: str) -> List[RawCandidate]:
        html = await self._fetch_html(source_url)
        candidates = extract_candidates(html, base_url=source_url, limit=self.config.max_candidates_per_source)
        logger.debug(f"Extracted {len(candidates)} candidates from {source_url} for {symbol}")
        return candidates

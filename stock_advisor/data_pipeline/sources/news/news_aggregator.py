"""News aggregator that fans out across source pages for a single symbol."""

import asyncio
import hashlib
import logging
from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from stock_advisor.data_pipeline.config import AggregatorConfig
from stock_advisor.research.text_scorer import TextScorer

from .base_news_source import BaseNewsSource
from .html_page_source import HtmlPageNewsSource
from .models import CandidateArticle, NewsAnalysis, ScoredNewsItem, SentimentProfile

logger = logging.getLogger(__name__)


def company_token(company_name: Optional[str]) -> Optional[str]:
    """Derive the search token for a company name.

    The first word of the name, lower-cased with trailing punctuation removed
    ("Apple Inc." -> "apple"). Tokens shorter than three characters are too
    noisy to match on and yield None.
    """
    if not company_name:
        return None
    words = company_name.split()
    if not words:
        return None
    token = words[0].strip(".,;:!?'\"()").lower()
    if len(token) < 3:
        return None
    return token


class NewsAggregator:
    """Collect, filter, score and summarise news for one symbol."""

    def __init__(
        self,
        source: Optional[BaseNewsSource] = None,
        scorer: Optional[TextScorer] = None,
        config: Optional[AggregatorConfig] = None,
    ):
        """Initialize news aggregator.

        Args:
            source: Page fetcher/extractor (defaults to HtmlPageNewsSource)
            scorer: Text scorer shared by all symbols
            config: Aggregation configuration
        """
        self.config = config or AggregatorConfig()
        self.source = source or HtmlPageNewsSource(self.config)
        self.scorer = scorer or TextScorer()
        # Shared by every aggregate() call so the bound holds across symbols
        self._fetch_slots = asyncio.Semaphore(self.config.fetch_workers)

        if not self.config.sources:
            logger.warning("No news sources configured!")

    async def aggregate(self, symbol: str, company_name: str) -> NewsAnalysis:
        """Build the news analysis for a symbol.

        Never raises: source failures contribute nothing, and an unexpected
        error yields an empty analysis.

        Args:
            symbol: Ticker symbol
            company_name: Company display name

        Returns:
            NewsAnalysis with up to config.max_items relevance-ranked items
        """
        try:
            candidates = await self._collect_candidates(symbol)
            relevant = self._filter_candidates(candidates, symbol, company_name)
            items = self._score_and_rank(relevant, symbol)

            analysis = NewsAnalysis(
                symbol=symbol,
                company_name=company_name,
                items=tuple(items),
                keywords=tuple(self.scorer.extract_keywords(items, self.config.max_keywords)),
                sentiment=SentimentProfile.from_labels(item.sentiment for item in items),
                analyzed_at=datetime.now(),
            )
        except Exception as e:
            logger.error(f"News aggregation failed for {symbol}: {e}", exc_info=True)
            return NewsAnalysis.empty(symbol, company_name)

        logger.info(
            f"{symbol}: kept {analysis.item_count} of {len(candidates)} candidates, "
            f"sentiment {analysis.sentiment.overall.value}"
        )
        return analysis

    async def _collect_candidates(self, symbol: str) -> List[CandidateArticle]:
        """Fetch every configured source concurrently and fold the results in source order."""
        tasks = [self._fetch_source(source_url, symbol) for source_url in self.config.sources]
        results = await asyncio.gather(*tasks)

        candidates: List[CandidateArticle] = []
        for source_candidates in results:
            candidates.extend(source_candidates)
        return candidates

    async def _fetch_source(self, source_url: str, symbol: str) -> List[CandidateArticle]:
        """Fetch one source; any failure or timeout yields an empty list."""
        async with self._fetch_slots:
            try:
                raw_candidates = await asyncio.wait_for(
                    self.source.fetch_candidates(source_url, symbol),
                    timeout=self.config.fetch_timeout_seconds,
                )
            except asyncio.TimeoutError:
                logger.warning(f"Timed out fetching {source_url} for {symbol}")
                return []
            except Exception as e:
                logger.warning(f"Error fetching {source_url} for {symbol}: {e}")
                return []

        return self._to_articles(raw_candidates or [], source_url)

    def _to_articles(self, raw_candidates: Sequence, source_url: str) -> List[CandidateArticle]:
        articles: List[CandidateArticle] = []
        for raw in list(raw_candidates)[: self.config.max_candidates_per_source]:
            try:
                title, body, url = raw
                articles.append(
                    CandidateArticle(
                        title=str(title or "").strip(),
                        body=str(body or "").strip(),
                        source=source_url,
                        url=str(url or ""),
                    )
                )
            except (TypeError, ValueError) as e:
                logger.debug(f"Skipping malformed candidate from {source_url}: {e}")
                continue
        return articles

    def _filter_candidates(
        self,
        candidates: Iterable[CandidateArticle],
        symbol: str,
        company_name: str,
    ) -> List[CandidateArticle]:
        """Keep titled candidates that mention the symbol or company token."""
        tokens = [symbol.lower()]
        token = company_token(company_name)
        if token:
            tokens.append(token)

        seen_hashes = set()
        relevant: List[CandidateArticle] = []

        for candidate in candidates:
            if not candidate.title:
                continue

            title_lower = candidate.title.lower()
            body_lower = candidate.body.lower()
            if not any(t in title_lower or t in body_lower for t in tokens):
                continue

            if self.config.deduplicate_titles:
                title_hash = hashlib.md5(title_lower.strip().encode()).hexdigest()[:16]
                if title_hash in seen_hashes:
                    continue
                seen_hashes.add(title_hash)

            relevant.append(candidate)

        return relevant

    def _score_and_rank(self, candidates: Iterable[CandidateArticle], symbol: str) -> List[ScoredNewsItem]:
        """Score candidates, drop low relevance, rank descending and cap.

        sorted() is stable, so equal scores keep source-fetch order.
        """
        scored = [self.scorer.score(candidate, symbol) for candidate in candidates]
        kept = [item for item in scored if item.relevance_score > self.config.min_relevance_score]
        kept.sort(key=lambda item: item.relevance_score, reverse=True)
        return kept[: self.config.max_items]

    async def close(self) -> None:
        """Close the underlying source."""
        await self.source.close()

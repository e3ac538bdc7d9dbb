"""Data models for candidate articles, scored news and per-symbol news analysis."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable, NamedTuple, Tuple


class SentimentLabel(str, Enum):
    """Sentiment classification."""

    VERY_POSITIVE = "very_positive"
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"
    VERY_NEGATIVE = "very_negative"

    @property
    def is_positive(self) -> bool:
        return self in (SentimentLabel.POSITIVE, SentimentLabel.VERY_POSITIVE)

    @property
    def is_negative(self) -> bool:
        return self in (SentimentLabel.NEGATIVE, SentimentLabel.VERY_NEGATIVE)


class RawCandidate(NamedTuple):
    """A (title, body, url) triple as yielded by a page extractor."""

    title: str
    body: str
    url: str


@dataclass(frozen=True)
class CandidateArticle:
    """An unscored article extracted from a source page."""

    title: str
    body: str
    source: str  # Source URL the candidate was extracted from
    url: str = ""
    discovered_at: datetime = field(default_factory=datetime.now)

    @property
    def text(self) -> str:
        return f"{self.title} {self.body}"


@dataclass(frozen=True)
class ScoredNewsItem:
    """A candidate article with its relevance score and sentiment label."""

    article: CandidateArticle
    relevance_score: float  # 0.0 to 1.0
    sentiment: SentimentLabel

    @property
    def title(self) -> str:
        return self.article.title

    @property
    def body(self) -> str:
        return self.article.body

    @property
    def source(self) -> str:
        return self.article.source

    @property
    def url(self) -> str:
        return self.article.url


@dataclass(frozen=True)
class SentimentProfile:
    """Distribution of sentiment labels across a symbol's kept articles."""

    positive: float = 0.0
    negative: float = 0.0
    neutral: float = 1.0
    overall: SentimentLabel = SentimentLabel.NEUTRAL

    @classmethod
    def from_labels(cls, labels: Iterable[SentimentLabel]) -> "SentimentProfile":
        """Build a profile from the labels of the kept items.

        Very-positive/very-negative labels count toward the positive/negative
        fractions. An empty input yields the all-neutral profile.
        """
        labels = list(labels)
        total = len(labels)
        if total == 0:
            return cls()

        positive_count = sum(1 for label in labels if label.is_positive)
        negative_count = sum(1 for label in labels if label.is_negative)
        neutral_count = total - positive_count - negative_count

        positive = positive_count / total
        negative = negative_count / total
        neutral = neutral_count / total

        overall = SentimentLabel.NEUTRAL
        if positive > negative and positive > neutral:
            overall = SentimentLabel.POSITIVE
        elif negative > positive and negative > neutral:
            overall = SentimentLabel.NEGATIVE

        return cls(positive=positive, negative=negative, neutral=neutral, overall=overall)


@dataclass(frozen=True)
class NewsAnalysis:
    """Aggregated news analysis for a single symbol in a single run."""

    symbol: str
    company_name: str
    items: Tuple[ScoredNewsItem, ...] = ()  # Relevance-descending, capped
    keywords: Tuple[str, ...] = ()
    sentiment: SentimentProfile = field(default_factory=SentimentProfile)
    analyzed_at: datetime = field(default_factory=datetime.now)

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def sources(self) -> Tuple[str, ...]:
        """Distinct source identifiers in order of first appearance."""
        return tuple(dict.fromkeys(item.source for item in self.items))

    @classmethod
    def empty(cls, symbol: str, company_name: str) -> "NewsAnalysis":
        return cls(symbol=symbol, company_name=company_name)

"""Recommendation data model."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class RecommendationType(str, Enum):
    """Discrete trading stance derived from news sentiment."""

    STRONG_BUY = "STRONG_BUY"
    BUY = "BUY"
    HOLD = "HOLD"
    SELL = "SELL"
    STRONG_SELL = "STRONG_SELL"


@dataclass(frozen=True)
class Recommendation:
    """A daily recommendation for one symbol."""

    symbol: str
    company_name: str

    # Prices
    current_price: float
    previous_close: float
    target_price: float
    stop_loss: float

    recommendation: RecommendationType
    reasoning: str
    risk_level: float  # 1-10 scale

    key_keywords: Tuple[str, ...] = ()
    news_sources: Tuple[str, ...] = ()
    generated_at: datetime = field(default_factory=datetime.now)
    analysis_date: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "symbol": self.symbol,
            "company_name": self.company_name,
            "current_price": self.current_price,
            "previous_close": self.previous_close,
            "recommendation": self.recommendation.value,
            "reasoning": self.reasoning,
            "target_price": self.target_price,
            "stop_loss": self.stop_loss,
            "risk_level": self.risk_level,
            "key_keywords": list(self.key_keywords),
            "news_sources": list(self.news_sources),
            "generated_at": self.generated_at.isoformat(),
            "analysis_date": self.analysis_date.isoformat(),
        }


@dataclass(frozen=True)
class StoredRecommendation:
    """A recommendation together with the identity assigned by the store."""

    id: int
    recommendation: Recommendation

    @property
    def symbol(self) -> str:
        return self.recommendation.symbol

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, **self.recommendation.to_dict()}


def price_change_pct(recommendation: Recommendation) -> Optional[float]:
    """Percent change from previous close to current price, None without a close."""
    if not recommendation.previous_close:
        return None
    return (recommendation.current_price - recommendation.previous_close) / recommendation.previous_close * 100

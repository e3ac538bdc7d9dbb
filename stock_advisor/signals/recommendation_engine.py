"""Map a symbol's news analysis and price snapshot to a recommendation."""

import logging
import math
from datetime import datetime
from typing import Iterable, List, Optional

from ..data_pipeline.sources.market_data import BaseMarketDataSource
from ..data_pipeline.sources.news.models import NewsAnalysis, SentimentLabel, SentimentProfile
from ..exceptions import RecommendationError
from ..models.recommendation import Recommendation, RecommendationType
from .config import RecommendationConfig

logger = logging.getLogger(__name__)

SENTIMENT_CLAUSES = {
    SentimentLabel.POSITIVE: "Positive sentiment detected in recent news. ",
    SentimentLabel.NEGATIVE: "Negative sentiment detected in recent news. ",
}
MIXED_SENTIMENT_CLAUSE = "Mixed sentiment in recent news. "

CLOSING_CLAUSES = {
    RecommendationType.STRONG_BUY: "Strong positive catalysts identified with low risk factors.",
    RecommendationType.BUY: "Positive outlook with moderate risk factors.",
    RecommendationType.HOLD: "Mixed signals suggest maintaining current position.",
    RecommendationType.SELL: "Negative factors outweigh positive catalysts.",
    RecommendationType.STRONG_SELL: "Significant negative catalysts with high risk factors.",
}


class RecommendationEngine:
    """Derive recommendation type, price levels, risk and reasoning.

    Pure given the analysis and price snapshot; the optional market data
    source is only used by ``recommend_for``.
    """

    def __init__(
        self,
        config: Optional[RecommendationConfig] = None,
        market_data: Optional[BaseMarketDataSource] = None,
    ):
        """Initialize recommendation engine.

        Args:
            config: Multipliers, thresholds and risk settings
            market_data: Source of (current, previous close) price pairs
        """
        self.config = config or RecommendationConfig()
        self.market_data = market_data

    def recommendation_type(self, sentiment: SentimentProfile) -> RecommendationType:
        """Ordered mapping from sentiment profile to recommendation type."""
        threshold = self.config.strong_signal_fraction
        if sentiment.overall == SentimentLabel.POSITIVE:
            if sentiment.positive > threshold:
                return RecommendationType.STRONG_BUY
            return RecommendationType.BUY
        if sentiment.overall == SentimentLabel.NEGATIVE:
            if sentiment.negative > threshold:
                return RecommendationType.STRONG_SELL
            return RecommendationType.SELL
        return RecommendationType.HOLD

    def target_price(self, current_price: float, recommendation: RecommendationType) -> float:
        return current_price * self.config.target_multipliers[recommendation]

    def stop_loss(self, current_price: float, recommendation: RecommendationType) -> float:
        return current_price * self.config.stop_loss_multipliers[recommendation]

    def risk_level(self, analysis: NewsAnalysis) -> float:
        """Risk on a 1-10 scale from sentiment direction and news volume."""
        risk = self.config.base_risk

        overall = analysis.sentiment.overall
        if overall == SentimentLabel.POSITIVE:
            risk -= self.config.sentiment_risk_adjustment
        elif overall == SentimentLabel.NEGATIVE:
            risk += self.config.sentiment_risk_adjustment

        # Heavy coverage is treated as a volatility proxy
        if analysis.item_count > self.config.high_volume_item_count:
            risk += self.config.high_volume_risk_adjustment

        return max(self.config.min_risk, min(self.config.max_risk, risk))

    def reasoning(self, analysis: NewsAnalysis, recommendation: RecommendationType) -> str:
        """Build the fixed-template reasoning text."""
        parts = ["Based on recent news analysis: "]
        parts.append(SENTIMENT_CLAUSES.get(analysis.sentiment.overall, MIXED_SENTIMENT_CLAUSE))

        if analysis.keywords:
            parts.append(f"Key themes include: {', '.join(analysis.keywords)}. ")

        parts.append(f"Analyzed {analysis.item_count} relevant news articles. ")
        parts.append(CLOSING_CLAUSES[recommendation])
        return "".join(parts)

    def _build(self, analysis: NewsAnalysis, current_price: float, previous_close: float) -> Recommendation:
        for name, value in (("current_price", current_price), ("previous_close", previous_close)):
            if value is None or not math.isfinite(value) or value < 0:
                raise RecommendationError(f"Invalid {name} {value!r}", symbol=analysis.symbol)

        recommendation_type = self.recommendation_type(analysis.sentiment)

        return Recommendation(
            symbol=analysis.symbol,
            company_name=analysis.company_name,
            current_price=current_price,
            previous_close=previous_close,
            target_price=self.target_price(current_price, recommendation_type),
            stop_loss=self.stop_loss(current_price, recommendation_type),
            recommendation=recommendation_type,
            reasoning=self.reasoning(analysis, recommendation_type),
            risk_level=self.risk_level(analysis),
            key_keywords=tuple(analysis.keywords),
            news_sources=analysis.sources,
            generated_at=datetime.now(),
            analysis_date=analysis.analyzed_at,
        )

    def recommend(
        self,
        analysis: NewsAnalysis,
        current_price: float,
        previous_close: float,
    ) -> Optional[Recommendation]:
        """Create a recommendation, or None if one cannot be derived.

        Args:
            analysis: Aggregated news analysis for the symbol
            current_price: Latest price
            previous_close: Previous session close

        Returns:
            Complete Recommendation, or None on any derivation failure
        """
        try:
            return self._build(analysis, current_price, previous_close)
        except Exception as e:
            logger.warning(f"No recommendation produced for {analysis.symbol}: {e}")
            return None

    async def recommend_for(
        self,
        analysis: NewsAnalysis,
        market_data: Optional[BaseMarketDataSource] = None,
    ) -> Optional[Recommendation]:
        """Fetch the price snapshot for the analysis' symbol, then recommend.

        Unavailable market data yields None.
        """
        source = market_data or self.market_data
        if source is None:
            logger.warning(f"No market data source configured, skipping {analysis.symbol}")
            return None

        try:
            current_price, previous_close = await source.current_and_previous(analysis.symbol)
        except Exception as e:
            logger.warning(f"Market data unavailable for {analysis.symbol}: {e}")
            return None

        return self.recommend(analysis, current_price, previous_close)

    async def generate_recommendations(self, analyses: Iterable[NewsAnalysis]) -> List[Recommendation]:
        """Recommend for each analysis in turn, skipping failures."""
        recommendations = []
        for analysis in analyses:
            recommendation = await self.recommend_for(analysis)
            if recommendation is not None:
                recommendations.append(recommendation)
        return recommendations

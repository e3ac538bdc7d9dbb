"""Tests for the recommendation engine."""

import math
from unittest.mock import AsyncMock

import pytest

from conftest import make_analysis
from stock_advisor.data_pipeline.exceptions import DataFetchError
from stock_advisor.data_pipeline.sources.news.models import SentimentLabel, SentimentProfile
from stock_advisor.models.recommendation import RecommendationType
from stock_advisor.signals.config import RecommendationConfig
from stock_advisor.signals.recommendation_engine import RecommendationEngine

POS = SentimentLabel.POSITIVE
NEG = SentimentLabel.NEGATIVE
NEU = SentimentLabel.NEUTRAL


@pytest.fixture
def engine():
    return RecommendationEngine()


class TestRecommendationType:
    """Test sentiment to recommendation type mapping."""

    @pytest.mark.parametrize(
        "profile,expected",
        [
            (SentimentProfile(0.8, 0.1, 0.1, POS), RecommendationType.STRONG_BUY),
            (SentimentProfile(0.7, 0.1, 0.2, POS), RecommendationType.BUY),
            (SentimentProfile(0.5, 0.2, 0.3, POS), RecommendationType.BUY),
            (SentimentProfile(0.1, 0.8, 0.1, NEG), RecommendationType.STRONG_SELL),
            (SentimentProfile(0.2, 0.6, 0.2, NEG), RecommendationType.SELL),
            (SentimentProfile(0.4, 0.4, 0.2, NEU), RecommendationType.HOLD),
            (SentimentProfile(), RecommendationType.HOLD),
        ],
    )
    def test_mapping(self, engine, profile, expected):
        assert engine.recommendation_type(profile) == expected


class TestPriceLevels:
    """Test target and stop-loss derivation."""

    def test_strong_buy_levels(self, engine):
        assert engine.target_price(100.0, RecommendationType.STRONG_BUY) == pytest.approx(115.0)
        assert engine.stop_loss(100.0, RecommendationType.STRONG_BUY) == pytest.approx(92.0)

    @pytest.mark.parametrize(
        "recommendation,target,stop",
        [
            (RecommendationType.BUY, 108.0, 92.0),
            (RecommendationType.HOLD, 100.0, 95.0),
            (RecommendationType.SELL, 92.0, 108.0),
            (RecommendationType.STRONG_SELL, 85.0, 108.0),
        ],
    )
    def test_other_levels(self, engine, recommendation, target, stop):
        assert engine.target_price(100.0, recommendation) == pytest.approx(target)
        assert engine.stop_loss(100.0, recommendation) == pytest.approx(stop)

    def test_custom_multipliers(self):
        config = RecommendationConfig(
            target_multipliers={t: 2.0 for t in RecommendationType},
            stop_loss_multipliers={t: 0.5 for t in RecommendationType},
        )
        engine = RecommendationEngine(config)
        assert engine.target_price(10.0, RecommendationType.HOLD) == pytest.approx(20.0)
        assert engine.stop_loss(10.0, RecommendationType.HOLD) == pytest.approx(5.0)


class TestRiskLevel:
    """Test risk scoring."""

    def test_positive_low_volume(self, engine):
        assert engine.risk_level(make_analysis(labels=[POS] * 3)) == 4.0

    def test_neutral_base(self, engine):
        assert engine.risk_level(make_analysis()) == 5.0

    def test_negative_high_volume(self, engine):
        analysis = make_analysis(labels=[NEG] * 10, item_count=16)
        assert analysis.sentiment.overall == NEG
        assert engine.risk_level(analysis) == 7.0

    def test_exactly_fifteen_items_is_not_high_volume(self, engine):
        analysis = make_analysis(labels=[NEG] * 10, item_count=15)
        assert engine.risk_level(analysis) == 6.0

    def test_clamped(self):
        config = RecommendationConfig(base_risk=9.5, sentiment_risk_adjustment=3.0)
        engine = RecommendationEngine(config)
        assert engine.risk_level(make_analysis(labels=[NEG] * 3)) == 10.0
        assert engine.risk_level(make_analysis(labels=[POS] * 3)) == 6.5


class TestReasoning:
    """Test reasoning text."""

    def test_buy_with_keywords(self, engine):
        analysis = make_analysis(labels=[POS] * 6 + [NEU] * 4, keywords=["earnings", "growth"])
        text = engine.reasoning(analysis, RecommendationType.BUY)
        assert text == (
            "Based on recent news analysis: Positive sentiment detected in recent news. "
            "Key themes include: earnings, growth. "
            "Analyzed 10 relevant news articles. "
            "Positive outlook with moderate risk factors."
        )

    def test_empty_analysis(self, engine):
        text = engine.reasoning(make_analysis(), RecommendationType.HOLD)
        assert text == (
            "Based on recent news analysis: Mixed sentiment in recent news. "
            "Analyzed 0 relevant news articles. "
            "Mixed signals suggest maintaining current position."
        )

    def test_negative_clause(self, engine):
        analysis = make_analysis(labels=[NEG] * 9 + [NEU])
        text = engine.reasoning(analysis, RecommendationType.STRONG_SELL)
        assert "Negative sentiment detected in recent news. " in text
        assert text.endswith("Significant negative catalysts with high risk factors.")


class TestRecommend:
    """Test full recommendation construction."""

    def test_strong_buy(self, engine):
        analysis = make_analysis(labels=[POS] * 8 + [NEU] * 2, keywords=["earnings"])

        rec = engine.recommend(analysis, 100.0, 98.0)

        assert rec.recommendation == RecommendationType.STRONG_BUY
        assert rec.target_price == pytest.approx(115.0)
        assert rec.stop_loss == pytest.approx(92.0)
        assert rec.risk_level == 4.0
        assert rec.current_price == 100.0
        assert rec.previous_close == 98.0
        assert rec.key_keywords == ("earnings",)
        assert rec.news_sources == ("https://source0.example/", "https://source1.example/")
        assert rec.analysis_date == analysis.analyzed_at
        assert rec.company_name == "AAPL Corporation"

    def test_zero_price_is_valid(self, engine):
        rec = engine.recommend(make_analysis(), 0.0, 0.0)
        assert rec.target_price == 0.0
        assert rec.stop_loss == 0.0

    @pytest.mark.parametrize("price", [-1.0, math.nan, math.inf, None])
    def test_invalid_price_yields_none(self, engine, price):
        assert engine.recommend(make_analysis(), price, 100.0) is None

    @pytest.mark.asyncio
    async def test_recommend_for_uses_market_data(self):
        market_data = AsyncMock()
        market_data.current_and_previous = AsyncMock(return_value=(50.0, 49.0))
        engine = RecommendationEngine(market_data=market_data)

        rec = await engine.recommend_for(make_analysis(symbol="MSFT"))

        market_data.current_and_previous.assert_awaited_once_with("MSFT")
        assert rec.symbol == "MSFT"
        assert rec.current_price == 50.0

    @pytest.mark.asyncio
    async def test_recommend_for_unavailable_market_data(self):
        market_data = AsyncMock()
        market_data.current_and_previous = AsyncMock(side_effect=DataFetchError("HTTP 500", symbol="MSFT"))
        engine = RecommendationEngine(market_data=market_data)

        assert await engine.recommend_for(make_analysis(symbol="MSFT")) is None

    @pytest.mark.asyncio
    async def test_recommend_for_without_source(self, engine):
        assert await engine.recommend_for(make_analysis()) is None

    @pytest.mark.asyncio
    async def test_generate_recommendations_skips_failures(self):
        prices = {"AAPL": (100.0, 99.0), "TSLA": (200.0, 210.0)}

        async def current_and_previous(symbol):
            if symbol not in prices:
                raise DataFetchError("no data", symbol=symbol)
            return prices[symbol]

        market_data = AsyncMock()
        market_data.current_and_previous = AsyncMock(side_effect=current_and_previous)
        engine = RecommendationEngine(market_data=market_data)

        analyses = [make_analysis("AAPL"), make_analysis("ZZZZ"), make_analysis("TSLA")]
        recommendations = await engine.generate_recommendations(analyses)

        assert [r.symbol for r in recommendations] == ["AAPL", "TSLA"]

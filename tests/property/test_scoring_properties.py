"""Property-based tests for scoring and recommendation invariants using hypothesis."""

from hypothesis import given, settings
from hypothesis import strategies as st

from stock_advisor.data_pipeline.sources.news.models import (
    CandidateArticle,
    NewsAnalysis,
    ScoredNewsItem,
    SentimentLabel,
    SentimentProfile,
)
from stock_advisor.models.recommendation import RecommendationType
from stock_advisor.research.sentiment.financial_lexicon import BEARISH_TERMS, BULLISH_TERMS, FINANCIAL_KEYWORDS
from stock_advisor.research.text_scorer import TextScorer
from stock_advisor.signals.recommendation_engine import RecommendationEngine

scorer = TextScorer()
engine = RecommendationEngine()


def news_text():
    """Generate text mixing lexicon terms, symbols and filler words."""
    words = st.sampled_from(
        list(FINANCIAL_KEYWORDS) + list(BULLISH_TERMS) + list(BEARISH_TERMS) + ["AAPL", "apple", "the", "said", "today"]
    )
    return st.lists(words, max_size=30).map(" ".join)


def labels():
    return st.lists(st.sampled_from(list(SentimentLabel)), max_size=40)


def valid_price():
    return st.floats(min_value=0.0, max_value=100000.0, allow_nan=False, allow_infinity=False)


def analysis_from(label_list):
    items = tuple(
        ScoredNewsItem(
            article=CandidateArticle(title=f"AAPL {i}", body="", source="https://news.example/"),
            relevance_score=0.5,
            sentiment=label,
        )
        for i, label in enumerate(label_list)
    )
    return NewsAnalysis(
        symbol="AAPL",
        company_name="Apple Inc.",
        items=items,
        sentiment=SentimentProfile.from_labels(label_list),
    )


class TestRelevanceProperties:
    """Property-based tests for relevance scoring."""

    @given(news_text(), news_text())
    @settings(max_examples=200, deadline=2000)
    def test_relevance_bounded(self, title, body):
        """Property: relevance is always within [0, 1]."""
        score = scorer.relevance(title, body, "AAPL")
        assert 0.0 <= score <= 1.0

    @given(news_text(), news_text(), st.sampled_from(list(FINANCIAL_KEYWORDS) + ["AAPL"]))
    @settings(max_examples=200, deadline=2000)
    def test_relevance_monotonic_in_added_terms(self, title, body, term):
        """Property: appending a term never lowers relevance."""
        before = scorer.relevance(title, body, "AAPL")
        after = scorer.relevance(title, f"{body} {term}", "AAPL")
        assert after >= before

    @given(news_text())
    @settings(max_examples=100, deadline=2000)
    def test_sentiment_is_a_label(self, text):
        """Property: classification is total over arbitrary text."""
        assert scorer.sentiment(text) in (SentimentLabel.POSITIVE, SentimentLabel.NEGATIVE, SentimentLabel.NEUTRAL)


class TestSentimentProfileProperties:
    """Property-based tests for sentiment profiles."""

    @given(labels())
    @settings(max_examples=200, deadline=2000)
    def test_fractions_sum_to_one(self, label_list):
        """Property: positive + negative + neutral == 1."""
        profile = SentimentProfile.from_labels(label_list)
        assert abs(profile.positive + profile.negative + profile.neutral - 1.0) < 1e-9

    @given(labels())
    @settings(max_examples=200, deadline=2000)
    def test_overall_is_strict_maximum(self, label_list):
        """Property: overall is positive/negative only when strictly greatest, else neutral."""
        profile = SentimentProfile.from_labels(label_list)
        if profile.overall == SentimentLabel.POSITIVE:
            assert profile.positive > profile.negative and profile.positive > profile.neutral
        elif profile.overall == SentimentLabel.NEGATIVE:
            assert profile.negative > profile.positive and profile.negative > profile.neutral
        else:
            assert profile.overall == SentimentLabel.NEUTRAL


class TestRecommendationProperties:
    """Property-based tests for recommendation derivation."""

    @given(labels())
    @settings(max_examples=200, deadline=2000)
    def test_risk_clamped(self, label_list):
        """Property: risk level always within [1, 10]."""
        assert 1.0 <= engine.risk_level(analysis_from(label_list)) <= 10.0

    @given(labels(), valid_price(), valid_price())
    @settings(max_examples=200, deadline=2000)
    def test_levels_non_negative(self, label_list, current, previous):
        """Property: target and stop-loss are non-negative for non-negative prices."""
        rec = engine.recommend(analysis_from(label_list), current, previous)
        assert rec is not None
        assert rec.target_price >= 0.0
        assert rec.stop_loss >= 0.0
        assert rec.recommendation in set(RecommendationType)

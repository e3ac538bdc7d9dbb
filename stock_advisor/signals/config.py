"""Configuration for recommendation generation."""

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field

from ..models.recommendation import RecommendationType


class RecommendationConfig(BaseModel):
    """Thresholds, price multipliers and risk adjustments.

    Attributes:
        strong_signal_fraction: Sentiment fraction above which buy/sell becomes strong
        target_multipliers: Target price as a multiple of current price, per type
        stop_loss_multipliers: Stop-loss as a multiple of current price, per type
        base_risk: Starting risk level
        sentiment_risk_adjustment: Subtracted for positive, added for negative sentiment
        high_volume_item_count: More kept items than this adds volume risk
        high_volume_risk_adjustment: Risk added for high news volume
        min_risk / max_risk: Clamp bounds
    """

    model_config = ConfigDict(frozen=True)

    strong_signal_fraction: float = 0.7
    target_multipliers: Dict[RecommendationType, float] = Field(
        default_factory=lambda: {
            RecommendationType.STRONG_BUY: 1.15,
            RecommendationType.BUY: 1.08,
            RecommendationType.HOLD: 1.00,
            RecommendationType.SELL: 0.92,
            RecommendationType.STRONG_SELL: 0.85,
        }
    )
    stop_loss_multipliers: Dict[RecommendationType, float] = Field(
        default_factory=lambda: {
            RecommendationType.STRONG_BUY: 0.92,
            RecommendationType.BUY: 0.92,
            RecommendationType.HOLD: 0.95,
            RecommendationType.SELL: 1.08,
            RecommendationType.STRONG_SELL: 1.08,
        }
    )
    base_risk: float = 5.0
    sentiment_risk_adjustment: float = 1.0
    high_volume_item_count: int = 15
    high_volume_risk_adjustment: float = 1.0
    min_risk: float = 1.0
    max_risk: float = 10.0

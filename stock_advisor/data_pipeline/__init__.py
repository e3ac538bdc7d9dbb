"""Data pipeline: news and market data acquisition."""

from .config import AggregatorConfig, MarketDataConfig
from .exceptions import APIRateLimitError, DataFetchError, DataPipelineError, DataValidationError

__all__ = [
    "AggregatorConfig",
    "MarketDataConfig",
    "DataPipelineError",
    "DataFetchError",
    "APIRateLimitError",
    "DataValidationError",
]

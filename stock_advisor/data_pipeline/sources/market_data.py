"""Market data sources providing current price and previous close."""

import logging
import math
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

import aiohttp

from stock_advisor.data_pipeline.config import MarketDataConfig
from stock_advisor.data_pipeline.exceptions import APIRateLimitError, DataFetchError, DataValidationError

logger = logging.getLogger(__name__)


class BaseMarketDataSource(ABC):
    """Abstract base class for price snapshot sources."""

    @abstractmethod
    async def current_and_previous(self, symbol: str) -> Tuple[float, float]:
        """Fetch the current price and previous close for a symbol.

        Args:
            symbol: The symbol to fetch data for (e.g., "AAPL")

        Returns:
            Tuple of (current_price, previous_close)

        Raises:
            DataFetchError: If data fetching fails
            DataValidationError: If the response lacks usable prices
        """
        pass

    async def close(self) -> None:
        """Release any network resources held by the source."""
        return None


def _as_price(value: Any, field: str, symbol: str) -> float:
    if value is None:
        raise DataValidationError(f"Missing {field} for {symbol}", symbol=symbol)
    try:
        price = float(value)
    except (TypeError, ValueError) as e:
        raise DataValidationError(f"Invalid {field} for {symbol}: {value!r}", symbol=symbol) from e
    if not math.isfinite(price) or price < 0:
        raise DataValidationError(f"Invalid {field} for {symbol}: {price}", symbol=symbol)
    return price


def parse_chart_payload(data: Dict[str, Any], symbol: str) -> Tuple[float, float]:
    """Extract (current_price, previous_close) from a Yahoo chart response.

    Args:
        data: Decoded JSON body of the chart endpoint
        symbol: Symbol the response belongs to (for error messages)

    Returns:
        Tuple of (current_price, previous_close)

    Raises:
        DataValidationError: If the payload has no usable prices
    """
    try:
        chart = data["chart"]
        if chart.get("error"):
            raise DataValidationError(f"Chart API error for {symbol}: {chart['error']}", symbol=symbol)
        meta = chart["result"][0]["meta"]
    except (AttributeError, KeyError, IndexError, TypeError) as e:
        raise DataValidationError(f"Unexpected chart payload for {symbol}", symbol=symbol) from e

    current = _as_price(meta.get("regularMarketPrice"), "regularMarketPrice", symbol)
    previous_raw = meta.get("previousClose")
    if previous_raw is None:
        previous_raw = meta.get("chartPreviousClose")
    previous = _as_price(previous_raw, "previousClose", symbol)
    return current, previous


class YahooChartClient(BaseMarketDataSource):
    """Price snapshots from the public Yahoo Finance chart endpoint."""

    def __init__(self, config: Optional[MarketDataConfig] = None):
        """Initialize the client.

        Args:
            config: Market data configuration
        """
        self.config = config or MarketDataConfig()
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"User-Agent": self.config.user_agent},
                timeout=aiohttp.ClientTimeout(total=self.config.timeout_seconds),
            )
        return self._session

    async def close(self) -> None:
        """Close aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def current_and_previous(self, symbol: str) -> Tuple[float, float]:
        url = f"{self.config.base_url}{symbol}"
        params = {"interval": "1d", "range": "1d"}
        session = await self._get_session()

        try:
            async with session.get(url, params=params) as response:
                if response.status == 429:
                    raise APIRateLimitError(f"Rate limit exceeded fetching {symbol}", symbol=symbol, source=url)
                if response.status != 200:
                    raise DataFetchError(f"HTTP {response.status} fetching prices for {symbol}", symbol=symbol, source=url)
                data = await response.json(content_type=None)
        except aiohttp.ClientError as e:
            raise DataFetchError(f"Error fetching prices for {symbol}: {e}", symbol=symbol, source=url) from e

        current, previous = parse_chart_payload(data, symbol)
        logger.debug(f"{symbol}: current={current:.2f} previous_close={previous:.2f}")
        return current, previous

"""Financial keyword lexicons used for relevance, sentiment and theme extraction."""

from typing import Tuple

# Terms counted toward bullish sentiment
BULLISH_TERMS: Tuple[str, ...] = (
    "beat",
    "exceeded",
    "growth",
    "expansion",
    "acquisition",
    "merger",
    "partnership",
    "upgrade",
    "positive",
    "strong",
    "robust",
    "outperform",
    "bullish",
    "rally",
    "surge",
    "gain",
    "profit",
    "earnings",
    "revenue",
    "dividend",
    "buyback",
)

# Terms counted toward bearish sentiment
BEARISH_TERMS: Tuple[str, ...] = (
    "miss",
    "decline",
    "loss",
    "cut",
    "downgrade",
    "negative",
    "weak",
    "concern",
    "risk",
    "volatility",
    "sell-off",
    "crash",
    "bearish",
    "recession",
    "layoff",
    "bankruptcy",
    "default",
    "debt",
    "lawsuit",
    "investigation",
    "scandal",
)

# Themes reported in the keyword summary, in tie-break order
IMPORTANT_TERMS: Tuple[str, ...] = (
    "earnings",
    "revenue",
    "profit",
    "growth",
    "acquisition",
    "merger",
    "partnership",
    "expansion",
    "dividend",
    "buyback",
    "upgrade",
    "downgrade",
)

# Each distinct hit adds to an article's relevance score
FINANCIAL_KEYWORDS: Tuple[str, ...] = (
    "earnings",
    "revenue",
    "profit",
    "loss",
    "growth",
    "stock",
    "shares",
    "dividend",
)

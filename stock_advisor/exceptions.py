"""Custom exception classes for the stock advisor.

This module provides specific exception types for different error categories,
enabling better error handling and debugging throughout the pipeline.
"""

from typing import Optional, Dict, Any, List


class AdvisorError(Exception):
    """Base exception for all stock advisor errors."""
    pass


class DataError(AdvisorError):
    """Base exception for data-related errors."""

    def __init__(
        self,
        message: str,
        symbol: Optional[str] = None,
        source: Optional[str] = None,
    ):
        super().__init__(message)
        self.symbol = symbol
        self.source = source


class DataSourceError(DataError):
    """Raised when a news or market data source cannot be read."""

    def __init__(
        self,
        message: str,
        symbol: Optional[str] = None,
        source: Optional[str] = None,
        source_type: Optional[str] = None,
    ):
        super().__init__(message, symbol, source)
        self.source_type = source_type


class ConfigurationError(AdvisorError):
    """Base exception for configuration errors."""

    def __init__(
        self,
        message: str,
        config_path: Optional[str] = None,
        field: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None
    ):
        super().__init__(message)
        self.config_path = config_path
        self.field = field
        self.errors = errors or []


class RecommendationError(AdvisorError):
    """Raised when a recommendation cannot be derived for a symbol."""

    def __init__(self, message: str, symbol: Optional[str] = None):
        super().__init__(message)
        self.symbol = symbol


class PersistenceError(AdvisorError):
    """Raised when storing or exporting a recommendation batch fails."""

    def __init__(self, message: str, target: Optional[str] = None):
        super().__init__(message)
        self.target = target

"""Enhanced logging module with structured logging, performance metrics, and event tracking."""

from .logger import (
    PerformanceContext,
    RunEventType,
    get_logger,
    log_performance_metric,
    log_recommendation_event,
    log_run_event,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "log_recommendation_event",
    "log_run_event",
    "log_performance_metric",
    "PerformanceContext",
    "RunEventType",
]

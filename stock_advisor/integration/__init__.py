"""Integration layer wiring aggregation, recommendation and sinks together."""

from .daily_analysis_service import DailyAnalysisOrchestrator, RunResult, RunState

__all__ = ["DailyAnalysisOrchestrator", "RunResult", "RunState"]

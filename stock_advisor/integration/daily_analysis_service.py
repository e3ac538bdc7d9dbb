"""Daily analysis orchestration.

Drives one batch end to end: news aggregation for a capped prefix of the
symbol universe, recommendation generation, then hand-off to the storage
and report sinks. Only one run may be in flight at a time; a trigger that
arrives while a run is active is rejected rather than queued.
"""

import asyncio
import threading
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..configs.advisor_config import AdvisorConfig
from ..data_pipeline.sources.market_data import YahooChartClient
from ..data_pipeline.sources.news.models import NewsAnalysis
from ..data_pipeline.sources.news.news_aggregator import NewsAggregator
from ..logging.logger import PerformanceContext, RunEventType, get_logger, log_recommendation_event, log_run_event
from ..models.recommendation import Recommendation, RecommendationType, StoredRecommendation
from ..output.report_writer import RecommendationReportWriter
from ..research.text_scorer import TextScorer
from ..signals.recommendation_engine import RecommendationEngine
from ..storage.base_store import BaseRecommendationStore
from ..storage.sqlite_store import SQLiteRecommendationStore

logger = get_logger(__name__)


class RunState(str, Enum):
    """Orchestrator lifecycle state."""

    IDLE = "idle"
    FETCHING = "fetching"
    SCORING = "scoring"
    PERSISTING = "persisting"


@dataclass
class RunResult:
    """Outcome of one trigger."""

    run_number: int
    rejected: bool = False
    symbols: List[str] = field(default_factory=list)
    analyses_count: int = 0
    recommendations: List[Recommendation] = field(default_factory=list)
    saved_ids: List[int] = field(default_factory=list)
    report_path: Optional[Path] = None
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    duration_seconds: Optional[float] = None

    @property
    def recommendation_count(self) -> int:
        return len(self.recommendations)


class DailyAnalysisOrchestrator:
    """Run the daily news analysis batch and expose its results."""

    def __init__(
        self,
        config: Optional[AdvisorConfig] = None,
        aggregator: Optional[NewsAggregator] = None,
        engine: Optional[RecommendationEngine] = None,
        store: Optional[BaseRecommendationStore] = None,
        report_writer: Optional[RecommendationReportWriter] = None,
    ):
        """Initialize the orchestrator.

        Collaborators left as None are built from the configuration.

        Args:
            config: Advisor configuration
            aggregator: Per-symbol news aggregator
            engine: Recommendation engine (with a market data source)
            store: Persistence sink
            report_writer: Text report sink
        """
        self.config = config or AdvisorConfig()

        self.aggregator = aggregator or NewsAggregator(
            scorer=TextScorer(self.config.scoring),
            config=self.config.aggregator,
        )
        self.engine = engine or RecommendationEngine(
            config=self.config.recommendation,
            market_data=YahooChartClient(self.config.market_data),
        )
        self.store = store if store is not None else SQLiteRecommendationStore(self.config.orchestrator.db_path)
        if report_writer is None and self.config.output.report_enabled:
            report_writer = RecommendationReportWriter(self.config.output.get_output_dir())
        self.report_writer = report_writer

        self.state = RunState.IDLE
        self.run_count = 0
        self.last_run_at: Optional[datetime] = None
        self.last_batch: Optional[List[Recommendation]] = None

        self._run_lock = threading.Lock()
        self._store_initialized = False

    def company_name_for(self, symbol: str) -> str:
        return self.config.orchestrator.company_name_for(symbol)

    def symbols_for_run(self) -> List[str]:
        """Configured universe capped to the per-run limit."""
        orchestrator_config = self.config.orchestrator
        return list(orchestrator_config.universe[: orchestrator_config.max_symbols_per_run])

    def is_running(self) -> bool:
        return self._run_lock.locked()

    async def run(self) -> RunResult:
        """Execute one daily analysis batch.

        Returns:
            RunResult; rejected=True when another run was already active
        """
        if not self._run_lock.acquire(blocking=False):
            log_run_event(logger, RunEventType.REJECTED, reason="a run is already in progress")
            return RunResult(run_number=self.run_count, rejected=True)

        try:
            self.run_count += 1
            result = RunResult(run_number=self.run_count, started_at=datetime.now())

            with PerformanceContext(logger, "daily_analysis_run") as perf:
                try:
                    await self._execute(result)
                except Exception as e:
                    logger.error(f"Daily analysis run #{result.run_number} failed: {e}", exc_info=True)

            result.finished_at = datetime.now()
            result.duration_seconds = perf.elapsed
            self.last_run_at = result.finished_at
            return result
        finally:
            self.state = RunState.IDLE
            self._run_lock.release()

    async def trigger_manual_run(self) -> RunResult:
        """Run the batch now, same as a scheduled tick."""
        logger.info("Manual analysis triggered")
        return await self.run()

    async def _execute(self, result: RunResult) -> None:
        symbols = self.symbols_for_run()
        result.symbols = symbols
        log_run_event(logger, RunEventType.STARTED, run_number=result.run_number, symbols=symbols)

        self.state = RunState.FETCHING
        analyses = await self._analyze_symbols(symbols)
        result.analyses_count = len(analyses)

        self.state = RunState.SCORING
        recommendations = await self.engine.generate_recommendations(analyses)
        for recommendation in recommendations:
            log_recommendation_event(logger, recommendation)
        result.recommendations = recommendations
        self.last_batch = recommendations

        self.state = RunState.PERSISTING
        result.saved_ids = self._save(recommendations)
        result.report_path = self._write_report(recommendations)

        log_run_event(
            logger,
            RunEventType.COMPLETED,
            run_number=result.run_number,
            recommendations=len(recommendations),
            analyses=len(analyses),
        )
        for recommendation in [r for r in recommendations if r.recommendation == RecommendationType.STRONG_BUY][:3]:
            logger.info(f"Strong Buy: {recommendation.symbol} at ${recommendation.current_price:.2f}")

    async def _analyze_symbols(self, symbols: List[str]) -> List[NewsAnalysis]:
        """Aggregate news for each symbol with bounded concurrency, in universe order."""
        slots = asyncio.Semaphore(self.config.orchestrator.symbol_workers)

        async def analyze(symbol: str) -> Optional[NewsAnalysis]:
            async with slots:
                try:
                    return await self.aggregator.aggregate(symbol, self.company_name_for(symbol))
                except Exception as e:
                    log_run_event(logger, RunEventType.SYMBOL_SKIPPED, symbol=symbol, reason=str(e))
                    return None

        results = await asyncio.gather(*(analyze(symbol) for symbol in symbols))
        return [analysis for analysis in results if analysis is not None]

    def _ensure_store(self) -> BaseRecommendationStore:
        if not self._store_initialized:
            self.store.initialize()
            self._store_initialized = True
        return self.store

    def _save(self, recommendations: List[Recommendation]) -> List[int]:
        try:
            return self._ensure_store().save_all(recommendations)
        except Exception as e:
            log_run_event(logger, RunEventType.SINK_FAILED, sink="store", error=str(e))
            return []

    def _write_report(self, recommendations: List[Recommendation]) -> Optional[Path]:
        if self.report_writer is None:
            return None
        try:
            return self.report_writer.write(recommendations)
        except Exception as e:
            log_run_event(logger, RunEventType.SINK_FAILED, sink="report", error=str(e))
            return None

    def latest_batch(self) -> List[Recommendation]:
        """Most recent batch, from memory or else from the store.

        A run that produced no recommendations makes the latest batch empty.
        """
        if self.last_batch is not None:
            return list(self.last_batch)
        try:
            return [stored.recommendation for stored in self._ensure_store().get_latest_batch()]
        except Exception as e:
            logger.warning(f"Could not load latest batch from store: {e}")
            return []

    def latest_recommendations(self, limit: int = 10) -> List[StoredRecommendation]:
        return self._ensure_store().get_latest(limit)

    def recommendations_for(self, symbol: str) -> List[StoredRecommendation]:
        """Stored recommendations for a symbol, newest first."""
        return self._ensure_store().get_by_symbol(symbol)

    def recommendations_of_type(self, recommendation: RecommendationType) -> List[StoredRecommendation]:
        return self._ensure_store().get_by_type(recommendation)

    def status(self) -> Dict[str, Any]:
        """Snapshot of the orchestrator state and the latest batch breakdown."""
        batch = self.latest_batch()
        breakdown = Counter(rec.recommendation.value for rec in batch)
        scheduler_config = self.config.scheduler

        return {
            "state": self.state.value,
            "running": self.is_running(),
            "run_count": self.run_count,
            "last_run_at": self.last_run_at.isoformat() if self.last_run_at else None,
            "last_batch_size": len(batch),
            "recommendation_breakdown": dict(breakdown),
            "schedule": (
                f"daily at {scheduler_config.hour:02d}:{scheduler_config.minute:02d} {scheduler_config.timezone}"
                if scheduler_config.enabled
                else "disabled"
            ),
        }

    async def close(self) -> None:
        """Release network sessions and the database connection."""
        await self.aggregator.close()
        if self.engine.market_data is not None:
            await self.engine.market_data.close()
        self.store.close()

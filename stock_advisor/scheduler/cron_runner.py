"""Cron scheduler runner for the automated daily analysis."""

from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from ..integration.daily_analysis_service import DailyAnalysisOrchestrator
from ..logging.logger import get_logger
from .config import SchedulerConfig
from .jobs.daily_analysis_job import daily_analysis_job

logger = get_logger(__name__)

DAILY_ANALYSIS_JOB_ID = "daily_stock_analysis"


class CronRunner:
    """Cron scheduler runner for the automated daily analysis."""

    def __init__(
        self,
        config: Optional[SchedulerConfig] = None,
        orchestrator: Optional[DailyAnalysisOrchestrator] = None,
    ):
        """Initialize cron runner.

        Args:
            config: Optional scheduler configuration. If None, uses default config.
            orchestrator: Orchestrator every tick runs against. If None, each
                tick builds its own from the loaded configuration.
        """
        self.config = config or SchedulerConfig()
        self.orchestrator = orchestrator
        self.scheduler = AsyncIOScheduler()
        self._running = False

    def register_jobs(self) -> None:
        """Register all scheduled jobs."""
        if not self.config.enabled:
            logger.info("Scheduler is disabled, skipping job registration")
            return

        # Daily analysis - 9 PM ET by default
        self.scheduler.add_job(
            daily_analysis_job,
            CronTrigger(
                hour=self.config.hour,
                minute=self.config.minute,
                timezone=self.config.timezone,
            ),
            id=DAILY_ANALYSIS_JOB_ID,
            kwargs={"orchestrator": self.orchestrator},
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )

        logger.info(
            f"Registered scheduled job: {DAILY_ANALYSIS_JOB_ID} "
            f"({self.config.hour:02d}:{self.config.minute:02d} {self.config.timezone})"
        )

    def start(self) -> None:
        """Start the scheduler."""
        if not self.config.enabled:
            logger.info("Scheduler is disabled, not starting")
            return

        self.scheduler.start()
        self._running = True
        logger.info("Scheduler started")

    def stop(self) -> None:
        """Stop the scheduler.

        AsyncIOScheduler completes its shutdown on the next event loop
        iteration, so the runner tracks its own running state.
        """
        if self._running and self.scheduler.running:
            self.scheduler.shutdown(wait=True)
            self._running = False
            logger.info("Scheduler stopped")
        else:
            logger.info("Scheduler was not running")

    def is_running(self) -> bool:
        """Check if scheduler is running.

        Returns:
            True if scheduler is running, False otherwise
        """
        return self._running

"""Daily analysis job for scheduled execution."""

from typing import Optional

from ...configs.advisor_config import load_config
from ...integration.daily_analysis_service import DailyAnalysisOrchestrator, RunResult
from ...logging.logger import get_logger

logger = get_logger(__name__)


async def daily_analysis_job(
    orchestrator: Optional[DailyAnalysisOrchestrator] = None,
    config_path: Optional[str] = None,
) -> Optional[RunResult]:
    """Run the daily analysis batch.

    Never raises; the scheduler keeps ticking whatever happens to one run.

    Args:
        orchestrator: Long-lived orchestrator (built from config when None)
        config_path: Optional path to config file, used only when building one

    Returns:
        RunResult of the run, or None if the job could not start
    """
    logger.info("Starting daily analysis job")

    owns_orchestrator = orchestrator is None
    try:
        if orchestrator is None:
            orchestrator = DailyAnalysisOrchestrator(load_config(config_path))

        result = await orchestrator.run()
        if result.rejected:
            logger.warning("Daily analysis job skipped: previous run still in progress")
        else:
            logger.info(
                f"Daily analysis job completed: {result.recommendation_count} recommendations "
                f"for {result.analyses_count} stocks"
            )
        return result
    except Exception as e:
        logger.error(f"Daily analysis job failed: {e}", exc_info=True)
        return None
    finally:
        if owns_orchestrator and orchestrator is not None:
            await orchestrator.close()

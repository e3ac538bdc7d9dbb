"""Tests for the cron runner and daily analysis job."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from stock_advisor.integration.daily_analysis_service import RunResult
from stock_advisor.scheduler.config import SchedulerConfig
from stock_advisor.scheduler.cron_runner import DAILY_ANALYSIS_JOB_ID, CronRunner
from stock_advisor.scheduler.jobs.daily_analysis_job import daily_analysis_job


class TestCronRunner:
    """Test job registration and lifecycle."""

    def test_registers_daily_job_at_nine_pm_eastern(self):
        orchestrator = MagicMock()
        runner = CronRunner(SchedulerConfig(), orchestrator)

        runner.register_jobs()

        job = runner.scheduler.get_job(DAILY_ANALYSIS_JOB_ID)
        assert job is not None
        fields = {field.name: str(field) for field in job.trigger.fields}
        assert fields["hour"] == "21"
        assert fields["minute"] == "0"
        assert str(job.trigger.timezone) == "America/New_York"
        assert job.kwargs == {"orchestrator": orchestrator}

    def test_custom_schedule(self):
        runner = CronRunner(SchedulerConfig(hour=6, minute=30, timezone="UTC"))

        runner.register_jobs()

        job = runner.scheduler.get_job(DAILY_ANALYSIS_JOB_ID)
        fields = {field.name: str(field) for field in job.trigger.fields}
        assert (fields["hour"], fields["minute"]) == ("6", "30")

    def test_disabled_registers_nothing(self):
        runner = CronRunner(SchedulerConfig(enabled=False))

        runner.register_jobs()
        runner.start()

        assert runner.scheduler.get_jobs() == []
        assert not runner.is_running()

    @pytest.mark.asyncio
    async def test_start_and_stop(self):
        runner = CronRunner(SchedulerConfig())
        runner.register_jobs()

        runner.start()
        assert runner.is_running()

        runner.stop()
        assert not runner.is_running()

        # Underlying scheduler finishes shutting down on the next loop iteration
        await asyncio.sleep(0)
        assert not runner.scheduler.running

    @pytest.mark.asyncio
    async def test_stop_twice(self):
        runner = CronRunner(SchedulerConfig())
        runner.start()

        runner.stop()
        runner.stop()
        await asyncio.sleep(0)

        assert not runner.is_running()
        assert not runner.scheduler.running

    def test_stop_when_not_running(self):
        runner = CronRunner(SchedulerConfig())
        runner.stop()
        assert not runner.is_running()


class TestDailyAnalysisJob:
    """Test the scheduled job function."""

    @pytest.mark.asyncio
    async def test_runs_given_orchestrator(self):
        orchestrator = MagicMock()
        orchestrator.run = AsyncMock(return_value=RunResult(run_number=1, analyses_count=2))
        orchestrator.close = AsyncMock()

        result = await daily_analysis_job(orchestrator=orchestrator)

        assert result.run_number == 1
        orchestrator.run.assert_awaited_once()
        orchestrator.close.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rejected_run_is_returned(self):
        orchestrator = MagicMock()
        orchestrator.run = AsyncMock(return_value=RunResult(run_number=1, rejected=True))

        result = await daily_analysis_job(orchestrator=orchestrator)

        assert result.rejected

    @pytest.mark.asyncio
    async def test_failure_is_contained(self):
        orchestrator = MagicMock()
        orchestrator.run = AsyncMock(side_effect=RuntimeError("boom"))

        assert await daily_analysis_job(orchestrator=orchestrator) is None

    @pytest.mark.asyncio
    async def test_builds_and_closes_own_orchestrator(self):
        built = MagicMock()
        built.run = AsyncMock(return_value=RunResult(run_number=1))
        built.close = AsyncMock()

        with patch("stock_advisor.scheduler.jobs.daily_analysis_job.load_config") as mock_load, patch(
            "stock_advisor.scheduler.jobs.daily_analysis_job.DailyAnalysisOrchestrator", return_value=built
        ) as mock_cls:
            result = await daily_analysis_job(config_path="advisor.yaml")

        mock_load.assert_called_once_with("advisor.yaml")
        mock_cls.assert_called_once_with(mock_load.return_value)
        built.close.assert_awaited_once()
        assert result.run_number == 1

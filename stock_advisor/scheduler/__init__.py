"""Scheduler module for the automated daily analysis."""

from .config import SchedulerConfig
from .cron_runner import CronRunner

__all__ = ["SchedulerConfig", "CronRunner"]

"""Scheduled jobs for the stock advisor."""

from .daily_analysis_job import daily_analysis_job

__all__ = ["daily_analysis_job"]

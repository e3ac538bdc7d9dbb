"""Configuration for scheduler module."""

from ..configs.advisor_config import SchedulerConfig

__all__ = ["SchedulerConfig"]

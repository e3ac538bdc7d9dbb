"""Configuration models and loading."""

from .advisor_config import (
    AdvisorConfig,
    OrchestratorConfig,
    OutputConfig,
    SchedulerConfig,
    load_config,
)

__all__ = [
    "AdvisorConfig",
    "OrchestratorConfig",
    "OutputConfig",
    "SchedulerConfig",
    "load_config",
]

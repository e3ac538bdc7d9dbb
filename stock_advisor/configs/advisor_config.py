"""Root configuration model for the stock advisor."""

import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from ..data_pipeline.config import AggregatorConfig, MarketDataConfig
from ..exceptions import ConfigurationError
from ..research.config import ScoringConfig
from ..signals.config import RecommendationConfig

DEFAULT_UNIVERSE: List[str] = [
    "AAPL", "MSFT", "GOOGL", "AMZN", "TSLA",
    "META", "NVDA", "NFLX", "AMD", "INTC",
    "CRM", "ADBE", "PYPL", "UBER", "LYFT",
    "SQ", "ROKU", "ZM", "DOCU", "SNOW",
]

DEFAULT_COMPANY_NAMES: Dict[str, str] = {
    "AAPL": "Apple Inc.",
    "MSFT": "Microsoft Corporation",
    "GOOGL": "Alphabet Inc.",
    "AMZN": "Amazon.com Inc.",
    "TSLA": "Tesla Inc.",
    "META": "Meta Platforms Inc.",
    "NVDA": "NVIDIA Corporation",
    "NFLX": "Netflix Inc.",
    "AMD": "Advanced Micro Devices Inc.",
    "INTC": "Intel Corporation",
    "CRM": "Salesforce Inc.",
    "ADBE": "Adobe Inc.",
    "PYPL": "PayPal Holdings Inc.",
    "UBER": "Uber Technologies Inc.",
    "LYFT": "Lyft Inc.",
    "SQ": "Block Inc.",
    "ROKU": "Roku Inc.",
    "ZM": "Zoom Video Communications Inc.",
    "DOCU": "DocuSign Inc.",
    "SNOW": "Snowflake Inc.",
}


class OrchestratorConfig(BaseModel):
    """Daily run configuration.

    Attributes:
        universe: Symbols considered for analysis, in priority order
        max_symbols_per_run: Universe prefix analysed per run
        symbol_workers: Maximum symbols analysed concurrently
        db_path: SQLite database for persisted recommendations
        company_names: Symbol to display name table
    """

    universe: List[str] = Field(default_factory=lambda: list(DEFAULT_UNIVERSE))
    max_symbols_per_run: int = Field(default=10, ge=0)
    symbol_workers: int = Field(default=5, ge=1)
    db_path: str = "data/recommendations.db"
    company_names: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_COMPANY_NAMES))

    def company_name_for(self, symbol: str) -> str:
        """Display name for a symbol, "<SYMBOL> Corporation" when unknown."""
        return self.company_names.get(symbol, f"{symbol} Corporation")


class SchedulerConfig(BaseModel):
    """Configuration for the scheduler module.

    Attributes:
        enabled: Whether the scheduler is enabled
        hour: Hour of the daily run
        minute: Minute of the daily run
        timezone: Timezone the run time is expressed in
    """

    enabled: bool = True
    hour: int = Field(default=21, ge=0, le=23)
    minute: int = Field(default=0, ge=0, le=59)
    timezone: str = "America/New_York"


class OutputConfig(BaseModel):
    """Output configuration."""

    output_dir: str = "output/"
    log_level: str = "INFO"
    log_file: str = "advisor.log"
    log_json_format: bool = False
    log_use_rich: bool = True
    report_enabled: bool = True

    def get_output_dir(self) -> Path:
        """Get output directory path.

        Returns:
            Path to the directory reports and logs are written to
        """
        return Path(self.output_dir)


class AdvisorConfig(BaseModel):
    """Complete stock advisor configuration."""

    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    aggregator: AggregatorConfig = Field(default_factory=AggregatorConfig)
    market_data: MarketDataConfig = Field(default_factory=MarketDataConfig)
    recommendation: RecommendationConfig = Field(default_factory=RecommendationConfig)
    orchestrator: OrchestratorConfig = Field(default_factory=OrchestratorConfig)
    scheduler: SchedulerConfig = Field(default_factory=SchedulerConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def from_yaml(cls, path: str) -> "AdvisorConfig":
        """Load advisor configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            AdvisorConfig instance

        Raises:
            ConfigurationError: If the file is missing, not valid YAML or fails validation
        """
        path_obj = Path(path)
        if not path_obj.exists():
            raise ConfigurationError(f"Config file not found: {path}", config_path=str(path))

        try:
            with open(path_obj, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML format in {path}: {e}", config_path=str(path)) from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Expected a mapping at the top of {path}", config_path=str(path))

        return _validate(data, config_path=str(path))

    def to_yaml(self, path: str) -> None:
        """Save advisor configuration to YAML file.

        Args:
            path: Path to save YAML configuration file
        """
        with open(path, "w") as f:
            yaml.dump(self.model_dump(mode="json"), f, default_flow_style=False, sort_keys=False)


def _validate(data: Dict[str, Any], config_path: Optional[str] = None) -> AdvisorConfig:
    try:
        return AdvisorConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(
            "Advisor configuration validation failed",
            config_path=config_path,
            errors=e.errors(),
        ) from e


# (environment variable, config section, field, parser)
ENV_OVERRIDES: List[tuple] = [
    ("ADVISOR_DB_PATH", "orchestrator", "db_path", str),
    ("ADVISOR_OUTPUT_DIR", "output", "output_dir", str),
    ("ADVISOR_LOG_LEVEL", "output", "log_level", str),
    ("ADVISOR_MAX_SYMBOLS", "orchestrator", "max_symbols_per_run", int),
    ("ADVISOR_FETCH_TIMEOUT", "aggregator", "fetch_timeout_seconds", float),
]


def load_config(config_path: Optional[str] = None) -> AdvisorConfig:
    """Load configuration from YAML (when given) and apply environment overrides.

    Args:
        config_path: Optional path to a YAML config file

    Returns:
        Validated AdvisorConfig

    Raises:
        ConfigurationError: If the file or an override is invalid
    """
    config = AdvisorConfig.from_yaml(config_path) if config_path else AdvisorConfig()

    data = config.model_dump()
    overridden = False
    for env_var, section, field, parser in ENV_OVERRIDES:
        raw = os.getenv(env_var)
        if raw is None or raw == "":
            continue
        data[section][field] = _parse_env(env_var, raw, parser)
        overridden = True

    if not overridden:
        return config
    return _validate(data, config_path=config_path)


def _parse_env(env_var: str, raw: str, parser: Callable[[str], Any]) -> Any:
    try:
        return parser(raw)
    except ValueError as e:
        raise ConfigurationError(f"Invalid value for {env_var}: {raw!r}", field=env_var) from e

"""Enhanced logging with structured logging, performance metrics, and event tracking."""

import json
import logging
import logging.handlers
import os
import time
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional, Union

from loguru import logger as loguru_logger
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from ..configs.advisor_config import OutputConfig
    from ..models.recommendation import Recommendation

try:
    import psutil

    PSUTIL_AVAILABLE = True
except ImportError:
    PSUTIL_AVAILABLE = False


class RunEventType(str, Enum):
    """Types of analysis run events to log."""

    STARTED = "started"
    COMPLETED = "completed"
    REJECTED = "rejected"
    SYMBOL_SKIPPED = "symbol_skipped"
    SINK_FAILED = "sink_failed"


# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED_RECORD_KEYS = {
    "name",
    "msg",
    "args",
    "created",
    "filename",
    "funcName",
    "levelname",
    "levelno",
    "lineno",
    "module",
    "msecs",
    "message",
    "pathname",
    "process",
    "processName",
    "relativeCreated",
    "thread",
    "threadName",
    "taskName",
    "exc_info",
    "exc_text",
    "stack_info",
}


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_KEYS:
                log_data[key] = value

        return json.dumps(log_data, default=str)


class PerformanceContext:
    """Context manager for performance timing."""

    def __init__(self, logger: logging.Logger, operation: str, log_memory: bool = True):
        """Initialize performance context.

        Args:
            logger: Logger instance
            operation: Operation name
            log_memory: Whether to log memory usage
        """
        self.logger = logger
        self.operation = operation
        self.log_memory = log_memory
        self.start_time: Optional[float] = None
        self.start_memory: Optional[float] = None
        self.elapsed: Optional[float] = None

    def _memory_mb(self) -> Optional[float]:
        if not (self.log_memory and PSUTIL_AVAILABLE):
            return None
        try:
            return psutil.Process(os.getpid()).memory_info().rss / 1024 / 1024
        except psutil.Error:
            return None

    def __enter__(self):
        """Start timing."""
        self.start_time = time.perf_counter()
        self.start_memory = self._memory_mb()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """End timing and log performance."""
        if self.start_time is None:
            return False
        self.elapsed = time.perf_counter() - self.start_time

        end_memory = self._memory_mb()
        memory_delta = None
        if end_memory is not None and self.start_memory is not None:
            memory_delta = end_memory - self.start_memory

        log_performance_metric(
            self.logger,
            operation=self.operation,
            duration_seconds=self.elapsed,
            memory_mb=end_memory,
            memory_delta_mb=memory_delta,
        )
        return False


def setup_logging(config: "OutputConfig", use_json: Optional[bool] = None, use_rich: Optional[bool] = None) -> None:
    """Setup enhanced logging configuration.

    Args:
        config: OutputConfig instance with log settings
        use_json: Whether to use JSON format for file logs (defaults to config value)
        use_rich: Whether to use rich for console output (defaults to config value)
    """
    if use_json is None:
        use_json = config.log_json_format
    if use_rich is None:
        use_rich = config.log_use_rich

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    log_level = getattr(logging, config.log_level.upper(), logging.INFO)

    console_handler: logging.Handler
    if use_rich:
        console_handler = RichHandler(rich_tracebacks=True, show_path=False, console=Console(stderr=True))
        console_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    else:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
        )
    console_handler.setLevel(log_level)

    output_dir = config.get_output_dir()
    output_dir.mkdir(parents=True, exist_ok=True)
    log_file = output_dir / config.log_file

    file_handler = logging.handlers.RotatingFileHandler(log_file, maxBytes=10 * 1024 * 1024, backupCount=5)  # 10MB
    file_handler.setLevel(logging.DEBUG)

    file_formatter: Union[StructuredFormatter, logging.Formatter]
    if use_json:
        file_formatter = StructuredFormatter()
    else:
        file_formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    file_handler.setFormatter(file_formatter)

    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    # aiohttp and apscheduler are chatty at DEBUG
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("apscheduler").setLevel(logging.WARNING)

    loguru_logger.remove()
    loguru_logger.add(
        str(output_dir / "advisor_events.log"),
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        level="DEBUG",
        rotation="10 MB",
        retention=5,
        compression="zip",
    )

    logging.info(f"Logging initialized. Log file: {log_file}, JSON format: {use_json}, Rich: {use_rich}")


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def log_recommendation_event(logger: logging.Logger, recommendation: "Recommendation") -> None:
    """Log a generated recommendation.

    Args:
        logger: Logger instance
        recommendation: Recommendation that was produced
    """
    event_data = {
        "symbol": recommendation.symbol,
        "recommendation": recommendation.recommendation.value,
        "current_price": recommendation.current_price,
        "target_price": recommendation.target_price,
        "stop_loss": recommendation.stop_loss,
        "risk_level": recommendation.risk_level,
    }
    logger.info(
        f"RECOMMENDATION: {recommendation.symbol} | {recommendation.recommendation.value} | "
        f"Price: {recommendation.current_price:.2f} | Target: {recommendation.target_price:.2f} | "
        f"Stop: {recommendation.stop_loss:.2f} | Risk: {recommendation.risk_level:.1f}/10",
        extra=event_data,
    )
    loguru_logger.info(
        "RECOMMENDATION {} {} target={:.2f} stop={:.2f}",
        recommendation.symbol,
        recommendation.recommendation.value,
        recommendation.target_price,
        recommendation.stop_loss,
    )


def log_run_event(logger: logging.Logger, event_type: RunEventType, **kwargs: Any) -> None:
    """Log an orchestration run event.

    Args:
        logger: Logger instance
        event_type: Type of run event
        **kwargs: Additional event-specific fields
    """
    event_data = {"event_type": event_type.value, **kwargs}

    if event_type == RunEventType.STARTED:
        logger.info(f"RUN_STARTED: run #{kwargs.get('run_number', 'N/A')} | Symbols: {kwargs.get('symbols', 'N/A')}", extra=event_data)
    elif event_type == RunEventType.COMPLETED:
        logger.info(
            f"RUN_COMPLETED: {kwargs.get('recommendations', 0)} recommendations for "
            f"{kwargs.get('analyses', 0)} analysed symbols",
            extra=event_data,
        )
    elif event_type == RunEventType.REJECTED:
        logger.warning(f"RUN_REJECTED: {kwargs.get('reason', 'a run is already in progress')}", extra=event_data)
    elif event_type == RunEventType.SYMBOL_SKIPPED:
        logger.warning(f"SYMBOL_SKIPPED: {kwargs.get('symbol', 'N/A')} | Reason: {kwargs.get('reason', 'N/A')}", extra=event_data)
    elif event_type == RunEventType.SINK_FAILED:
        logger.error(f"SINK_FAILED: {kwargs.get('sink', 'N/A')} | Error: {kwargs.get('error', 'N/A')}", extra=event_data)

    loguru_logger.info("RUN_EVENT {} {}", event_type.value, kwargs)


def log_performance_metric(
    logger: logging.Logger,
    operation: str,
    duration_seconds: float,
    memory_mb: Optional[float] = None,
    memory_delta_mb: Optional[float] = None,
    **kwargs: Any,
) -> None:
    """Log performance metrics (timing, memory).

    Args:
        logger: Logger instance
        operation: Operation name
        duration_seconds: Duration in seconds
        memory_mb: Current memory usage in MB
        memory_delta_mb: Memory delta in MB
        **kwargs: Additional performance metrics
    """
    metric_data = {
        "operation": operation,
        "duration_seconds": duration_seconds,
        "memory_mb": memory_mb,
        "memory_delta_mb": memory_delta_mb,
        **kwargs,
    }

    msg = f"PERFORMANCE: {operation} | Duration: {duration_seconds:.4f}s"
    if memory_mb is not None:
        msg += f" | Memory: {memory_mb:.2f} MB"
    if memory_delta_mb is not None:
        msg += f" | Memory delta: {memory_delta_mb:+.2f} MB"

    logger.debug(msg, extra=metric_data)

"""Plain-text report sink for a batch of recommendations."""

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, Union

from ..exceptions import PersistenceError
from ..models.recommendation import Recommendation

logger = logging.getLogger(__name__)

REPORT_HEADER = "=== DAILY STOCK RECOMMENDATIONS ==="
REPORT_SEPARATOR = "---"


def format_recommendation(recommendation: Recommendation) -> List[str]:
    """Format one recommendation as report lines (without separator)."""
    return [
        f"Symbol: {recommendation.symbol} ({recommendation.company_name})",
        f"Current Price: ${recommendation.current_price:.2f}",
        f"Previous Close: ${recommendation.previous_close:.2f}",
        f"Recommendation: {recommendation.recommendation.value}",
        f"Target Price: ${recommendation.target_price:.2f}",
        f"Stop Loss: ${recommendation.stop_loss:.2f}",
        f"Risk Level: {recommendation.risk_level:.1f}/10",
        f"Reasoning: {recommendation.reasoning}",
        f"Key Keywords: {', '.join(recommendation.key_keywords)}",
    ]


def render_report(recommendations: Sequence[Recommendation], generated_at: Optional[datetime] = None) -> str:
    """Render the full report text.

    Args:
        recommendations: Batch to render, in batch order
        generated_at: Timestamp printed in the header (defaults to now)

    Returns:
        Report text; an empty batch renders the header only
    """
    generated_at = generated_at or datetime.now()
    lines = [REPORT_HEADER, f"Generated at: {generated_at.isoformat()}", ""]

    for recommendation in recommendations:
        lines.extend(format_recommendation(recommendation))
        lines.append(REPORT_SEPARATOR)
        lines.append("")

    return "\n".join(lines) + "\n"


class RecommendationReportWriter:
    """Write each batch to a timestamped text file in the output directory."""

    FILENAME_FORMAT = "stock_recommendations_%Y-%m-%d_%H-%M-%S.txt"

    def __init__(self, output_dir: Union[str, Path] = "."):
        """Initialize report writer.

        Args:
            output_dir: Directory the report files are created in
        """
        self.output_dir = Path(output_dir)

    def report_path(self, generated_at: datetime) -> Path:
        return self.output_dir / generated_at.strftime(self.FILENAME_FORMAT)

    def write(self, recommendations: Sequence[Recommendation]) -> Path:
        """Write a batch report.

        Args:
            recommendations: Batch to write

        Returns:
            Path of the written file

        Raises:
            PersistenceError: If the file cannot be written
        """
        generated_at = datetime.now()
        path = self.report_path(generated_at)

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(render_report(recommendations, generated_at), encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Failed to write report {path}: {e}", target=str(path)) from e

        logger.info(f"Recommendations written to file: {path}")
        return path

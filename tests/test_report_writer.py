"""Tests for the text report sink."""

from datetime import datetime
from unittest.mock import patch

import pytest

from conftest import make_recommendation
from stock_advisor.exceptions import PersistenceError
from stock_advisor.models.recommendation import RecommendationType
from stock_advisor.output.report_writer import RecommendationReportWriter, render_report


class TestRenderReport:
    """Test report text rendering."""

    def test_header_and_block(self):
        rec = make_recommendation("AAPL", RecommendationType.STRONG_BUY, 190.0)

        text = render_report([rec], generated_at=datetime(2024, 3, 1, 21, 0, 5))

        lines = text.splitlines()
        assert lines[0] == "=== DAILY STOCK RECOMMENDATIONS ==="
        assert lines[1] == "Generated at: 2024-03-01T21:00:05"
        assert lines[2] == ""
        assert lines[3:13] == [
            "Symbol: AAPL (AAPL Corporation)",
            "Current Price: $190.00",
            "Previous Close: $186.20",
            "Recommendation: STRONG_BUY",
            "Target Price: $205.20",
            "Stop Loss: $174.80",
            "Risk Level: 4.0/10",
            f"Reasoning: {rec.reasoning}",
            "Key Keywords: earnings, growth",
            "---",
        ]

    def test_blocks_in_batch_order(self, sample_recommendations):
        text = render_report(sample_recommendations)
        symbols = [line.split()[1] for line in text.splitlines() if line.startswith("Symbol:")]
        assert symbols == ["AAPL", "MSFT", "TSLA"]
        assert text.count("---\n") == 3

    def test_empty_batch_has_header_only(self):
        text = render_report([], generated_at=datetime(2024, 3, 1))
        assert text == "=== DAILY STOCK RECOMMENDATIONS ===\nGenerated at: 2024-03-01T00:00:00\n\n"


class TestRecommendationReportWriter:
    """Test report file writing."""

    def test_write_creates_timestamped_file(self, tmp_path, sample_recommendations):
        writer = RecommendationReportWriter(tmp_path / "reports")

        path = writer.write(sample_recommendations)

        assert path.parent == tmp_path / "reports"
        assert path.name.startswith("stock_recommendations_")
        assert path.suffix == ".txt"
        assert "Symbol: MSFT (MSFT Corporation)" in path.read_text()

    def test_report_path_format(self, tmp_path):
        writer = RecommendationReportWriter(tmp_path)
        path = writer.report_path(datetime(2024, 3, 1, 21, 0, 5))
        assert path.name == "stock_recommendations_2024-03-01_21-00-05.txt"

    def test_write_failure_raises_persistence_error(self, tmp_path):
        writer = RecommendationReportWriter(tmp_path)
        with patch("pathlib.Path.write_text", side_effect=OSError("read-only file system")):
            with pytest.raises(PersistenceError, match="read-only"):
                writer.write([make_recommendation()])

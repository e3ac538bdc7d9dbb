"""Output sinks for generated recommendations."""

from .report_writer import RecommendationReportWriter, render_report

__all__ = ["RecommendationReportWriter", "render_report"]

"""Data source implementations."""

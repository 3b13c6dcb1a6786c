"""Download YCharts price history as CSV."""

__version__ = "1.0.0"

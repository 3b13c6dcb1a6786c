"""Data providers for external sources."""

from .base import SeriesProvider
from .ycharts import YChartsProvider, describe_status

__all__ = [
    "SeriesProvider",
    "YChartsProvider",
    "describe_status",
]

"""Series transformations."""

from .interpolation import (
    DailyLinearInterpolator,
    InterpolationMode,
    interpolate,
    interpolate_series,
)

__all__ = [
    "DailyLinearInterpolator",
    "InterpolationMode",
    "interpolate",
    "interpolate_series",
]

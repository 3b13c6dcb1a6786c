"""Data collection, parsing and export."""

from .series import TimePoint, Series, date_from_unix_millis
from .parser import ParseResult, parse_response
from .export import render_csv, write_csv

__all__ = [
    "TimePoint",
    "Series",
    "date_from_unix_millis",
    "ParseResult",
    "parse_response",
    "render_csv",
    "write_csv",
]

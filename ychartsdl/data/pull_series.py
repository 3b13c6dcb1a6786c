"""Pull one YCharts series and write it as delimited text."""

import re
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from loguru import logger

from ..config.settings import Settings
from ..errors import PointParseWarning
from ..features.interpolation import InterpolationMode, interpolate_series
from .export import write_csv
from .parser import parse_response
from .providers.base import SeriesProvider
from .providers.ycharts import YChartsProvider
from .series import Series

_FILENAME_UNSAFE = re.compile(r"[\s,:.;/\\]+")


@dataclass(frozen=True)
class PullResult:
    """Outcome of a successful pull."""

    path: Path
    series: Series
    warnings: List[PointParseWarning] = field(default_factory=list)


def default_output_path(identifier: str, settings: Settings, now: Optional[float] = None) -> str:
    """Build ``{prefix}_{TICKER}_{UNIXTIME}.csv`` in the current directory.

    Args:
        identifier: Ticker, stripped of characters that are unsafe in file names
        settings: Settings providing the file name prefix
        now: Unix time in seconds, defaults to the current time

    Returns:
        Relative output path
    """
    unix_time = int(time.time() if now is None else now)
    sanitized = _FILENAME_UNSAFE.sub("", identifier)
    return f"{settings.output_prefix}_{sanitized}_{unix_time}.csv"


def pull_series(
    identifier: str,
    settings: Settings,
    session_token: str = "",
    interpolate: bool = False,
    path: Optional[Union[str, Path]] = None,
    provider: Optional[SeriesProvider] = None,
) -> PullResult:
    """Fetch, parse, optionally interpolate, and export one series.

    Args:
        identifier: YCharts-formatted ticker, e.g. "GOOG" or "M:VFISX"
        settings: Explicit configuration for the provider and the exporter
        session_token: Optional YCharts session ID for premium data
        interpolate: Fill missing calendar days by linear interpolation
        path: Output path, defaults to ``default_output_path``
        provider: Source of the raw payload, defaults to ``YChartsProvider``

    Returns:
        PullResult with the written path, the exported series and the skipped points

    Raises:
        TransportError: If the request fails
        ParseError: If the payload does not have the expected shape
        OrderError: If interpolation meets out-of-order dates
        ExportError: If the output file cannot be written
    """
    provider = provider or YChartsProvider(settings)

    raw = provider.fetch_raw(identifier, session_token=session_token)
    parsed = parse_response(raw, identifier=identifier)

    mode = InterpolationMode.LINEAR_DAILY if interpolate else InterpolationMode.OFF
    series = interpolate_series(parsed.series, mode)
    if interpolate:
        logger.debug("Interpolated {} points to {}", len(parsed.series), len(series))

    target = write_csv(series, path or default_output_path(identifier, settings), settings)
    return PullResult(path=target, series=series, warnings=parsed.warnings)

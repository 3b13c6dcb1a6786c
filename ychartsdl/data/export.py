"""Delimited text export of a Series."""

from pathlib import Path
from typing import Union

import pandas as pd
from loguru import logger

from ..config.settings import Settings
from ..errors import ExportError
from .series import Series

HEADERS = ("Date", "Change")


def to_frame(series: Series, settings: Settings) -> pd.DataFrame:
    """Build the two-column export frame, dates already rendered as text."""
    return pd.DataFrame(
        {
            HEADERS[0]: [d.strftime(settings.output_date_format) for d in series.dates],
            HEADERS[1]: pd.Series(series.values, dtype="float64"),
        },
        columns=list(HEADERS),
    )


def render_csv(series: Series, settings: Settings) -> str:
    """Render the header line and one line per point, without a trailing terminator."""
    terminator = settings.output_line_terminator
    text = to_frame(series, settings).to_csv(
        sep=settings.output_delimiter,
        index=False,
        lineterminator=terminator,
    )
    if text.endswith(terminator):
        text = text[: -len(terminator)]
    return text


def write_csv(series: Series, path: Union[str, Path], settings: Settings) -> Path:
    """Write the series to ``path``.

    Raises:
        ExportError: If the file cannot be written; carries the path and the content
    """
    content = render_csv(series, settings)
    target = Path(path)
    try:
        # newline="" keeps the configured terminator byte-for-byte
        with open(target, "w", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as e:
        raise ExportError(str(target), content, reason=str(e)) from e

    logger.debug("Wrote {} rows to {}", len(series), target)
    return target

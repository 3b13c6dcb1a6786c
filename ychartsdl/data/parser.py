"""Parse a raw YCharts chart response into a validated Series.

The response is a JSON object that echoes the request queries and carries a
two dimensional ``chart_data`` array (one axis per security, one per calc).
Only the first security/calc is read::

    {"chart_data": [[{"raw_data": [["1577836800000", "100.0"], ...]}]]}

A broken top-level shape aborts the whole parse with ``ParseError``. A single
malformed point is skipped and reported as a ``PointParseWarning``.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Annotated, Any, List, Optional, Sequence, Union
from datetime import date

from loguru import logger
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from ..errors import ParseError, PointParseWarning
from .series import Series, TimePoint, date_from_unix_millis

ROOT_PATH = "<root>"

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_INTEGER_LITERAL = re.compile(r"\s*[+-]?[0-9]+\s*")
_DECIMAL_LITERAL = re.compile(r"\s*[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?\s*")


class _ChartResponse(BaseModel):
    chart_data: Annotated[List[Any], Field(min_length=1)]


class _ChartEntry(BaseModel):
    raw_data: List[Any]


_CHART_ROW = TypeAdapter(Annotated[List[Any], Field(min_length=1)])


@dataclass(frozen=True)
class ParseResult:
    """Parsed series plus the points that were skipped on the way."""

    series: Series
    warnings: List[PointParseWarning] = field(default_factory=list)


class _PointRejected(ValueError):
    pass


def _render_path(prefix: str, loc: Sequence[Union[str, int]]) -> str:
    path = "" if prefix == ROOT_PATH else prefix
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path or ROOT_PATH


def _shape_error(prefix: str, exc: ValidationError) -> ParseError:
    first = exc.errors()[0]
    return ParseError(_render_path(prefix, first["loc"]), detail=first["msg"])


def _descend_raw_data(text: Union[str, bytes]) -> List[Any]:
    """Walk chart_data -> [0] -> [0] -> raw_data, failing with the path reached."""
    try:
        response = _ChartResponse.model_validate_json(text)
    except ValidationError as e:
        raise _shape_error(ROOT_PATH, e) from e

    try:
        row = _CHART_ROW.validate_python(response.chart_data[0])
    except ValidationError as e:
        raise _shape_error("chart_data[0]", e) from e

    try:
        entry = _ChartEntry.model_validate(row[0])
    except ValidationError as e:
        raise _shape_error("chart_data[0][0]", e) from e

    return entry.raw_data


def _token_text(token: Any) -> Optional[str]:
    # JSON numbers are read through their decimal text; anything else is malformed
    if isinstance(token, bool):
        return None
    if isinstance(token, str):
        return token
    if isinstance(token, (int, float)):
        return str(token)
    return None


def parse_timestamp(token: Any) -> date:
    """Parse a millisecond Unix timestamp token to a calendar date.

    Raises:
        ValueError: If the token is not a 64-bit integer literal or the day is out of range
    """
    text = _token_text(token)
    if text is None or not _INTEGER_LITERAL.fullmatch(text):
        raise _PointRejected("timestamp is not an integer literal")
    millis = int(text)
    if not INT64_MIN <= millis <= INT64_MAX:
        raise _PointRejected("timestamp is outside the 64-bit range")
    try:
        return date_from_unix_millis(millis)
    except OverflowError:
        raise _PointRejected("timestamp is outside the representable date range") from None


def parse_value(token: Any) -> float:
    """Parse a decimal literal token to a finite float.

    Raises:
        ValueError: If the token is not a finite decimal literal
    """
    text = _token_text(token)
    if text is None or not _DECIMAL_LITERAL.fullmatch(text):
        raise _PointRejected("value is not a decimal literal")
    value = float(text)
    if not math.isfinite(value):
        raise _PointRejected("value is not finite")
    return value


def _parse_point(item: Any) -> TimePoint:
    if not isinstance(item, list) or len(item) != 2:
        raise _PointRejected("expected a [timestamp, value] pair")
    return TimePoint(date=parse_timestamp(item[0]), value=parse_value(item[1]))


def parse_response(text: Union[str, bytes], identifier: str = "") -> ParseResult:
    """Parse a raw YCharts response into a Series.

    Args:
        text: Raw response body
        identifier: Ticker the response was fetched for, carried on the Series

    Returns:
        ParseResult with the points in source order and any skipped-point warnings

    Raises:
        ParseError: If the JSON cannot be decoded or the raw_data path is missing
    """
    raw_data = _descend_raw_data(text)

    points: List[TimePoint] = []
    warnings: List[PointParseWarning] = []

    for index, item in enumerate(raw_data):
        try:
            point = _parse_point(item)
        except _PointRejected as e:
            warning = PointParseWarning(index=index, token=item, reason=str(e))
            logger.warning("Skipping malformed point: {}", warning)
            warnings.append(warning)
            continue
        points.append(point)

    logger.debug("Parsed {} points ({} skipped) for {!r}", len(points), len(warnings), identifier)
    return ParseResult(series=Series(identifier=identifier, points=tuple(points)), warnings=warnings)

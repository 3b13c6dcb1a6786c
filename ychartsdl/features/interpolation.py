"""Calendar-day gap filling by linear interpolation."""

from datetime import timedelta
from enum import Enum
from typing import Iterable, Iterator, Optional, Union

from ..data.series import Series, TimePoint, days_between
from ..errors import OrderError


class InterpolationMode(str, Enum):
    OFF = "off"
    LINEAR_DAILY = "linear-daily"


class _State(Enum):
    AWAITING_FIRST = "awaiting-first"
    HAVE_LAST = "have-last"
    EXHAUSTED = "exhausted"


class DailyLinearInterpolator(Iterator[TimePoint]):
    """Single-pass stream that fills missing calendar days between consecutive points.

    Every input point is emitted exactly once, in input order, with synthetic
    points for the missing days of each gap emitted between them. A pair on
    the same day is passed through without synthetic points. A pair going
    backwards in time raises ``OrderError`` and ends the stream.
    """

    def __init__(self, points: Iterable[TimePoint]):
        self._source = iter(points)
        self._state = _State.AWAITING_FIRST
        self._last: Optional[TimePoint] = None
        self._target: Optional[TimePoint] = None
        self._delta_days = 0
        self._offset = 0

    @property
    def state(self) -> str:
        return self._state.value

    def __iter__(self) -> "DailyLinearInterpolator":
        return self

    def __next__(self) -> TimePoint:
        if self._state is _State.EXHAUSTED:
            raise StopIteration

        if self._state is _State.AWAITING_FIRST:
            first = next(self._source, None)
            if first is None:
                self._state = _State.EXHAUSTED
                raise StopIteration
            self._last = first
            self._state = _State.HAVE_LAST
            return first

        if self._target is None:
            current = next(self._source, None)
            if current is None:
                self._state = _State.EXHAUSTED
                raise StopIteration
            delta_days = days_between(self._last.date, current.date)
            if delta_days < 0:
                self._state = _State.EXHAUSTED
                raise OrderError(self._last, current)
            self._target = current
            self._delta_days = delta_days
            self._offset = 1

        if self._offset < self._delta_days:
            point = self._synthetic_point(self._offset)
            self._offset += 1
            return point

        point = self._target
        self._last = point
        self._target = None
        return point

    def _synthetic_point(self, offset: int) -> TimePoint:
        a = self._last.value
        b = self._target.value
        r = offset / self._delta_days
        return TimePoint(date=self._last.date + timedelta(days=offset), value=a + r * (b - a))


def interpolate(
    points: Iterable[TimePoint],
    mode: Union[InterpolationMode, str] = InterpolationMode.LINEAR_DAILY,
) -> Iterator[TimePoint]:
    """Lazily apply the interpolation mode to a chronological stream of points.

    Args:
        points: Points in chronological order
        mode: ``off`` passes points through, ``linear-daily`` fills missing days

    Returns:
        Iterator over the output points
    """
    mode = InterpolationMode(mode)
    if mode is InterpolationMode.OFF:
        return iter(points)
    return DailyLinearInterpolator(points)


def interpolate_series(
    series: Series,
    mode: Union[InterpolationMode, str] = InterpolationMode.LINEAR_DAILY,
) -> Series:
    """Return a new Series with the interpolation mode applied.

    The output is fully built before returning, so an ``OrderError`` leaves
    no partial result behind.

    Raises:
        OrderError: If two consecutive points go backwards in time
    """
    return Series(identifier=series.identifier, points=tuple(interpolate(series.points, mode)))

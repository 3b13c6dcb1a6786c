"""Date-indexed series model and the time helpers shared by parser and interpolator."""

from datetime import date, timedelta
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict

UNIX_EPOCH = date(1970, 1, 1)
MILLIS_PER_DAY = 86_400_000


class TimePoint(BaseModel):
    """A single (date, value) observation."""

    model_config = ConfigDict(frozen=True)

    date: date
    value: float


class Series(BaseModel):
    """Ordered, immutable sequence of observations for one identifier.

    Points are kept in the order they were received. Nothing in this package
    re-sorts a Series; ordering problems surface as errors downstream.
    """

    model_config = ConfigDict(frozen=True)

    identifier: str = ""
    points: Tuple[TimePoint, ...] = ()

    def __len__(self) -> int:
        return len(self.points)

    @property
    def dates(self) -> List[date]:
        return [p.date for p in self.points]

    @property
    def values(self) -> List[float]:
        return [p.value for p in self.points]


def date_from_unix_millis(millis: int) -> date:
    """Convert milliseconds since the Unix epoch to the calendar day containing that instant.

    Integer floor division keeps the conversion exact for the whole 64-bit
    range; instants before the epoch land on the earlier day.

    Raises:
        OverflowError: If the day falls outside the range of ``datetime.date``
    """
    return UNIX_EPOCH + timedelta(days=millis // MILLIS_PER_DAY)


def days_between(start: date, end: date) -> int:
    """Whole-day difference ``end - start``."""
    return (end - start).days

"""Error taxonomy for the download pipeline."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class YChartsError(RuntimeError):
    """Base class for errors that abort a run."""
    pass


class TransportError(YChartsError):
    """Raised by the fetcher when the request fails or returns a non-success status."""

    def __init__(self, message: str, url: str, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class ShapeErrorKind(str, Enum):
    UNEXPECTED_SHAPE = "UnexpectedShape"


class ParseError(YChartsError):
    """Raised when the response does not have the expected nested shape."""

    def __init__(self, path: str, kind: ShapeErrorKind = ShapeErrorKind.UNEXPECTED_SHAPE, detail: str = ""):
        self.kind = kind
        self.path = path
        self.detail = detail
        message = f"{kind.value} at {path}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class OrderError(YChartsError):
    """Raised when two consecutive points are not in chronological order."""

    def __init__(self, previous: Any, current: Any):
        self.previous = previous
        self.current = current
        super().__init__(
            f"Input data is not in chronological order: "
            f"{previous.date.isoformat()} is followed by {current.date.isoformat()}"
        )


class ExportError(YChartsError):
    """Raised when the output file cannot be written.

    The message carries the full content so computed results are not lost.
    """

    def __init__(self, path: str, content: str, reason: str = ""):
        self.path = path
        self.content = content
        self.reason = reason
        super().__init__(
            f"Failed to write to the output file. The output path was:\n{path}\n"
            + (f"Reason: {reason}\n" if reason else "")
            + f"\nThe output contents were:\n{content}\n"
        )


@dataclass(frozen=True)
class PointParseWarning:
    """A raw point that was skipped; recorded, never raised."""

    index: int
    token: Any
    reason: str

    def __str__(self) -> str:
        return f"raw_data[{self.index}] skipped ({self.reason}): {self.token!r}"

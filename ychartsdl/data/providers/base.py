"""Base provider interface for chart data sources."""

from abc import ABC, abstractmethod


class SeriesProvider(ABC):
    """Interface for a source that returns one raw chart payload per identifier."""

    @abstractmethod
    def build_url(self, identifier: str) -> str:
        """Return the request URL for the identifier."""
        ...

    @abstractmethod
    def fetch_raw(self, identifier: str, session_token: str = "") -> str:
        """Return the raw response body for the identifier.

        Raises:
            TransportError: If the request fails or returns a non-success status
        """
        ...

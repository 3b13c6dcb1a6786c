"""YCharts chart data provider."""

from typing import Optional

import requests
from loguru import logger

from ...config.settings import Settings
from ...errors import TransportError
from .base import SeriesProvider

# Help text for the statuses YCharts is known to answer with
STATUS_MESSAGES = {
    400: (
        "400 error. Your ticker may be invalid (MUTFs need an M: prefix) or "
        "YCharts may have changed its request format. The URL was:\n{url}"
    ),
    401: (
        "401 (Unauthorized) error. YCharts may have patched some holes, changed its format, "
        "or changed how it restricts premium content. The URL was:\n{url}"
    ),
    403: (
        "403 (Forbidden) error. YCharts may have patched some holes, changed its format, "
        "or changed how it restricts premium content. The URL was:\n{url}"
    ),
    404: "404 error. YCharts may have changed its request format. The URL was:\n{url}",
}


def describe_status(status_code: int, url: str) -> str:
    """Return the diagnostic message for a failed status."""
    template = STATUS_MESSAGES.get(status_code, "HTTP {status} error. The URL was:\n{url}")
    return template.format(status=status_code, url=url)


class YChartsProvider(SeriesProvider):
    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.settings = settings
        # Plain session: no retry adapter is mounted, a failed request fails the run
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "User-Agent": settings.http_user_agent,
                "Content-Type": settings.http_content_type,
            }
        )

    def build_url(self, identifier: str) -> str:
        return self.settings.url_template.format(identifier)

    def fetch_raw(self, identifier: str, session_token: str = "") -> str:
        url = self.build_url(identifier)

        # Without a session ID only the logged-out data is available (5 years of history)
        if session_token:
            self.session.cookies.set(
                self.settings.session_cookie_name,
                session_token,
                domain=self.settings.session_cookie_domain,
            )

        logger.debug("Requesting {}", url)
        try:
            r = self.session.get(url, timeout=self.settings.request_timeout)
        except requests.exceptions.Timeout as e:
            raise TransportError(f"Request timed out ({e}). The URL was:\n{url}", url) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request failed ({e}). The URL was:\n{url}", url) from e

        if not 200 <= r.status_code < 300:
            raise TransportError(describe_status(r.status_code, url), url, status_code=r.status_code)

        logger.debug("Received {} bytes from {}", len(r.content), url)
        return r.text

"""Tests for the YCharts provider with a mocked HTTP session."""

import pytest
import requests
from unittest.mock import Mock, patch

from ychartsdl.config.settings import Settings
from ychartsdl.data.providers.ycharts import YChartsProvider, describe_status
from ychartsdl.errors import TransportError


@pytest.fixture
def settings():
    return Settings(_env_file=None, url_template="https://example.test/chart?securities=id:{0}")


def _response(status_code: int, text: str = "") -> Mock:
    response = Mock()
    response.status_code = status_code
    response.text = text
    response.content = text.encode("ascii")
    return response


class TestYChartsProvider:
    """Test request construction and status classification."""

    def test_build_url(self, settings):
        """Test the identifier is substituted into the template."""
        provider = YChartsProvider(settings)
        assert provider.build_url("M:VFISX") == "https://example.test/chart?securities=id:M:VFISX"

    def test_default_template_contains_identifier(self):
        """Test the default template targets the fund_data endpoint."""
        provider = YChartsProvider(Settings(_env_file=None))
        url = provider.build_url("GOOG")
        assert url.startswith("https://ycharts.com/charts/fund_data.json?")
        assert "securities=id:GOOG,include:true" in url

    def test_fetch_success_returns_body(self, settings):
        """Test a 200 response returns the body text with headers and timeout applied."""
        session = requests.Session()
        provider = YChartsProvider(settings, session=session)

        with patch.object(session, "get", return_value=_response(200, '{"chart_data": []}')) as mock_get:
            body = provider.fetch_raw("GOOG", session_token="abc123")

        assert body == '{"chart_data": []}'
        mock_get.assert_called_once_with(
            "https://example.test/chart?securities=id:GOOG",
            timeout=settings.request_timeout,
        )
        assert session.headers["User-Agent"] == settings.http_user_agent
        assert session.headers["Content-Type"] == settings.http_content_type
        assert session.cookies.get(settings.session_cookie_name, domain=settings.session_cookie_domain) == "abc123"

    def test_no_cookie_without_session_token(self, settings):
        """Test no session cookie is set when no token is given."""
        session = requests.Session()
        provider = YChartsProvider(settings, session=session)

        with patch.object(session, "get", return_value=_response(200, "{}")):
            provider.fetch_raw("GOOG")

        assert len(session.cookies) == 0

    @pytest.mark.parametrize(
        "status, fragment",
        [
            (400, "MUTFs need an M: prefix"),
            (401, "401 (Unauthorized)"),
            (403, "403 (Forbidden)"),
            (404, "404 error"),
            (500, "HTTP 500 error"),
            (302, "HTTP 302 error"),
        ],
    )
    def test_status_classification(self, settings, status, fragment):
        """Test each failing status maps to its message and carries the URL."""
        session = requests.Session()
        provider = YChartsProvider(settings, session=session)

        with patch.object(session, "get", return_value=_response(status)):
            with pytest.raises(TransportError) as exc_info:
                provider.fetch_raw("BAD")

        err = exc_info.value
        assert err.status_code == status
        assert err.url == "https://example.test/chart?securities=id:BAD"
        assert fragment in str(err)
        assert err.url in str(err)

    def test_network_error_is_unclassified(self, settings):
        """Test connection failures become TransportError without a status."""
        session = requests.Session()
        provider = YChartsProvider(settings, session=session)

        with patch.object(session, "get", side_effect=requests.exceptions.ConnectionError("refused")):
            with pytest.raises(TransportError) as exc_info:
                provider.fetch_raw("GOOG")

        assert exc_info.value.status_code is None
        assert "refused" in str(exc_info.value)

    def test_timeout_is_reported(self, settings):
        """Test timeouts are reported as TransportError."""
        session = requests.Session()
        provider = YChartsProvider(settings, session=session)

        with patch.object(session, "get", side_effect=requests.exceptions.Timeout("slow")):
            with pytest.raises(TransportError, match="timed out"):
                provider.fetch_raw("GOOG")

    def test_no_retry_on_failure(self, settings):
        """Test a failing request is attempted once."""
        session = requests.Session()
        provider = YChartsProvider(settings, session=session)

        with patch.object(session, "get", return_value=_response(503)) as mock_get:
            with pytest.raises(TransportError):
                provider.fetch_raw("GOOG")

        assert mock_get.call_count == 1


class TestDescribeStatus:
    """Test the status messages."""

    def test_messages_are_distinct(self):
        """Test 400, 401, 403 and 404 each have their own message."""
        messages = {describe_status(code, "u") for code in (400, 401, 403, 404)}
        assert len(messages) == 4

"""Tests for CSV export."""

import pytest
from datetime import date, datetime

from ychartsdl.config.settings import Settings
from ychartsdl.data.export import render_csv, to_frame, write_csv
from ychartsdl.data.series import Series, TimePoint
from ychartsdl.errors import ExportError


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def series():
    return Series(
        identifier="GOOG",
        points=(
            TimePoint(date=date(2020, 1, 1), value=100.0),
            TimePoint(date=date(2020, 1, 2), value=110.00000000000001),
            TimePoint(date=date(2020, 1, 3), value=-0.5),
        ),
    )


class TestRenderCsv:
    """Test the rendered text."""

    def test_header_and_rows(self, series, settings):
        """Test header line, one row per point, CRLF separators, no trailing newline."""
        text = render_csv(series, settings)

        assert text == (
            "Date,Change\r\n"
            "2020-01-01,100.0\r\n"
            "2020-01-02,110.00000000000001\r\n"
            "2020-01-03,-0.5"
        )

    def test_values_round_trip(self, series, settings):
        """Test dates and values can be recovered from the text."""
        rows = render_csv(series, settings).split("\r\n")[1:]

        recovered = [
            (datetime.strptime(d, settings.output_date_format).date(), float(v))
            for d, v in (row.split(",") for row in rows)
        ]
        assert recovered == [(p.date, p.value) for p in series.points]

    def test_custom_delimiter_format_and_terminator(self, series):
        """Test delimiter, date format and line terminator come from settings."""
        settings = Settings(
            _env_file=None,
            output_delimiter=";",
            output_date_format="%m/%d/%Y",
            output_line_terminator="\n",
        )

        text = render_csv(series, settings)

        assert text.splitlines()[0] == "Date;Change"
        assert text.splitlines()[1] == "01/01/2020;100.0"
        assert "\r" not in text

    def test_empty_series_has_header_only(self, settings):
        """Test an empty series renders just the header."""
        assert render_csv(Series(), settings) == "Date,Change"

    def test_frame_columns(self, series, settings):
        """Test the export frame has the two expected columns."""
        frame = to_frame(series, settings)

        assert list(frame.columns) == ["Date", "Change"]
        assert len(frame) == 3


class TestWriteCsv:
    """Test writing to disk."""

    def test_write_creates_file(self, series, settings, tmp_path):
        """Test the file content matches the rendered text byte for byte."""
        target = tmp_path / "out.csv"

        written = write_csv(series, target, settings)

        assert written == target
        assert target.read_bytes() == render_csv(series, settings).encode("utf-8")

    def test_write_failure_raises_export_error(self, series, settings, tmp_path):
        """Test an unwritable path raises ExportError with the path and the content."""
        target = tmp_path / "missing_dir" / "out.csv"

        with pytest.raises(ExportError) as exc_info:
            write_csv(series, target, settings)

        err = exc_info.value
        assert err.path == str(target)
        assert err.content == render_csv(series, settings)
        assert str(target) in str(err)
        assert "2020-01-02,110.00000000000001" in str(err)

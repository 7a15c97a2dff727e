# ruff: noqa: PLR2004
from datetime import date
from pathlib import Path

import pytest

from ado_lab_bootstrap.core.exceptions import ArchiveExtractionError
from ado_lab_bootstrap.utils.forecast import refresh_dates, refresh_forecast

TODAY = date(2024, 6, 15)


def test_refresh_dates() -> None:
    """Test dates from 2000 to 2029 are replaced and later ones are kept."""
    text = '{"start": "2023-05-01", "end": "2019-12-31", "future": "2031-01-01"}'
    content, count = refresh_dates(text, TODAY)

    if content != '{"start": "2024-06-15", "end": "2024-06-15", "future": "2031-01-01"}':
        pytest.fail(f"Unexpected content: {content}")
    if count != 2:
        pytest.fail(f"Expected 2 replacements, got {count}")


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("2000-01-01", "2024-06-15"),
        ("2029-12-31", "2024-06-15"),
        ("1999-12-31", "1999-12-31"),
        ("2030-01-01", "2030-01-01"),
        ("2023-05-01T08:00:00Z", "2024-06-15T08:00:00Z"),
        ("no dates here", "no dates here"),
    ],
)
def test_refresh_dates_range(text: str, expected: str) -> None:
    """Test the boundaries of the date range."""
    content, _ = refresh_dates(text, TODAY)
    if content != expected:
        pytest.fail(f"Expected '{expected}', got '{content}'")


def test_refresh_dates_defaults_to_today() -> None:
    """Test the current date is used by default."""
    content, _ = refresh_dates("2020-02-02")
    if content != date.today().isoformat():
        pytest.fail(f"Expected today's date, got '{content}'")


def test_refresh_forecast(tmp_path: Path) -> None:
    """Test the refreshed file is written to the destination."""
    source = tmp_path / "extracted" / "jobs.json"
    source.parent.mkdir()
    source.write_text('[{"date": "2022-01-01"}, {"date": "2022-01-02"}]', encoding="utf-8")
    destination = tmp_path / "jobs.json"

    count = refresh_forecast(source, destination, TODAY)

    if count != 2:
        pytest.fail(f"Expected 2 replacements, got {count}")
    if destination.read_text(encoding="utf-8") != '[{"date": "2024-06-15"}, {"date": "2024-06-15"}]':
        pytest.fail("Unexpected destination content")
    if source.read_text(encoding="utf-8") != '[{"date": "2022-01-01"}, {"date": "2022-01-02"}]':
        pytest.fail("Expected the source file to be left untouched")


def test_refresh_forecast_missing_source(tmp_path: Path) -> None:
    """Test a missing forecast file raises ArchiveExtractionError."""
    with pytest.raises(ArchiveExtractionError):
        refresh_forecast(tmp_path / "missing.json", tmp_path / "jobs.json", TODAY)


def test_refresh_forecast_non_utf8_source(tmp_path: Path) -> None:
    """Test an undecodable forecast file raises ArchiveExtractionError."""
    source = tmp_path / "source.json"
    source.write_bytes(b'[{"date": "2022-01-01", "site": "caf\xe9"}]')
    with pytest.raises(ArchiveExtractionError):
        refresh_forecast(source, tmp_path / "jobs.json", TODAY)


def test_refresh_forecast_unwritable_destination(tmp_path: Path) -> None:
    """Test a failed write raises ArchiveExtractionError naming the destination."""
    source = tmp_path / "source.json"
    source.write_text('[{"date": "2022-01-01"}]', encoding="utf-8")
    destination = tmp_path / "missing" / "jobs.json"

    with pytest.raises(ArchiveExtractionError) as exc_info:
        refresh_forecast(source, destination, TODAY)

    if str(destination) not in str(exc_info.value):
        pytest.fail(f"Expected the destination in the error, got: {exc_info.value}")

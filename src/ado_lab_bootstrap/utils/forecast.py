"""Forecast data refresh.

The lab ships a forecast data file whose dates go stale. Refreshing rewrites every
date between 2000-01-01 and 2029-12-31 to today's date. The rewrite is textual:
the JSON is never parsed, and replacing a fixed-width date with another keeps the
document well formed.
"""

import logging
import re
from datetime import date
from pathlib import Path

from ado_lab_bootstrap.core.exceptions import ArchiveExtractionError

DATE_PATTERN = re.compile(r"20[0-2]\d-\d{2}-\d{2}")


def refresh_dates(text: str, today: date | None = None) -> tuple[str, int]:
    """Replace every date in the text with today's date, returning the new text and the number of replacements."""
    today = today or date.today()
    return DATE_PATTERN.subn(today.isoformat(), text)


def refresh_forecast(source: Path, destination: Path, today: date | None = None) -> int:
    """
    Refresh the dates of a forecast file.

    Args:
        source: Forecast file inside the extracted bundle
        destination: Where to write the refreshed file
        today: Date to use instead of the current date

    Returns:
        Number of dates replaced
    """
    if not source.is_file():
        raise ArchiveExtractionError(str(source), "forecast data file not found in the asset archive")

    try:
        text = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ArchiveExtractionError(str(source), f"cannot read forecast data file: {e!s}") from e

    content, count = refresh_dates(text, today)
    try:
        destination.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ArchiveExtractionError(str(destination), f"cannot write forecast data file: {e!s}") from e
    logging.info("forecast: replaced %d dates, written to %s", count, destination)
    return count

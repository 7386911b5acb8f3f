from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

from sentiment_tracker.domain.exceptions import ValidationError


def normalize_report_date(value: str | date | None, timezone: str = "UTC") -> date:
    """Coerce a user supplied date to a calendar date.

    None means today in `timezone`. Strings must be ISO dates (YYYY-MM-DD) or
    ISO datetimes, of which only the date part is kept.
    """
    if value is None or value == "":
        return datetime.now(tz=ZoneInfo(timezone)).date()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise ValidationError(f"Invalid date format: {value}. Use YYYY-MM-DD format.") from None

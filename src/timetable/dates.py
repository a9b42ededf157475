"""Date helpers shared by the fetcher, the search and the grid merger."""

from datetime import date, datetime, timedelta

# date.weekday(): Monday == 0 ... Sunday == 6
_SATURDAY = 5


def format_date(value: date) -> str:
    """Format a date as YYYY-MM-DD, the format used for day matching."""
    return value.strftime("%Y-%m-%d")


def iso_week_key(value: date) -> str:
    """Return the ISO week identifier for a date, e.g. "2024-5".

    Uses the ISO-8601 week-numbering year, so 2024-12-30 maps to "2025-1".
    The week number is not zero-padded.
    """
    iso_year, iso_week, _ = value.isocalendar()
    return f"{iso_year}-{iso_week}"


def is_weekend(value: date) -> bool:
    return value.weekday() >= _SATURDAY


def next_valid_date(now: datetime, cutoff_hour: int = 17) -> date:
    """Pick the date whose timetable should be shown at `now`.

    After `cutoff_hour` the school day is over, so the next day is used.
    Saturdays and Sundays are skipped.

    Args:
        now: Current local date and time.
        cutoff_hour: Hour (0-23) from which on the following day is shown.

    Returns:
        The first weekday on or after today (or tomorrow, past the cutoff).
    """
    day = now.date()
    if now.hour >= cutoff_hour:
        day += timedelta(days=1)

    while is_weekend(day):
        day += timedelta(days=1)

    return day


def format_updated(value: datetime) -> str:
    """Human-readable timestamp for the "last updated" line."""
    return value.strftime("%d.%m.%Y, %H:%M")

"""Grid merger - turns a resolved day into the hour x class display grid."""

import re
from datetime import date, datetime

from src.timetable.dates import format_date, format_updated
from src.timetable.models import DisplayGrid, Lesson, Note, ResolvedDay, Row

DEFAULT_COUNTDOWN_DAYS = 5

# Leading bullet dashes: hyphen, en dash, em dash
_LEADING_DASHES = re.compile(r"^[-–—]+")


def flatten_notes(notes: list[Note]) -> list[str]:
    """Split note descriptions into display lines without bullet dashes.

    "- Foo\\n—Bar\\n\\nBaz" becomes ["Foo", "Bar", "Baz"].
    """
    lines: list[str] = []
    for note in notes:
        for line in note.description.splitlines():
            text = _LEADING_DASHES.sub("", line.strip()).strip()
            if text:
                lines.append(text)
    return lines


def _last_hour(day: ResolvedDay) -> int:
    return max(
        (lesson.nr for column in day.classes for lesson in column.lessons),
        default=-1,
    )


def _lesson_at(lessons: list[Lesson], hour: int) -> Lesson | None:
    return next((lesson for lesson in lessons if lesson.nr == hour), None)


def merge(
    day: ResolvedDay,
    today: date,
    now: datetime | None = None,
    show_countdown_days: int = DEFAULT_COUNTDOWN_DAYS,
) -> DisplayGrid:
    """Merge the per-class lesson lists of a resolved day into a DisplayGrid.

    Args:
        day: Output of the holiday search.
        today: Caller's current local date, for `is_today`.
        now: Timestamp recorded as `updated` (default: local now).
        show_countdown_days: Days off from which on the grid is flagged
            for holiday mode.

    Returns:
        DisplayGrid with rows for hours 1..last_hour, one cell per class
        column (None for a free period), and the flattened notes.
    """
    now = now or datetime.now()
    date_str = format_date(day.actual_date)
    last_hour = _last_hour(day)

    rows = [
        Row(
            hour=hour,
            time=day.times.get(hour),
            lessons=[_lesson_at(column.lessons, hour) for column in day.classes],
        )
        for hour in range(1, last_hour + 1)
    ]

    return DisplayGrid(
        date=date_str,
        is_today=date_str == format_date(today),
        class_names=[column.class_name for column in day.classes],
        hours=rows,
        notes=flatten_notes(day.notes),
        last_hour=last_hour,
        updated=format_updated(now),
        days_off=day.days_off_before,
        holiday_mode=not day.classes or day.days_off_before >= show_countdown_days,
    )


def _cell(lesson: Lesson | None) -> str:
    if lesson is None:
        return ""
    text = lesson.display_subject
    if lesson.is_canceled:
        text += " (entfällt)"
    details = [part for part in (lesson.teacher_names, lesson.room_names) if part]
    if details:
        text += f" [{', '.join(details)}]"
    return text


def format_table(grid: DisplayGrid) -> str:
    """Format a DisplayGrid as a human-readable table.

    Columns: Hour | one column per class. Notes follow below the table.
    """
    if grid.holiday_mode:
        if grid.days_off >= 1:
            return f"FERIEN - noch {grid.days_off} Tage frei bis {grid.date}"
        return "FERIEN"

    headers = ["Stunde", *grid.class_names]
    rows = []
    for row in grid.hours:
        hour = str(row.hour)
        if row.time is not None:
            hour += f" {row.time.start}-{row.time.end}"
        rows.append([hour, *(_cell(lesson) for lesson in row.lessons)])

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    header_line = " | ".join(h.ljust(widths[i]) for i, h in enumerate(headers))
    separator = "-+-".join("-" * w for w in widths)
    row_lines = [
        " | ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)) for row in rows
    ]

    title = "Stundenplan" if grid.is_today else "Nächster Stundenplan"
    lines = [f"{title} {grid.date}", header_line, separator, *row_lines]
    if grid.notes:
        lines.append("")
        lines.append(" • ".join(grid.notes))
    lines.append(f"Zuletzt aktualisiert: {grid.updated}")
    return "\n".join(lines)

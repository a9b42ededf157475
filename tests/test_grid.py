from datetime import date, datetime

from src.timetable.extract import extract_day
from src.timetable.grid import flatten_notes, format_table, merge
from src.timetable.models import Note, ResolvedDay
from tests.factories import lesson, note, week_payload

NOW = datetime(2024, 5, 8, 7, 30)


def _resolved(lessons, notes=None, days_off: int = 0) -> ResolvedDay:
    day = date(2024, 5, 8)
    payload = week_payload({"2024-05-08": lessons}, notes={"2024-05-08": notes or []})
    extraction = extract_day(payload, day)
    return ResolvedDay(
        times=extraction.times,
        classes=extraction.classes,
        notes=extraction.notes,
        requested_date=day,
        actual_date=day,
        days_off_before=days_off,
    )


def _fixture() -> ResolvedDay:
    return _resolved(
        [
            lesson(1, level_id=5, local_id="5a", subject="Deutsch", short="De"),
            lesson(3, level_id=5, local_id="5b", status="canceled"),
            lesson(2, level_id=6, local_id="6a", subject="Sport", short="Sp"),
        ],
        notes=[note("- Foo\n—Bar\n\nBaz")],
    )


def test_flatten_notes_strips_dashes_and_blank_lines() -> None:
    notes = [Note(description="- Foo\n—Bar\n\nBaz"), Note(description="–– Qux  ")]

    assert flatten_notes(notes) == ["Foo", "Bar", "Baz", "Qux"]


def test_merge_builds_hour_by_class_rows() -> None:
    grid = merge(_fixture(), today=date(2024, 5, 8), now=NOW)

    assert grid.date == "2024-05-08"
    assert grid.is_today is True
    assert grid.class_names == ["5", "6a"]
    assert grid.last_hour == 3
    assert [row.hour for row in grid.hours] == [1, 2, 3]
    assert grid.hours[0].time.start == "07:45"

    first, second, third = grid.hours
    assert first.lessons[0].display_subject == "Deutsch"
    assert first.lessons[1] is None
    assert second.lessons[0] is None
    assert second.lessons[1].display_subject == "Sport"
    assert third.lessons[0].is_canceled is True
    assert grid.notes == ["Foo", "Bar", "Baz"]
    assert grid.updated == "08.05.2024, 07:30"


def test_merge_marks_other_days_as_not_today() -> None:
    grid = merge(_fixture(), today=date(2024, 5, 7), now=NOW)

    assert grid.is_today is False


def test_merge_empty_day() -> None:
    grid = merge(_resolved([]), today=date(2024, 5, 8), now=NOW)

    assert grid.last_hour == -1
    assert grid.hours == []
    assert grid.class_names == []
    assert grid.holiday_mode is True


def test_hours_length_matches_last_hour_with_gaps() -> None:
    grid = merge(_resolved([lesson(5)]), today=date(2024, 5, 8), now=NOW)

    assert grid.last_hour == 5
    assert len(grid.hours) == 5
    assert grid.hours[0].time is None
    assert grid.hours[0].lessons == [None]


def test_holiday_mode_from_countdown_threshold() -> None:
    short_break = merge(_resolved([lesson(1)], days_off=4), today=date(2024, 5, 8), now=NOW)
    long_break = merge(_resolved([lesson(1)], days_off=5), today=date(2024, 5, 8), now=NOW)

    assert short_break.holiday_mode is False
    assert long_break.holiday_mode is True
    assert long_break.days_off == 5


def test_merge_is_idempotent_with_frozen_clock() -> None:
    day = _fixture()

    first = merge(day, today=date(2024, 5, 8), now=NOW)
    second = merge(day, today=date(2024, 5, 8), now=NOW)

    assert first == second


def test_format_table() -> None:
    table = format_table(merge(_fixture(), today=date(2024, 5, 8), now=NOW))

    assert table.startswith("Stundenplan 2024-05-08")
    assert "1 07:45-08:30" in table
    assert "Mathematik (entfällt)" in table
    assert "Foo • Bar • Baz" in table


def test_format_table_holiday_countdown() -> None:
    grid = merge(_resolved([lesson(1)], days_off=9), today=date(2024, 5, 8), now=NOW)

    assert format_table(grid) == "FERIEN - noch 9 Tage frei bis 2024-05-08"

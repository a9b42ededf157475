from datetime import date

from src.timetable.extract import common_prefix, extract_day
from tests.factories import lesson, note, week_payload

DAY = "2024-05-08"


def _extract(lessons, notes=None):
    payload = week_payload({DAY: lessons}, notes={DAY: notes or []})
    return extract_day(payload, date(2024, 5, 8))


def test_common_prefix() -> None:
    assert common_prefix("5a", "5b") == "5"
    assert common_prefix("5a", "6b") == ""
    assert common_prefix("5a-Ev", "5a") == "5a"
    assert common_prefix("", "5a") == ""


def test_missing_day_is_empty_not_an_error() -> None:
    payload = week_payload({"2024-05-09": [lesson(1)]})

    result = extract_day(payload, date(2024, 5, 8))

    assert result.classes == []
    assert result.times == {}
    assert result.notes == []
    assert result.has_lessons is False


def test_invalid_lessons_are_discarded() -> None:
    result = _extract([lesson(0), lesson(2, level_id=0), lesson(3)])

    kept = [l for column in result.classes for l in column.lessons]
    assert [l.nr for l in kept] == [3]
    assert all(l.nr != 0 and l.group.level_id != 0 for l in kept)
    assert set(result.times) == {3}


def test_lessons_grouped_by_level_and_sorted_by_hour() -> None:
    result = _extract(
        [
            lesson(4, level_id=6, local_id="6a"),
            lesson(3, level_id=5),
            lesson(1, level_id=5),
            lesson(2, level_id=6, local_id="6a"),
            lesson(2, level_id=5),
        ]
    )

    assert [c.level_id for c in result.classes] == [5, 6]
    assert [l.nr for l in result.classes[0].lessons] == [1, 2, 3]
    assert [l.nr for l in result.classes[1].lessons] == [2, 4]


def test_class_name_is_common_prefix_of_group_labels() -> None:
    result = _extract(
        [
            lesson(1, level_id=5, local_id="5a"),
            lesson(2, level_id=5, local_id="5a"),
            lesson(3, level_id=5, local_id="5b"),
            lesson(1, level_id=6, local_id="5a"),
            lesson(2, level_id=6, local_id="6b"),
        ]
    )

    names = {c.level_id: c.class_name for c in result.classes}
    assert names == {5: "5", 6: ""}


def test_first_time_for_an_hour_wins() -> None:
    result = _extract(
        [
            lesson(1, level_id=5, time_from="07:45"),
            lesson(1, level_id=6, local_id="6a", time_from="08:00"),
        ]
    )

    assert result.times[1].start == "07:45"


def test_notes_are_copied_verbatim() -> None:
    result = _extract([lesson(1)], notes=[note("- Foo\n- Bar")])

    assert [n.description for n in result.notes] == ["- Foo\n- Bar"]


def test_day_with_only_notes_has_no_lessons() -> None:
    result = _extract([], notes=[note("Wandertag")])

    assert result.has_lessons is False
    assert len(result.notes) == 1

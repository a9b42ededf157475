"""Day extraction - isolates one day's lessons from a week payload.

Lessons are grouped into one column per class level. A level's display name
is the common prefix of all its group labels, so the groups "5a-Ev" and
"5a-Kath" of one level show up as column "5a-".
"""

from datetime import date

from src.timetable.dates import format_date
from src.timetable.logging import get_logger
from src.timetable.models import (
    ClassColumn,
    DayExtraction,
    Lesson,
    Note,
    TimeSlot,
    WeekPayload,
)

log = get_logger(__name__)


def common_prefix(current: str, label: str) -> str:
    """Longest common prefix of two labels, compared character by character.

    Stops at the first mismatch or at the end of either string, so
    common_prefix("5a", "6b") == "".
    """
    prefix = []
    for a, b in zip(current, label):
        if a != b:
            break
        prefix.append(a)
    return "".join(prefix)


def _is_valid(lesson: Lesson) -> bool:
    return lesson.group.level_id != 0 and lesson.nr != 0


def extract_day(payload: WeekPayload, target_date: date) -> DayExtraction:
    """Extract the lessons, hour times and notes of one day.

    A day missing from the payload is not an error; it yields an empty
    extraction. Lessons without a level or hour number are dropped.

    Args:
        payload: Week payload containing the target date.
        target_date: Day to extract.

    Returns:
        DayExtraction with one column per level (ascending level_id), each
        column's lessons sorted by hour number.
    """
    date_str = format_date(target_date)
    lessons_by_level: dict[int, list[Lesson]] = {}
    names_by_level: dict[int, str] = {}
    times_by_number: dict[int, TimeSlot] = {}
    notes: list[Note] = []

    for day in payload.days:
        if day.date != date_str:
            continue

        notes = list(day.notes)

        for lesson in day.lessons:
            if not _is_valid(lesson):
                log.debug(
                    "lesson_skipped",
                    date=date_str,
                    level_id=lesson.group.level_id,
                    nr=lesson.nr,
                )
                continue

            level = lesson.group.level_id
            lessons_by_level.setdefault(level, []).append(lesson)

            if level in names_by_level:
                names_by_level[level] = common_prefix(
                    names_by_level[level], lesson.group.local_id
                )
            else:
                names_by_level[level] = lesson.group.local_id

            # First lesson of an hour decides its time slot
            times_by_number.setdefault(lesson.nr, lesson.time)

    classes = [
        ClassColumn(
            level_id=level,
            class_name=names_by_level[level],
            lessons=sorted(lessons_by_level[level], key=lambda item: item.nr),
        )
        for level in sorted(lessons_by_level)
    ]

    return DayExtraction(times=times_by_number, classes=classes, notes=notes)

"""Pydantic models for journal week payloads and the derived timetable.

All data structures use Pydantic v2 for validation, serialization, and type safety.
Raw records mirror the journal API's JSON (`/journal/weeks/{year}-{week}`); missing
or null fields fall back to defaults so a sparse lesson never fails a whole week.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Subject names at least this long are replaced by their short label
_MAX_SUBJECT_NAME_LENGTH = 15

CANCELED_STATUS = "canceled"


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def _null_to_default(cls, value, info):
        # The API sends explicit nulls for absent labels and ids
        if value is None:
            field = cls.model_fields[info.field_name]
            if not field.is_required():
                return field.get_default(call_default_factory=True)
        return value


class Group(_Record):
    id: int | None = None
    local_id: str = ""  # Group label, e.g. "5a" or "5a-Ev"
    level_id: int = 0  # Class level; 0 marks an unusable lesson


class Subject(_Record):
    id: int | None = None
    local_id: str = ""  # Short label, e.g. "Ma"
    name: str = ""  # Full name, e.g. "Mathematik"
    tags: list[str] = Field(default_factory=list)
    for_field: str = Field(default="", alias="for")


class Teacher(_Record):
    id: int | None = None
    local_id: str = ""
    forename: str = ""
    name: str = ""

    @property
    def display_name(self) -> str:
        return f"{self.forename} {self.name}"


class Room(_Record):
    id: int | None = None
    local_id: str = ""  # Room label, e.g. "A101"


class TimeSlot(_Record):
    id: int | None = None
    nr: int = 0
    start: str = Field(default="", alias="from")  # "07:45"
    end: str = Field(default="", alias="to")  # "08:30"


class Lesson(_Record):
    """A single lesson of one group in one hour slot."""

    id: int | None = None
    nr: int = 0  # Hour-of-day slot; 0 marks an unusable lesson
    group: Group = Field(default_factory=Group)
    subject: Subject = Field(default_factory=Subject)
    status: str = ""  # "initial" | "planned" | "hold" | "canceled"
    rooms: list[Room] = Field(default_factory=list)
    teachers: list[Teacher] = Field(default_factory=list)
    time: TimeSlot = Field(default_factory=TimeSlot)

    @property
    def is_canceled(self) -> bool:
        # The API spells it "canceled"; nothing else counts as a cancellation
        return self.status == CANCELED_STATUS

    @property
    def display_subject(self) -> str:
        name = self.subject.name
        if not name or len(name) >= _MAX_SUBJECT_NAME_LENGTH:
            return self.subject.local_id
        return name

    @property
    def teacher_names(self) -> str:
        return "/".join(t.display_name for t in self.teachers)

    @property
    def room_names(self) -> str:
        return "/".join(r.local_id for r in self.rooms)


class Note(_Record):
    """Free-text note attached to a day (substitution plan remarks)."""

    id: str | int | None = None
    for_field: str = Field(default="", alias="for")
    source: str = ""
    description: str = ""  # May span several lines
    notable_type: str | None = None


class DayRecord(_Record):
    id: str | int
    date: str  # YYYY-MM-DD, matched by string equality
    lessons: list[Lesson] = Field(default_factory=list)
    notes: list[Note] = Field(default_factory=list)


class WeekData(_Record):
    days: list[DayRecord] = Field(default_factory=list)


class WeekPayload(_Record):
    """Raw reply for one ISO week: {"data": {"days": [...]}}."""

    data: WeekData

    @property
    def days(self) -> list[DayRecord]:
        return self.data.days


class ClassColumn(BaseModel):
    """All lessons of one class level on one day, sorted by hour."""

    level_id: int
    class_name: str  # Common prefix of the level's group labels
    lessons: list[Lesson] = Field(default_factory=list)


class DayExtraction(BaseModel):
    """Lessons, times and notes of one day taken from a week payload."""

    times: dict[int, TimeSlot] = Field(default_factory=dict)
    classes: list[ClassColumn] = Field(default_factory=list)
    notes: list[Note] = Field(default_factory=list)

    @property
    def has_lessons(self) -> bool:
        return any(column.lessons for column in self.classes)


class ResolvedDay(DayExtraction):
    """The school day that should be displayed for a requested date.

    `actual_date` differs from `requested_date` when the requested date was a
    holiday and a later school day was found.
    """

    requested_date: date
    actual_date: date
    days_off_before: int = 0  # Calendar days, weekends included


class Row(BaseModel):
    hour: int
    time: TimeSlot | None = None
    lessons: list[Lesson | None] = Field(default_factory=list)  # One per class column


class DisplayGrid(BaseModel):
    """Hour x class matrix handed to the presentation layer."""

    date: str  # YYYY-MM-DD of the resolved day
    is_today: bool
    class_names: list[str] = Field(default_factory=list)
    hours: list[Row] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)
    last_hour: int = -1  # -1 when the day has no lessons
    updated: str  # "DD.MM.YYYY, HH:MM"
    days_off: int = 0
    holiday_mode: bool = False  # Show a holiday countdown instead of the grid

"""School timetable resolver for the beste.schule journal API.

Fetches week payloads, extracts one day's lessons, searches forward over
holidays for the next school day and merges the result into an hour x class
display grid.
"""

from src.timetable.client import JournalClient, WeekFetcher
from src.timetable.grid import flatten_notes, format_table, merge
from src.timetable.models import DisplayGrid, ResolvedDay, WeekPayload
from src.timetable.search import HolidaySearch, get_timetable, resolve

__all__ = [
    "JournalClient",
    "WeekFetcher",
    "WeekPayload",
    "HolidaySearch",
    "ResolvedDay",
    "DisplayGrid",
    "resolve",
    "get_timetable",
    "merge",
    "flatten_notes",
    "format_table",
]

"""Per-run cache of fetched week payloads, keyed by ISO week ("2024-5").

A WeekCache belongs to exactly one resolve run and is dropped when the run
returns. It never evicts: a holiday search touches at most a handful of weeks.
"""

from collections.abc import Iterator

from src.timetable.client import WeekFetcher
from src.timetable.logging import get_logger
from src.timetable.models import WeekPayload

log = get_logger(__name__)


class WeekCache:
    def __init__(self) -> None:
        self._weeks: dict[str, WeekPayload] = {}

    def get(self, key: str) -> WeekPayload | None:
        return self._weeks.get(key)

    def put(self, key: str, payload: WeekPayload) -> None:
        self._weeks[key] = payload

    def get_or_fetch(self, key: str, fetcher: WeekFetcher) -> WeekPayload:
        """Return the cached week, fetching and storing it on a miss.

        Fetch errors propagate and leave the cache untouched.
        """
        payload = self._weeks.get(key)
        if payload is not None:
            log.debug("week_cache_hit", week=key)
            return payload

        payload = fetcher.fetch_week(key)
        self._weeks[key] = payload
        return payload

    def keys(self) -> list[str]:
        return list(self._weeks)

    def __contains__(self, key: object) -> bool:
        return key in self._weeks

    def __len__(self) -> int:
        return len(self._weeks)

    def __iter__(self) -> Iterator[str]:
        return iter(self._weeks)

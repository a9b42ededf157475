"""Holiday search - resolves a requested date to the day that should be shown.

If the requested date has lessons it is returned as is. Otherwise the search
walks forward day by day (Saturdays and Sundays skipped) until it finds a day
with lessons or the horizon runs out:

    Searching(d) --weekend / fetch error / no lessons--> Searching(d + 1)
    Searching(d) --lessons found-------------------------> Found(day)
    Searching(d) --d beyond horizon----------------------> Exhausted

Exhausted is not an error: the (empty) requested day is returned with zero
days off. Every run owns its own WeekCache, so a week that was fetched once is
not requested again in that run, and concurrent runs never share state.
"""

from collections.abc import Callable
from datetime import date, timedelta

from pydantic import BaseModel, ConfigDict

from src.timetable.cache import WeekCache
from src.timetable.client import JournalClient, WeekFetcher
from src.timetable.config import TimetableConfig, get_config
from src.timetable.dates import format_date, is_weekend, iso_week_key
from src.timetable.errors import FetchError, ResolutionCancelled
from src.timetable.extract import extract_day
from src.timetable.logging import get_logger, log_context
from src.timetable.models import DayExtraction, ResolvedDay, WeekPayload

log = get_logger(__name__)

DEFAULT_HORIZON_DAYS = 21


class Searching(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: date


class Found(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: ResolvedDay


class Exhausted(BaseModel):
    model_config = ConfigDict(frozen=True)


SearchState = Searching | Found | Exhausted


class HolidaySearch:
    """One resolve run for one requested date.

    Create a new instance per run; the instance owns the run's WeekCache.
    """

    def __init__(
        self,
        fetcher: WeekFetcher,
        requested_date: date,
        horizon_days: int = DEFAULT_HORIZON_DAYS,
        should_cancel: Callable[[], bool] | None = None,
    ) -> None:
        """Initialize HolidaySearch.

        Args:
            fetcher: Source of week payloads (usually a JournalClient).
            requested_date: Date the caller wants a timetable for.
            horizon_days: Last day offset (inclusive) that may be searched.
            should_cancel: Polled before every fetch; returning True aborts
                the run with ResolutionCancelled.
        """
        self.fetcher = fetcher
        self.requested_date = requested_date
        self.horizon_days = horizon_days
        self.should_cancel = should_cancel
        self.cache = WeekCache()

    @property
    def last_day(self) -> date:
        return self.requested_date + timedelta(days=self.horizon_days)

    def _week(self, day: date) -> WeekPayload:
        key = iso_week_key(day)
        if key not in self.cache and self.should_cancel and self.should_cancel():
            log.info("resolution_cancelled", date=format_date(day), week=key)
            raise ResolutionCancelled(f"Resolution cancelled before fetching week {key}")
        return self.cache.get_or_fetch(key, self.fetcher)

    def _resolved(self, extraction: DayExtraction, actual_date: date) -> ResolvedDay:
        return ResolvedDay(
            times=extraction.times,
            classes=extraction.classes,
            notes=extraction.notes,
            requested_date=self.requested_date,
            actual_date=actual_date,
            days_off_before=(actual_date - self.requested_date).days,
        )

    def step(self, state: Searching) -> SearchState:
        """Examine one candidate day and return the next state."""
        day = state.day
        if day > self.last_day:
            return Exhausted()

        following = Searching(day=day + timedelta(days=1))
        if is_weekend(day):
            return following

        log.debug("holiday_search_step", date=format_date(day))
        try:
            payload = self._week(day)
        except FetchError as e:
            # A broken week only costs this candidate day
            log.warning(
                "holiday_search_fetch_failed",
                date=format_date(day),
                week=iso_week_key(day),
                error=str(e),
            )
            return following

        extraction = extract_day(payload, day)
        if extraction.has_lessons:
            return Found(day=self._resolved(extraction, day))
        return following

    def run(self) -> ResolvedDay:
        """Resolve the requested date.

        Returns:
            ResolvedDay for the requested date, or for the next school day
            within the horizon, or the empty requested day if none was found.

        Raises:
            FetchError: If the requested date's own week cannot be fetched.
            ResolutionCancelled: If should_cancel() returned True.
        """
        with log_context(requested_date=format_date(self.requested_date)):
            return self._run()

    def _run(self) -> ResolvedDay:
        initial = extract_day(self._week(self.requested_date), self.requested_date)
        if initial.has_lessons:
            return self._resolved(initial, self.requested_date)

        log.info("holiday_detected", horizon_days=self.horizon_days)

        state: SearchState = Searching(day=self.requested_date + timedelta(days=1))
        while isinstance(state, Searching):
            state = self.step(state)

        if isinstance(state, Found):
            log.info(
                "next_school_day_found",
                date=format_date(state.day.actual_date),
                days_off=state.day.days_off_before,
                weeks_fetched=len(self.cache),
            )
            return state.day

        log.info("no_school_day_found", horizon_days=self.horizon_days)
        return self._resolved(initial, self.requested_date)


def resolve(
    fetcher: WeekFetcher,
    requested_date: date,
    horizon_days: int = DEFAULT_HORIZON_DAYS,
    should_cancel: Callable[[], bool] | None = None,
) -> ResolvedDay:
    """Resolve `requested_date` with a fresh, run-scoped week cache."""
    search = HolidaySearch(
        fetcher,
        requested_date,
        horizon_days=horizon_days,
        should_cancel=should_cancel,
    )
    return search.run()


def get_timetable(
    token: str,
    requested_date: date,
    config: TimetableConfig | None = None,
    should_cancel: Callable[[], bool] | None = None,
) -> ResolvedDay:
    """Fetch and resolve the timetable for `requested_date` using `token`."""
    config = config or get_config()
    client = JournalClient(
        token,
        base_url=config.api_base_url,
        timeout=config.request_timeout_seconds,
    )
    return resolve(
        client,
        requested_date,
        horizon_days=config.search_horizon_days,
        should_cancel=should_cancel,
    )

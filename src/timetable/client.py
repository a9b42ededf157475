"""Journal API client - fetches one ISO week of lessons per request.

The client is deliberately thin: it builds the week URL and the bearer headers,
performs exactly one GET per call and classifies failures into the error
hierarchy. Retrying is not its job; the holiday search decides what to do
when a week cannot be fetched.
"""

from typing import Protocol

import requests
from pydantic import ValidationError

from src.timetable.errors import AuthenticationError, ParseError, TransportError
from src.timetable.logging import get_logger
from src.timetable.models import WeekPayload

log = get_logger(__name__)

DEFAULT_BASE_URL = "https://beste.schule/api"

# Query parameters the journal needs to embed lessons and fill in planned ones
_WEEK_QUERY = {"include": "days.lessons", "interpolate": "true"}

_BODY_PREVIEW_CHARS = 200


class WeekFetcher(Protocol):
    """Anything that can produce the payload for an ISO week key like "2024-5"."""

    def fetch_week(self, week_key: str) -> WeekPayload: ...


class JournalClient:
    """HTTP client for /journal/weeks/{year}-{week}."""

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize JournalClient.

        Args:
            token: Bearer token for the journal API.
            base_url: API base URL without trailing slash.
            timeout: Timeout in seconds for a single request.
            session: Optional requests session (shared connection pool).
        """
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def week_url(self, week_key: str) -> str:
        return f"{self.base_url}/journal/weeks/{week_key}"

    def fetch(self, iso_year: int, iso_week: int) -> WeekPayload:
        """Fetch the week given as ISO (year, week) pair."""
        return self.fetch_week(f"{iso_year}-{iso_week}")

    def fetch_week(self, week_key: str) -> WeekPayload:
        """Fetch and parse one ISO week.

        Args:
            week_key: ISO week identifier, e.g. "2024-5".

        Returns:
            Parsed WeekPayload.

        Raises:
            AuthenticationError: If no token is set or the API rejects it.
            TransportError: On network failures and non-2xx responses.
            ParseError: If the body is not JSON or not a week payload.
        """
        if not self.token:
            raise AuthenticationError("No API token configured")

        url = self.week_url(week_key)
        log.info("week_fetch_started", week=week_key, url=url)

        try:
            resp = self.session.get(
                url,
                params=_WEEK_QUERY,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            log.warning("week_fetch_failed", week=week_key, error=str(e))
            raise TransportError(f"Request for week {week_key} failed: {e}") from e

        text = resp.text
        log.info(
            "week_fetch_response",
            week=week_key,
            status=resp.status_code,
            body_length=len(text),
        )

        if resp.status_code in (401, 403):
            raise AuthenticationError(
                f"API token rejected for week {week_key} ({resp.status_code})"
            )
        if resp.status_code >= 400:
            raise TransportError(
                f"Week {week_key} returned HTTP {resp.status_code}: "
                f"{text[:_BODY_PREVIEW_CHARS]}"
            )

        try:
            return WeekPayload.model_validate_json(text)
        except ValidationError as e:
            log.warning(
                "week_parse_failed",
                week=week_key,
                errors=e.error_count(),
            )
            raise ParseError(
                f"Failed to parse week {week_key}: {e.error_count()} errors"
                f" - Body preview: {text[:_BODY_PREVIEW_CHARS]}"
            ) from e

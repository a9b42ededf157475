"""Error hierarchy for timetable resolution.

The hierarchy separates failures to obtain a week payload (FetchError) from
everything else, so the holiday search can decide which errors end a run and
which only skip a candidate day.

Example:
    try:
        day = resolve(client, date(2024, 12, 23))
    except FetchError as e:
        # Initial fetch failed - show an error state to the user
        ...
"""


class TimetableError(Exception):
    """Base exception for all timetable errors."""

    pass


class FetchError(TimetableError):
    """A week payload could not be obtained from the journal API."""

    pass


class TransportError(FetchError):
    """Network failure reaching the data source.

    Examples: connection refused, timeouts, 5xx responses.
    """

    pass


class AuthenticationError(TransportError):
    """The API token was missing or rejected (401/403).

    Inherits from TransportError so the holiday search treats it like any other
    transport failure, while callers can still ask the user for a new token.
    """

    pass


class ParseError(FetchError):
    """Response body is not JSON or does not match the week payload shape."""

    pass


class ResolutionCancelled(TimetableError):
    """The caller aborted a resolve run between fetch steps."""

    pass

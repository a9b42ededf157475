import pytest

from src.timetable.cache import WeekCache
from src.timetable.errors import TransportError
from tests.factories import FakeFetcher, empty_week


def test_get_and_put() -> None:
    cache = WeekCache()
    payload = empty_week()

    assert cache.get("2024-19") is None
    cache.put("2024-19", payload)

    assert cache.get("2024-19") is payload
    assert "2024-19" in cache
    assert len(cache) == 1
    assert cache.keys() == ["2024-19"]


def test_get_or_fetch_fetches_once() -> None:
    cache = WeekCache()
    fetcher = FakeFetcher()

    first = cache.get_or_fetch("2024-19", fetcher)
    second = cache.get_or_fetch("2024-19", fetcher)

    assert first is second
    assert fetcher.calls == ["2024-19"]


def test_get_or_fetch_does_not_cache_failures() -> None:
    cache = WeekCache()
    fetcher = FakeFetcher({"2024-19": TransportError("boom")})

    with pytest.raises(TransportError):
        cache.get_or_fetch("2024-19", fetcher)

    assert "2024-19" not in cache

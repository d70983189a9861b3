"""Fixtures for ticker tests.

Provides a scripted DailySeriesSource that counts upstream calls and a
manual clock, so freshness can be tested without sleeping.
"""

import asyncio
from datetime import date, datetime, timedelta, timezone

import pytest

from app.ticker.interface import DailySeriesSource
from app.ticker.models import DailySeries, RawDailyEntry


def build_series(closes: list[str], start: date = date(2024, 1, 1)) -> dict[str, RawDailyEntry]:
    """Consecutive daily entries from `start`, closes given oldest first."""
    series = {}
    for offset, close in enumerate(closes):
        day = start + timedelta(days=offset)
        series[day.isoformat()] = RawDailyEntry(
            open=close, high=close, low=close, close=close, volume=1000 + offset
        )
    return series


class FakeDailySource(DailySeriesSource):
    """Scripted upstream. Fails the test if called more than `max_calls` times."""

    def __init__(
        self,
        series: dict[str, RawDailyEntry] | None = None,
        timezone_name: str = "US/Eastern",
        max_calls: int | None = None,
        delay: float = 0.0,
    ) -> None:
        self.series = series if series is not None else {}
        self.timezone_name = timezone_name
        self.max_calls = max_calls
        self.delay = delay
        self.error: Exception | None = None
        self.calls = 0
        self.block: asyncio.Event | None = None

    async def fetch_daily_adjusted(self, symbol: str) -> DailySeries:
        self.calls += 1
        if self.max_calls is not None and self.calls > self.max_calls:
            pytest.fail(f"upstream called {self.calls} times, expected at most {self.max_calls}")
        if self.block is not None:
            await self.block.wait()
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return DailySeries(symbol=symbol, timezone=self.timezone_name, series=dict(self.series))


class ManualClock:
    """Callable UTC clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(datetime(2024, 6, 3, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def make_series():
    return build_series


@pytest.fixture
def make_source():
    """Factory for FakeDailySource instances."""

    def _make(closes: list[str] | None = None, **kwargs) -> FakeDailySource:
        series = build_series(closes) if closes is not None else None
        return FakeDailySource(series=series, **kwargs)

    return _make

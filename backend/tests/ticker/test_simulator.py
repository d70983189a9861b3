"""Tests for the daily GBM simulator and SimulatedDailySource."""

from datetime import date

import pytest

from app.ticker.normalizer import normalize_time_series
from app.ticker.seed_prices import DEFAULT_SEED_PRICE, SEED_PRICES
from app.ticker.service import parse_price
from app.ticker.simulator import (
    SIMULATED_TIMEZONE,
    DailyGBMSimulator,
    SimulatedDailySource,
    trading_days,
)


class TestDailyGBMSimulator:
    """Unit tests for the daily GBM generator."""

    def test_path_length(self):
        assert len(DailyGBMSimulator("AAPL", seed=1).path(30)) == 30

    def test_empty_path(self):
        assert DailyGBMSimulator("AAPL", seed=1).path(0) == []

    def test_prices_are_positive(self):
        """GBM prices can never go negative (exp() is always positive)."""
        for o, h, l, c, v in DailyGBMSimulator("TSLA", seed=3).path(500):
            assert min(o, h, l, c) > 0
            assert v > 0

    def test_bar_shape(self):
        """High and low bracket the open/close body."""
        for o, h, l, c, _ in DailyGBMSimulator("NVDA", seed=5).path(200):
            assert h >= max(o, c)
            assert l <= min(o, c)

    def test_first_open_is_seed_price(self):
        bars = DailyGBMSimulator("AAPL", seed=1).path(5)
        assert bars[0][0] == SEED_PRICES["AAPL"]

    def test_unknown_ticker_uses_default_seed(self):
        bars = DailyGBMSimulator("ZZZZ", seed=1).path(1)
        assert bars[0][0] == DEFAULT_SEED_PRICE

    def test_seed_is_deterministic(self):
        a = DailyGBMSimulator("AAPL", seed=42).path(20)
        b = DailyGBMSimulator("AAPL", seed=42).path(20)
        assert a == b

    def test_default_dt_is_one_trading_day(self):
        assert DailyGBMSimulator.DEFAULT_DT == pytest.approx(1 / 252)


class TestTradingDays:
    def test_skips_weekends(self):
        # 2024-01-08 is a Monday
        days = trading_days(date(2024, 1, 8), 3)
        assert days == [date(2024, 1, 4), date(2024, 1, 5), date(2024, 1, 8)]

    def test_count(self):
        days = trading_days(date(2024, 6, 30), 50)
        assert len(days) == 50
        assert all(d.weekday() < 5 for d in days)
        assert days == sorted(days)


@pytest.mark.asyncio
class TestSimulatedDailySource:
    """The simulator's output has the same shape as a real upstream series."""

    async def test_fetch_shape(self):
        source = SimulatedDailySource(history_days=40, seed=9)
        daily = await source.fetch_daily_adjusted("IBM")

        assert daily.symbol == "IBM"
        assert daily.timezone == SIMULATED_TIMEZONE
        assert len(daily.series) == 40

    async def test_prices_are_exact_decimal_strings(self):
        daily = await SimulatedDailySource(history_days=10, seed=9).fetch_daily_adjusted("IBM")
        for entry in daily.series.values():
            assert parse_price(entry.close) > 0
            assert len(entry.close.split(".")[1]) == 4
            assert isinstance(entry.volume, int)

    async def test_keys_normalize(self):
        daily = await SimulatedDailySource(history_days=25, seed=9).fetch_daily_adjusted("IBM")
        series = normalize_time_series(daily.series, daily.timezone)

        assert len(series) == 25
        for newer, older in zip(series, series[1:]):
            assert newer.date > older.date

    async def test_keys_are_not_presorted(self):
        daily = await SimulatedDailySource(history_days=30, seed=9).fetch_daily_adjusted("IBM")
        keys = list(daily.series)
        assert keys != sorted(keys)
        assert keys != sorted(keys, reverse=True)

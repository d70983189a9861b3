"""GBM-based daily price history simulator."""

from __future__ import annotations

import logging
import math
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

import numpy as np

from .interface import DailySeriesSource
from .models import DailySeries, RawDailyEntry
from .seed_prices import (
    BASE_VOLUME,
    DEFAULT_PARAMS,
    DEFAULT_SEED_PRICE,
    SEED_PRICES,
    TICKER_PARAMS,
)

logger = logging.getLogger(__name__)

SIMULATED_TIMEZONE = "US/Eastern"
DEFAULT_HISTORY_DAYS = 100


class DailyGBMSimulator:
    """Geometric Brownian Motion generator for one ticker's daily bars.

    Math:
        S(t+dt) = S(t) * exp((mu - sigma^2/2) * dt + sigma * sqrt(dt) * Z)

    Where:
        S(t)   = close on trading day t
        mu     = annualized drift (expected return)
        sigma  = annualized volatility
        dt     = one trading day as a fraction of a trading year (1/252)
        Z      = standard normal random variable

    The walk runs forward from the seed price, so the newest close is the
    last element of the path.
    """

    TRADING_DAYS_PER_YEAR = 252
    DEFAULT_DT = 1 / TRADING_DAYS_PER_YEAR

    def __init__(self, ticker: str, seed: int | None = None, dt: float = DEFAULT_DT) -> None:
        self._ticker = ticker
        self._dt = dt
        self._rng = np.random.default_rng(seed)
        self._start = SEED_PRICES.get(ticker, DEFAULT_SEED_PRICE)
        self._params = TICKER_PARAMS.get(ticker, dict(DEFAULT_PARAMS))

    def path(self, days: int) -> list[tuple[float, float, float, float, int]]:
        """Return `days` bars as (open, high, low, close, volume), oldest first."""
        if days <= 0:
            return []

        mu = self._params["mu"]
        sigma = self._params["sigma"]
        drift = (mu - 0.5 * sigma**2) * self._dt
        scale = sigma * math.sqrt(self._dt)

        z = self._rng.standard_normal(days)
        closes = self._start * np.exp(np.cumsum(drift + scale * z))
        opens = np.concatenate(([self._start], closes[:-1]))

        # Intraday range: a half-normal excursion beyond the open/close body
        wick = np.abs(self._rng.standard_normal((2, days))) * scale * 0.5
        highs = np.maximum(opens, closes) * (1 + wick[0])
        lows = np.minimum(opens, closes) * (1 - wick[1])
        volumes = self._rng.lognormal(mean=math.log(BASE_VOLUME), sigma=0.3, size=days)

        return [
            (float(o), float(h), float(l), float(c), int(v))
            for o, h, l, c, v in zip(opens, highs, lows, closes, volumes)
        ]


def trading_days(end: date, count: int) -> list[date]:
    """The `count` most recent weekdays up to and including `end`, oldest first."""
    days: list[date] = []
    current = end
    while len(days) < count:
        if current.weekday() < 5:
            days.append(current)
        current -= timedelta(days=1)
    days.reverse()
    return days


class SimulatedDailySource(DailySeriesSource):
    """DailySeriesSource backed by the GBM simulator.

    Used when no upstream API key is configured. Each fetch produces a fresh
    random history ending today (US/Eastern), keyed the way the real provider
    keys it: by 'YYYY-MM-DD' string, in no particular order.
    """

    def __init__(self, history_days: int = DEFAULT_HISTORY_DAYS, seed: int | None = None) -> None:
        self._history_days = history_days
        self._seed = seed

    async def fetch_daily_adjusted(self, symbol: str) -> DailySeries:
        tz = ZoneInfo(SIMULATED_TIMEZONE)
        today = datetime.now(tz).date()
        days = trading_days(today, self._history_days)
        bars = DailyGBMSimulator(symbol, seed=self._seed).path(len(days))

        series = {
            day.strftime("%Y-%m-%d"): RawDailyEntry(
                open=f"{o:.4f}",
                high=f"{h:.4f}",
                low=f"{l:.4f}",
                close=f"{c:.4f}",
                volume=v,
                adjusted_close=f"{c:.4f}",
                dividend_amount="0.0000",
                split_coefficient="1.0",
            )
            for day, (o, h, l, c, v) in zip(days, bars)
        }
        # Upstream mappings carry no ordering; don't hand out a sorted one
        keys = list(series)
        np.random.default_rng(self._seed).shuffle(keys)

        logger.debug("Simulated %d daily bars for %s", len(keys), symbol)
        return DailySeries(
            symbol=symbol,
            timezone=SIMULATED_TIMEZONE,
            series={key: series[key] for key in keys},
            last_refreshed=today.isoformat(),
        )

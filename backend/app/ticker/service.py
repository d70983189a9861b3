"""Stock ticker service: freshness-bounded snapshot of a rolling close average."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, DecimalException, InvalidOperation, localcontext

from .cache import SnapshotCache
from .errors import InsufficientData, PriceParseError
from .interface import DailySeriesSource
from .models import DatedEntry, TickerSnapshot
from .normalizer import normalize_time_series

logger = logging.getLogger(__name__)

DEFAULT_FRESHNESS_SECONDS = 600.0
CENT = Decimal("0.01")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_price(value: str) -> Decimal:
    """Parse an upstream price string exactly. Rejects NaN and infinities."""
    try:
        price = Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise PriceParseError(value) from e
    if not price.is_finite():
        raise PriceParseError(value)
    return price


def average_close(entries: Sequence[DatedEntry]) -> Decimal:
    """Mean close price of `entries`, rounded half-up to 2 decimal places.

    A close too large to be averaged at this precision is reported as a
    PriceParseError naming the largest close in the window.
    """
    if not entries:
        raise InsufficientData(required=1, available=0)
    prices = [parse_price(e.close) for e in entries]
    with localcontext() as ctx:
        ctx.prec = 50
        try:
            total = sum(prices, Decimal(0))
            return (total / len(prices)).quantize(CENT, rounding=ROUND_HALF_UP)
        except DecimalException as e:
            largest = max(zip(prices, entries), key=lambda pair: abs(pair[0]))[1]
            raise PriceParseError(largest.close) from e


class StockTickerService:
    """Serves a cached TickerSnapshot for one symbol, refreshing on expiry.

    A snapshot younger than `freshness_seconds` is returned as-is with no
    upstream call. Otherwise the daily history is fetched, normalized, cut to
    the newest `window_size` entries and averaged. Concurrent misses await
    one shared refresh task and all receive its result or its error. A failed
    refresh leaves the previous snapshot in place; it is never served as a
    stale fallback.
    """

    def __init__(
        self,
        source: DailySeriesSource,
        symbol: str,
        window_size: int,
        freshness_seconds: float = DEFAULT_FRESHNESS_SECONDS,
        cache: SnapshotCache | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if window_size < 1:
            raise ValueError(f"window_size must be >= 1, got {window_size}")
        if freshness_seconds <= 0:
            raise ValueError(f"freshness_seconds must be > 0, got {freshness_seconds}")

        self._source = source
        self._symbol = symbol
        self._window = window_size
        self._freshness = freshness_seconds
        self._cache = cache if cache is not None else SnapshotCache()
        self._clock = clock
        self._inflight: asyncio.Task | None = None
        self._waiters: int = 0

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def window_size(self) -> int:
        return self._window

    def snapshot(self) -> TickerSnapshot | None:
        """Last cached snapshot regardless of age. Never triggers a refresh."""
        return self._cache.get(self._symbol)

    async def get_snapshot(self) -> TickerSnapshot:
        """Return the current snapshot, refreshing from upstream if it is stale.

        Raises a StockTickerError subclass if a required refresh fails.
        Cancelling a caller only cancels the shared refresh once no other
        caller is waiting on it.
        """
        cached = self._fresh_snapshot()
        if cached is not None:
            return cached

        task = self._inflight
        if task is None or task.done():
            logger.debug("Cached snapshot for %s missing or expired, refreshing", self._symbol)
            task = asyncio.ensure_future(self._refresh_and_store())
            task.add_done_callback(_consume_result)
            self._inflight = task

        self._waiters += 1
        try:
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            if self._waiters == 1 and not task.done():
                task.cancel()
                if self._inflight is task:
                    self._inflight = None
            raise
        finally:
            self._waiters -= 1

    # --- Internal ---

    def _fresh_snapshot(self) -> TickerSnapshot | None:
        cached = self._cache.get(self._symbol)
        if cached is None:
            return None
        age = cached.age(self._clock())
        if age < self._freshness:
            logger.debug("Valid cached snapshot for %s (age %.1fs)", self._symbol, age)
            return cached
        return None

    async def _refresh_and_store(self) -> TickerSnapshot:
        try:
            snapshot = await self._refresh()
            self._cache.put(snapshot)
            logger.info(
                "Refreshed %s: %d-day average close %s",
                snapshot.symbol,
                snapshot.window_size,
                snapshot.average_close,
            )
            return snapshot
        finally:
            # Cleared before the task completes, so later misses start afresh
            if self._inflight is asyncio.current_task():
                self._inflight = None

    async def _refresh(self) -> TickerSnapshot:
        """Fetch, normalize, window and average. Does not touch the cache."""
        daily = await self._source.fetch_daily_adjusted(self._symbol)
        series = normalize_time_series(daily.series, daily.timezone)

        if len(series) < self._window:
            raise InsufficientData(required=self._window, available=len(series))

        window = tuple(series[: self._window])
        return TickerSnapshot(
            symbol=self._symbol,
            window_size=self._window,
            average_close=average_close(window),
            entries=window,
            refreshed_at=self._clock(),
        )


def _consume_result(task: asyncio.Task) -> None:
    # Waiters read the outcome through shield(); this covers a refresh that
    # finishes after every waiter has gone.
    if not task.cancelled():
        task.exception()

"""Data models for daily price history and cached ticker snapshots."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True, slots=True)
class RawDailyEntry:
    """One upstream daily record. Prices stay as the exact strings received."""

    open: str
    high: str
    low: str
    close: str
    volume: int
    adjusted_close: str | None = None
    dividend_amount: str | None = None
    split_coefficient: str | None = None


@dataclass(frozen=True, slots=True)
class DatedEntry:
    """A RawDailyEntry with its calendar date resolved in the series timezone."""

    date: datetime  # Local midnight, timezone-aware
    entry: RawDailyEntry

    @property
    def close(self) -> str:
        return self.entry.close

    def to_dict(self) -> dict:
        """Serialize for JSON transmission."""
        return {
            "date": self.date.isoformat(),
            "open": self.entry.open,
            "high": self.entry.high,
            "low": self.entry.low,
            "close": self.entry.close,
            "volume": self.entry.volume,
        }


@dataclass(frozen=True, slots=True)
class DailySeries:
    """Daily history as returned by an upstream source, keyed by 'YYYY-MM-DD'.

    The mapping carries no ordering guarantee.
    """

    symbol: str
    timezone: str
    series: Mapping[str, RawDailyEntry]
    last_refreshed: str | None = None


@dataclass(frozen=True, slots=True)
class TickerSnapshot:
    """Immutable derived result of one successful refresh."""

    symbol: str
    window_size: int
    average_close: Decimal
    entries: tuple[DatedEntry, ...]
    refreshed_at: datetime  # UTC, timezone-aware

    def age(self, now: datetime) -> float:
        """Seconds elapsed between refreshed_at and `now`."""
        return (now - self.refreshed_at).total_seconds()

    def to_dict(self) -> dict:
        """Serialize for JSON transmission.

        refreshed_at uses the C asctime layout, e.g. 'Mon Jan  2 15:04:05 2006'.
        The average is a string so it survives JSON without float rounding.
        """
        ts = self.refreshed_at
        return {
            "last_refreshed": f"{ts:%a %b} {ts.day:2d} {ts:%H:%M:%S %Y}",
            "days": self.window_size,
            "symbol": self.symbol,
            "average_closing_price": str(self.average_close),
            "stock_time_series": [e.to_dict() for e in self.entries],
        }

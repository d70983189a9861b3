"""Stock ticker subsystem.

Public API:
    RawDailyEntry       - One upstream daily bar, prices as exact strings
    DatedEntry          - Daily bar with its resolved calendar date
    DailySeries         - Unordered date-keyed history from an upstream source
    TickerSnapshot      - Immutable cached N-day average and window
    SnapshotCache       - Thread-safe in-memory snapshot store
    DailySeriesSource   - Abstract interface for history providers
    StockTickerService  - Freshness-bounded refresh and averaging
    StockTickerError    - Base class of all core failures
    normalize_time_series     - Date-keyed mapping → newest-first list
    create_daily_series_source - Factory that selects simulator or Alpha Vantage
    create_ticker_router      - FastAPI router factory for the HTTP endpoints
"""

from .cache import SnapshotCache
from .errors import (
    InsufficientData,
    InvalidDateFormat,
    InvalidTimezone,
    PriceParseError,
    StockTickerError,
    UpstreamUnavailable,
)
from .factory import create_daily_series_source
from .interface import DailySeriesSource
from .models import DailySeries, DatedEntry, RawDailyEntry, TickerSnapshot
from .normalizer import normalize_time_series
from .router import create_ticker_router
from .service import StockTickerService

__all__ = [
    "RawDailyEntry",
    "DatedEntry",
    "DailySeries",
    "TickerSnapshot",
    "SnapshotCache",
    "DailySeriesSource",
    "StockTickerService",
    "StockTickerError",
    "UpstreamUnavailable",
    "InvalidTimezone",
    "InvalidDateFormat",
    "PriceParseError",
    "InsufficientData",
    "normalize_time_series",
    "create_daily_series_source",
    "create_ticker_router",
]

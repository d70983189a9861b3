"""Errors raised by the ticker core.

Every failure of a snapshot refresh surfaces as a StockTickerError subclass
with the underlying cause chained. None of them carry transport semantics;
the HTTP layer decides how to present them.
"""

from __future__ import annotations


class StockTickerError(Exception):
    """Base class for all ticker core failures."""


class UpstreamUnavailable(StockTickerError):
    """The data provider could not be reached or returned an unusable response."""


class InvalidTimezone(StockTickerError):
    def __init__(self, timezone_name: str) -> None:
        super().__init__(f"invalid timezone location: {timezone_name!r}")
        self.timezone_name = timezone_name


class InvalidDateFormat(StockTickerError):
    def __init__(self, value: str) -> None:
        super().__init__(f"error parsing date string: {value!r} (expected YYYY-MM-DD)")
        self.value = value


class PriceParseError(StockTickerError):
    def __init__(self, value: str) -> None:
        super().__init__(f"failed to parse close price as decimal: {value!r}")
        self.value = value


class InsufficientData(StockTickerError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            f"time series has {available} entries, {required} required for the window"
        )
        self.required = required
        self.available = available

"""Abstract interface for daily price history sources."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import DailySeries


class DailySeriesSource(ABC):
    """Contract for upstream providers of daily-adjusted price history.

    The service calls the source only when its cached snapshot is missing or
    stale. Sources do not cache and do not retry.

    Usage:
        source = create_daily_series_source(api_key)
        series = await source.fetch_daily_adjusted("IBM")
        series.timezone   # e.g. "US/Eastern"
        series.series     # {"2024-01-05": RawDailyEntry(...), ...}
    """

    @abstractmethod
    async def fetch_daily_adjusted(self, symbol: str) -> DailySeries:
        """Fetch the full daily history currently available for `symbol`.

        Raises UpstreamUnavailable on transport failures, timeouts, or
        responses that cannot be decoded. Cancelling the awaiting task
        aborts the in-flight request.
        """

"""Factory for creating daily series sources."""

from __future__ import annotations

import logging

from .interface import DailySeriesSource

logger = logging.getLogger(__name__)


def create_daily_series_source(
    api_key: str | None,
    *,
    timeout: float = 30.0,
    output_size: str = "compact",
    window_size: int = 1,
) -> DailySeriesSource:
    """Create the appropriate daily series source for the configured API key.

    - api_key set and non-blank → AlphaVantageClient (real market data)
    - Otherwise → SimulatedDailySource (GBM simulation), generating at least
      `window_size` trading days of history
    """
    api_key = (api_key or "").strip()

    if api_key:
        from .alphavantage_client import AlphaVantageClient

        logger.info("Daily series source: Alpha Vantage API (real data)")
        return AlphaVantageClient(api_key=api_key, timeout=timeout, output_size=output_size)
    else:
        from .simulator import DEFAULT_HISTORY_DAYS, SimulatedDailySource

        history_days = max(DEFAULT_HISTORY_DAYS, window_size)
        logger.info("Daily series source: GBM Simulator (%d days of history)", history_days)
        return SimulatedDailySource(history_days=history_days)

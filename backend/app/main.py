"""FastAPI entry point for the stock ticker service.

Wires the daily series source, the ticker service and the router.

Run locally:
    NDAYS=7 SYMBOL=IBM ENV=dev stock-ticker
    NDAYS=7 SYMBOL=IBM uvicorn app.main:create_app --factory --port 8080
"""

from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI

from .config import ConfigError, Settings, load_settings
from .logging_config import configure_logging
from .ticker import StockTickerService, create_daily_series_source, create_ticker_router
from .ticker.interface import DailySeriesSource

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    source: DailySeriesSource | None = None,
) -> FastAPI:
    """Build the FastAPI app. `source` overrides the factory choice (tests)."""
    if settings is None:
        settings = load_settings()

    if source is None:
        source = create_daily_series_source(
            settings.api_key,
            timeout=settings.upstream_timeout,
            output_size=settings.output_size,
            window_size=settings.window_size,
        )

    service = StockTickerService(
        source=source,
        symbol=settings.symbol,
        window_size=settings.window_size,
        freshness_seconds=settings.freshness_seconds,
    )

    app = FastAPI(title="Stock Ticker")
    app.state.ticker_service = service
    app.include_router(create_ticker_router(service))
    return app


def main() -> None:
    try:
        settings = load_settings()
    except ConfigError as e:
        configure_logging()
        logger.error("Error parsing environment variables: %s", e)
        raise SystemExit(1) from e

    configure_logging(settings.env)
    logger.info(
        "Starting server on %s:%d (symbol=%s, ndays=%d)",
        settings.host,
        settings.port,
        settings.symbol,
        settings.window_size,
    )
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()

"""Alpha Vantage API client for daily-adjusted price history."""

from __future__ import annotations

import logging

import httpx
from pydantic import BaseModel, Field, ValidationError

from .errors import UpstreamUnavailable
from .interface import DailySeriesSource
from .models import DailySeries, RawDailyEntry

logger = logging.getLogger(__name__)

BASE_URL = "https://www.alphavantage.co"

# Keys Alpha Vantage uses to report problems with a 200 status
_ERROR_KEYS = ("Error Message", "Note", "Information")


class _DailyRecord(BaseModel):
    open: str = Field(alias="1. open")
    high: str = Field(alias="2. high")
    low: str = Field(alias="3. low")
    close: str = Field(alias="4. close")
    adjusted_close: str | None = Field(default=None, alias="5. adjusted close")
    volume: int = Field(alias="6. volume")
    dividend_amount: str | None = Field(default=None, alias="7. dividend amount")
    split_coefficient: str | None = Field(default=None, alias="8. split coefficient")

    def to_entry(self) -> RawDailyEntry:
        return RawDailyEntry(
            open=self.open,
            high=self.high,
            low=self.low,
            close=self.close,
            volume=self.volume,
            adjusted_close=self.adjusted_close,
            dividend_amount=self.dividend_amount,
            split_coefficient=self.split_coefficient,
        )


class _MetaData(BaseModel):
    information: str | None = Field(default=None, alias="1. Information")
    symbol: str = Field(alias="2. Symbol")
    last_refreshed: str | None = Field(default=None, alias="3. Last Refreshed")
    output_size: str | None = Field(default=None, alias="4. Output Size")
    timezone: str = Field(alias="5. Time Zone")


class _DailyAdjustedResponse(BaseModel):
    meta_data: _MetaData = Field(alias="Meta Data")
    time_series: dict[str, _DailyRecord] = Field(alias="Time Series (Daily)")


class AlphaVantageClient(DailySeriesSource):
    """DailySeriesSource backed by the Alpha Vantage REST API.

    Issues GET /query?function=TIME_SERIES_DAILY_ADJUSTED for the symbol.
    'compact' output holds the latest 100 trading days, 'full' holds
    20+ years of history.

    Rate limits:
      - Free tier: 25 req/day, so keep the service's freshness window long
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = BASE_URL,
        timeout: float = 30.0,
        output_size: str = "compact",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._output_size = output_size
        self._transport = transport  # Injected in tests

    async def fetch_daily_adjusted(self, symbol: str) -> DailySeries:
        params = {
            "function": "TIME_SERIES_DAILY_ADJUSTED",
            "symbol": symbol,
            "outputsize": self._output_size,
            "apikey": self._api_key,
        }

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(f"{self._base_url}/query", params=params)
                response.raise_for_status()
                payload = response.json()
        except httpx.TimeoutException as e:
            raise UpstreamUnavailable(
                f"Alpha Vantage request for {symbol} timed out after {self._timeout}s"
            ) from e
        except httpx.HTTPStatusError as e:
            raise UpstreamUnavailable(
                f"Alpha Vantage returned HTTP {e.response.status_code} for {symbol}"
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamUnavailable(f"failed to complete request to Alpha Vantage: {e}") from e
        except ValueError as e:
            raise UpstreamUnavailable(f"failed to decode Alpha Vantage response: {e}") from e

        return self._parse(symbol, payload)

    @staticmethod
    def _parse(symbol: str, payload: object) -> DailySeries:
        if not isinstance(payload, dict):
            raise UpstreamUnavailable(
                f"unexpected Alpha Vantage payload type: {type(payload).__name__}"
            )

        if "Time Series (Daily)" not in payload:
            for key in _ERROR_KEYS:
                if key in payload:
                    raise UpstreamUnavailable(f"Alpha Vantage error for {symbol}: {payload[key]}")

        try:
            decoded = _DailyAdjustedResponse.model_validate(payload)
        except ValidationError as e:
            raise UpstreamUnavailable(f"failed to decode Alpha Vantage response: {e}") from e

        logger.debug(
            "Decoded %d daily entries for %s (last refreshed %s)",
            len(decoded.time_series),
            decoded.meta_data.symbol,
            decoded.meta_data.last_refreshed,
        )
        return DailySeries(
            symbol=decoded.meta_data.symbol,
            timezone=decoded.meta_data.timezone,
            series={day: record.to_entry() for day, record in decoded.time_series.items()},
            last_refreshed=decoded.meta_data.last_refreshed,
        )

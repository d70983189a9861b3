"""Tests for ticker data models."""

import json
from datetime import datetime, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from app.ticker.models import DatedEntry, RawDailyEntry, TickerSnapshot


def _entry(day: int, close: str) -> DatedEntry:
    return DatedEntry(
        date=datetime(2024, 1, day, tzinfo=ZoneInfo("US/Eastern")),
        entry=RawDailyEntry(open="1.50", high="2.00", low="1.00", close=close, volume=1200),
    )


def _snapshot(**overrides) -> TickerSnapshot:
    fields = dict(
        symbol="ABC",
        window_size=2,
        average_close=Decimal("4.50"),
        entries=(_entry(5, "5.00"), _entry(4, "4.00")),
        refreshed_at=datetime(2006, 1, 2, 15, 4, 5, tzinfo=timezone.utc),
    )
    fields.update(overrides)
    return TickerSnapshot(**fields)


class TestDatedEntry:
    def test_close_passthrough(self):
        assert _entry(5, "123.4500").close == "123.4500"

    def test_to_dict(self):
        result = _entry(5, "5.00").to_dict()
        assert result == {
            "date": "2024-01-05T00:00:00-05:00",
            "open": "1.50",
            "high": "2.00",
            "low": "1.00",
            "close": "5.00",
            "volume": 1200,
        }


class TestTickerSnapshot:
    """Unit tests for the TickerSnapshot model."""

    def test_to_dict(self):
        result = _snapshot().to_dict()

        assert result["last_refreshed"] == "Mon Jan  2 15:04:05 2006"
        assert result["days"] == 2
        assert result["symbol"] == "ABC"
        assert result["average_closing_price"] == "4.50"
        assert [e["close"] for e in result["stock_time_series"]] == ["5.00", "4.00"]

    def test_two_digit_day_in_timestamp(self):
        snapshot = _snapshot(refreshed_at=datetime(2024, 3, 15, 9, 30, 0, tzinfo=timezone.utc))
        assert snapshot.to_dict()["last_refreshed"] == "Fri Mar 15 09:30:00 2024"

    def test_to_dict_is_json_serializable(self):
        payload = json.loads(json.dumps(_snapshot().to_dict()))
        assert Decimal(payload["average_closing_price"]) == Decimal("4.50")

    def test_age(self):
        snapshot = _snapshot()
        later = datetime(2006, 1, 2, 15, 14, 5, tzinfo=timezone.utc)
        assert snapshot.age(later) == 600.0

    def test_immutability(self):
        snapshot = _snapshot()
        with pytest.raises(AttributeError):
            snapshot.average_close = Decimal("1.00")

    def test_raw_entry_immutability(self):
        record = RawDailyEntry(open="1", high="1", low="1", close="1", volume=1)
        with pytest.raises(AttributeError):
            record.close = "2"

    def test_raw_entry_optional_fields_default_none(self):
        record = RawDailyEntry(open="1", high="1", low="1", close="1", volume=1)
        assert record.adjusted_close is None
        assert record.dividend_amount is None
        assert record.split_coefficient is None

"""Tests for candle, quote and journal position parsers"""

import orjson
import pytest

from signal_desk.data.models import Direction, PositionStatus
from signal_desk.data.parsers import (
    InvalidPriceError,
    InvalidTimestampError,
    InvalidVolumeError,
    OHLCConsistencyError,
    ParseError,
    parse_candles,
    parse_open_position,
    parse_quote,
)
from signal_desk.errors import MalformedDataError, MissingDataError


class TestParseCandles:
    """Test candle payload parsing"""

    def test_row_dicts(self):
        rows = [
            {"timestamp": 1_700_000_900_000, "open": 101, "high": 103, "low": 100, "close": 102, "volume": 500},
            {"timestamp": 1_700_000_000_000, "open": 100, "high": 102, "low": 99, "close": 101, "volume": 400},
        ]
        candles = parse_candles(rows)

        assert len(candles) == 2
        # Sorted ascending
        assert candles[0].timestamp == 1_700_000_000_000
        assert candles[1].close == 102.0

    def test_short_keys(self):
        rows = [{"t": 1000, "o": "10", "h": "11", "l": "9", "c": "10.5", "v": "7"}]
        candle = parse_candles(rows)[0]
        assert candle.timestamp == 1000
        assert candle.close == 10.5
        assert candle.volume == 7.0

    def test_columnar_payload_seconds(self):
        payload = {
            "t": [1_700_000_000, 1_700_000_900],
            "o": [100, 101], "h": [102, 103], "l": [99, 100], "c": [101, 102], "v": [400, 500],
            "s": "ok",
        }
        candles = parse_candles(payload)
        assert [c.timestamp for c in candles] == [1_700_000_000_000, 1_700_000_900_000]

    def test_json_bytes(self):
        raw = orjson.dumps([{"timestamp": 1000, "open": 1, "high": 2, "low": 1, "close": 2, "volume": 3}])
        assert parse_candles(raw)[0].high == 2.0

    def test_no_data_status(self):
        with pytest.raises(MissingDataError) as exc_info:
            parse_candles({"s": "no_data"})
        assert exc_info.value.data_type == "candles"
        assert exc_info.value.recoverable

    def test_error_status(self):
        with pytest.raises(ParseError):
            parse_candles({"s": "error"})

    def test_mismatched_columns(self):
        payload = {"t": [1, 2], "o": [1], "h": [1], "l": [1], "c": [1], "v": [1], "s": "ok"}
        with pytest.raises(ParseError):
            parse_candles(payload)

    def test_invalid_json(self):
        with pytest.raises(ParseError):
            parse_candles(b"{not json")

    def test_missing_field(self):
        with pytest.raises(ParseError, match="close"):
            parse_candles([{"timestamp": 1, "open": 1, "high": 1, "low": 1, "volume": 1}])

    def test_invalid_price(self):
        with pytest.raises(InvalidPriceError):
            parse_candles([{"timestamp": 1, "open": "x", "high": 1, "low": 1, "close": 1, "volume": 1}])

    def test_non_positive_price(self):
        with pytest.raises(InvalidPriceError):
            parse_candles([{"timestamp": 1, "open": 0, "high": 1, "low": 0, "close": 1, "volume": 1}])

    def test_negative_volume(self):
        with pytest.raises(InvalidVolumeError):
            parse_candles([{"timestamp": 1, "open": 1, "high": 1, "low": 1, "close": 1, "volume": -5}])

    def test_bad_timestamp(self):
        with pytest.raises(InvalidTimestampError):
            parse_candles([{"timestamp": "soon", "open": 1, "high": 1, "low": 1, "close": 1, "volume": 1}])

    def test_ohlc_inconsistent(self):
        with pytest.raises(OHLCConsistencyError):
            parse_candles([{"timestamp": 1, "open": 10, "high": 9, "low": 8, "close": 9, "volume": 1}])

    def test_parse_errors_are_data_quality_errors(self):
        with pytest.raises(MalformedDataError):
            parse_candles("42")


class TestParseQuote:
    """Test quote parsing"""

    def test_provider_keys(self):
        quote = parse_quote({"c": 187.2, "d": 1.5, "dp": 0.81, "h": 188, "l": 185, "o": 186, "pc": 185.7})
        assert quote.price == 187.2
        assert quote.change_pct == 0.81
        assert quote.prev_close == 185.7

    def test_long_keys(self):
        quote = parse_quote({"price": 50, "changePct": -1.2, "prevClose": 50.6})
        assert quote.change_pct == -1.2
        assert quote.high is None

    def test_zero_price_is_no_quote(self):
        assert parse_quote({"c": 0, "d": None, "dp": None}) is None

    def test_json_text(self):
        assert parse_quote('{"c": 10.5}').price == 10.5

    def test_not_an_object(self):
        with pytest.raises(ParseError):
            parse_quote([1, 2])


class TestParseOpenPosition:
    """Test journal position parsing"""

    def test_journal_record(self):
        position = parse_open_position({
            "symbol": "AAPL", "direction": "BUY", "entryPrice": 100, "slPrice": 95,
            "tpPrice": 110, "shares": 10, "status": "open",
        })
        assert position.direction == Direction.BUY
        assert position.stop_price == 95.0
        assert position.status == PositionStatus.OPEN

    def test_closed_status(self):
        position = parse_open_position({
            "symbol": "AAPL", "direction": "sell", "entry_price": 100, "stop_price": 105,
            "target_price": 90, "shares": 5, "status": "closed",
        })
        assert position.direction == Direction.SELL
        assert not position.is_open

    def test_wait_rejected(self):
        with pytest.raises(ParseError):
            parse_open_position({"direction": "WAIT", "entry_price": 1, "stop_price": 1, "target_price": 1})

    def test_missing_prices(self):
        with pytest.raises(ParseError):
            parse_open_position({"direction": "BUY", "entry_price": 100})

    def test_unknown_direction(self):
        with pytest.raises(ParseError):
            parse_open_position({"direction": "HOLD", "entry_price": 1, "stop_price": 1, "target_price": 1})

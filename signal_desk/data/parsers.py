"""
Payload parsers converting provider and journal formats to normalized objects.

Three candle shapes are accepted: a list of row dicts, a columnar provider
payload (``{"t": [...], "o": [...], ..., "s": "ok"}`` with second
timestamps), or either of those as raw JSON text/bytes. Row timestamps are
epoch milliseconds.
"""

from typing import Any, Optional, Union

import orjson

from ..errors import MalformedDataError, MissingDataError
from .models import Candle, Direction, OpenPosition, PositionStatus, Quote


class ParseError(MalformedDataError):
    """Raised when parsing fails due to invalid data format."""
    pass


class InvalidPriceError(ParseError):
    """Raised when price data is invalid."""
    pass


class InvalidTimestampError(ParseError):
    """Raised when timestamp data is invalid."""
    pass


class InvalidVolumeError(ParseError):
    """Raised when volume data is invalid."""
    pass


class OHLCConsistencyError(ParseError):
    """Raised when OHLC prices are inconsistent."""
    pass


Payload = Union[str, bytes, dict[str, Any], list[Any]]

_ROW_KEYS = {
    "timestamp": ("timestamp", "t", "ts"),
    "open": ("open", "o"),
    "high": ("high", "h"),
    "low": ("low", "l"),
    "close": ("close", "c"),
    "volume": ("volume", "v"),
}


def _decode(payload: Payload) -> Any:
    if isinstance(payload, (str, bytes)):
        try:
            return orjson.loads(payload)
        except orjson.JSONDecodeError as e:
            raise ParseError(f"Payload is not valid JSON: {e}", raw_data=str(payload)[:100])
    return payload


def _pick(row: dict[str, Any], field: str) -> Any:
    for key in _ROW_KEYS[field]:
        if key in row:
            return row[key]
    raise ParseError(f"Missing '{field}' field", raw_data=str(row)[:100])


def _to_ms(raw: Any, seconds: bool) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError) as e:
        raise InvalidTimestampError(f"Invalid timestamp '{raw}': {e}")
    if value < 0:
        raise InvalidTimestampError(f"Negative timestamp: {value}")
    return value * 1000 if seconds else value


def _build_candle(ts: Any, open_: Any, high: Any, low: Any, close: Any, volume: Any,
                  seconds: bool = False) -> Candle:
    timestamp = _to_ms(ts, seconds)

    try:
        open_price = float(open_)
        high_price = float(high)
        low_price = float(low)
        close_price = float(close)
    except (TypeError, ValueError) as e:
        raise InvalidPriceError(f"Invalid price data [O:{open_}, H:{high}, L:{low}, C:{close}]: {e}")

    try:
        vol = float(volume)
    except (TypeError, ValueError) as e:
        raise InvalidVolumeError(f"Invalid volume '{volume}': {e}")

    if any(price <= 0 for price in [open_price, high_price, low_price, close_price]):
        raise InvalidPriceError(
            f"All prices must be positive: O={open_price}, H={high_price}, L={low_price}, C={close_price}"
        )

    if vol < 0:
        raise InvalidVolumeError(f"Volume must be non-negative: {vol}")

    if high_price < max(open_price, close_price) or low_price > min(open_price, close_price):
        raise OHLCConsistencyError(
            f"High/low prices inconsistent with open/close: O={open_price}, H={high_price}, L={low_price}, C={close_price}"
        )

    return Candle(
        timestamp=timestamp,
        open=open_price,
        high=high_price,
        low=low_price,
        close=close_price,
        volume=vol,
    )


def parse_candles(payload: Payload) -> tuple[Candle, ...]:
    """
    Parse a candle payload into a chronologically sorted tuple of Candles.

    Raises:
        ParseError: If the payload shape is unrecognized or a bar is invalid
        MissingDataError: If the provider reports no data
    """
    data = _decode(payload)

    if isinstance(data, dict):
        status = data.get("s")
        if status == "no_data":
            raise MissingDataError("Provider has no candles for the requested range", data_type="candles")
        if status not in (None, "ok"):
            raise ParseError(f"Provider returned status '{status}'")
        try:
            columns = [data[key] for key in ("t", "o", "h", "l", "c", "v")]
        except KeyError as e:
            raise ParseError(f"Missing column {e} in candle payload")
        if len({len(column) for column in columns}) != 1:
            raise ParseError("Candle columns have mismatched lengths")
        candles = [_build_candle(*row, seconds=True) for row in zip(*columns)]
    elif isinstance(data, list):
        candles = []
        for i, row in enumerate(data):
            if not isinstance(row, dict):
                raise ParseError(f"Invalid candle data at index {i}: expected an object")
            candles.append(_build_candle(*(_pick(row, field) for field in _ROW_KEYS)))
    else:
        raise ParseError("Candle payload must be a list or an object")

    return tuple(sorted(candles, key=lambda c: c.timestamp))


def _optional_float(data: dict[str, Any], *keys: str) -> Optional[float]:
    for key in keys:
        if data.get(key) is not None:
            try:
                return float(data[key])
            except (TypeError, ValueError) as e:
                raise ParseError(f"Invalid numeric field '{key}': {e}")
    return None


def parse_quote(payload: Payload) -> Optional[Quote]:
    """
    Parse a quote payload.

    Returns:
        Quote, or None when the provider reports a zero/absent price
    """
    data = _decode(payload)
    if not isinstance(data, dict):
        raise ParseError("Quote payload must be an object")

    price = _optional_float(data, "price", "c")
    if not price:
        return None

    return Quote(
        price=price,
        change=_optional_float(data, "change", "d") or 0.0,
        change_pct=_optional_float(data, "change_pct", "changePct", "dp") or 0.0,
        high=_optional_float(data, "high", "h"),
        low=_optional_float(data, "low", "l"),
        open=_optional_float(data, "open", "o"),
        prev_close=_optional_float(data, "prev_close", "prevClose", "pc"),
    )


def parse_open_position(record: dict[str, Any]) -> OpenPosition:
    """Build an OpenPosition from a journal record."""
    try:
        direction = Direction(str(record["direction"]).upper())
        status = PositionStatus(str(record.get("status", "open")).lower())
        entry = _optional_float(record, "entry_price", "entryPrice")
        stop = _optional_float(record, "stop_price", "stopPrice", "slPrice")
        target = _optional_float(record, "target_price", "targetPrice", "tpPrice")
        shares = int(record.get("shares", 0))
    except (KeyError, ValueError, TypeError) as e:
        raise ParseError(f"Invalid position record: {e}", raw_data=str(record)[:100])

    if direction == Direction.WAIT:
        raise ParseError("Position direction must be BUY or SELL", raw_data=str(record)[:100])
    if entry is None or stop is None or target is None:
        raise ParseError("Position record requires entry, stop and target prices", raw_data=str(record)[:100])
    if entry <= 0:
        raise InvalidPriceError(f"Entry price must be positive: {entry}")

    return OpenPosition(
        symbol=str(record.get("symbol", "")),
        direction=direction,
        entry_price=entry,
        stop_price=stop,
        target_price=target,
        shares=shares,
        status=status,
    )

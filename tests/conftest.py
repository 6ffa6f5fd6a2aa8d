"""Pytest configuration and shared fixtures."""

from collections.abc import Callable, Sequence
from datetime import UTC, datetime

import pytest

from signal_desk.data.models import Candle, Direction, OpenPosition, Quote
from signal_desk.models.indicators import IndicatorSnapshot
from signal_desk.models.risk import AccountSettings

BASE_TS = int(datetime(2026, 10, 1, 13, 30, tzinfo=UTC).timestamp() * 1000)
FIFTEEN_MINUTES_MS = 15 * 60 * 1000

# Wednesday 2026-10-14 11:00 New York (EDT)
OPEN_SESSION = datetime(2026, 10, 14, 15, 0, tzinfo=UTC)
# Saturday 2026-10-17
WEEKEND = datetime(2026, 10, 17, 15, 0, tzinfo=UTC)


def make_candles(closes: Sequence[float], spread: float = 1.0,
                 volumes: Sequence[float] | float = 1000.0) -> list[Candle]:
    """Build 15-minute candles around the given closes."""
    if isinstance(volumes, (int, float)):
        volumes = [float(volumes)] * len(closes)

    candles = []
    for i, close in enumerate(closes):
        open_price = closes[i - 1] if i > 0 else close
        candles.append(Candle(
            timestamp=BASE_TS + i * FIFTEEN_MINUTES_MS,
            open=open_price,
            high=max(open_price, close) + spread,
            low=min(open_price, close) - spread,
            close=close,
            volume=volumes[i],
        ))
    return candles


@pytest.fixture
def candle_factory() -> Callable[..., list[Candle]]:
    """Factory building candles from a close series."""
    return make_candles


@pytest.fixture
def rising_candles() -> list[Candle]:
    """60 bars rising one point per bar."""
    return make_candles([100.0 + i for i in range(60)])


@pytest.fixture
def bullish_snapshot() -> IndicatorSnapshot:
    """Snapshot of a steady uptrend with strong confirming volume."""
    return IndicatorSnapshot(
        close=111.0,
        high=111.5,
        low=110.2,
        volume=18000.0,
        prev_close=110.4,
        ema_fast=110.0,
        ema_medium=108.0,
        ema_trend=104.0,
        ema_long=None,
        rsi=55.0,
        macd_line=1.2,
        macd_signal=0.8,
        macd_hist=0.4,
        macd_hist_prev=0.3,
        atr=1.4,
        bb_upper=113.0,
        bb_mid=108.0,
        bb_lower=103.0,
        pct_b=0.7,
        stoch_k=65.0,
        stoch_d=60.0,
        rel_vol=1.8,
        obv=52000.0,
        obv_ema=48000.0,
    )


@pytest.fixture
def rising_quote() -> Quote:
    """Quote with a positive change on the day."""
    return Quote(price=111.0, change=1.2, change_pct=1.09)


@pytest.fixture
def default_settings() -> AccountSettings:
    """Account settings with the stock defaults."""
    return AccountSettings()


@pytest.fixture
def long_position() -> OpenPosition:
    """Open long journal position."""
    return OpenPosition(
        symbol="AAPL",
        direction=Direction.BUY,
        entry_price=100.0,
        stop_price=95.0,
        target_price=110.0,
        shares=10,
    )


@pytest.fixture
def short_position() -> OpenPosition:
    """Open short journal position."""
    return OpenPosition(
        symbol="AAPL",
        direction=Direction.SELL,
        entry_price=100.0,
        stop_price=105.0,
        target_price=90.0,
        shares=10,
    )


@pytest.fixture
def open_session_now() -> datetime:
    """A weekday instant inside the regular session."""
    return OPEN_SESSION


@pytest.fixture
def weekend_now() -> datetime:
    """A Saturday instant."""
    return WEEKEND


@pytest.fixture
def advancing_candles() -> list[Candle]:
    """
    150 bars of a choppy advance ending on a high-volume up bar

    Closes alternate one point either side of a 0.05-per-bar trend; the last
    bar closes half a point above trend on 1.9x the usual volume.
    """
    closes = [100.0 + 0.05 * i + (1.0 if i % 2 else -1.0) for i in range(149)]
    closes.append(100.0 + 0.05 * 149 + 0.5)
    volumes = [1000.0] * 149 + [1900.0]
    return make_candles(closes, volumes=volumes)


@pytest.fixture
def advancing_quote(advancing_candles) -> Quote:
    """Quote at the last close, up on the previous bar."""
    last, prev = advancing_candles[-1].close, advancing_candles[-2].close
    return Quote(price=last, change=last - prev, change_pct=(last - prev) / prev * 100)


@pytest.fixture
def balanced_candles() -> list[Candle]:
    """150 bars oscillating around 100 in a four-bar wave, last bar falling back to 100."""
    wave = (1.0, 0.0, -1.0, 0.0)
    return make_candles([100.0 + wave[i % 4] for i in range(150)])

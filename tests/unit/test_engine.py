"""Unit tests for the analysis engine."""

from dataclasses import replace
from pathlib import Path

import orjson
import pytest
import yaml

from signal_desk.data.models import Direction, PositionStatus, Quote
from signal_desk.engine import Analysis, TradeAssistEngine
from signal_desk.errors import InsufficientDataError
from signal_desk.models.risk import AccountSettings
from signal_desk.signals.scoring import score as real_score


@pytest.fixture
def engine() -> TradeAssistEngine:
    return TradeAssistEngine()


@pytest.fixture
def last_quote(rising_candles) -> Quote:
    return Quote(price=rising_candles[-1].close, change=1.0, change_pct=0.63)


@pytest.fixture
def force_buy(monkeypatch):
    """Make the engine's scorer always return BUY."""
    def buy_score(snapshot, symbol, quote=None, *, now=None, config=None):
        return replace(real_score(snapshot, symbol, quote, now=now, config=config),
                       direction=Direction.BUY, confidence=70)

    monkeypatch.setattr("signal_desk.engine.score", buy_score)


class TestEngineCreation:
    """Test engine construction and settings."""

    def test_defaults(self, engine: TradeAssistEngine) -> None:
        assert engine.settings == AccountSettings()
        assert engine.config_for("AAPL") is engine.config

    def test_update_settings(self, engine: TradeAssistEngine) -> None:
        settings = AccountSettings(capital=50000.0)
        engine.update_settings(settings)
        assert engine.settings is settings

    def test_from_config_dir(self, tmp_path: Path) -> None:
        (tmp_path / "symbols.yaml").write_text(yaml.safe_dump({
            "account": {"capital": 20000.0},
            "symbols": {"TSLA": {"risk": {"atr_stop_multiplier": 2.0}}},
        }))
        engine = TradeAssistEngine.from_config_dir(str(tmp_path))

        assert engine.settings.capital == 20000.0
        assert engine.config_for("TSLA").risk.atr_stop_multiplier == 2.0
        assert engine.config_for("AAPL").risk.atr_stop_multiplier == 1.5


class TestAnalyze:
    """Test the per-symbol refresh pipeline."""

    def test_short_history_skipped(self, engine, candle_factory, open_session_now) -> None:
        analysis = engine.analyze("AAPL", candle_factory([100.0 + i for i in range(29)]), now=open_session_now)

        assert analysis.skipped
        assert analysis.signal is None
        assert "29" in analysis.skipped_reason

    def test_advancing_series_plans_buy(self, engine, advancing_candles, advancing_quote, open_session_now) -> None:
        analysis = engine.analyze("AAPL", advancing_candles, advancing_quote, now=open_session_now)

        assert not analysis.skipped
        assert analysis.signal.symbol == "AAPL"
        assert analysis.signal.direction == Direction.BUY
        assert analysis.signal.confidence >= 60
        assert analysis.indicators.snapshot.close == advancing_candles[-1].close
        assert analysis.plan is not None
        assert analysis.plan.direction == Direction.BUY
        assert analysis.plan.entry_price == round(advancing_quote.price, 2)
        assert analysis.plan.stop_price < advancing_quote.price < analysis.plan.target_price

    def test_balanced_series_waits(self, engine, balanced_candles, open_session_now) -> None:
        analysis = engine.analyze("AAPL", balanced_candles, Quote(price=100.0), now=open_session_now)

        assert analysis.signal.direction == Direction.WAIT
        assert analysis.signal.confidence == 0
        assert analysis.plan is None

    def test_plan_uses_quote_price(self, engine, rising_candles, last_quote, open_session_now, force_buy) -> None:
        analysis = engine.analyze("AAPL", rising_candles, last_quote, now=open_session_now)

        assert analysis.plan is not None
        assert analysis.plan.entry_price == last_quote.price
        assert analysis.plan.symbol == "AAPL"
        assert analysis.plan.stop_price < last_quote.price < analysis.plan.target_price

    def test_no_plan_without_quote(self, engine, rising_candles, open_session_now, force_buy) -> None:
        analysis = engine.analyze("AAPL", rising_candles, now=open_session_now)
        assert analysis.signal.direction == Direction.BUY
        assert analysis.plan is None

    def test_per_call_settings(self, engine, rising_candles, last_quote, open_session_now, force_buy) -> None:
        small = engine.analyze("AAPL", rising_candles, last_quote, now=open_session_now,
                               settings=AccountSettings(capital=1000.0))
        large = engine.analyze("AAPL", rising_candles, last_quote, now=open_session_now)
        assert small.plan.risk_amount == 15.0
        assert large.plan.risk_amount == 150.0

    def test_exit_checked_for_open_position(self, engine, rising_candles, long_position, open_session_now) -> None:
        quote = Quote(price=94.5)
        analysis = engine.analyze("AAPL", rising_candles, quote, long_position, now=open_session_now)

        assert analysis.exit_verdict is not None
        assert analysis.exit_verdict.should_exit
        assert "Stop loss" in analysis.exit_verdict.reasons[0]

    def test_exit_skipped_for_other_symbol(self, engine, rising_candles, long_position, open_session_now) -> None:
        analysis = engine.analyze("MSFT", rising_candles, Quote(price=94.5), long_position, now=open_session_now)
        assert analysis.exit_verdict is None

    def test_exit_skipped_for_closed_position(self, engine, rising_candles, long_position, open_session_now) -> None:
        closed = replace(long_position, status=PositionStatus.CLOSED)
        analysis = engine.analyze("AAPL", rising_candles, Quote(price=94.5), closed, now=open_session_now)
        assert analysis.exit_verdict is None

    def test_exit_needs_quote(self, engine, rising_candles, long_position, open_session_now) -> None:
        analysis = engine.analyze("AAPL", rising_candles, None, long_position, now=open_session_now)
        assert analysis.exit_verdict is None


class TestEvaluateExit:
    """Test the live-tick exit path."""

    def test_stop_breach(self, engine, rising_candles, long_position) -> None:
        verdict = engine.evaluate_exit(long_position, 94.5, rising_candles)
        assert verdict.should_exit

    def test_empty_candles(self, engine, long_position) -> None:
        with pytest.raises(InsufficientDataError):
            engine.evaluate_exit(long_position, 94.5, [])


class TestAnalysisSerialization:
    """Test rendering payloads."""

    def test_to_json(self, engine, rising_candles, last_quote, open_session_now, force_buy) -> None:
        analysis = engine.analyze("AAPL", rising_candles, last_quote, now=open_session_now)
        data = orjson.loads(analysis.to_json())

        assert data["symbol"] == "AAPL"
        assert data["signal"]["direction"] == "BUY"
        assert data["plan"]["shares"] == analysis.plan.shares
        assert set(data["pivots"]) == {"PP", "R1", "R2", "S1", "S2"}
        assert data["exit"] is None

    def test_skipped_to_dict(self) -> None:
        data = Analysis(symbol="AAPL", skipped_reason="Insufficient history").to_dict()
        assert data["signal"] is None
        assert data["skipped_reason"] == "Insufficient history"

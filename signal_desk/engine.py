"""
Main analysis engine coordinator.

Runs the per-symbol refresh pipeline: candles → indicators → signal →
trade plan, plus the exit check for an open position. The engine holds no
market data between calls; callers own fetching, caching and persistence.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

import orjson
import structlog

from .config.defaults import DefaultConfig, get_default_config
from .config.loader import ConfigLoader
from .data.models import Candle, OpenPosition, Quote
from .errors import DataQualityError, InsufficientDataError
from .indicators.calculator import IndicatorCalculator
from .models.indicators import IndicatorResult
from .models.risk import AccountSettings, ExitVerdict, TradePlan
from .models.signal import Signal
from .risk.planner import plan as build_plan
from .signals.exit_monitor import check_exit
from .signals.scoring import score

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Analysis:
    """Result of one refresh for one symbol."""
    symbol: str
    indicators: Optional[IndicatorResult] = None
    signal: Optional[Signal] = None
    plan: Optional[TradePlan] = None
    exit_verdict: Optional[ExitVerdict] = None
    skipped_reason: Optional[str] = None

    @property
    def skipped(self) -> bool:
        return self.skipped_reason is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "symbol": self.symbol,
            "skipped_reason": self.skipped_reason,
            "indicators": self.indicators.snapshot.to_dict() if self.indicators else None,
            "pivots": self.indicators.pivots.to_dict() if self.indicators else None,
            "signal": self.signal.to_dict() if self.signal else None,
            "plan": self.plan.to_dict() if self.plan else None,
            "exit": self.exit_verdict.to_dict() if self.exit_verdict else None,
        }

    def to_json(self) -> bytes:
        return orjson.dumps(self.to_dict())


def _default_settings(config: DefaultConfig) -> AccountSettings:
    account = config.account
    return AccountSettings(
        capital=account.capital,
        risk_pct=account.risk_pct,
        reward_risk_ratio=account.reward_risk_ratio,
        commission_per_leg=account.commission_per_leg,
        fx_rate=account.fx_rate,
    )


class TradeAssistEngine:
    """
    Coordinator for the trade assistant pipeline.

    Manages the analysis flow:
    Candles → Indicators → Signal → Trade plan / Exit verdict

    With a ``config_loader`` each symbol gets its merged configuration
    (symbol overrides from ``symbols.yaml`` over defaults); otherwise every
    symbol uses ``config``.
    """

    def __init__(
        self,
        config: Optional[DefaultConfig] = None,
        settings: Optional[AccountSettings] = None,
        config_loader: Optional[ConfigLoader] = None,
    ) -> None:
        self.config = config or get_default_config()
        self.settings = settings or _default_settings(self.config)
        self.config_loader = config_loader

        self._symbol_configs: dict[str, DefaultConfig] = {}

        logger.info("Trade assist engine initialized", capital=self.settings.capital,
                    risk_pct=self.settings.risk_pct)

    @classmethod
    def from_config_dir(cls, config_dir: Optional[str] = None) -> "TradeAssistEngine":
        """Create an engine whose account settings and symbol overrides come from YAML."""
        loader = ConfigLoader.create(config_dir)
        return cls(
            config=loader.defaults,
            settings=loader.load_account_settings(),
            config_loader=loader,
        )

    def config_for(self, symbol: str) -> DefaultConfig:
        """Return the parameter set used for ``symbol``."""
        if self.config_loader is None:
            return self.config

        if symbol not in self._symbol_configs:
            self._symbol_configs[symbol] = self.config_loader.load_config(symbol)
        return self._symbol_configs[symbol]

    def update_settings(self, settings: AccountSettings) -> None:
        """Replace the account settings used for subsequent plans."""
        self.settings = settings
        logger.info("Account settings updated", **settings.to_dict())

    def analyze(
        self,
        symbol: str,
        candles: Sequence[Candle],
        quote: Optional[Quote] = None,
        open_position: Optional[OpenPosition] = None,
        *,
        settings: Optional[AccountSettings] = None,
        now: Optional[datetime] = None,
    ) -> Analysis:
        """
        Run the full refresh pipeline for one symbol.

        Args:
            symbol: Instrument symbol
            candles: Chronologically ascending candle history
            quote: Latest quote; entry price for the plan and price for the exit check
            open_position: Journal position to re-check, if any
            settings: Per-call account settings; the engine's when None
            now: Evaluation time for the session check

        Returns:
            Analysis; skipped with a reason when the history is too short
        """
        config = self.config_for(symbol)
        min_bars = config.engine.min_bars

        if len(candles) < min_bars:
            reason = f"Insufficient history: {len(candles)} candles, need {min_bars}"
            logger.info("Symbol skipped", symbol=symbol, candles=len(candles), required=min_bars)
            return Analysis(symbol=symbol, skipped_reason=reason)

        try:
            indicators = IndicatorCalculator(config).compute(candles)
        except DataQualityError as e:
            logger.warning("Data quality issue during analysis", symbol=symbol, error=str(e))
            return Analysis(symbol=symbol, skipped_reason=str(e))

        signal = score(indicators.snapshot, symbol, quote, now=now, config=config)

        trade_plan = None
        snapshot = indicators.snapshot
        if signal.is_actionable and snapshot.atr is not None and quote is not None:
            trade_plan = build_plan(
                settings or self.settings,
                signal.direction,
                quote.price,
                snapshot.atr,
                indicators.pivots,
                symbol=symbol,
                params=config.risk,
            )

        exit_verdict = None
        if (open_position is not None and open_position.is_open
                and open_position.symbol == symbol and quote is not None):
            exit_verdict = check_exit(open_position, quote.price, snapshot, params=config.exit)

        logger.info(
            "Symbol analyzed",
            symbol=symbol,
            direction=signal.direction.value,
            confidence=signal.confidence,
            planned=trade_plan is not None,
            should_exit=exit_verdict.should_exit if exit_verdict else None,
        )

        return Analysis(
            symbol=symbol,
            indicators=indicators,
            signal=signal,
            plan=trade_plan,
            exit_verdict=exit_verdict,
        )

    def evaluate_exit(
        self,
        position: OpenPosition,
        current_price: float,
        candles: Sequence[Candle],
    ) -> ExitVerdict:
        """
        Re-check an open position on a live tick.

        Raises:
            InsufficientDataError: If ``candles`` is empty
        """
        if not candles:
            raise InsufficientDataError(f"No candles for {position.symbol}",
                                        required_count=1, available_count=0)

        config = self.config_for(position.symbol)
        indicators = IndicatorCalculator(config).compute(candles)
        return check_exit(position, current_price, indicators.snapshot, params=config.exit)

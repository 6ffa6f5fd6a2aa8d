"""Default configuration parameters for the signal desk."""

from dataclasses import dataclass


@dataclass(frozen=True)
class IndicatorParams:
    """Indicator periods used by the calculator."""
    ema_fast: int = 9
    ema_medium: int = 21
    ema_trend: int = 50
    ema_long: int = 200
    rsi_period: int = 14
    macd_fast: int = 12
    macd_slow: int = 26
    macd_signal: int = 9
    atr_period: int = 14
    bb_period: int = 20
    bb_mult: float = 2.0
    stoch_k_period: int = 14
    stoch_d_period: int = 3
    volume_period: int = 20
    obv_ema_period: int = 10
    pivot_lookback: int = 30                          # Bars used for pivot levels


@dataclass(frozen=True)
class SignalParams:
    """Decision rule parameters."""
    min_score_diff: float = 28.0                      # bull - bear needed for a direction
    min_side_score: float = 35.0                      # Winning accumulator floor
    max_confidence: int = 95
    off_session_penalty: int = 15                     # Confidence points removed outside RTH
    high_rel_volume: float = 1.5
    low_rel_volume: float = 0.6
    low_volume_dampening: float = 0.85


@dataclass(frozen=True)
class RiskParams:
    """Stop placement and warning thresholds."""
    atr_stop_multiplier: float = 1.5
    pivot_snap_fraction: float = 0.25                 # Snap band as fraction of raw stop distance
    pivot_snap_offset: float = 0.01                   # Distance placed beyond the snapped level
    min_effective_rr: float = 1.2
    max_position_pct: float = 30.0
    max_commission_risk_ratio: float = 0.1
    tight_stop_pct: float = 0.5
    wide_stop_pct: float = 8.0


@dataclass(frozen=True)
class ExitParams:
    """Soft technical exit thresholds."""
    rsi_long_exit: float = 75.0
    rsi_short_exit: float = 25.0
    macd_cross_exit: bool = True


@dataclass(frozen=True)
class SessionParams:
    """US equity session boundaries in exchange-local hours."""
    timezone: str = "America/New_York"
    pre_market_open: float = 4.0
    regular_open: float = 9.5
    regular_close: float = 16.0
    after_hours_close: float = 20.0


@dataclass(frozen=True)
class EngineParams:
    """Analysis pipeline parameters."""
    min_bars: int = 30                                # Skip scoring below this history


@dataclass(frozen=True)
class AccountDefaults:
    """Account settings used when the caller supplies none."""
    capital: float = 10000.0
    risk_pct: float = 1.5
    reward_risk_ratio: float = 2.0
    commission_per_leg: float = 3.95
    fx_rate: float = 1.08


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    indicators: IndicatorParams
    signal: SignalParams
    risk: RiskParams
    exit: ExitParams
    session: SessionParams
    engine: EngineParams
    account: AccountDefaults


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        indicators=IndicatorParams(),
        signal=SignalParams(),
        risk=RiskParams(),
        exit=ExitParams(),
        session=SessionParams(),
        engine=EngineParams(),
        account=AccountDefaults(),
    )

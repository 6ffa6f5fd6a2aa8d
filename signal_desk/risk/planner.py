"""
Position sizing and trade planning.

Stops are ATR-based and anchored to a nearby pivot level when one sits close
to the raw stop. Sizing risks a fixed share of capital, converted to the
instrument's currency. Intermediate values are kept unrounded; rounding happens
only when the TradePlan is built.
"""

import math
from typing import Optional

import structlog

from ..config.defaults import RiskParams
from ..data.models import Direction
from ..models.indicators import PivotLevels
from ..models.risk import AccountSettings, QuickSize, TradePlan

logger = structlog.get_logger(__name__)


def _snap_stop(direction: Direction, entry: float, raw_stop: float, raw_distance: float,
               pivots: Optional[PivotLevels], params: RiskParams) -> tuple[float, Optional[str]]:
    """
    Move the stop just beyond a pivot level sitting near the raw stop

    Candidates must sit on the protective side of entry and within
    ``pivot_snap_fraction`` of the raw stop distance from the raw stop.
    Levels are visited in S1, S2, R1, R2, PP order and the last
    qualifying one wins.
    """
    if pivots is None:
        return raw_stop, None

    band = raw_distance * params.pivot_snap_fraction
    snapped: Optional[tuple[float, str]] = None
    for name, level in pivots.levels():
        if level is None or not math.isfinite(level):
            continue
        protective = level < entry if direction == Direction.BUY else level > entry
        if protective and abs(level - raw_stop) < band:
            snapped = (level, name)

    if snapped is None:
        return raw_stop, None

    level, name = snapped
    if direction == Direction.BUY:
        return level - params.pivot_snap_offset, name
    return level + params.pivot_snap_offset, name


def _warnings(effective_rr: float, position_pct: float, commission_ratio: float,
              stop_pct: float, params: RiskParams) -> list[str]:
    warnings = []
    if effective_rr < params.min_effective_rr:
        warnings.append("Effective R:R too low – trade not recommended")
    if position_pct > params.max_position_pct:
        warnings.append(f"Position exceeds {params.max_position_pct:g}% of capital – concentration risk")
    if commission_ratio > params.max_commission_risk_ratio:
        warnings.append(
            f"Commission is over {params.max_commission_risk_ratio * 100:g}% of the risk amount – consider increasing capital"
        )
    if stop_pct < params.tight_stop_pct:
        warnings.append("Stop loss very tight – may be hit by market noise")
    if stop_pct > params.wide_stop_pct:
        warnings.append("Wide stop loss – drawdown risk")
    return warnings


def plan(
    settings: AccountSettings,
    direction: Direction,
    entry_price: Optional[float],
    atr: Optional[float],
    pivots: Optional[PivotLevels] = None,
    reward_risk_ratio: Optional[float] = None,
    *,
    symbol: Optional[str] = None,
    params: Optional[RiskParams] = None,
) -> Optional[TradePlan]:
    """
    Build a trade plan for a directional signal

    Args:
        settings: Account capital, risk %, commission and FX rate
        direction: BUY or SELL; WAIT yields no plan
        entry_price: Entry in instrument currency
        atr: Latest ATR in instrument currency
        pivots: Optional support/resistance levels for stop anchoring
        reward_risk_ratio: Target multiple of the raw stop distance;
            ``settings.reward_risk_ratio`` when None
        symbol: Echoed on the plan
        params: Stop and warning thresholds

    Returns:
        TradePlan, or None without a direction, entry price or ATR
    """
    if direction == Direction.WAIT or not entry_price or not atr:
        logger.debug("Trade plan skipped", symbol=symbol, direction=direction.value,
                     entry_price=entry_price, atr=atr)
        return None

    params = params or RiskParams()
    rr = settings.reward_risk_ratio if reward_risk_ratio is None else reward_risk_ratio
    long = direction == Direction.BUY

    # 1. ATR stop and target
    raw_distance = atr * params.atr_stop_multiplier
    stop_pct = raw_distance / entry_price * 100
    if long:
        raw_stop = entry_price - raw_distance
        target = entry_price + raw_distance * rr
    else:
        raw_stop = entry_price + raw_distance
        target = entry_price - raw_distance * rr

    # 2. Pivot anchoring
    stop, snapped_level = _snap_stop(direction, entry_price, raw_stop, raw_distance, pivots, params)
    stop_distance = abs(entry_price - stop)

    # 3. Risk budget, account currency then instrument currency
    risk_amount = settings.capital * settings.risk_pct / 100
    risk_amount_instrument = risk_amount * settings.fx_rate

    # 4. Share count, never below one
    shares = max(1, math.floor(risk_amount_instrument / stop_distance))

    # 5. Derived values
    target_distance = abs(entry_price - target)
    position_value_instrument = shares * entry_price
    position_value = position_value_instrument / settings.fx_rate
    position_pct = position_value / settings.capital * 100

    commission_total = settings.commission_per_leg * 2
    projected_gain = shares * target_distance / settings.fx_rate - commission_total
    projected_loss = shares * stop_distance / settings.fx_rate + commission_total
    effective_rr = projected_gain / max(projected_loss, 0.01)

    commission_per_share = commission_total * settings.fx_rate / shares
    break_even = entry_price + commission_per_share if long else entry_price - commission_per_share

    # 6. Warnings
    warnings = _warnings(
        effective_rr,
        position_pct,
        settings.commission_per_leg / risk_amount if risk_amount else math.inf,
        stop_pct,
        params,
    )

    trade_plan = TradePlan(
        direction=direction,
        symbol=symbol,
        entry_price=round(entry_price, 2),
        stop_price=round(stop, 2),
        target_price=round(target, 2),
        stop_distance=round(stop_distance, 2),
        target_distance=round(target_distance, 2),
        stop_pct=round(stop_pct, 2),
        shares=shares,
        position_value=round(position_value, 2),
        position_value_instrument=round(position_value_instrument, 2),
        position_pct=round(position_pct, 1),
        risk_amount=round(risk_amount, 2),
        risk_amount_instrument=round(risk_amount_instrument, 2),
        projected_gain=round(projected_gain, 2),
        projected_loss=round(abs(projected_loss), 2),
        effective_reward_risk=round(effective_rr, 2),
        commission_total=round(commission_total, 2),
        break_even_price=round(break_even, 2),
        reward_risk_ratio=rr,
        snapped_level=snapped_level,
        warnings=tuple(warnings),
    )

    logger.debug(
        "Trade plan built",
        symbol=symbol,
        direction=direction.value,
        shares=shares,
        stop=trade_plan.stop_price,
        target=trade_plan.target_price,
        snapped_level=snapped_level,
        warnings=len(warnings),
    )

    return trade_plan


def quick_size(capital: float, risk_pct: float, stop_pct: float, entry_price: float,
               fx_rate: float = 1.08) -> Optional[QuickSize]:
    """
    Estimate a share count from a stop expressed as % of entry

    Returns:
        QuickSize, or None when the stop distance per share is not positive
    """
    risk_amount = capital * risk_pct / 100
    stop_per_share = entry_price * stop_pct / 100
    if stop_per_share <= 0:
        return None

    shares = max(1, math.floor(risk_amount * fx_rate / stop_per_share))
    return QuickSize(
        shares=shares,
        risk_amount=round(risk_amount, 2),
        position_value_instrument=round(shares * entry_price, 2),
    )

"""Account settings, trade plan and exit verdict models"""

from dataclasses import asdict, dataclass, fields
from typing import Any, Optional

from ..config.validation import ConfigValidator
from ..data.models import Direction
from ..errors import SettingsError


@dataclass(frozen=True)
class AccountSettings:
    """
    Caller-owned account parameters.

    capital > 0 (account currency), risk_pct in (0, 100],
    reward_risk_ratio > 0, commission_per_leg >= 0 (account currency),
    fx_rate > 0 (instrument currency per unit of account currency).
    """
    capital: float = 10000.0
    risk_pct: float = 1.5
    reward_risk_ratio: float = 2.0
    commission_per_leg: float = 3.95
    fx_rate: float = 1.08

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AccountSettings":
        """
        Build validated settings from a loosely-typed mapping.

        Raises:
            SettingsError: On unknown keys or out-of-range values
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise SettingsError(f"Unknown account settings: {', '.join(unknown)}")

        errors = ConfigValidator.validate_account_settings(data)
        if errors:
            raise SettingsError("Invalid account settings", errors)

        return cls(**{key: float(value) for key, value in data.items()})

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class TradePlan:
    """
    Fully specified trade plan.

    Prices are in instrument currency; ``position_value``, ``risk_amount``,
    ``projected_gain``, ``projected_loss`` and ``commission_total`` are in
    account currency. All values are rounded.
    """
    direction: Direction
    symbol: Optional[str]
    entry_price: float
    stop_price: float
    target_price: float
    stop_distance: float
    target_distance: float
    stop_pct: float
    shares: int
    position_value: float
    position_value_instrument: float
    position_pct: float
    risk_amount: float
    risk_amount_instrument: float
    projected_gain: float
    projected_loss: float
    effective_reward_risk: float
    commission_total: float
    break_even_price: float
    reward_risk_ratio: float
    snapped_level: Optional[str] = None                 # Pivot the stop was anchored to
    warnings: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["direction"] = self.direction.value
        data["warnings"] = list(self.warnings)
        return data


@dataclass(frozen=True)
class ExitVerdict:
    """Exit decision for an open position."""
    should_exit: bool
    reasons: tuple[str, ...]
    unrealized_pnl_pct: float
    unrealized_pnl: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "should_exit": self.should_exit,
            "reasons": list(self.reasons),
            "unrealized_pnl_pct": self.unrealized_pnl_pct,
            "unrealized_pnl": self.unrealized_pnl,
        }


@dataclass(frozen=True)
class QuickSize:
    """Share estimate from a stop expressed as a percentage of entry."""
    shares: int
    risk_amount: float
    position_value_instrument: float

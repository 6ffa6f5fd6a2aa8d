"""Configuration validation utilities."""

import math
from dataclasses import dataclass
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


SESSION_HOUR_FIELDS = ("pre_market_open", "regular_open", "regular_close", "after_hours_close")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _is_timezone(value: Any) -> bool:
    if not isinstance(value, str) or not value:
        return False
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return False
    return True


class ConfigValidator:
    """Validates configuration parameters and account settings."""

    PERIOD_FIELDS = (
        "ema_fast", "ema_medium", "ema_trend", "ema_long", "rsi_period",
        "macd_fast", "macd_slow", "macd_signal", "atr_period", "bb_period",
        "stoch_k_period", "stoch_d_period", "volume_period", "obv_ema_period",
        "pivot_lookback",
    )

    @staticmethod
    def validate_account_settings(params: dict[str, Any]) -> list[ValidationError]:
        """Validate account settings (capital, risk %, R:R, commission, FX rate)."""
        errors = []

        # Validate capital
        if "capital" in params:
            value = params["capital"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="capital",
                    message="Must be a positive number",
                    value=value
                ))

        # Validate risk_pct
        if "risk_pct" in params:
            value = params["risk_pct"]
            if not _is_number(value) or value <= 0 or value > 100:
                errors.append(ValidationError(
                    field="risk_pct",
                    message="Must be a number in (0, 100]",
                    value=value
                ))

        # Validate reward_risk_ratio
        if "reward_risk_ratio" in params:
            value = params["reward_risk_ratio"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="reward_risk_ratio",
                    message="Must be a positive number",
                    value=value
                ))

        # Validate commission_per_leg
        if "commission_per_leg" in params:
            value = params["commission_per_leg"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="commission_per_leg",
                    message="Must be a non-negative number",
                    value=value
                ))

        # Validate fx_rate
        if "fx_rate" in params:
            value = params["fx_rate"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="fx_rate",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_indicator_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate indicator periods and Bollinger multiplier."""
        errors = []

        for name in ConfigValidator.PERIOD_FIELDS:
            if name in params:
                value = params[name]
                if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive integer",
                        value=value
                    ))

        if "bb_mult" in params:
            value = params["bb_mult"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="bb_mult",
                    message="Must be a positive number",
                    value=value
                ))

        fast = params.get("macd_fast")
        slow = params.get("macd_slow")
        if isinstance(fast, int) and isinstance(slow, int) and fast >= slow:
            errors.append(ValidationError(
                field="macd_fast",
                message="Must be smaller than macd_slow",
                value=fast
            ))

        return errors

    @staticmethod
    def validate_risk_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate stop placement and warning thresholds."""
        errors = []

        for name in ("atr_stop_multiplier", "min_effective_rr", "max_position_pct",
                     "max_commission_risk_ratio", "tight_stop_pct", "wide_stop_pct"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value <= 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive number",
                        value=value
                    ))

        if "pivot_snap_fraction" in params:
            value = params["pivot_snap_fraction"]
            if not _is_number(value) or value < 0 or value > 1:
                errors.append(ValidationError(
                    field="pivot_snap_fraction",
                    message="Must be a number between 0 and 1",
                    value=value
                ))

        if "pivot_snap_offset" in params:
            value = params["pivot_snap_offset"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="pivot_snap_offset",
                    message="Must be a non-negative number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_exit_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate soft exit thresholds."""
        errors = []

        for name in ("rsi_long_exit", "rsi_short_exit"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value < 0 or value > 100:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a number between 0 and 100",
                        value=value
                    ))

        if "macd_cross_exit" in params and not isinstance(params["macd_cross_exit"], bool):
            errors.append(ValidationError(
                field="macd_cross_exit",
                message="Must be a boolean",
                value=params["macd_cross_exit"]
            ))

        return errors

    @staticmethod
    def validate_session_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate the session timezone and hour boundaries."""
        errors = []

        if "timezone" in params:
            value = params["timezone"]
            if not _is_timezone(value):
                errors.append(ValidationError(
                    field="timezone",
                    message="Must be an IANA timezone name",
                    value=value
                ))

        hours = []
        for name in SESSION_HOUR_FIELDS:
            if name not in params:
                continue
            value = params[name]
            if not _is_number(value) or value < 0 or value > 24:
                errors.append(ValidationError(
                    field=name,
                    message="Must be an hour between 0 and 24",
                    value=value
                ))
            else:
                hours.append((name, value))

        # Boundaries must run pre-market -> open -> close -> after-hours
        for (earlier, first), (later, second) in zip(hours, hours[1:]):
            if first >= second:
                errors.append(ValidationError(
                    field=later,
                    message=f"Must be after {earlier}",
                    value=second
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "indicators" in config:
            errors.extend(ConfigValidator.validate_indicator_params(config["indicators"]))

        if "risk" in config:
            errors.extend(ConfigValidator.validate_risk_params(config["risk"]))

        if "exit" in config:
            errors.extend(ConfigValidator.validate_exit_params(config["exit"]))

        if "session" in config:
            errors.extend(ConfigValidator.validate_session_params(config["session"]))

        if "account" in config:
            errors.extend(ConfigValidator.validate_account_settings(config["account"]))

        return errors

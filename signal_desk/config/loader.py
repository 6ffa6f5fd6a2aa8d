"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

import yaml

from ..errors import SettingsError
from .defaults import (
    AccountDefaults,
    DefaultConfig,
    EngineParams,
    ExitParams,
    IndicatorParams,
    RiskParams,
    SessionParams,
    SignalParams,
    get_default_config,
)
from .validation import ConfigValidator

if TYPE_CHECKING:
    from ..models.risk import AccountSettings

SECTION_TYPES = {
    "indicators": IndicatorParams,
    "signal": SignalParams,
    "risk": RiskParams,
    "exit": ExitParams,
    "session": SessionParams,
    "engine": EngineParams,
    "account": AccountDefaults,
}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def _load_file(self) -> dict[str, Any]:
        symbols_file = self.config_dir / "symbols.yaml"

        if not symbols_file.exists():
            return {}

        with open(symbols_file) as f:
            return yaml.safe_load(f) or {}

    def load_symbol_config(self, symbol: str) -> dict[str, Any]:
        """Load symbol-specific configuration overrides."""
        return self._load_file().get("symbols", {}).get(symbol, {}) or {}  # type: ignore[no-any-return]

    def load_account_settings(self) -> "AccountSettings":
        """Load account settings from the ``account`` section, falling back to defaults."""
        from ..models.risk import AccountSettings

        merged = self._deep_merge(
            self._dataclass_to_dict(self.defaults.account),
            self._load_file().get("account", {}) or {},
        )
        return AccountSettings.from_dict(merged)

    def merge_config(
        self,
        symbol: str,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Per-call overrides (highest priority)
        2. Symbol-specific overrides
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        symbol_config = self.load_symbol_config(symbol)
        config = self._deep_merge(config, symbol_config)

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load_config(self, symbol: str, overrides: Optional[dict[str, Any]] = None) -> DefaultConfig:
        """Merge and validate configuration for a symbol, returning typed parameters."""
        return self.build_config(self.merge_config(symbol, overrides))

    @staticmethod
    def build_config(config: dict[str, Any]) -> DefaultConfig:
        """
        Convert a merged configuration dictionary back to a DefaultConfig.

        Raises:
            SettingsError: If a section contains unknown keys or invalid values
        """
        errors = ConfigValidator.validate_config(config)
        if errors:
            raise SettingsError("Invalid configuration", errors)

        sections = {}
        for name, section_type in SECTION_TYPES.items():
            values = config.get(name, {}) or {}
            known = {f.name for f in fields(section_type)}
            unknown = sorted(set(values) - known)
            if unknown:
                raise SettingsError(f"Unknown keys in '{name}' section: {', '.join(unknown)}")
            sections[name] = section_type(**values)

        return DefaultConfig(**sections)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

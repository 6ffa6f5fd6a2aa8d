"""Configuration and account settings errors."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..config.validation import ValidationError


class SettingsError(ValueError):
    """Raised when account settings or parameter overrides fail validation."""

    def __init__(self, message: str, errors: Optional[list["ValidationError"]] = None):
        if errors:
            details = "; ".join(f"{err.field}: {err.message} (got: {err.value!r})" for err in errors)
            message = f"{message}: {details}"
        super().__init__(message)
        self.errors = list(errors or [])

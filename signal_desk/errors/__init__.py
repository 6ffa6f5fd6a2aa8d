"""
Error classification system for the analysis pipeline.

The core indicator, scoring, risk and exit operations recover locally from
short history, missing quotes and degenerate ranges. These exceptions are
raised only at the boundary: malformed inputs, invalid settings, and
unexpected failures inside the indicator calculator.
"""

from .configuration import SettingsError
from .data_quality import (
    DataQualityError,
    TemporalDataError,
    MissingDataError,
    MalformedDataError,
    InsufficientDataError,
)
from .system_failures import (
    SystemFailureError,
    IndicatorCalculationError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "TemporalDataError",
    "MissingDataError",
    "MalformedDataError",
    "InsufficientDataError",
    # System Failures
    "SystemFailureError",
    "IndicatorCalculationError",
    # Configuration
    "SettingsError",
]

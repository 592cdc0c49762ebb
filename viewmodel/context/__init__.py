"""
Context module for viewmodel

Per-request user preferences consumed by formatters and tables.
"""

from .schemas import (
    DOT_DECIMAL_LANGUAGES,
    DOT_DECIMAL_LOCALES,
    DistanceUnit,
    PressureUnit,
    SpeedUnit,
    UserContext,
    normalize_locale,
    uses_comma_decimal,
)

__all__ = [
    "DOT_DECIMAL_LANGUAGES",
    "DOT_DECIMAL_LOCALES",
    "DistanceUnit",
    "PressureUnit",
    "SpeedUnit",
    "UserContext",
    "normalize_locale",
    "uses_comma_decimal",
]

"""
Formatting module for viewmodel

Pure functions mapping raw values plus user preferences to display strings:
locale numbers, unit conversion, timestamps and durations.
"""

from .dates import format_date, format_datetime, resolve_timezone, to_local_datetime
from .durations import format_time_length, time_length_minutes
from .numbers import add_thousand_separators, format_number, format_plain
from .units import (
    convert_distance,
    convert_pressure,
    convert_speed,
    distance_km_from,
    format_distance,
    format_pressure,
    format_speed,
)

__all__ = [
    "add_thousand_separators",
    "convert_distance",
    "convert_pressure",
    "convert_speed",
    "distance_km_from",
    "format_date",
    "format_datetime",
    "format_distance",
    "format_number",
    "format_plain",
    "format_pressure",
    "format_speed",
    "format_time_length",
    "resolve_timezone",
    "time_length_minutes",
    "to_local_datetime",
]

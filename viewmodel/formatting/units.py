"""Unit conversion for distances, speeds and pressures.

Values are stored in canonical units (km, km/h, bar) and converted to the
user's preferred unit right before formatting. Rounding happens after the
conversion, never before.
"""

from ..context.schemas import DistanceUnit, PressureUnit, SpeedUnit, UserContext
from .numbers import format_number

KM_TO_MILES = 0.621371
KM_TO_NAUTICAL_MILES = 0.539957
BAR_TO_PSI = 14.5038
BAR_TO_KPA = 100.0

_DISTANCE_FACTORS = {
    DistanceUnit.KILOMETER: 1.0,
    DistanceUnit.MILES: KM_TO_MILES,
    DistanceUnit.NAUTICAL_MILES: KM_TO_NAUTICAL_MILES,
}

_SPEED_FACTORS = {
    SpeedUnit.KMH: 1.0,
    SpeedUnit.MPH: KM_TO_MILES,
    SpeedUnit.KNOTS: KM_TO_NAUTICAL_MILES,
}

_PRESSURE_FACTORS = {
    PressureUnit.BAR: 1.0,
    PressureUnit.PSI: BAR_TO_PSI,
    PressureUnit.KPA: BAR_TO_KPA,
}


def convert_distance(km: float, unit: DistanceUnit) -> float:
    return km * _DISTANCE_FACTORS[unit]


def convert_speed(kmh: float, unit: SpeedUnit) -> float:
    return kmh * _SPEED_FACTORS[unit]


def convert_pressure(bar: float, unit: PressureUnit) -> float:
    return bar * _PRESSURE_FACTORS[unit]


def distance_km_from(value: float, unit: DistanceUnit) -> float:
    """Convert a value entered in the user's unit back to kilometers."""
    return value / _DISTANCE_FACTORS[unit]


def format_distance(km: float, ctx: UserContext, decimals: int = 2) -> str:
    """'196,50 km', '122.09 mi', '106.10 NM'."""
    unit = ctx.distance_unit
    return f"{format_number(convert_distance(km, unit), decimals, ctx.locale)} {unit.value}"


def format_speed(kmh: float, ctx: UserContext, decimals: int = 1) -> str:
    """'100,0 km/h', '62.1 mph', '54.0 kn'."""
    unit = ctx.effective_speed_unit
    return f"{format_number(convert_speed(kmh, unit), decimals, ctx.locale)} {unit.value}"


def format_pressure(bar: float, ctx: UserContext, decimals: int = 2) -> str:
    """'2,50 bar', '36.26 psi', '250.00 kPa'."""
    unit = ctx.pressure_unit
    return f"{format_number(convert_pressure(bar, unit), decimals, ctx.locale)} {unit.value}"

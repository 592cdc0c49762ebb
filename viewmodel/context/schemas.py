"""
User context schemas for viewmodel

The per-request bundle of user preferences every formatter reads:
timezone, language, locale and preferred measurement units.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .. import config


class DistanceUnit(str, Enum):
    """Preferred unit for distances. Speeds follow it unless overridden."""

    KILOMETER = "km"
    MILES = "mi"
    NAUTICAL_MILES = "NM"


class SpeedUnit(str, Enum):
    """Preferred unit for speeds."""

    KMH = "km/h"
    MPH = "mph"
    KNOTS = "kn"


class PressureUnit(str, Enum):
    """Preferred unit for pressures."""

    BAR = "bar"
    PSI = "psi"
    KPA = "kPa"


# Locales written with a dot decimal separator and comma thousands. A tag
# whose language is in DOT_DECIMAL_LANGUAGES (bare "en", "en-AU", "zh-TW")
# also counts. Every other locale uses comma decimals and dot thousands.
DOT_DECIMAL_LOCALES = frozenset({"en-gb", "en-us", "ja", "zh-cn", "ar-ae"})
DOT_DECIMAL_LANGUAGES = frozenset({"en", "ja", "zh"})

_SPEED_FOR_DISTANCE = {
    DistanceUnit.KILOMETER: SpeedUnit.KMH,
    DistanceUnit.MILES: SpeedUnit.MPH,
    DistanceUnit.NAUTICAL_MILES: SpeedUnit.KNOTS,
}


def normalize_locale(locale: str) -> str:
    """Normalize a locale tag: 'en_GB', 'EN-gb' -> 'en-gb'."""
    return (locale or "").strip().replace("_", "-").lower()


def uses_comma_decimal(locale: str) -> bool:
    """Return True if the locale writes decimals with a comma."""
    tag = normalize_locale(locale)
    if tag in DOT_DECIMAL_LOCALES:
        return False
    return tag.split("-", 1)[0] not in DOT_DECIMAL_LANGUAGES


class UserContext(BaseModel):
    """Per-request user preferences.

    Immutable once built: a table captures its context at construction and
    every render pass reads from the same instance.
    """

    model_config = ConfigDict(frozen=True)

    timezone: str = Field(
        default=config.DEFAULT_TIMEZONE,
        description="IANA timezone name, e.g. 'Europe/Vienna'",
    )
    language: str = Field(
        default=config.DEFAULT_LANGUAGE,
        description="UI language code used by the translator",
    )
    locale: str = Field(
        default=config.DEFAULT_LOCALE,
        description="Number formatting locale, e.g. 'de' or 'en-GB'",
    )
    distance_unit: DistanceUnit = Field(default=DistanceUnit.KILOMETER)
    speed_unit: Optional[SpeedUnit] = Field(
        default=None,
        description="Explicit speed unit; derived from distance_unit when unset",
    )
    pressure_unit: PressureUnit = Field(default=PressureUnit.BAR)
    permissions: Optional[frozenset[str]] = Field(
        default=None,
        description="Granted permissions. None disables field access checks.",
    )

    @property
    def effective_speed_unit(self) -> SpeedUnit:
        if self.speed_unit is not None:
            return self.speed_unit
        return _SPEED_FOR_DISTANCE[self.distance_unit]

    def can_access(self, access: list[str]) -> bool:
        """Check field access: empty list is public, otherwise any one permission grants it."""
        if not access or self.permissions is None:
            return True
        return any(permission in self.permissions for permission in access)

    def with_units(
        self,
        distance_unit: Optional[DistanceUnit] = None,
        speed_unit: Optional[SpeedUnit] = None,
        pressure_unit: Optional[PressureUnit] = None,
    ) -> "UserContext":
        """Return a copy with some unit preferences replaced (per-row overrides)."""
        update = {}
        if distance_unit is not None:
            update["distance_unit"] = distance_unit
        if speed_unit is not None:
            update["speed_unit"] = speed_unit
        if pressure_unit is not None:
            update["pressure_unit"] = pressure_unit
        return self.model_copy(update=update)

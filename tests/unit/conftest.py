"""Unit test fixtures.

These fixtures provide:
- UserContexts for German (km) and British (miles) users
- A dictionary-backed translator
- Sample trip rows
"""

from typing import Any, Callable

import pytest

from viewmodel.context import DistanceUnit, UserContext

# ---------------------------------------------------------------------------
# User contexts
# ---------------------------------------------------------------------------


@pytest.fixture
def de_ctx() -> UserContext:
    """German user in Vienna using kilometers.

    Returns:
        UserContext with comma decimals and metric units.
    """
    return UserContext(timezone="Europe/Vienna", language="de", locale="de")


@pytest.fixture
def en_ctx() -> UserContext:
    """British user in London using miles.

    Returns:
        UserContext with dot decimals and imperial distances.
    """
    return UserContext(
        timezone="Europe/London",
        language="en",
        locale="en-GB",
        distance_unit=DistanceUnit.MILES,
    )


# ---------------------------------------------------------------------------
# Translator
# ---------------------------------------------------------------------------

TRANSLATIONS = {
    "KEINEDATEN": "Keine Daten",
    "NAME": "Name",
    "DISTANZ": "Distanz",
    "Yes": "Ja",
    "No": "Nein",
    "BEARBEITEN": "Bearbeiten",
    "LOESCHEN": "Löschen",
}


@pytest.fixture
def translator() -> Callable[[str], str]:
    """Translator backed by a small German dictionary.

    Returns:
        Function returning the translation, or the key when unknown.
    """
    return lambda key: TRANSLATIONS.get(key, key)


# ---------------------------------------------------------------------------
# Rows
# ---------------------------------------------------------------------------


@pytest.fixture
def trips() -> list[dict[str, Any]]:
    """Three trips as plain dict rows.

    Returns:
        Rows with id, name, km, active and duration (seconds).
    """
    return [
        {"id": 1, "name": "Truck 1", "km": 196.5, "active": True, "duration": 2700},
        {"id": 2, "name": "Truck 2", "km": 342.8, "active": False, "duration": 19800},
        {"id": 3, "name": "Truck 3", "km": 89.2, "active": True, "duration": 183900},
    ]

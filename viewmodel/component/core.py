"""Shared component contracts.

Every component renders itself to a JSON-ready dict via ``print``. The
translator is optional everywhere; without one, keys pass through as-is.
"""

from enum import Enum
from typing import Any, Callable, Optional, Protocol, runtime_checkable

TranslateFunc = Callable[[str], str]


def translate(translator: Optional[TranslateFunc], key: str) -> str:
    """Apply the translator if one is given, else return the key unchanged."""
    if translator is None:
        return key
    return translator(key)


@runtime_checkable
class Component(Protocol):
    """Anything that can render to the frontend's JSON shape."""

    def print(self, translator: Optional[TranslateFunc] = None) -> dict[str, Any]: ...


def with_new_row(result: dict[str, Any]) -> dict[str, Any]:
    """Mark a printed component to start a new grid row."""
    result["newRow"] = True
    return result


class ButtonAction(str, Enum):
    """What a button does when clicked."""

    LINK = "link"
    DIALOG = "dialog"
    API = "api"
    DOWNLOAD = "download"
    FORM = "form"
    BACK = "back"
    CLOSE = "close"
    SAVE = "save"
    HREF = "href"
    GET = "get"
    POST = "post"
    PUT = "put"
    DELETE = "delete"


class ButtonType(str, Enum):
    """Visual style of a button."""

    RAISED = "raised"
    BASIC = "basic"
    STROKED = "stroked"
    FLAT = "flat"
    MINI_FAB = "minifab"
    FAB = "fab"
    ICON = "icon"
    ICON_TEXT = "icontext"


class Color(str, Enum):
    """Theme colors."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    TERTIARY = "tertiary"
    ACCENT = "accent"
    WARNING = "warn"
    ERROR = "error"
    SUCCESS = "success"
    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"
    ORANGE = "orange"
    GRAY = "gray"

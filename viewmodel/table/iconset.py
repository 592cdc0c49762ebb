"""IconSet: named icon definitions for icon-kind fields.

Register each possible value once, keep the returned IconRef, and return
refs from accessors. Values coming from untyped sources (database columns)
go through ``resolve``, which turns unknown values into None instead of
raising, so a row with unexpected data still renders.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterator, Optional

from .schemas import FieldColor, IconDef

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IconRef:
    """Reference to a value registered in an IconSet."""

    value: str


class IconSet:
    """Ordered registry of value -> (icon, color, hint)."""

    def __init__(self):
        self._icons: dict[str, IconDef] = {}

    def add(
        self,
        value: str,
        icon: str,
        color: FieldColor = FieldColor.PRIMARY,
        hint: str = "",
    ) -> IconRef:
        return self.add_with_options(value, icon, color, hint, None)

    def add_with_options(
        self,
        value: str,
        icon: str,
        color: FieldColor = FieldColor.PRIMARY,
        hint: str = "",
        options: Optional[dict[str, Any]] = None,
    ) -> IconRef:
        """Register a value with extra frontend options merged into its icon JSON."""
        if value in self._icons:
            logger.debug(f"IconSet: redefining icon value '{value}'")
        self._icons[value] = IconDef(icon=icon, color=color, hint=hint, options=dict(options or {}))
        return IconRef(value)

    def resolve(self, value: Optional[str]) -> Optional[IconRef]:
        """Return the ref for a registered value, or None (with a warning) otherwise."""
        if value is not None and value in self._icons:
            return IconRef(value)
        logger.warning(f"IconSet.resolve: unknown value '{value}'")
        return None

    def get(self, value: str) -> Optional[IconDef]:
        return self._icons.get(value)

    def definitions(self) -> dict[str, IconDef]:
        return dict(self._icons)

    def __contains__(self, value: object) -> bool:
        if isinstance(value, IconRef):
            value = value.value
        return value in self._icons

    def __iter__(self) -> Iterator[str]:
        return iter(self._icons)

    def __len__(self) -> int:
        return len(self._icons)

"""Cross-field row access for custom formatters."""

from typing import Any, Callable, Generic, TypeVar

RowT = TypeVar("RowT")


class RowView(Generic[RowT]):
    """Reads any registered field's raw value from the current row by field id.

    Lets a custom formatter depend on sibling values (e.g. a unit flag
    stored in another column) without knowing the row's concrete type.
    """

    def __init__(self, row: RowT, accessors: dict[str, Callable[[RowT], Any]]):
        self.row = row
        self._accessors = accessors

    def get(self, field_id: str) -> Any:
        accessor = self._accessors.get(field_id)
        if accessor is None:
            return None
        return accessor(self.row)

    def get_int(self, field_id: str) -> int:
        value = self.get(field_id)
        try:
            return int(value) if value is not None else 0
        except (TypeError, ValueError):
            return 0

    def get_float(self, field_id: str) -> float:
        value = self.get(field_id)
        try:
            return float(value) if value is not None else 0.0
        except (TypeError, ValueError):
            return 0.0

    def get_str(self, field_id: str) -> str:
        value = self.get(field_id)
        return "" if value is None else str(value)

    def get_bool(self, field_id: str) -> bool:
        value = self.get(field_id)
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

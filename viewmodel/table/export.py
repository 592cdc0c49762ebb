"""
Table data responses for viewmodel

The payload an AJAX table endpoint returns: formatted rows plus optional
field definitions, footer, total count and extra components. CSV and
Excel targets render to a semicolon CSV string or XLSX bytes instead.
"""

import csv
import io
import logging
from typing import Any, Optional

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from .. import config
from ..api.schemas import DataResult
from ..component.core import Component, TranslateFunc
from .schemas import OutputTarget

logger = logging.getLogger(__name__)

EXCEL_SHEET_NAME = "Sheet1"
EXCEL_MIN_WIDTH = 10.0
EXCEL_MAX_WIDTH = 50.0
EXCEL_WIDTH_FACTOR = 1.2


def _cell_text(value: Any) -> str:
    """Flatten a formatted cell to text. Web pairs keep their display part."""
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return "" if not value else _cell_text(value[0])
    return str(value)


def expand_n_columns(
    fields: list[dict[str, Any]], rows: list[dict[str, Any]]
) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """Spread list-valued cells over numbered columns.

    A field whose rows hold up to N items becomes columns ``id``,
    ``id_2`` ... ``id_N`` named ``name``, ``name 2`` ... ``name N``.
    Shorter rows are padded with "". Returns new field and row lists.
    """
    widest: dict[str, int] = {}
    for row in rows:
        for key, value in row.items():
            if isinstance(value, list):
                widest[key] = max(widest.get(key, 0), len(value))

    if not widest:
        return fields, rows

    expanded_fields: list[dict[str, Any]] = []
    for field in fields:
        field_id = field.get("id")
        n = widest.get(field_id, 0)
        if n <= 1:
            expanded_fields.append(field)
            continue
        expanded_fields.append(field)
        for i in range(2, n + 1):
            expanded_fields.append(
                {**field, "id": f"{field_id}_{i}", "name": f"{field.get('name', field_id)} {i}"}
            )

    expanded_rows: list[dict[str, Any]] = []
    for row in rows:
        new_row = dict(row)
        for field_id, n in widest.items():
            items = row.get(field_id)
            if not isinstance(items, list):
                continue
            new_row[field_id] = items[0] if items else ""
            for i in range(2, n + 1):
                new_row[f"{field_id}_{i}"] = items[i - 1] if i <= len(items) else ""
        expanded_rows.append(new_row)

    return expanded_fields, expanded_rows


class TableDataResponse:
    """Rows for one table request, rendered per output target."""

    def __init__(self, data: Optional[list[dict[str, Any]]], output_type: OutputTarget = OutputTarget.WEB):
        self.data: list[dict[str, Any]] = data if data is not None else []
        self.output_type = output_type
        self.fields: Optional[list[dict[str, Any]]] = None
        self.export_fields: Optional[list[dict[str, Any]]] = None
        self.footer: Optional[dict[str, Any]] = None
        self.total_count: Optional[int] = None
        self.components: list[Component] = []

    def with_fields(self, fields: list[dict[str, Any]]) -> "TableDataResponse":
        """Send field definitions along (the columns changed)."""
        self.fields = fields
        return self

    def with_fields_for_export(self, fields: list[dict[str, Any]]) -> "TableDataResponse":
        """Column headers and order for CSV/Excel. Never serialized to JSON."""
        self.export_fields = fields
        return self

    def with_footer(self, footer: dict[str, Any]) -> "TableDataResponse":
        self.footer = footer
        return self

    def with_total_count(self, count: int) -> "TableDataResponse":
        """Total matching rows before pagination (server-side tables)."""
        self.total_count = count
        return self

    def add_component(self, component: Optional[Component]) -> "TableDataResponse":
        if component is not None:
            self.components.append(component)
        return self

    # ── Rendering ───────────────────────────────────────────────────────

    def print(self, translator: Optional[TranslateFunc] = None) -> dict[str, Any]:
        if self.output_type == OutputTarget.CSV:
            return {"csv": self.to_csv()}
        if self.output_type == OutputTarget.EXCEL:
            return {"excel": self.to_excel()}

        result: dict[str, Any] = {"data": self.data}
        if self.total_count is not None:
            result["totalCount"] = self.total_count
        if self.fields:
            result["fields"] = self.fields
        if self.footer:
            result["footer"] = self.footer
        if self.components:
            printed = [component.print(translator) for component in self.components]
            printed = [item for item in printed if item]
            if printed:
                result["components"] = printed
        return result

    def data_response(self, translator: Optional[TranslateFunc] = None) -> DataResult:
        """Typed body for the HTTP layer. Not wrapped in a {"data": ...} envelope."""
        printed = self.print(translator)
        if "csv" in printed:
            return DataResult.csv(printed["csv"])
        if "excel" in printed:
            return DataResult.excel(printed["excel"])
        return DataResult.raw(printed)

    def _columns(self) -> tuple[list[tuple[str, str]], list[dict[str, Any]]]:
        """(id, header) pairs and rows after N-column expansion."""
        fields = self.export_fields if self.export_fields is not None else (self.fields or [])
        fields, rows = expand_n_columns(fields, self.data)

        columns = [
            (field["id"], str(field.get("name") or field["id"]))
            for field in fields
            if "id" in field
        ]
        if not columns and rows:
            columns = [(key, key) for key in rows[0]]
        return columns, rows

    def to_csv(self) -> str:
        """Delimited text with a header row; "" when there are no rows."""
        if not self.data:
            return ""

        columns, rows = self._columns()
        buffer = io.StringIO()
        writer = csv.writer(buffer, delimiter=config.CSV_DELIMITER, lineterminator="\n")
        writer.writerow([header for _, header in columns])
        for row in rows:
            writer.writerow([_cell_text(row.get(field_id)) for field_id, _ in columns])
        return buffer.getvalue()

    def to_excel(self) -> bytes:
        """XLSX workbook bytes with one sheet and content-sized columns."""
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = EXCEL_SHEET_NAME

        if self.data:
            columns, rows = self._columns()
            sheet.append([header for _, header in columns])
            for row in rows:
                sheet.append([_cell_text(row.get(field_id)) for field_id, _ in columns])

            for index, (field_id, header) in enumerate(columns, start=1):
                longest = max(
                    [len(header)] + [len(_cell_text(row.get(field_id))) for row in rows]
                )
                width = min(max(longest * EXCEL_WIDTH_FACTOR, EXCEL_MIN_WIDTH), EXCEL_MAX_WIDTH)
                sheet.column_dimensions[get_column_letter(index)].width = width

            logger.debug(f"Excel export: {len(rows)} rows, {len(columns)} columns")

        buffer = io.BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()

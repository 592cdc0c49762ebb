"""
Table component for viewmodel

A built table: fields (already in column order), the rows or the AJAX url
they are fetched from, options, and everything needed to render the
frontend JSON, footer aggregates and data responses.
"""

import logging
import math
from decimal import Decimal
from typing import Any, Generic, Optional, TypeVar, Union

from ..api.schemas import DataResult
from ..component.button import TableButton
from ..component.core import ButtonAction, Color, Component, TranslateFunc
from ..component.query import Query
from ..component.url import Url, as_url
from ..context.schemas import UserContext
from .export import TableDataResponse
from .field import Field
from .row import RowView
from .schemas import (
    FieldFooter,
    FieldKind,
    OutputTarget,
    PaginationParams,
    TableOptions,
)

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT")

EXPORT_FLAG_KEYS = ("_csv", "_excel")
PAGINATION_KEYS = ("_page", "_pageSize", "_sort", "_sortDir", "_search")
DEFAULT_PAGE_SIZE = 50


def _is_true(value: Any) -> bool:
    return value is True or value == "true"


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return int(value)


def _is_present(value: Any) -> bool:
    """Counted by COUNT footers: anything but None, "", 0 and False."""
    if value is None or value is False or value == "":
        return False
    if isinstance(value, (int, float, Decimal)) and value == 0:
        return False
    return True


class Table(Generic[RowT]):
    """Rendered through ``print`` (component JSON) or ``to_table_data_response``."""

    def __init__(
        self,
        fields: list[Field[RowT]],
        options: TableOptions,
        ctx: UserContext,
        translator: Optional[TranslateFunc] = None,
        filter_form: Optional[list[dict[str, Any]]] = None,
        has_filter: Optional[bool] = None,
        flags: Optional[list[str]] = None,
        fields_can_change: bool = False,
    ):
        self.fields = fields
        self.options = options
        self.ctx = ctx
        self.translator = translator
        self.filter_form = filter_form
        self.has_filter = has_filter
        self.flags = list(flags or [])
        self.fields_can_change = fields_can_change

        self.rows: list[RowT] = []
        self.url: Optional[Url] = None
        self.output_type = OutputTarget.WEB
        self.filter_data: dict[str, Any] = {}
        self.components: list[Component] = []

    # ── Mode ────────────────────────────────────────────────────────────

    @property
    def is_ajax(self) -> bool:
        return self.url is not None

    def set_data(self, rows: list[RowT]) -> "Table[RowT]":
        """Static mode: embed rows and drop any url."""
        self.rows = list(rows)
        self.url = None
        return self

    def set_url(self, url: Union[Url, str]) -> "Table[RowT]":
        """AJAX mode: rows are fetched from url; drops any embedded rows."""
        self.url = as_url(url)
        self.rows = []
        return self

    def set_output_type(self, target: OutputTarget) -> "Table[RowT]":
        self.output_type = target
        return self

    def add_component(self, component: Component) -> "Table[RowT]":
        """Extra component shown alongside web data responses."""
        self.components.append(component)
        return self

    def add_button_top(self, button: TableButton) -> "Table[RowT]":
        self.options.buttons_top.append(button)
        return self

    # ── Field visibility ────────────────────────────────────────────────

    def get_field(self, field_id: str) -> Optional[Field[RowT]]:
        for field in self.fields:
            if field.id == field_id:
                return field
        return None

    def _set_hidden(self, field_id: str, hidden: bool) -> None:
        field = self.get_field(field_id)
        if field is None:
            action = "hide_field" if hidden else "show_field"
            logger.warning(f"Table.{action}: unknown field '{field_id}'")
            return
        field.hidden = hidden

    def hide_field(self, field_id: str) -> "Table[RowT]":
        self._set_hidden(field_id, True)
        return self

    def show_field(self, field_id: str) -> "Table[RowT]":
        self._set_hidden(field_id, False)
        return self

    def hide_fields(self, *field_ids: str) -> "Table[RowT]":
        for field_id in field_ids:
            self._set_hidden(field_id, True)
        return self

    def show_fields(self, *field_ids: str) -> "Table[RowT]":
        for field_id in field_ids:
            self._set_hidden(field_id, False)
        return self

    def visible_fields(self) -> list[Field[RowT]]:
        """Fields neither hidden nor denied to the current user, in column order."""
        return [field for field in self.fields if field.is_visible_for(self.ctx)]

    def _data_fields(self, target: OutputTarget) -> list[Field[RowT]]:
        fields = [field for field in self.visible_fields() if field.kind != FieldKind.HEADER]
        if target.is_export:
            fields = [field for field in fields if field.csv]
        return fields

    def _row_view(self, row: RowT) -> RowView[RowT]:
        accessors = {
            field.id: field.accessor
            for field in self.fields
            if field.accessor is not None and field.kind != FieldKind.HEADER
        }
        return RowView(row, accessors)

    # ── Data ────────────────────────────────────────────────────────────

    def get_data(
        self,
        target: OutputTarget = OutputTarget.WEB,
        translator: Optional[TranslateFunc] = None,
    ) -> list[dict[str, Any]]:
        """Formatted rows, one dict per row keyed by field id."""
        translator = translator or self.translator
        fields = self._data_fields(target)
        web = target == OutputTarget.WEB

        result: list[dict[str, Any]] = []
        for row in self.rows:
            view = self._row_view(row)
            out: dict[str, Any] = {}

            for field in fields:
                ctx = field.context_for(row, self.ctx)
                formatted = field.format_value(field.get_value(row), view, target, ctx, translator)

                if web and field.kind == FieldKind.LINK:
                    if isinstance(formatted, (list, tuple)) and len(formatted) == 2:
                        out[field.id], out[f"{field.id}Link"] = formatted[0], formatted[1]
                    else:
                        out[field.id], out[f"{field.id}Link"] = formatted, ""
                else:
                    out[field.id] = formatted

                if web and field.hint_accessor is not None:
                    hint = field.hint_accessor(row)
                    if hint:
                        out[f"{field.id}Hint"] = hint

                if web and field.menu_accessors and isinstance(out[field.id], dict):
                    self._inject_menus(field, row, out[field.id])

            result.append(out)
        return result

    @staticmethod
    def _inject_menus(field: Field[RowT], row: RowT, buttons: dict[str, Any]) -> None:
        """Replace menu button entries with the row's item urls (False = disabled)."""
        for key, accessor in field.menu_accessors.items():
            slot = str(key)
            if buttons.get(slot) is False:
                continue
            items = accessor(row)
            if items is None:
                buttons[slot] = False
                continue
            buttons[slot] = [item if item else False for item in items]

    def calculate_footer(self, target: OutputTarget = OutputTarget.WEB) -> dict[str, Any]:
        """Aggregates for SUM/COUNT footer fields, keyed by field id.

        Sums are formatted like a single value of the field. Counts are
        plain ints. With no rows the raw aggregate is returned unformatted.
        """
        footer: dict[str, Any] = {}
        first_row = self.rows[0] if self.rows else None

        for field in self.visible_fields():
            if field.footer == FieldFooter.SUM:
                values = [field.get_value(row) for row in self.rows]
                total = math.fsum(
                    float(value)
                    for value in values
                    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)
                )
                if first_row is None:
                    footer[field.id] = total
                    continue
                ctx = field.context_for(first_row, self.ctx)
                footer[field.id] = field.format_value(
                    total, self._row_view(first_row), target, ctx, self.translator
                )
            elif field.footer == FieldFooter.COUNT:
                footer[field.id] = sum(1 for row in self.rows if _is_present(field.get_value(row)))

        return footer

    # ── Request handling ────────────────────────────────────────────────

    def load_filter_data(self, body: Optional[dict[str, Any]]) -> dict[str, Any]:
        """Read a data request body.

        ``_csv`` / ``_excel`` switch the output type. Flags and export keys
        are dropped; the rest is stored for ``load_pagination_params``.
        Returns the filter values without the pagination keys.
        """
        body = body or {}
        if _is_true(body.get("_csv")):
            self.output_type = OutputTarget.CSV
        if _is_true(body.get("_excel")):
            self.output_type = OutputTarget.EXCEL

        self.filter_data = {
            key: value
            for key, value in body.items()
            if key not in EXPORT_FLAG_KEYS and key not in self.flags
        }
        return {key: value for key, value in self.filter_data.items() if key not in PAGINATION_KEYS}

    def set_filter_data(self, data: dict[str, Any]) -> "Table[RowT]":
        self.filter_data = dict(data)
        return self

    def load_pagination_params(self) -> PaginationParams:
        """Server-side pagination parameters from the stored filter data."""
        data = self.filter_data
        page_size = self.options.items_per_page or DEFAULT_PAGE_SIZE
        params: dict[str, Any] = {"page": 0, "page_size": page_size}

        page = _as_int(data.get("_page"))
        if page is not None:
            params["page"] = page
        size = _as_int(data.get("_pageSize"))
        if size is not None:
            params["page_size"] = size
        if isinstance(data.get("_sort"), str):
            params["sort"] = data["_sort"]
        if data.get("_sortDir") in ("asc", "desc"):
            params["sort_dir"] = data["_sortDir"]
        if isinstance(data.get("_search"), str):
            params["search"] = data["_search"]

        return PaginationParams(**params)

    # ── Component JSON ──────────────────────────────────────────────────

    def export_fields(self, translator: Optional[TranslateFunc] = None) -> list[dict[str, Any]]:
        """Field definitions in column order (hidden and denied fields excluded)."""
        translator = translator or self.translator
        return [field.to_json(translator) for field in self.visible_fields()]

    def export_fields_for_csv(self, translator: Optional[TranslateFunc] = None) -> list[dict[str, Any]]:
        translator = translator or self.translator
        return [field.to_json(translator) for field in self._data_fields(OutputTarget.CSV)]

    def _download_buttons(self) -> list[TableButton]:
        buttons: list[TableButton] = []
        if self.url is None:
            return buttons
        if self.options.csv:
            buttons.append(
                TableButton(
                    ButtonAction.DOWNLOAD,
                    "csv",
                    Url(self.url.url, self.url.prefix),
                    "CSV",
                    Color.ACCENT,
                    options={"data": {"_csv": True}},
                )
            )
        if self.options.excel:
            buttons.append(
                TableButton(
                    ButtonAction.DOWNLOAD,
                    "explicit",
                    Url(self.url.url, self.url.prefix),
                    "Excel",
                    Color.ACCENT,
                    options={"data": {"_excel": True}},
                )
            )
        return buttons

    def export_options(self, translator: Optional[TranslateFunc] = None) -> dict[str, Any]:
        """Set options only, under the frontend's camelCase keys."""
        translator = translator or self.translator
        opts = self.options
        options: dict[str, Any] = {}

        if opts.css_class is not None:
            options["class"] = opts.css_class
        if opts.title is not None:
            options["title"] = opts.title
        if opts.text_no_data is not None:
            options["textNoData"] = opts.text_no_data
        if opts.items_per_page is not None:
            options["itemsPerPage"] = opts.items_per_page
        if opts.page_sizes:
            options["pageSizes"] = list(opts.page_sizes)

        top_buttons = list(opts.buttons_top) + self._download_buttons()
        if top_buttons:
            options["buttons"] = {"buttons": [button.print(translator) for button in top_buttons]}

        simple = (
            ("reload", opts.reload),
            ("dense", opts.dense),
            ("pagination", opts.pagination),
            ("search", opts.search),
            ("minWidth", opts.min_width),
            ("query", opts.query),
            ("csv", opts.csv),
        )
        for key, value in simple:
            if value is not None:
                options[key] = value

        if opts.save_state is not None and opts.save_state_id is not None:
            options["saveState"] = opts.save_state
            options["saveStateId"] = opts.save_state_id

        simple = (
            ("saveInput", opts.save_input),
            ("saveInputUrl", opts.save_input_url),
            ("borders", opts.borders),
            ("bordersHeader", opts.borders_header),
            ("select", opts.select),
        )
        for key, value in simple:
            if value is not None:
                options[key] = value

        if opts.select_buttons:
            options["selectButtons"] = [button.print(translator) for button in opts.select_buttons]

        simple = (
            ("footer", opts.footer),
            ("serverSide", opts.server_side),
            ("scrollHeight", opts.scroll_height),
        )
        for key, value in simple:
            if value is not None:
                options[key] = value

        return options

    def print(self, translator: Optional[TranslateFunc] = None) -> dict[str, Any]:
        """Full table component; wrapped in a query component when a filter is set."""
        translator = translator or self.translator

        data: dict[str, Any] = {
            "hasFilter": self.has_filter if self.has_filter is not None else self.filter_form is not None,
            "fields": self.export_fields(translator),
            "options": self.export_options(translator),
        }
        if self.url is not None:
            data["url"] = self.url.print_prefix()
            data["data"] = None
        else:
            data["data"] = self.get_data(OutputTarget.WEB, translator)
        data["components"] = None

        result: dict[str, Any] = {"type": "table"}
        if self.options.display is not None:
            result["display"] = self.options.display
        result["data"] = data

        if self.filter_form is None:
            return result

        # Filter fields with form=False are not shown; their defaults travel as extra data
        visible = [item for item in self.filter_form if item.get("form", True) is not False]
        extra = {
            item["id"]: item.get("default")
            for item in self.filter_form
            if item.get("form", True) is False and "id" in item
        }
        query = Query(visible, save_state_id=self.options.save_state_id, display=self.options.display)
        if extra:
            query.set_extra_data(extra)
        query.add_printed(result)
        return query.print(translator)

    # ── Data responses ──────────────────────────────────────────────────

    def to_table_data_response(self) -> TableDataResponse:
        """Rows for the current output type, ready for an AJAX data endpoint."""
        target = self.output_type
        response = TableDataResponse(self.get_data(target), target)

        if target.is_export:
            response.with_fields_for_export(self.export_fields_for_csv())
        elif self.fields_can_change:
            response.with_fields(self.export_fields())

        if not target.is_export:
            footer = self.calculate_footer(target)
            if footer:
                response.with_footer(footer)
            for component in self.components:
                response.add_component(component)

        return response

    def to_server_side_response(self, total_count: int) -> TableDataResponse:
        """Data response for server-side pagination; total_count is pre-pagination."""
        return self.to_table_data_response().with_total_count(total_count)

    def data_response(self, translator: Optional[TranslateFunc] = None) -> DataResult:
        return self.to_table_data_response().data_response(translator or self.translator)

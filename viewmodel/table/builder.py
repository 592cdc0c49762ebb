"""
Table builder for viewmodel

Fluent registration of typed fields plus table-level option setters.
``build()`` copies the configuration into an independent Table, so one
builder can produce several tables.

Usage:
    builder = TableBuilder[Trip](ctx, translator)
    builder.id_field("id", "ID", lambda t: t.id)
    builder.distance_field("distance", "DISTANZ", lambda t: t.km).with_footer_sum()
    table = builder.build()
    table.set_data(trips)
"""

import copy
import logging
from typing import Any, Generic, Optional, TypeVar

from ..component.button import TableButton
from ..component.core import ButtonAction, Color, TranslateFunc, translate
from ..component.url import Url
from ..context.schemas import UserContext
from .field import Accessor, Field, FieldBuilder
from .iconset import IconSet
from .schemas import FieldKind, TableOptions
from .table import Table

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT")


class TableBuilder(Generic[RowT]):
    """Accumulates fields and options for a Table."""

    def __init__(self, ctx: UserContext, translator: Optional[TranslateFunc] = None):
        self.ctx = ctx
        self.translator = translator
        self.fields: list[Field[RowT]] = []
        self.options = TableOptions(
            pagination=True,
            search=True,
            reload=True,
            csv=True,
            excel=True,
            text_no_data=translate(translator, "KEINEDATEN"),
        )
        self.filter_form: Optional[list[dict[str, Any]]] = None
        self.has_filter: Optional[bool] = None
        self.flags: list[str] = []
        self.fields_can_change = False

    # ── Field registration ──────────────────────────────────────────────

    def _add_field(
        self,
        field_id: str,
        translation_key: str,
        kind: FieldKind,
        accessor: Optional[Accessor] = None,
    ) -> FieldBuilder[RowT]:
        if any(existing.id == field_id for existing in self.fields):
            raise ValueError(f"Duplicate field id '{field_id}'")
        field: Field[RowT] = Field(field_id, translation_key, kind, accessor)
        field.column_order = len(self.fields)
        self.fields.append(field)
        return FieldBuilder(field)

    def field(
        self, field_id: str, translation_key: str, kind: FieldKind, accessor: Optional[Accessor] = None
    ) -> FieldBuilder[RowT]:
        """Register a field of any kind."""
        return self._add_field(field_id, translation_key, kind, accessor)

    def id_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        return self._add_field(field_id, translation_key, FieldKind.ID, accessor)

    def int_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        return self._add_field(field_id, translation_key, FieldKind.INTEGER, accessor)

    def float_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        return self._add_field(field_id, translation_key, FieldKind.FLOAT, accessor)

    def text_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        return self._add_field(field_id, translation_key, FieldKind.TEXT, accessor)

    def bool_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        return self._add_field(field_id, translation_key, FieldKind.BOOL, accessor)

    def datetime_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        return self._add_field(field_id, translation_key, FieldKind.DATETIME, accessor)

    def date_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        return self._add_field(field_id, translation_key, FieldKind.DATE, accessor)

    def distance_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        """Accessor returns kilometers."""
        return self._add_field(field_id, translation_key, FieldKind.DISTANCE, accessor)

    def speed_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        """Accessor returns km/h."""
        return self._add_field(field_id, translation_key, FieldKind.SPEED, accessor)

    def pressure_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        """Accessor returns bar."""
        return self._add_field(field_id, translation_key, FieldKind.PRESSURE, accessor)

    def time_length_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        """Accessor returns a duration in seconds."""
        return self._add_field(field_id, translation_key, FieldKind.TIME_LENGTH, accessor)

    def link_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        """Accessor returns (text, url)."""
        return self._add_field(field_id, translation_key, FieldKind.LINK, accessor)

    def html_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        return self._add_field(field_id, translation_key, FieldKind.HTML, accessor)

    def input_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        return self._add_field(field_id, translation_key, FieldKind.INPUT, accessor)

    def header_field(self, field_id: str, translation_key: str) -> FieldBuilder[RowT]:
        """Layout-only column; appears in field definitions, never in row data."""
        return self._add_field(field_id, translation_key, FieldKind.HEADER)

    def buttons_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        """Accessor returns {index: url or falsy}; define the buttons with add_button."""
        return self._add_field(field_id, translation_key, FieldKind.BUTTONS, accessor)

    def icon_field(
        self,
        field_id: str,
        translation_key: str,
        accessor: Accessor,
        icon_set: IconSet,
        unknown_value: str = "",
    ) -> FieldBuilder[RowT]:
        """Accessor returns an IconRef (or key) from ``icon_set``."""
        builder = self._add_field(field_id, translation_key, FieldKind.ICON, accessor)
        builder.field.icon_set = icon_set
        builder.field.unknown_icon = unknown_value
        return builder

    # Two-line fields: accessor returns (primary, secondary)

    def text2_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        return self._add_field(field_id, translation_key, FieldKind.TEXT2, accessor)

    def text2_int_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        return self._add_field(field_id, translation_key, FieldKind.TEXT2_INT, accessor)

    def text2_float_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        return self._add_field(field_id, translation_key, FieldKind.TEXT2_FLOAT, accessor)

    def text2_datetime_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        return self._add_field(field_id, translation_key, FieldKind.TEXT2_DATETIME, accessor)

    def text2_date_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        return self._add_field(field_id, translation_key, FieldKind.TEXT2_DATE, accessor)

    def text2_distance_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        return self._add_field(field_id, translation_key, FieldKind.TEXT2_DISTANCE, accessor)

    def text2_speed_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        return self._add_field(field_id, translation_key, FieldKind.TEXT2_SPEED, accessor)

    def text2_bool_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        return self._add_field(field_id, translation_key, FieldKind.TEXT2_BOOL, accessor)

    def text2_time_length_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        return self._add_field(field_id, translation_key, FieldKind.TEXT2_TIME_LENGTH, accessor)

    # N-line fields: accessor returns a list

    def text_n_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        return self._add_field(field_id, translation_key, FieldKind.TEXT_N, accessor)

    def int_n_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        return self._add_field(field_id, translation_key, FieldKind.INTEGER_N, accessor)

    def float_n_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        return self._add_field(field_id, translation_key, FieldKind.FLOAT_N, accessor)

    def datetime_n_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        return self._add_field(field_id, translation_key, FieldKind.DATETIME_N, accessor)

    def date_n_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        return self._add_field(field_id, translation_key, FieldKind.DATE_N, accessor)

    def distance_n_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        return self._add_field(field_id, translation_key, FieldKind.DISTANCE_N, accessor)

    def speed_n_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        return self._add_field(field_id, translation_key, FieldKind.SPEED_N, accessor)

    def bool_n_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        return self._add_field(field_id, translation_key, FieldKind.BOOL_N, accessor)

    def time_length_n_field(self, field_id: str, translation_key: str, accessor: Accessor) -> FieldBuilder[RowT]:
        return self._add_field(field_id, translation_key, FieldKind.TIME_LENGTH_N, accessor)

    # ── Option setters ──────────────────────────────────────────────────

    def _set(self, **values: Any) -> "TableBuilder[RowT]":
        for name, value in values.items():
            setattr(self.options, name, value)
        return self

    def set_class(self, css_class: str) -> "TableBuilder[RowT]":
        return self._set(css_class=css_class)

    def set_title(self, title: str) -> "TableBuilder[RowT]":
        return self._set(title=title)

    def set_text_no_data(self, text: str) -> "TableBuilder[RowT]":
        return self._set(text_no_data=text)

    def set_items_per_page(self, items_per_page: int) -> "TableBuilder[RowT]":
        return self._set(items_per_page=items_per_page)

    def set_page_sizes(self, page_sizes: list[int]) -> "TableBuilder[RowT]":
        return self._set(page_sizes=list(page_sizes))

    def set_reload(self, reload: bool) -> "TableBuilder[RowT]":
        return self._set(reload=reload)

    def set_dense(self, dense: bool) -> "TableBuilder[RowT]":
        return self._set(dense=dense)

    def set_pagination(self, pagination: bool) -> "TableBuilder[RowT]":
        return self._set(pagination=pagination)

    def set_search(self, search: bool) -> "TableBuilder[RowT]":
        return self._set(search=search)

    def set_min_width(self, min_width: str) -> "TableBuilder[RowT]":
        return self._set(min_width=min_width)

    def set_query(self, query: bool) -> "TableBuilder[RowT]":
        return self._set(query=query)

    def set_csv(self, csv: bool) -> "TableBuilder[RowT]":
        return self._set(csv=csv)

    def set_excel(self, excel: bool) -> "TableBuilder[RowT]":
        return self._set(excel=excel)

    def set_save_state(self, save_state: bool) -> "TableBuilder[RowT]":
        return self._set(save_state=save_state)

    def set_save_state_id(self, save_state_id: str) -> "TableBuilder[RowT]":
        return self._set(save_state_id=save_state_id)

    def set_save_input(self, save_input: str) -> "TableBuilder[RowT]":
        return self._set(save_input=save_input)

    def set_save_input_url(self, url: str) -> "TableBuilder[RowT]":
        """Endpoint receiving edits from every input field."""
        return self._set(save_input_url=url)

    def set_borders(self, borders: bool) -> "TableBuilder[RowT]":
        return self._set(borders=borders)

    def set_borders_header(self, borders_header: bool) -> "TableBuilder[RowT]":
        return self._set(borders_header=borders_header)

    def set_select(self, select: bool) -> "TableBuilder[RowT]":
        return self._set(select=select)

    def set_display(self, display: str) -> "TableBuilder[RowT]":
        return self._set(display=display)

    def set_footer(self, footer: bool) -> "TableBuilder[RowT]":
        return self._set(footer=footer)

    def set_server_side(self, server_side: bool) -> "TableBuilder[RowT]":
        return self._set(server_side=server_side)

    def set_scroll_height(self, scroll_height: str) -> "TableBuilder[RowT]":
        return self._set(scroll_height=scroll_height)

    def set_buttons_top(self, buttons: list[TableButton]) -> "TableBuilder[RowT]":
        return self._set(buttons_top=list(buttons))

    def add_button_top(self, button: TableButton) -> "TableBuilder[RowT]":
        self.options.buttons_top.append(button)
        return self

    # ── Selection ───────────────────────────────────────────────────────

    def set_select_buttons(self, buttons: list[TableButton]) -> "TableBuilder[RowT]":
        """Replace the selection buttons; selection is on iff any are given."""
        return self._set(select_buttons=list(buttons), select=bool(buttons))

    def add_select_button(self, button: TableButton) -> "TableBuilder[RowT]":
        self.options.select_buttons.append(button)
        self.options.select = True
        return self

    def clear_select_buttons(self) -> "TableBuilder[RowT]":
        return self._set(select_buttons=[], select=False)

    def add_multi_edit_button(self, url: str) -> "TableBuilder[RowT]":
        return self.add_select_button(
            TableButton(ButtonAction.DIALOG, "edit", Url(url), translate(self.translator, "BEARBEITEN"))
        )

    def add_multi_delete_button(self, url: str) -> "TableBuilder[RowT]":
        return self.add_select_button(
            TableButton(
                ButtonAction.DIALOG,
                "delete",
                Url(url),
                translate(self.translator, "LOESCHEN"),
                Color.WARNING,
            )
        )

    def add_multi_edit_and_delete_buttons(self, edit_url: str, delete_url: str) -> "TableBuilder[RowT]":
        return self.add_multi_edit_button(edit_url).add_multi_delete_button(delete_url)

    # ── Filter ──────────────────────────────────────────────────────────

    def set_filter(self, filter_form: list[dict[str, Any]]) -> "TableBuilder[RowT]":
        """Attach filter field definitions; the table is printed inside a query component."""
        self.filter_form = filter_form
        return self

    def set_has_filter(self, has_filter: bool) -> "TableBuilder[RowT]":
        self.has_filter = has_filter
        return self

    def set_flags(self, *flags: str) -> "TableBuilder[RowT]":
        """Request keys that are UI state only and never reach filter data."""
        self.flags = list(flags)
        return self

    def set_fields_can_change(self, can_change: bool = True) -> "TableBuilder[RowT]":
        self.fields_can_change = can_change
        return self

    # ── Build ───────────────────────────────────────────────────────────

    def _validate(self) -> None:
        for field in self.fields:
            if field.kind == FieldKind.ICON and (field.icon_set is None or len(field.icon_set) == 0):
                logger.warning(f"TableBuilder.build: icon field '{field.id}' has no icon definitions")
            elif field.kind == FieldKind.BUTTONS and not field.buttons:
                logger.warning(f"TableBuilder.build: buttons field '{field.id}' has no buttons, use add_button()")

    def build(self) -> Table[RowT]:
        self._validate()
        fields = sorted(copy.deepcopy(self.fields), key=lambda f: f.column_order)
        return Table(
            fields=fields,
            options=self.options.model_copy(deep=True),
            ctx=self.ctx,
            translator=self.translator,
            filter_form=copy.deepcopy(self.filter_form),
            has_filter=self.has_filter,
            flags=list(self.flags),
            fields_can_change=self.fields_can_change,
        )

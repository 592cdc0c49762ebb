"""
Field definitions for viewmodel tables

A Field is one column: the accessor that pulls a raw value out of a row,
the kind that decides how that value is formatted, and the layout options
the frontend needs. FieldBuilder is the fluent handle returned by the
TableBuilder's registration methods.
"""

from typing import Any, Callable, Generic, Optional, TypeVar

from ..component.core import TranslateFunc, translate
from ..context.schemas import UserContext
from .formatters import format_value
from .iconset import IconSet
from .row import RowView
from .schemas import (
    KIND_DEFAULTS,
    SUMMABLE_KINDS,
    ButtonDef,
    FieldAlign,
    FieldButtonAction,
    FieldColor,
    FieldFooter,
    FieldFormat,
    FieldKind,
    MenuItemDef,
    OutputTarget,
)

RowT = TypeVar("RowT")

Accessor = Callable[[RowT], Any]
# (value, row_view, target, ctx) -> formatted value
CustomFormatter = Callable[[Any, RowView, OutputTarget, UserContext], Any]
ContextOverride = Callable[[RowT, UserContext], UserContext]


class Field(Generic[RowT]):
    """One table column."""

    def __init__(
        self,
        field_id: str,
        translation_key: str,
        kind: FieldKind,
        accessor: Optional[Accessor] = None,
    ):
        defaults = KIND_DEFAULTS[kind]
        self.id = field_id
        self.translation_key = translation_key
        self.kind = kind
        self.accessor = accessor

        self.format: FieldFormat = defaults.format
        self.align: FieldAlign = defaults.align
        self.decimals: int = defaults.decimals
        self.search: bool = defaults.search
        self.sort: bool = defaults.sort
        self.csv: bool = defaults.csv

        self.footer = FieldFooter.NO
        self.hidden = False
        self.sticky = False
        self.width: Optional[str] = None
        self.min_width: Optional[str] = None
        self.hint: Optional[str] = None
        self.display: Optional[str] = None
        self.header: Optional[str] = None
        self.header_span: Optional[int] = None
        self.column_order = 0
        self.text_prefix: Optional[str] = None
        self.text_suffix: Optional[str] = None
        self.access: list[str] = []

        self.bool_true_text = "Yes"
        self.bool_false_text = "No"

        self.input_type = "text"
        self.input_required = False
        self.input_lang = False
        self.input_paste = False

        self.buttons: dict[int, ButtonDef] = {}
        self.menu_accessors: dict[int, Callable[[RowT], Optional[list[str]]]] = {}
        self.icon_set: Optional[IconSet] = None
        self.unknown_icon = ""
        self.hint_accessor: Optional[Callable[[RowT], str]] = None

        # None key = formatter for every target without its own entry
        self.formatters: dict[Optional[OutputTarget], CustomFormatter] = {}
        self.context_override: Optional[ContextOverride] = None

    def __repr__(self) -> str:
        return f"Field({self.id!r}, kind={self.kind.value})"

    @property
    def has_custom_formatter(self) -> bool:
        return bool(self.formatters)

    def get_value(self, row: RowT) -> Any:
        """Raw value for a row. Header fields never call their accessor."""
        if self.accessor is None or self.kind == FieldKind.HEADER:
            return None
        return self.accessor(row)

    def context_for(self, row: RowT, ctx: UserContext) -> UserContext:
        if self.context_override is None:
            return ctx
        return self.context_override(row, ctx)

    def format_value(
        self,
        value: Any,
        row: RowView,
        target: OutputTarget,
        ctx: UserContext,
        translator: Optional[TranslateFunc] = None,
    ) -> Any:
        """Format a raw value (or footer aggregate) for one output target.

        Custom formatters take precedence: the per-target one, then the
        default one. Numeric output on the web is the ``[display, value]``
        pair so the frontend can sort numerically.
        """
        custom = self.formatters.get(target) or self.formatters.get(None)
        if custom is not None:
            formatted = custom(value, row, target, ctx)
        else:
            formatted = format_value(self, value, target, ctx, translator)
        if target == OutputTarget.WEB and self.format == FieldFormat.NUMBER:
            return [formatted, value]
        return formatted

    def is_visible_for(self, ctx: UserContext) -> bool:
        return not self.hidden and ctx.can_access(self.access)

    # ── JSON export ─────────────────────────────────────────────────────

    def to_json(self, translator: Optional[TranslateFunc] = None) -> dict[str, Any]:
        """Field definition as consumed by the frontend table."""
        data: dict[str, Any] = {
            "id": self.id,
            "name": translate(translator, self.translation_key),
            "format": self.format.value,
            "align": self.align.value,
        }

        if self.width is not None:
            data["width"] = self.width
        if self.min_width is not None:
            data["minWidth"] = self.min_width
        if self.hint:
            data["hint"] = translate(translator, self.hint)
        if self.display is not None:
            data["display"] = self.display
        if self.header is not None:
            data["header"] = translate(translator, self.header)
        if self.header_span is not None:
            data["headerSpan"] = self.header_span

        if not self.search:
            data["search"] = False
        if not self.sort:
            data["sort"] = False
        if self.sticky:
            data["sticky"] = True
        if self.hidden:
            data["hide"] = True
        if self.footer != FieldFooter.NO:
            data["footer"] = self.footer.value
        if self.text_prefix is not None:
            data["textPrefix"] = self.text_prefix
        if self.text_suffix is not None:
            data["textSuffix"] = self.text_suffix
        if self.access:
            data["access"] = list(self.access)

        if self.kind == FieldKind.BUTTONS:
            # Array indexed by button key; gaps stay null
            size = max(self.buttons) + 1 if self.buttons else 0
            buttons: list[Optional[dict[str, Any]]] = [None] * size
            for key, button in self.buttons.items():
                buttons[key] = button.to_json(translator)
            data["buttons"] = buttons
        elif self.kind == FieldKind.ICON:
            icons = self.icon_set.definitions() if self.icon_set is not None else {}
            data["icons"] = {value: icon.to_json(translator) for value, icon in icons.items()}
        elif self.kind == FieldKind.INPUT:
            data["inputType"] = self.input_type
            data["inputRequired"] = self.input_required
            data["inputLang"] = self.input_lang
            data["inputPaste"] = self.input_paste
            data["search"] = False
            data["sort"] = False

        return data


class FieldBuilder(Generic[RowT]):
    """Fluent configuration of a registered Field. Every setter returns self."""

    def __init__(self, field: Field[RowT]):
        self.field = field

    # ── Formatting ──────────────────────────────────────────────────────

    def with_formatter(self, formatter: CustomFormatter) -> "FieldBuilder[RowT]":
        """Replace the built-in formatter for every target."""
        self.field.formatters[None] = formatter
        return self

    def with_target_formatter(
        self, target: OutputTarget, formatter: CustomFormatter
    ) -> "FieldBuilder[RowT]":
        self.field.formatters[target] = formatter
        return self

    def with_web_formatter(self, formatter: CustomFormatter) -> "FieldBuilder[RowT]":
        return self.with_target_formatter(OutputTarget.WEB, formatter)

    def with_csv_formatter(self, formatter: CustomFormatter) -> "FieldBuilder[RowT]":
        return self.with_target_formatter(OutputTarget.CSV, formatter)

    def with_pdf_formatter(self, formatter: CustomFormatter) -> "FieldBuilder[RowT]":
        return self.with_target_formatter(OutputTarget.PDF, formatter)

    def with_excel_formatter(self, formatter: CustomFormatter) -> "FieldBuilder[RowT]":
        return self.with_target_formatter(OutputTarget.EXCEL, formatter)

    def with_decimals(self, decimals: int) -> "FieldBuilder[RowT]":
        if decimals < 0:
            raise ValueError(f"Field '{self.field.id}': decimals must be >= 0, got {decimals}")
        self.field.decimals = decimals
        return self

    def with_text_prefix(self, prefix: str) -> "FieldBuilder[RowT]":
        self.field.text_prefix = prefix
        return self

    def with_text_suffix(self, suffix: str) -> "FieldBuilder[RowT]":
        self.field.text_suffix = suffix
        return self

    def with_bool_text(self, true_text: str, false_text: str) -> "FieldBuilder[RowT]":
        """Translation keys shown for True/False."""
        self.field.bool_true_text = true_text
        self.field.bool_false_text = false_text
        return self

    def with_context_override(self, override: ContextOverride) -> "FieldBuilder[RowT]":
        """Per-row user context, e.g. a device-specific distance unit."""
        self.field.context_override = override
        return self

    # ── Footer ──────────────────────────────────────────────────────────

    def with_footer(self, footer: FieldFooter) -> "FieldBuilder[RowT]":
        if footer == FieldFooter.SUM and self.field.kind not in SUMMABLE_KINDS:
            raise ValueError(
                f"Field '{self.field.id}': a sum footer needs a numeric kind, "
                f"got {self.field.kind.value}"
            )
        self.field.footer = footer
        return self

    def with_footer_sum(self) -> "FieldBuilder[RowT]":
        return self.with_footer(FieldFooter.SUM)

    def with_footer_count(self) -> "FieldBuilder[RowT]":
        return self.with_footer(FieldFooter.COUNT)

    # ── Visibility ──────────────────────────────────────────────────────

    def hide(self) -> "FieldBuilder[RowT]":
        self.field.hidden = True
        return self

    def hide_in_csv(self) -> "FieldBuilder[RowT]":
        self.field.csv = False
        return self

    def show_in_csv(self) -> "FieldBuilder[RowT]":
        self.field.csv = True
        return self

    def with_access(self, *permissions: str) -> "FieldBuilder[RowT]":
        """Restrict the column to users holding any of the permissions."""
        self.field.access = list(permissions)
        return self

    # ── Layout ──────────────────────────────────────────────────────────

    def with_align(self, align: FieldAlign) -> "FieldBuilder[RowT]":
        self.field.align = align
        return self

    def align_left(self) -> "FieldBuilder[RowT]":
        return self.with_align(FieldAlign.LEFT)

    def align_center(self) -> "FieldBuilder[RowT]":
        return self.with_align(FieldAlign.CENTER)

    def align_right(self) -> "FieldBuilder[RowT]":
        return self.with_align(FieldAlign.RIGHT)

    def with_width(self, width: str) -> "FieldBuilder[RowT]":
        """Fixed width. Clears min_width."""
        self.field.width = width
        self.field.min_width = None
        return self

    def with_min_width(self, min_width: str) -> "FieldBuilder[RowT]":
        """Responsive minimum width. Clears width."""
        self.field.min_width = min_width
        self.field.width = None
        return self

    def with_sticky(self, sticky: bool = True) -> "FieldBuilder[RowT]":
        self.field.sticky = sticky
        return self

    def with_hint(self, hint: str) -> "FieldBuilder[RowT]":
        self.field.hint = hint
        return self

    def with_display(self, display: str) -> "FieldBuilder[RowT]":
        self.field.display = display
        return self

    def with_header(self, header: str) -> "FieldBuilder[RowT]":
        self.field.header = header
        return self

    def with_header_span(self, span: int) -> "FieldBuilder[RowT]":
        self.field.header_span = span
        return self

    def with_column_order(self, order: int) -> "FieldBuilder[RowT]":
        self.field.column_order = order
        return self

    def with_search(self, search: bool) -> "FieldBuilder[RowT]":
        self.field.search = search
        return self

    def with_sort(self, sort: bool) -> "FieldBuilder[RowT]":
        self.field.sort = sort
        return self

    # ── Input ───────────────────────────────────────────────────────────

    def with_input_type(self, input_type: str) -> "FieldBuilder[RowT]":
        self.field.input_type = input_type
        return self

    def with_input_required(self, required: bool = True) -> "FieldBuilder[RowT]":
        self.field.input_required = required
        return self

    def with_input_lang(self, lang: bool = True) -> "FieldBuilder[RowT]":
        self.field.input_lang = lang
        return self

    def with_input_paste(self, paste: bool = True) -> "FieldBuilder[RowT]":
        self.field.input_paste = paste
        return self

    # ── Per-row extras ──────────────────────────────────────────────────

    def with_row_hint(self, accessor: Callable[[RowT], str]) -> "FieldBuilder[RowT]":
        """Per-row tooltip, emitted as '{id}Hint' when non-empty."""
        self.field.hint_accessor = accessor
        return self

    # ── Buttons ─────────────────────────────────────────────────────────

    def add_button(
        self,
        key: int,
        action: FieldButtonAction,
        icon: str,
        color: FieldColor = FieldColor.PRIMARY,
        hint: str = "",
        options: Optional[dict[str, Any]] = None,
    ) -> "FieldBuilder[RowT]":
        self.field.buttons[key] = ButtonDef(
            action=action, icon=icon, color=color, hint=hint, options=dict(options or {})
        )
        return self

    def add_menu(
        self,
        key: int,
        icon: str,
        color: FieldColor,
        hint: str,
        accessor: Callable[[RowT], Optional[list[str]]],
    ) -> "FieldBuilder[RowT]":
        """Menu button whose per-row entries come from ``accessor``.

        The accessor returns one url per menu item (empty string disables
        that item) or None to hide the whole menu for the row.
        """
        self.field.buttons[key] = ButtonDef(
            action=FieldButtonAction.MENU, icon=icon, color=color, hint=hint
        )
        self.field.menu_accessors[key] = accessor
        return self

    def add_menu_item(
        self,
        key: int,
        action: FieldButtonAction,
        icon: str,
        color: FieldColor = FieldColor.PRIMARY,
        text: str = "",
    ) -> "FieldBuilder[RowT]":
        button = self.field.buttons.get(key)
        if button is None or button.action != FieldButtonAction.MENU:
            raise ValueError(
                f"Field '{self.field.id}': add_menu({key}, ...) must be called before add_menu_item"
            )
        button.menu_items.append(MenuItemDef(action=action, icon=icon, color=color, text=text))
        return self

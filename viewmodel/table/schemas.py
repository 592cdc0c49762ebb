"""
Table schemas for viewmodel

Enums, per-kind defaults and the value objects shared by fields, the
builder and the table renderer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..component.core import TranslateFunc, translate


class OutputTarget(str, Enum):
    """Where rendered table data is headed. Decides value shape and precision."""

    WEB = "web"
    CSV = "csv"
    PDF = "pdf"
    EXCEL = "excel"

    @property
    def is_export(self) -> bool:
        """CSV and Excel drop csv-disabled fields and use export formats."""
        return self in (OutputTarget.CSV, OutputTarget.EXCEL)


class FieldFormat(str, Enum):
    """The `format` tag the frontend uses to pick a cell renderer."""

    TEXT = "text"
    BUTTONS = "buttons"
    ICON = "icon"
    HTML = "html"
    LINK = "link"
    INPUT = "input"
    TEXT2 = "text2"
    HEADER = "header"
    NUMBER = "number"
    ID = "id"


class FieldAlign(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class FieldFooter(str, Enum):
    """Footer aggregation mode."""

    NO = "no"
    SUM = "sum"
    COUNT = "count"
    STATIC = "static"


class FieldColor(str, Enum):
    PRIMARY = "primary"
    ACCENT = "accent"
    WARNING = "warn"
    TERTIARY = "tertiary"


class FieldButtonAction(str, Enum):
    """Row button actions. MENU opens a per-row menu instead of acting."""

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
    MENU = "menu"


class FieldKind(str, Enum):
    """Semantic field kind. Fixes the accessor's value shape and the formatter."""

    # Scalars
    ID = "id"
    INTEGER = "integer"
    FLOAT = "float"
    TEXT = "text"
    BOOL = "bool"
    DATETIME = "datetime"
    DATE = "date"
    DISTANCE = "distance"
    SPEED = "speed"
    PRESSURE = "pressure"
    TIME_LENGTH = "timelength"

    # Structured
    BUTTONS = "buttons"
    ICON = "icon"
    LINK = "link"
    HTML = "html"
    INPUT = "input"
    HEADER = "header"

    # Two-line (fixed pair)
    TEXT2 = "text2"
    TEXT2_INT = "text2int"
    TEXT2_FLOAT = "text2float"
    TEXT2_DATETIME = "text2datetime"
    TEXT2_DATE = "text2date"
    TEXT2_DISTANCE = "text2distance"
    TEXT2_SPEED = "text2speed"
    TEXT2_BOOL = "text2bool"
    TEXT2_TIME_LENGTH = "text2timelength"

    # N-line (variable sequence)
    TEXT_N = "textn"
    INTEGER_N = "integern"
    FLOAT_N = "floatn"
    DATETIME_N = "datetimen"
    DATE_N = "daten"
    DISTANCE_N = "distancen"
    SPEED_N = "speedn"
    BOOL_N = "booln"
    TIME_LENGTH_N = "timelengthn"


# Kinds whose formatter accepts a single number, so a SUM footer can render.
SUMMABLE_KINDS = frozenset(
    {
        FieldKind.INTEGER,
        FieldKind.FLOAT,
        FieldKind.DISTANCE,
        FieldKind.SPEED,
        FieldKind.PRESSURE,
        FieldKind.TIME_LENGTH,
    }
)


@dataclass(frozen=True)
class KindDefaults:
    """Non-formatter defaults applied when a field of a kind is registered."""

    format: FieldFormat
    align: FieldAlign
    decimals: int = 0
    search: bool = True
    sort: bool = True
    csv: bool = True


_LEFT = FieldAlign.LEFT
_RIGHT = FieldAlign.RIGHT
_CENTER = FieldAlign.CENTER

KIND_DEFAULTS: dict[FieldKind, KindDefaults] = {
    FieldKind.ID: KindDefaults(FieldFormat.ID, _RIGHT, csv=False),
    FieldKind.INTEGER: KindDefaults(FieldFormat.NUMBER, _RIGHT),
    FieldKind.FLOAT: KindDefaults(FieldFormat.NUMBER, _RIGHT, 2),
    FieldKind.TEXT: KindDefaults(FieldFormat.TEXT, _LEFT),
    FieldKind.BOOL: KindDefaults(FieldFormat.TEXT, _LEFT),
    FieldKind.DATETIME: KindDefaults(FieldFormat.TEXT, _LEFT),
    FieldKind.DATE: KindDefaults(FieldFormat.TEXT, _LEFT),
    FieldKind.DISTANCE: KindDefaults(FieldFormat.NUMBER, _RIGHT, 2),
    FieldKind.SPEED: KindDefaults(FieldFormat.NUMBER, _RIGHT, 1),
    FieldKind.PRESSURE: KindDefaults(FieldFormat.NUMBER, _RIGHT, 2),
    FieldKind.TIME_LENGTH: KindDefaults(FieldFormat.TEXT, _LEFT),
    FieldKind.BUTTONS: KindDefaults(FieldFormat.BUTTONS, _CENTER, search=False, sort=False, csv=False),
    FieldKind.ICON: KindDefaults(FieldFormat.ICON, _CENTER, search=False),
    FieldKind.LINK: KindDefaults(FieldFormat.LINK, _LEFT),
    FieldKind.HTML: KindDefaults(FieldFormat.HTML, _LEFT, csv=False),
    FieldKind.INPUT: KindDefaults(FieldFormat.INPUT, _LEFT, search=False, csv=False),
    FieldKind.HEADER: KindDefaults(FieldFormat.HEADER, _LEFT, search=False, sort=False, csv=False),
    FieldKind.TEXT2: KindDefaults(FieldFormat.TEXT2, _LEFT),
    FieldKind.TEXT2_INT: KindDefaults(FieldFormat.TEXT2, _RIGHT),
    FieldKind.TEXT2_FLOAT: KindDefaults(FieldFormat.TEXT2, _RIGHT, 2),
    FieldKind.TEXT2_DATETIME: KindDefaults(FieldFormat.TEXT2, _LEFT),
    FieldKind.TEXT2_DATE: KindDefaults(FieldFormat.TEXT2, _LEFT),
    FieldKind.TEXT2_DISTANCE: KindDefaults(FieldFormat.TEXT2, _RIGHT, 2),
    FieldKind.TEXT2_SPEED: KindDefaults(FieldFormat.TEXT2, _RIGHT, 1),
    FieldKind.TEXT2_BOOL: KindDefaults(FieldFormat.TEXT2, _LEFT),
    FieldKind.TEXT2_TIME_LENGTH: KindDefaults(FieldFormat.TEXT2, _LEFT),
    FieldKind.TEXT_N: KindDefaults(FieldFormat.TEXT2, _LEFT),
    FieldKind.INTEGER_N: KindDefaults(FieldFormat.TEXT2, _RIGHT),
    FieldKind.FLOAT_N: KindDefaults(FieldFormat.TEXT2, _RIGHT, 2),
    FieldKind.DATETIME_N: KindDefaults(FieldFormat.TEXT2, _LEFT),
    FieldKind.DATE_N: KindDefaults(FieldFormat.TEXT2, _LEFT),
    FieldKind.DISTANCE_N: KindDefaults(FieldFormat.TEXT2, _RIGHT, 2),
    FieldKind.SPEED_N: KindDefaults(FieldFormat.TEXT2, _RIGHT, 1),
    FieldKind.BOOL_N: KindDefaults(FieldFormat.TEXT2, _LEFT),
    FieldKind.TIME_LENGTH_N: KindDefaults(FieldFormat.TEXT2, _LEFT),
}


# ── Field metadata value objects ────────────────────────────────────────


class IconDef(BaseModel):
    """Icon, color and hint shown for one icon value."""

    icon: str
    color: FieldColor = FieldColor.PRIMARY
    hint: str = Field(default="", description="Tooltip translation key")
    options: dict[str, Any] = Field(default_factory=dict)

    def to_json(self, translator: Optional[TranslateFunc] = None) -> dict[str, Any]:
        data: dict[str, Any] = {
            "icon": self.icon,
            "color": self.color.value,
            "hint": translate(translator, self.hint),
        }
        data.update(self.options)
        return data


class MenuItemDef(BaseModel):
    """One entry of a menu-type row button."""

    action: FieldButtonAction
    icon: str
    color: FieldColor = FieldColor.PRIMARY
    text: str = Field(default="", description="Label translation key")

    def to_json(self, translator: Optional[TranslateFunc] = None) -> dict[str, Any]:
        return {
            "action": self.action.value,
            "icon": self.icon,
            "color": self.color.value,
            "text": translate(translator, self.text),
        }


class ButtonDef(BaseModel):
    """Static definition of one row button; rows only decide url/visibility."""

    action: FieldButtonAction
    icon: str
    color: FieldColor = FieldColor.PRIMARY
    hint: str = Field(default="", description="Tooltip translation key")
    options: dict[str, Any] = Field(default_factory=dict)
    menu_items: list[MenuItemDef] = Field(default_factory=list)

    def to_json(self, translator: Optional[TranslateFunc] = None) -> dict[str, Any]:
        data: dict[str, Any] = {
            "icon": self.icon,
            "color": self.color.value,
            "hint": translate(translator, self.hint),
        }
        data.update(self.options)
        data["action"] = self.action.value
        if self.action == FieldButtonAction.MENU and self.menu_items:
            data["menuItems"] = [item.to_json(translator) for item in self.menu_items]
        return data


# ── Table-level options ─────────────────────────────────────────────────


class TableOptions(BaseModel):
    """Table configuration. Unset (None) options are left out of the output."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    css_class: Optional[str] = Field(default=None, description="CSS class ('class' in JSON)")
    title: Optional[str] = None
    text_no_data: Optional[str] = Field(default=None, description="Text shown for empty tables")
    items_per_page: Optional[int] = None
    page_sizes: list[int] = Field(default_factory=list)
    buttons_top: list[Any] = Field(default_factory=list, description="TableButtons above the table")
    reload: Optional[bool] = None
    dense: Optional[bool] = None
    pagination: Optional[bool] = None
    search: Optional[bool] = None
    min_width: Optional[str] = None
    query: Optional[bool] = None
    csv: Optional[bool] = None
    excel: Optional[bool] = None
    save_state: Optional[bool] = None
    save_state_id: Optional[str] = None
    save_input: Optional[str] = None
    save_input_url: Optional[str] = Field(
        default=None,
        description="Endpoint shared by all input fields for saving edits",
    )
    borders: Optional[bool] = None
    borders_header: Optional[bool] = None
    select: Optional[bool] = None
    select_buttons: list[Any] = Field(default_factory=list, description="TableButtons for selected rows")
    display: Optional[str] = None
    footer: Optional[bool] = None
    server_side: Optional[bool] = Field(default=None, description="Server-side pagination")
    scroll_height: Optional[str] = None


class PaginationParams(BaseModel):
    """Server-side pagination parameters taken from a data request."""

    page: int = Field(default=0, description="0-based page index (_page)")
    page_size: int = Field(default=50, description="Rows per page (_pageSize)")
    sort: str = Field(default="", description="Column id to sort by (_sort)")
    sort_dir: str = Field(default="asc", description="'asc' or 'desc' (_sortDir)")
    search: str = Field(default="", description="Search text (_search)")

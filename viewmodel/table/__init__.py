"""
Table module for viewmodel

Generic data table: typed field registration, per-target formatting
(web, CSV, PDF, Excel), footer aggregation and the data responses served
to AJAX tables.
"""

from .builder import TableBuilder
from .export import TableDataResponse, expand_n_columns
from .field import Field, FieldBuilder
from .formatters import FORMATTERS, format_value
from .iconset import IconRef, IconSet
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
    IconDef,
    KindDefaults,
    MenuItemDef,
    OutputTarget,
    PaginationParams,
    TableOptions,
)
from .table import Table

__all__ = [
    "ButtonDef",
    "FORMATTERS",
    "Field",
    "FieldAlign",
    "FieldBuilder",
    "FieldButtonAction",
    "FieldColor",
    "FieldFooter",
    "FieldFormat",
    "FieldKind",
    "IconDef",
    "IconRef",
    "IconSet",
    "KIND_DEFAULTS",
    "SUMMABLE_KINDS",
    "KindDefaults",
    "MenuItemDef",
    "OutputTarget",
    "PaginationParams",
    "RowView",
    "Table",
    "TableBuilder",
    "TableDataResponse",
    "TableOptions",
    "expand_n_columns",
    "format_value",
]

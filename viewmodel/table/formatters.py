"""Built-in per-kind formatters.

Every FieldKind maps to one formatter taking
``(field, value, target, ctx, translator)``. Scalar kinds format a single
value; TEXT2 kinds format a fixed pair; N kinds format a sequence element
by element. Pairs and sequences share the scalar element formatters, so a
TEXT2_DISTANCE element renders exactly like a DISTANCE cell.

Values of the wrong shape raise TypeError: an accessor returning the
wrong type is a programming error, not bad input. Icon keys are the
exception: any value is looked up by its string form and unknown keys fall
back to the field's sentinel.
"""

import logging
from collections.abc import Mapping
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, Optional

from ..component.core import TranslateFunc, translate
from ..context.schemas import UserContext
from ..formatting.dates import format_date, format_datetime
from ..formatting.durations import format_time_length, time_length_minutes
from ..formatting.numbers import format_number
from ..formatting.units import convert_distance, convert_pressure, convert_speed
from .iconset import IconRef
from .schemas import FieldKind, OutputTarget

if TYPE_CHECKING:
    from .field import Field

logger = logging.getLogger(__name__)

Formatter = Callable[["Field", Any, OutputTarget, UserContext, Optional[TranslateFunc]], Any]
ElementFormatter = Callable[["Field", Any, OutputTarget, UserContext, Optional[TranslateFunc]], str]


# ── Shape checks ────────────────────────────────────────────────────────


def _number(field: "Field", value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise TypeError(
            f"Field '{field.id}' ({field.kind.value}) expects a number, "
            f"got {type(value).__name__}"
        )
    return value


def _pair(field: "Field", value: Any) -> tuple[Any, Any]:
    if value is None:
        return None, None
    if isinstance(value, (str, bytes)) or not isinstance(value, (tuple, list)) or len(value) != 2:
        raise TypeError(
            f"Field '{field.id}' ({field.kind.value}) expects a 2-item tuple, got {value!r}"
        )
    return value[0], value[1]


def _sequence(field: "Field", value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, (tuple, list)):
        raise TypeError(
            f"Field '{field.id}' ({field.kind.value}) expects a list, got {type(value).__name__}"
        )
    return list(value)


def _decorate(field: "Field", text: str) -> str:
    """Wrap a formatted value in the field's literal prefix/suffix."""
    return f"{field.text_prefix or ''}{text}{field.text_suffix or ''}"


# ── Element formatters (one value -> str) ───────────────────────────────


def _text_element(field, value, target, ctx, translator) -> str:
    if value is None or value == "":
        return ""
    return _decorate(field, str(value))


def _integer_element(field, value, target, ctx, translator) -> str:
    if value is None:
        return ""
    return _decorate(field, format_number(_number(field, value), field.decimals, ctx.locale))


def _float_element(field, value, target, ctx, translator) -> str:
    if value is None:
        return ""
    return _decorate(field, format_number(_number(field, value), field.decimals, ctx.locale))


def _distance_element(field, value, target, ctx, translator) -> str:
    if value is None:
        return ""
    unit = ctx.distance_unit
    converted = convert_distance(float(_number(field, value)), unit)
    return f"{_decorate(field, format_number(converted, field.decimals, ctx.locale))} {unit.value}"


def _speed_element(field, value, target, ctx, translator) -> str:
    if value is None:
        return ""
    unit = ctx.effective_speed_unit
    converted = convert_speed(float(_number(field, value)), unit)
    return f"{_decorate(field, format_number(converted, field.decimals, ctx.locale))} {unit.value}"


def _pressure_element(field, value, target, ctx, translator) -> str:
    if value is None:
        return ""
    unit = ctx.pressure_unit
    converted = convert_pressure(float(_number(field, value)), unit)
    return f"{_decorate(field, format_number(converted, field.decimals, ctx.locale))} {unit.value}"


def _bool_element(field, value, target, ctx, translator) -> str:
    if value is None:
        return ""
    if not isinstance(value, bool):
        raise TypeError(
            f"Field '{field.id}' ({field.kind.value}) expects a bool, got {type(value).__name__}"
        )
    return translate(translator, field.bool_true_text if value else field.bool_false_text)


def _datetime_element(field, value, target, ctx, translator) -> str:
    return format_datetime(value, ctx.timezone, with_seconds=target.is_export)


def _date_element(field, value, target, ctx, translator) -> str:
    return format_date(value, ctx.timezone)


def _time_length_element(field, value, target, ctx, translator) -> str:
    if value is None:
        return ""
    seconds = int(_number(field, value))
    if seconds < 0:
        return ""
    if target.is_export:
        return time_length_minutes(seconds)
    return format_time_length(seconds)


# ── Kind formatters ─────────────────────────────────────────────────────


def _scalar(element: ElementFormatter) -> Formatter:
    def formatter(field, value, target, ctx, translator):
        return element(field, value, target, ctx, translator)

    return formatter


def _two_line(element: ElementFormatter, drop_zero_secondary: bool = False) -> Formatter:
    """Web/PDF: [primary, secondary]. CSV/Excel: 'primary - secondary'."""

    def formatter(field, value, target, ctx, translator):
        first, second = _pair(field, value)
        primary = element(field, first, target, ctx, translator)
        secondary = element(field, second, target, ctx, translator)
        if not target.is_export:
            return [primary, secondary]
        if secondary == "" or (drop_zero_secondary and secondary == "0"):
            return primary
        return f"{primary} - {secondary}"

    return formatter


def _n_line(element: ElementFormatter) -> Formatter:
    """Every target: one formatted string per element, never joined."""

    def formatter(field, value, target, ctx, translator):
        return [element(field, item, target, ctx, translator) for item in _sequence(field, value)]

    return formatter


def _id_formatter(field, value, target, ctx, translator):
    if value is None:
        return None
    return int(_number(field, value))


def _plain_formatter(field, value, target, ctx, translator):
    """HTML: the markup string as-is."""
    return "" if value is None else str(value)


def _input_formatter(field, value, target, ctx, translator):
    """Input cells carry the raw value so the frontend can edit it."""
    if value is None:
        return ""
    if target == OutputTarget.WEB:
        return value
    return str(value)


def _header_formatter(field, value, target, ctx, translator):
    return ""


def _link_formatter(field, value, target, ctx, translator):
    """Web: [text, url] (split into {id}/{id}Link by the table). Exports: text."""
    text, url = _pair(field, value)
    text = "" if text is None else str(text)
    url = "" if url is None else str(url)
    if target == OutputTarget.WEB:
        return [text, url]
    return text


def _icon_formatter(field, value, target, ctx, translator):
    """The icon value if registered in the field's set, else the unknown sentinel."""
    if value is None:
        return field.unknown_icon
    key = value.value if isinstance(value, IconRef) else str(value)
    if field.icon_set is not None and key in field.icon_set:
        return key
    logger.warning(f"Field '{field.id}': unknown icon key {key!r}")
    return field.unknown_icon


def _buttons_formatter(field, value, target, ctx, translator):
    """Web: {"0": url|False, ...}. Falsy entries hide that button for the row."""
    if target != OutputTarget.WEB:
        return ""
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise TypeError(
            f"Field '{field.id}' (buttons) expects a mapping, got {type(value).__name__}"
        )
    return {str(key): (url if url else False) for key, url in value.items()}


FORMATTERS: dict[FieldKind, Formatter] = {
    FieldKind.ID: _id_formatter,
    FieldKind.INTEGER: _scalar(_integer_element),
    FieldKind.FLOAT: _scalar(_float_element),
    FieldKind.TEXT: _scalar(_text_element),
    FieldKind.BOOL: _scalar(_bool_element),
    FieldKind.DATETIME: _scalar(_datetime_element),
    FieldKind.DATE: _scalar(_date_element),
    FieldKind.DISTANCE: _scalar(_distance_element),
    FieldKind.SPEED: _scalar(_speed_element),
    FieldKind.PRESSURE: _scalar(_pressure_element),
    FieldKind.TIME_LENGTH: _scalar(_time_length_element),
    FieldKind.BUTTONS: _buttons_formatter,
    FieldKind.ICON: _icon_formatter,
    FieldKind.LINK: _link_formatter,
    FieldKind.HTML: _plain_formatter,
    FieldKind.INPUT: _input_formatter,
    FieldKind.HEADER: _header_formatter,
    FieldKind.TEXT2: _two_line(_text_element),
    FieldKind.TEXT2_INT: _two_line(_integer_element, drop_zero_secondary=True),
    FieldKind.TEXT2_FLOAT: _two_line(_float_element),
    FieldKind.TEXT2_DATETIME: _two_line(_datetime_element),
    FieldKind.TEXT2_DATE: _two_line(_date_element),
    FieldKind.TEXT2_DISTANCE: _two_line(_distance_element),
    FieldKind.TEXT2_SPEED: _two_line(_speed_element),
    FieldKind.TEXT2_BOOL: _two_line(_bool_element),
    FieldKind.TEXT2_TIME_LENGTH: _two_line(_time_length_element, drop_zero_secondary=True),
    FieldKind.TEXT_N: _n_line(_text_element),
    FieldKind.INTEGER_N: _n_line(_integer_element),
    FieldKind.FLOAT_N: _n_line(_float_element),
    FieldKind.DATETIME_N: _n_line(_datetime_element),
    FieldKind.DATE_N: _n_line(_date_element),
    FieldKind.DISTANCE_N: _n_line(_distance_element),
    FieldKind.SPEED_N: _n_line(_speed_element),
    FieldKind.BOOL_N: _n_line(_bool_element),
    FieldKind.TIME_LENGTH_N: _n_line(_time_length_element),
}


def format_value(
    field: "Field",
    value: Any,
    target: OutputTarget,
    ctx: UserContext,
    translator: Optional[TranslateFunc] = None,
) -> Any:
    """Format one raw value with the built-in formatter for the field's kind."""
    return FORMATTERS[field.kind](field, value, target, ctx, translator)

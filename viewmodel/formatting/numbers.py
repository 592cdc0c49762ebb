"""Locale-aware number formatting."""

from ..context.schemas import uses_comma_decimal


def format_number(value: float, decimals: int, locale: str) -> str:
    """Format a number with fixed decimals and locale separators.

    Examples:
        format_number(196.5, 2, "de")       -> "196,50"
        format_number(1234567, 0, "de")     -> "1.234.567"
        format_number(45.67, 2, "en-GB")    -> "45.67"
        format_number(-1234.5, 1, "en-US")  -> "-1,234.5"
    """
    plain = format_plain(value, decimals)
    if uses_comma_decimal(locale):
        return add_thousand_separators(plain, thousands_sep=".", decimal_sep=",")
    return add_thousand_separators(plain, thousands_sep=",", decimal_sep=".")


def format_plain(value: float, decimals: int) -> str:
    """Format with fixed decimals, dot separator and no grouping."""
    return f"{float(value):.{max(decimals, 0)}f}"


def add_thousand_separators(number: str, thousands_sep: str, decimal_sep: str) -> str:
    """Regroup a plain '-1234.50' style string with the given separators."""
    int_part, _, dec_part = number.partition(".")

    sign = ""
    if int_part.startswith("-"):
        sign = "-"
        int_part = int_part[1:]

    groups = []
    while len(int_part) > 3:
        groups.insert(0, int_part[-3:])
        int_part = int_part[:-3]
    groups.insert(0, int_part)

    result = sign + thousands_sep.join(groups)
    if dec_part:
        result += decimal_sep + dec_part
    return result

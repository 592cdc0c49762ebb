"""Timestamp formatting in the user's timezone."""

import logging
from datetime import date, datetime, timezone
from functools import lru_cache
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

WEB_DATETIME_FORMAT = "%Y-%m-%d %H:%M"
EXPORT_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"


@lru_cache(maxsize=64)
def resolve_timezone(name: str) -> ZoneInfo:
    """Load an IANA timezone, falling back to UTC for unknown names."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown timezone '{name}', falling back to UTC")
        return ZoneInfo("UTC")


def to_local_datetime(value: Any, tz_name: str) -> Optional[datetime]:
    """Convert a raw timestamp to an aware datetime in the given timezone.

    Accepts Unix seconds (int/float) or datetime objects; naive datetimes
    are taken as UTC. Returns None for empty values (None or 0).
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        moment = value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    elif isinstance(value, (int, float)):
        if value == 0:
            return None
        moment = datetime.fromtimestamp(value, tz=timezone.utc)
    else:
        raise TypeError(
            f"Expected Unix seconds or datetime, got {type(value).__name__}"
        )
    return moment.astimezone(resolve_timezone(tz_name))


def format_datetime(value: Any, tz_name: str, with_seconds: bool = False) -> str:
    """'2021-12-20 12:26' (or with ':SS' for exports); '' for empty values."""
    moment = to_local_datetime(value, tz_name)
    if moment is None:
        return ""
    return moment.strftime(EXPORT_DATETIME_FORMAT if with_seconds else WEB_DATETIME_FORMAT)


def format_date(value: Any, tz_name: str) -> str:
    """'2021-12-20'; '' for empty values. Plain dates are not shifted."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value.strftime(DATE_FORMAT)
    moment = to_local_datetime(value, tz_name)
    if moment is None:
        return ""
    return moment.strftime(DATE_FORMAT)

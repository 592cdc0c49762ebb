"""Duration formatting for time-length values stored in seconds."""

SECONDS_PER_MINUTE = 60
MINUTES_PER_DAY = 24 * 60


def format_time_length(seconds: int) -> str:
    """Format seconds as 'HH:MM', or '{d}d HH:MM' from 24 hours on.

    Examples:
        2700   -> "00:45"
        19800  -> "05:30"
        183900 -> "2d 03:05"
        0      -> "00:00"
        -5     -> ""
    """
    seconds = int(seconds)
    if seconds < 0:
        return ""
    if seconds == 0:
        return "00:00"

    total_minutes = seconds // SECONDS_PER_MINUTE
    days, rest = divmod(total_minutes, MINUTES_PER_DAY)
    hours, minutes = divmod(rest, 60)

    if days:
        return f"{days}d {hours:02d}:{minutes:02d}"
    return f"{hours:02d}:{minutes:02d}"


def time_length_minutes(seconds: int) -> str:
    """Whole minutes as a plain integer string, rounded down: 3065 for 183900s."""
    return str(int(seconds) // SECONDS_PER_MINUTE)

"""Run timestamp generation."""

from datetime import datetime, timezone
from typing import Optional

TIMESTAMP_OUTPUT = "formatted_run_timestamp"


def format_timestamp(moment: datetime) -> str:
    """Format a datetime as ``YYYY-MM-DD HH:MM:SS UTC``.

    Aware datetimes are converted to UTC; naive ones are assumed to be UTC.

    Examples:
        >>> format_timestamp(datetime(2024, 3, 5, 7, 2, 9, tzinfo=timezone.utc))
        '2024-03-05 07:02:09 UTC'
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    else:
        moment = moment.astimezone(timezone.utc)
    # strftime("%Y") does not zero-pad years below 1000 on every platform
    return (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d} "
        f"{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d} UTC"
    )


def generate_timestamp(now: Optional[datetime] = None) -> str:
    """Return the formatted timestamp for ``now`` (default: current time)."""
    return format_timestamp(now or datetime.now(timezone.utc))

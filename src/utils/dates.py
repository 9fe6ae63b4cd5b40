"""
Date helpers.

Timestamp parsing, month keys and time-range cutoffs shared by the stages.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

logger = logging.getLogger(__name__)

# Sort key for timestamps that cannot be parsed (older than any real date)
EPOCH_MIN = datetime.min.replace(tzinfo=timezone.utc)

# time_range -> months to step back from the current month
TIME_RANGE_MONTHS = {
    "6months": 6,
    "1year": 12,
    "2years": 24,
}


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse an ISO 8601 timestamp into an aware UTC datetime.

    Accepts a trailing "Z" and naive timestamps (read as UTC).
    Returns None for empty, non-string or unparseable values.
    """
    if not value or not isinstance(value, str):
        return None

    text = value.strip()
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.debug(f"Unparseable timestamp: {value!r}")
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def month_key(moment: datetime) -> str:
    """Truncate a datetime to its calendar month ("YYYY-MM")."""
    return f"{moment.year:04d}-{moment.month:02d}"


def time_range_cutoff(time_range: str, now: Optional[datetime] = None) -> Optional[datetime]:
    """
    Get the cutoff for a time-range filter.

    "6months" is the first day of the month six months before now,
    "1year" and "2years" the first day of the current month one or two
    years back. Returns None for "all".

    Raises:
        ValueError: If time_range is not a known option
    """
    if time_range == "all":
        return None
    if time_range not in TIME_RANGE_MONTHS:
        raise ValueError(
            f"Invalid time range: {time_range}. "
            f"Must be one of: all, {', '.join(TIME_RANGE_MONTHS)}"
        )

    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    month_index = now.year * 12 + (now.month - 1) - TIME_RANGE_MONTHS[time_range]
    year, month = divmod(month_index, 12)
    return datetime(year, month + 1, 1, tzinfo=now.tzinfo)

"""
Time Codec Module

Converts between the 12-hour picker representation (hour, minute, AM/PM)
and the canonical 24-hour "HH:MM" strings stored on attendance records.

Picker fields are typed freely, so conversion never raises on bad input:
keystrokes are sanitized, committed fields are clamped, and an unparsable
hour degrades to zero.
"""

import re
from datetime import date, datetime, time
from typing import Optional, Union

from .entities import Period, TimeParts
from .errors import ValidationError
from infrastructure.logger import get_logger

logger = get_logger("TimeCodec")

# Strict canonical form: 00-23 hours, 00-59 minutes
CANONICAL_PATTERN = re.compile(r'^([01]\d|2[0-3]):([0-5]\d)$')

# Leading integer, the way a lenient parseInt reads "9am" as 9
_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')

HOUR_OPTIONS = [f"{h:02d}" for h in range(1, 13)]
MINUTE_OPTIONS = [f"{m:02d}" for m in range(60)]

FIELD_RANGES = {
    "hour": (1, 12),
    "minute": (0, 59),
}


def _parse_int(value) -> Optional[int]:
    """Parse the leading integer of a field value, None if there is none."""
    if value is None:
        return None
    match = _LEADING_INT.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def _period_value(period: Union[Period, str]) -> str:
    if isinstance(period, Period):
        return period.value
    return str(period).strip().upper()


def convert_to_24_hour(hour: str, minute: str, period: Union[Period, str]) -> str:
    """
    Convert 12-hour picker fields to a canonical "HH:MM" string.

    12 AM becomes 00, 12 PM stays 12, other PM hours gain 12.
    An unparsable hour is treated as 0. The minute is only padded.

    Args:
        hour: Hour field as typed ("1".."12")
        minute: Minute field, normally already zero-padded
        period: Period.AM / Period.PM or the strings "AM" / "PM"

    Returns:
        Canonical time string
    """
    h = _parse_int(hour)
    if h is None:
        h = 0

    p = _period_value(period)
    if p == Period.PM.value and h < 12:
        h += 12
    if p == Period.AM.value and h == 12:
        h = 0

    return f"{h:02d}:{str(minute).rjust(2, '0')}"


def clamp_field(field: str, raw_value: str) -> str:
    """
    Clamp a committed picker field into its display range.

    Hours use the 12-hour range [1, 12], minutes [0, 59]. A value that
    does not parse is returned unchanged.

    Raises:
        ValueError: If field is not "hour" or "minute"
    """
    if field not in FIELD_RANGES:
        raise ValueError(f"Unknown time field: {field}")

    value = _parse_int(raw_value)
    if value is None:
        return raw_value

    low, high = FIELD_RANGES[field]
    value = max(low, min(high, value))
    return f"{value:02d}"


def sanitize_field_input(raw: str) -> str:
    """Keystroke filter: keep digits only, at most two of them."""
    return re.sub(r'\D', '', raw or "")[:2]


def round_to_current_time(now: Optional[datetime] = None, step: int = 5) -> TimeParts:
    """
    Current wall-clock time as picker fields, minute rounded down to step.

    Args:
        now: Instant to use instead of the system clock
        step: Minute granularity (default 5)
    """
    now = now or datetime.now()
    step = max(1, step)

    h = now.hour
    period = Period.PM if h >= 12 else Period.AM
    if h > 12:
        h -= 12
    if h == 0:
        h = 12
    rounded = (now.minute // step) * step

    return TimeParts(hour=f"{h:02d}", minute=f"{rounded:02d}", period=period)


def is_canonical_time(value: Optional[str]) -> bool:
    """Check whether value is a valid "HH:MM" string."""
    return isinstance(value, str) and CANONICAL_PATTERN.match(value) is not None


def parse_canonical_time(value: Optional[str], field: str = "time") -> time:
    """
    Parse a canonical "HH:MM" string.

    Raises:
        ValidationError: If value is not a valid canonical time
    """
    match = CANONICAL_PATTERN.match(value or "")
    if not match:
        raise ValidationError(field, f"'{value}' is not a valid HH:MM time")
    return time(int(match.group(1)), int(match.group(2)))


def format_for_display(canonical: Optional[str]) -> str:
    """
    Render a canonical time as "h:mm AM/PM", e.g. "9:00 AM".

    An absent time (active shift) renders as an empty string. A malformed
    value is shown as stored.
    """
    if not canonical:
        return ""
    try:
        t = parse_canonical_time(canonical)
    except ValidationError:
        logger.warning(f"Cannot format malformed time: {canonical!r}")
        return canonical

    period = Period.PM if t.hour >= 12 else Period.AM
    h12 = t.hour % 12 or 12
    return f"{h12}:{t.minute:02d} {period.value}"


def parse_iso_date(value: Optional[str], field: str = "date") -> date:
    """
    Parse a YYYY-MM-DD date string.

    Raises:
        ValidationError: If value is not an ISO calendar date
    """
    if not isinstance(value, str) or not re.match(r'^\d{4}-\d{2}-\d{2}$', value):
        raise ValidationError(field, f"'{value}' is not a YYYY-MM-DD date")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError(field, f"'{value}' is not a valid calendar date")


def format_date_display(iso_date: str, style: str = "long") -> str:
    """
    Render an ISO date for headings.

    Styles:
        "short":   "Oct 19"
        "weekday": "Monday"
        "long":    "19 October 2026"
    """
    d = parse_iso_date(iso_date)
    if style == "short":
        return f"{d:%b} {d.day}"
    elif style == "weekday":
        return f"{d:%A}"
    else:
        return f"{d.day} {d:%B} {d.year}"

"""
Timezone utilities for wall-clock inputs.
Default: the LABOR_TIMEZONE setting, falling back to UTC.
"""
import re
import zoneinfo
from datetime import datetime, time

from django.conf import settings

from .time_utils import parse_timestamp

DEFAULT_TIMEZONE = "UTC"

TIME_OF_DAY_RE = re.compile(r'^(?P<hour>\d{1,2}):(?P<minute>\d{2})(?::(?P<second>\d{2}))?$')


def get_labor_timezone(tz_str=None):
    """ZoneInfo for ``tz_str`` or the configured labor timezone."""
    tz_str = (tz_str or getattr(settings, 'LABOR_TIMEZONE', '') or DEFAULT_TIMEZONE).strip()
    try:
        return zoneinfo.ZoneInfo(tz_str)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError):
        return zoneinfo.ZoneInfo(DEFAULT_TIMEZONE)


def to_local(dt, tz_str=None):
    """Convert an aware (or naive UTC) datetime to the labor timezone."""
    parsed = parse_timestamp(dt)
    if parsed is None:
        return None
    return parsed.astimezone(get_labor_timezone(tz_str))


def parse_time_of_day(value):
    """'14:00' or '14:00:30' -> datetime.time, else None."""
    if not isinstance(value, str):
        return None
    match = TIME_OF_DAY_RE.match(value.strip())
    if not match:
        return None
    hour = int(match.group('hour'))
    minute = int(match.group('minute'))
    second = int(match.group('second') or 0)
    if hour > 23 or minute > 59 or second > 59:
        return None
    return time(hour, minute, second)


def resolve_wall_clock(value, now, tz_str=None):
    """
    Turn a user-supplied moment into an aware datetime.

    A bare time of day is anchored to ``now``'s calendar date in the labor
    timezone; anything else must be a full timestamp. Returns None when the
    value is neither.
    """
    if isinstance(value, datetime):
        return parse_timestamp(value)
    clock = parse_time_of_day(value)
    if clock is None:
        return parse_timestamp(value)
    local_now = to_local(now, tz_str)
    if local_now is None:
        return None
    tz = get_labor_timezone(tz_str)
    return datetime.combine(local_now.date(), clock, tzinfo=tz)


def format_local_time(dt, tz_str=None, fmt="%H:%M"):
    """Format datetime in the labor timezone."""
    local = to_local(dt, tz_str)
    return local.strftime(fmt) if local else ""

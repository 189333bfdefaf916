"""
Time arithmetic for shift durations.

Every function here is total: unparseable timestamps or non-numeric break
minutes degrade to 0 hours instead of raising, and no result is negative.
"""
import logging
import math
from datetime import datetime, timedelta, timezone as dt_timezone

from django.utils.dateparse import parse_datetime

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(hours=24)


def to_number(value, default=0.0):
    """Coerce to a finite float, falling back to ``default``."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return number


def parse_timestamp(value):
    """
    Normalize a datetime or ISO-8601 string to an aware datetime.
    Naive values are taken as UTC. Returns None when the value can't be read.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = parse_datetime(value.strip())
        except ValueError:
            return None
    else:
        return None
    if parsed is None:
        return None
    if parsed.tzinfo is None or parsed.utcoffset() is None:
        parsed = parsed.replace(tzinfo=dt_timezone.utc)
    return parsed


def net_hours(duration, unpaid_break_minutes=0):
    """Hours in ``duration`` minus unpaid break, floored at 0."""
    hours = max(0.0, duration.total_seconds() / 3600)
    break_hours = max(0.0, to_number(unpaid_break_minutes)) / 60
    return max(0.0, hours - break_hours)


def _same_wall_clock_day(start, end, tz_str=None):
    from .timezone_utils import get_labor_timezone

    tz = get_labor_timezone(tz_str)
    return start.astimezone(tz).date() == end.astimezone(tz).date()


def elapsed_hours(start, end, unpaid_break_minutes, now, overnight_correction=True, tz_str=None):
    """
    Worked hours between ``start`` and ``end`` (``now`` when end is None).

    A recorded end that falls earlier on the same calendar day as the start is
    read as a clock time past midnight and moved forward 24 hours, e.g.
    23:00 -> 01:00 is 2 hours. The substituted ``now`` never gets that
    correction; a start in the future just yields 0. Calendar days are
    compared in the labor timezone (LABOR_TIMEZONE unless ``tz_str`` is given).
    """
    start_dt = parse_timestamp(start)
    if end is None:
        end_dt = parse_timestamp(now)
        recorded_end = False
    else:
        end_dt = parse_timestamp(end)
        recorded_end = True

    if start_dt is None or end_dt is None:
        logger.debug("Unreadable shift bounds start=%r end=%r now=%r; counting 0 hours", start, end, now)
        return 0.0

    duration = end_dt - start_dt
    if (
        duration < timedelta(0)
        and recorded_end
        and overnight_correction
        and _same_wall_clock_day(start_dt, end_dt, tz_str)
    ):
        duration += ONE_DAY
    return net_hours(duration, unpaid_break_minutes)


def employee_hours(employee, now, overnight_correction=True):
    """
    Hours worked so far on one employee record.

    ``is_active`` decides whether the shift is open: an open shift runs to
    ``now`` even if a stale end time is present, a closed one stops at its
    recorded end time.
    """
    from .records import to_active_flag

    start = getattr(employee, 'start_time', None)
    breaks = getattr(employee, 'unpaid_break_minutes', 0)
    if to_active_flag(getattr(employee, 'is_active', True)):
        return elapsed_hours(start, None, breaks, now, overnight_correction)

    end = getattr(employee, 'end_time', None)
    if end is None:
        logger.warning(
            "Employee %s is checked out without an end time; counting 0 hours",
            getattr(employee, 'id', '?'),
        )
        return 0.0
    return elapsed_hours(start, end, breaks, now, overnight_correction)

# app/utils/date_utils.py
"""
Date and time utility functions used across the project.

Notes:
- All "UTC" helpers use timezone-aware datetimes with `timezone.utc`.
- A naive datetime passed to `week_window` or `to_utc` is interpreted in the
  server's local time zone.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Callable, Optional, Tuple
from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)

UTC = timezone.utc

Clock = Callable[[], datetime]


def now_utc() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(UTC)


def local_now(tz_name: Optional[str] = None) -> datetime:
    """
    Current time in the named IANA zone (aware), or naive server local time
    when no name is given.
    """
    if tz_name:
        return datetime.now(ZoneInfo(tz_name))
    return datetime.now()


def start_of_day(d: date, tz: Optional[tzinfo] = None) -> datetime:
    """
    Return the start (00:00:00) of a given date.

    With ``tz`` None the result is resolved in the server's local zone.
    """
    naive = datetime.combine(d, time.min)
    return naive.astimezone() if tz is None else naive.replace(tzinfo=tz)


def end_of_day(d: date, tz: Optional[tzinfo] = None) -> datetime:
    """
    Return the end (23:59:59.999999) of a given date.

    With ``tz`` None the result is resolved in the server's local zone.
    """
    naive = datetime.combine(d, time.max)
    return naive.astimezone() if tz is None else naive.replace(tzinfo=tz)


def to_utc(dt: datetime) -> datetime:
    """
    Convert a datetime to UTC.

    - If naive, it is taken as server local time.
    - If aware, converts to UTC.
    """
    return dt.astimezone(UTC)


def week_window(now: datetime) -> Tuple[datetime, datetime]:
    """
    Monday 00:00:00 through Sunday 23:59:59.999999 of the week containing ``now``.

    The week is taken in ``now``'s own zone; a naive ``now`` is local time,
    and each bound then gets the local offset in force on its own day.
    Both bounds are inclusive and timezone-aware.
    """
    monday = now.date() - timedelta(days=now.weekday())
    sunday = monday + timedelta(days=6)

    zone = now.tzinfo
    return start_of_day(monday, zone), end_of_day(sunday, zone)


def current_week_window(
    tz_name: Optional[str] = None,
    clock: Optional[Clock] = None,
) -> Tuple[datetime, datetime]:
    """
    Week window for "now", read from ``clock`` when given.

    Without ``tz_name`` the week is the server's local week: an aware clock
    value is converted to naive local time so that each bound carries the
    offset of its own day across DST changes.
    """
    now = clock() if clock is not None else local_now(tz_name)
    if tz_name:
        return week_window(now.astimezone(ZoneInfo(tz_name)))
    if now.tzinfo is not None:
        now = now.astimezone().replace(tzinfo=None)
    return week_window(now)

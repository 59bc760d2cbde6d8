"""Local-time helpers for week/month windows and day bucketing.

Windows are built from wall-clock dates and re-attached to the zone, so with a
real zone (``zoneinfo``) a DST change inside the window keeps midnight at
midnight.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime, time, timedelta, tzinfo
from functools import partial
from zoneinfo import ZoneInfo


def resolve_zone(name: str = "") -> tzinfo | None:
    """IANA zone for ``name``; None means the host's local zone."""
    return ZoneInfo(name) if name else None


def local_now(zone: tzinfo | None = None) -> datetime:
    """Timezone-aware 'now' in ``zone`` (or the host's local zone)."""
    if zone is not None:
        return datetime.now(zone)
    return datetime.now().astimezone()


def make_clock(zone_name: str = "") -> Callable[[], datetime]:
    return partial(local_now, resolve_zone(zone_name))


def to_local(value: datetime, reference: datetime) -> datetime:
    """Express ``value`` in the zone of ``reference`` (naive values are left as-is)."""
    if value.tzinfo is None or reference.tzinfo is None:
        return value
    return value.astimezone(reference.tzinfo)


def align(value: datetime, reference: datetime) -> datetime:
    """
    Make ``value`` comparable with ``reference``. A naive value is read as
    wall-clock time in the reference's zone; an aware value compared with a
    naive reference is converted to the host zone and made naive.
    """
    if value.tzinfo is None and reference.tzinfo is not None:
        return value.replace(tzinfo=reference.tzinfo)
    if value.tzinfo is not None and reference.tzinfo is None:
        return value.astimezone().replace(tzinfo=None)
    return value


def local_date(value: datetime, reference: datetime) -> date:
    return to_local(value, reference).date()


def start_of_day(now: datetime) -> datetime:
    return datetime.combine(now.date(), time.min, tzinfo=now.tzinfo)


def start_of_week(now: datetime, first_weekday: int = 6) -> datetime:
    """Local midnight on the most recent ``first_weekday`` (Monday=0 ... Sunday=6)."""
    days_back = (now.weekday() - first_weekday) % 7
    return start_of_day(now - timedelta(days=days_back))


def start_of_month(now: datetime) -> datetime:
    return start_of_day(now.replace(day=1))

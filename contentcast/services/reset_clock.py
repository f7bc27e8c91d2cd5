"""
Daily reset boundary.

A ledger day starts at ``settings.reset_hour`` (03:00) in
``settings.reset_timezone`` (Europe/Istanbul) rather than at midnight.
Cast limits are keyed by ledger day. Streaks use plain UTC calendar
dates instead, see ``calendar_date``.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from contentcast.core.config import settings
from contentcast.models.base import utcnow


def _reset_zone() -> ZoneInfo:
    return ZoneInfo(settings.reset_timezone)


def _local_now(now: Optional[datetime]) -> datetime:
    return (now or utcnow()).astimezone(_reset_zone())


def current_ledger_day(now: Optional[datetime] = None) -> str:
    """Ledger day as ``YYYY-MM-DD``; before the reset hour it is still yesterday."""
    local = _local_now(now)
    day = local.date()
    if local.hour < settings.reset_hour:
        day -= timedelta(days=1)
    return day.isoformat()


def next_reset_at(now: Optional[datetime] = None) -> datetime:
    """Next reset instant, as an aware UTC datetime."""
    local = _local_now(now)
    day = local.date()
    if local.hour >= settings.reset_hour:
        day += timedelta(days=1)
    boundary = datetime.combine(day, time(hour=settings.reset_hour), tzinfo=_reset_zone())
    return boundary.astimezone(timezone.utc)


def seconds_until_next_reset(now: Optional[datetime] = None) -> int:
    now = now or utcnow()
    remaining = (next_reset_at(now) - now).total_seconds()
    return max(0, int(remaining))


def calendar_date(moment: datetime) -> date:
    """UTC calendar date of an instant, used by the streak walk."""
    return moment.astimezone(timezone.utc).date()

"""
Timezone-aware datetime helpers.
- Timestamps are stored and compared in UTC.
- The work day key ("YYYY-MM-DD") and the hour used for lateness come from the
  office timezone (settings.OFFICE_TZ).
"""
import math
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional, Tuple
from zoneinfo import ZoneInfo

from app.core.config import settings

UTC = timezone.utc
DATE_KEY_FORMAT = "%Y-%m-%d"
WEEKDAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def local_tz() -> ZoneInfo:
    """Office timezone from settings."""
    return settings.office_tz


def now_utc() -> datetime:
    """Current time in UTC (timezone-aware)."""
    return datetime.now(UTC)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """If dt is naive, treat as UTC and return timezone-aware UTC. If already aware, convert to UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def to_local(dt: Optional[datetime]) -> Optional[datetime]:
    """Convert to the office timezone. Naive datetimes are treated as UTC before converting."""
    if dt is None:
        return None
    return ensure_utc(dt).astimezone(local_tz())


def iso_local(dt: Optional[datetime]) -> Optional[str]:
    """Serialize as ISO-8601 in the office timezone, offset included."""
    if dt is None:
        return None
    return to_local(dt).isoformat()


def date_key(day: date) -> str:
    return day.strftime(DATE_KEY_FORMAT)


def today_key(now: Optional[datetime] = None) -> str:
    """Work day key for `now` (default: current time) in the office timezone."""
    return date_key(to_local(now or now_utc()).date())


def month_bounds(now: Optional[datetime] = None) -> Tuple[str, str]:
    """First and last day keys of the month containing `now`."""
    today = to_local(now or now_utc()).date()
    first = today.replace(day=1)
    next_month = (first + timedelta(days=32)).replace(day=1)
    return date_key(first), date_key(next_month - timedelta(days=1))


def week_days(now: Optional[datetime] = None) -> List[date]:
    """The seven days (Sunday to Saturday) of the week containing `now`."""
    today = to_local(now or now_utc()).date()
    # date.weekday(): Monday=0 .. Sunday=6
    start = today - timedelta(days=(today.weekday() + 1) % 7)
    return [start + timedelta(days=i) for i in range(7)]


def hours_between(start: datetime, end: datetime) -> int:
    """Whole hours from start to end, rounded half up."""
    seconds = (ensure_utc(end) - ensure_utc(start)).total_seconds()
    return int(math.floor(seconds / 3600 + 0.5))


def format_time_12h(dt: Optional[datetime]) -> str:
    """Local wall-clock time as "hh:mm AM"; empty string when missing."""
    if dt is None:
        return ""
    return to_local(dt).strftime("%I:%M %p")

# gym_classes/utils/clock.py
from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo

from gym_classes.core.config import settings


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def gym_now() -> datetime:
    """Current wall-clock time in the gym's zone, naive like session times."""
    return datetime.now(ZoneInfo(settings.GYM_TIMEZONE)).replace(tzinfo=None)


def at(session_date: date, clock_time: time) -> datetime:
    return datetime.combine(session_date, clock_time)


def js_day_of_week(day: date) -> int:
    """Day of week with 0 = Sunday, the numbering schedules are stored in."""
    return (day.weekday() + 1) % 7

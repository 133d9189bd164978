"""Wall-clock helpers for the business timezone"""
from datetime import date, datetime, time, timedelta
from typing import Tuple
from zoneinfo import ZoneInfo

from jadwal.config.settings import get_settings


def local_now() -> datetime:
    """Current time in the business timezone, as a naive wall-clock datetime"""
    tz = ZoneInfo(get_settings().BUSINESS_TIMEZONE)
    return datetime.now(tz).replace(tzinfo=None)


def parse_hhmm(value: str) -> time:
    """Parse 'HH:MM' (or 'HH:MM:SS') into a time"""
    parts = value.split(":")
    if len(parts) < 2:
        raise ValueError(f"Invalid time format: {value!r}, expected HH:MM")
    hours, minutes = int(parts[0]), int(parts[1])
    return time(hour=hours, minute=minutes)


def to_minutes(value: str) -> int:
    """'09:30' -> 570"""
    parsed = parse_hhmm(value)
    return parsed.hour * 60 + parsed.minute


def format_hhmm(moment: datetime) -> str:
    return moment.strftime("%H:%M")


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    """Local 00:00:00 .. 23:59:59.999 of a calendar date"""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1) - timedelta(milliseconds=1)


def combine_date_time(day: date, hhmm: str) -> datetime:
    return datetime.combine(day, parse_hhmm(hhmm))


def to_local_naive(moment: datetime) -> datetime:
    """Aware datetimes are converted to business wall-clock time; naive ones are kept"""
    if moment.tzinfo is None:
        return moment
    tz = ZoneInfo(get_settings().BUSINESS_TIMEZONE)
    return moment.astimezone(tz).replace(tzinfo=None)

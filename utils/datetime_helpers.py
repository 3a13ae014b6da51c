"""Timezone-aware date/time helpers for the reservation service."""

from datetime import date, datetime
from zoneinfo import ZoneInfo

from flask import current_app


def get_timezone() -> ZoneInfo:
    """Get the configured timezone."""
    tz_name = current_app.config.get('TIMEZONE', 'UTC')
    return ZoneInfo(tz_name)


def get_today() -> date:
    """Get today's date in the configured timezone."""
    return datetime.now(get_timezone()).date()


def get_now() -> datetime:
    """Get current datetime in the configured timezone."""
    return datetime.now(get_timezone())


def now_iso() -> str:
    """Current timestamp as an ISO-8601 string, second precision."""
    return get_now().isoformat(timespec='seconds')


def parse_slot(slot_date: str, slot_time: str) -> datetime:
    """
    Combine a YYYY-MM-DD date and HH:MM time into an aware datetime.

    Raises:
        ValueError: If either part is malformed
    """
    naive = datetime.strptime(f'{slot_date} {slot_time}', '%Y-%m-%d %H:%M')
    return naive.replace(tzinfo=get_timezone())


def is_slot_in_past(slot_date: str, slot_time: str) -> bool:
    """True when the date/time slot is strictly before now."""
    return parse_slot(slot_date, slot_time) < get_now()


def format_display_date(date_str: str) -> str:
    """Format 2025-12-25 as 'Thu, Dec 25, 2025'."""
    value = datetime.strptime(date_str, '%Y-%m-%d')
    return f"{value.strftime('%a, %b')} {value.day}, {value.year}"


def format_display_time(time_str: str) -> str:
    """Format 19:00 as '7:00 PM'."""
    value = datetime.strptime(time_str, '%H:%M')
    hour = value.hour % 12 or 12
    return f"{hour}:{value.strftime('%M %p')}"

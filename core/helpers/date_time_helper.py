"""
date_time_helper.py

Helpers for converting and formatting date/time values. Storage is always
UTC ISO8601; display uses the timezone from the [Display] config section.

All features should use ONLY these helpers for date/time logic.
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from core.config.config_service import config_service


def local_tz() -> ZoneInfo:
    """Display timezone from config (e.g. Europe/London)."""
    return ZoneInfo(config_service.display.timezone)


def utc_now() -> datetime:
    """Current UTC time without microseconds."""
    return datetime.now(timezone.utc).replace(microsecond=0)


def parse_utc_iso(utc_iso: str) -> datetime:
    """Parse an ISO string; naive values are taken as UTC."""
    value = datetime.fromisoformat(utc_iso)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def format_local(value: datetime) -> str:
    """
    Render a timestamp in the display timezone as "DD/MM/YYYY HH:MM:SS".
    Naive values are taken as UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(local_tz()).strftime("%d/%m/%Y %H:%M:%S")

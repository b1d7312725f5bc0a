"""Date helpers pinned to the configured business timezone (IST by default)."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from ..config import settings

TIMESTAMP_FORMAT = "%d %b %Y %I:%M:%S %p"


def business_timezone() -> ZoneInfo:
    return ZoneInfo(settings.timezone)


def now_local(reference: Optional[datetime] = None) -> datetime:
    """Current (or given) instant expressed in the business timezone."""

    tz = business_timezone()
    if reference is None:
        return datetime.now(tz)
    if reference.tzinfo is None:
        raise ValueError("reference datetime must be timezone-aware")
    return reference.astimezone(tz)


def today_local(reference: Optional[datetime] = None) -> date:
    return now_local(reference).date()


def format_timestamp(moment: Optional[datetime] = None) -> str:
    """Provenance stamp, e.g. ``17 Oct 2026 04:05:09 PM``."""

    return now_local(moment).strftime(TIMESTAMP_FORMAT)


def creation_stamp(moment: Optional[datetime] = None) -> str:
    """ISO-8601 instant at fixed microsecond precision, so stamps also order as strings."""

    return now_local(moment).isoformat(timespec="microseconds")

from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_request_date(value: Optional[str], *, default: date) -> date:
    v = (value or "").strip()
    if not v:
        return default
    try:
        return parse_iso_date(v)
    except ValueError:
        raise ValidationError(f"Invalid date: {v!r} (expected YYYY-MM-DD)")


def parse_hhmm(value: str) -> time:
    try:
        return datetime.strptime((value or "").strip(), "%H:%M").time()
    except ValueError:
        raise ValidationError(f"Invalid time: {value!r} (expected HH:MM)")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch it.
    """
    return datetime.now()


def time_ago(timestamp: datetime, *, now: datetime) -> str:
    hours = (now - timestamp).total_seconds() / 3600
    if hours < 1:
        return "Just now"
    if hours < 24:
        return f"{int(hours)}h ago"
    return f"{int(hours // 24)}d ago"

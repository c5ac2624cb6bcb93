"""Utilities for producing the timestamp strings used on the wire."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Return the current time as a timezone-aware ``datetime`` in UTC."""

    return datetime.now(timezone.utc)


def to_iso_z(dt: datetime) -> str:
    """Format ``dt`` as ISO-8601 with millisecond precision and a ``Z`` suffix.

    Matches what browser clients produce with ``Date.toISOString()`` so the
    frontend can compare and sort the strings directly.
    """

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def utc_now_iso() -> str:
    return to_iso_z(utc_now())


def utc_today(now: Optional[datetime] = None) -> str:
    """Return the UTC calendar date as ``YYYY-MM-DD``."""

    return (now or utc_now()).astimezone(timezone.utc).date().isoformat()


__all__ = ["utc_now", "to_iso_z", "utc_now_iso", "utc_today"]

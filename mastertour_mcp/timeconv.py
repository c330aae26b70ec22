"""Venue-local <-> UTC conversion for schedule items.

Master Tour stores ``startDatetime``/``endDatetime`` in UTC and mirrors them
as ``paulStartTime``/``paulEndTime`` in the day's own timezone.

Ambiguous wall-clock times (the repeated hour when clocks fall back) resolve
to the first occurrence (``fold=0``). Non-existent times (the skipped hour
when clocks spring forward) are interpreted with the offset in force before
the transition, which is how ``zoneinfo`` applies PEP 495.
"""

from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_UTC_FORMAT = "%Y-%m-%d %H:%M:%S"


def _zone(tz: str) -> ZoneInfo:
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"timezone must be a valid IANA timezone: {tz!r}") from exc


def local_to_utc(date: str, time: str, tz: str) -> str:
    """Convert ``date`` + ``time`` (wall clock in ``tz``) to a UTC string.

    >>> local_to_utc("2024-07-15", "22:00", "America/New_York")
    '2024-07-16 02:00:00'
    """
    try:
        naive = datetime.strptime(f"{date} {time}", "%Y-%m-%d %H:%M")
    except ValueError as exc:
        raise ValueError(
            f"Expected date as YYYY-MM-DD and time as HH:MM, got {date!r} {time!r}"
        ) from exc
    local = naive.replace(tzinfo=_zone(tz))
    return local.astimezone(timezone.utc).strftime(_UTC_FORMAT)


def utc_to_local(utc_datetime: str, tz: str) -> tuple[str, str]:
    """Convert a ``YYYY-MM-DD HH:MM:SS`` UTC string to ``(date, HH:MM)`` in ``tz``."""
    try:
        naive = datetime.strptime(utc_datetime, _UTC_FORMAT)
    except ValueError as exc:
        raise ValueError(
            f"Expected UTC datetime as YYYY-MM-DD HH:MM:SS, got {utc_datetime!r}"
        ) from exc
    local = naive.replace(tzinfo=timezone.utc).astimezone(_zone(tz))
    return local.strftime("%Y-%m-%d"), local.strftime("%H:%M")


def extract_time(paul_time: str) -> str:
    """Return ``HH:MM`` from a ``YYYY-MM-DD HH:MM:SS`` local timestamp."""
    if not paul_time:
        return ""
    _, _, clock = paul_time.strip().rpartition(" ")
    return clock[:5]

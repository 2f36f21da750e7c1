"""ISO-8601 helpers for the dateTime.iso8601 value type."""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone

from xmlrpc_api.utils.exceptions import XmlRpcValueError

_DATE_RE = re.compile(r"^(?P<year>\d{4})-?(?P<month>\d{2})-?(?P<day>\d{2})$")
_DATETIME_RE = re.compile(
    r"^(?P<year>\d{4})-?(?P<month>\d{2})-?(?P<day>\d{2})"
    r"T(?P<hour>\d{2}):?(?P<minute>\d{2})"
    r"(?::?(?P<second>\d{2})(?:[.,](?P<fraction>\d+))?)?"
    r"(?P<zone>[Zz]|[+-]\d{2}(?::?\d{2})?)?$"
)


def _parse_zone(zone: str | None) -> timezone:
    # Zone-less timestamps are read as UTC.
    if not zone or zone in ("Z", "z"):
        return timezone.utc
    sign = -1 if zone[0] == "-" else 1
    digits = zone[1:].replace(":", "")
    hours = int(digits[:2])
    minutes = int(digits[2:4] or 0)
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def parse_iso8601(text: str) -> date | datetime:
    """
    Parse dateTime.iso8601 text.

    Date-only text (``2004-09-13`` or ``20040913``) yields a ``date``. Full
    timestamps yield a timezone-aware ``datetime``; seconds, fractions and
    the zone designator are optional.
    """
    raw = (text or "").strip()
    try:
        m = _DATE_RE.match(raw)
        if m:
            return date(int(m["year"]), int(m["month"]), int(m["day"]))
        m = _DATETIME_RE.match(raw)
        if m:
            fraction = (m["fraction"] or "")[:6].ljust(6, "0")
            return datetime(
                int(m["year"]),
                int(m["month"]),
                int(m["day"]),
                int(m["hour"]),
                int(m["minute"]),
                int(m["second"] or 0),
                int(fraction),
                tzinfo=_parse_zone(m["zone"]),
            )
    except ValueError as e:
        raise XmlRpcValueError(f"Invalid dateTime.iso8601 value: {raw!r} ({e})", tag="dateTime.iso8601") from e
    raise XmlRpcValueError(f"Invalid dateTime.iso8601 value: {raw!r}", tag="dateTime.iso8601")


def _format_offset(offset: timedelta | None) -> str:
    if not offset:
        return "Z"
    if offset % timedelta(minutes=1):
        raise XmlRpcValueError(f"UTC offset is not a whole number of minutes: {offset}", tag="dateTime.iso8601")
    total_minutes = offset // timedelta(minutes=1)
    sign = "+" if total_minutes >= 0 else "-"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def format_iso8601(value: date | datetime) -> str:
    """
    Format a date as ``YYYY-MM-DD`` or a datetime as ``YYYY-MM-DDTHH:MM:SS`` plus zone.

    Microseconds are written as a ``.ffffff`` fraction only when non-zero.
    """
    day = f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
    if not isinstance(value, datetime):
        return day
    clock = f"{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    if value.microsecond:
        clock += f".{value.microsecond:06d}"
    return f"{day}T{clock}{_format_offset(value.utcoffset())}"

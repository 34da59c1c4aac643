"""Tolerant RFC 3339 date parsing and canonical date formatting.

Feeds in the wild do not all agree on one timestamp spelling. The parser
accepts the variants that show up in practice:

- ``2020-01-02T03:04:05Z``
- ``2020-01-02t03:04:05.123+05:00``
- ``2020-01-02 03:04:05-0500``

The date/time separator at index 10 may be ``T``, ``t`` or a space.
Fractional seconds are exactly three digits and are expected if and only if
the string contains a ``.``. The zone is ``Z`` or a numeric offset with or
without a colon.
"""

import re
from datetime import datetime, timedelta, timezone

_SEPARATORS = frozenset("Tt ")
_SEPARATOR_INDEX = 10

_DATE_TIME = (
    r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"
    r"[Tt ]"
    r"(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})"
)
_OFFSET = r"(?P<offset>Z|[+-][0-9]{2}:?[0-9]{2})"

# Compiled patterns are immutable and safe to share between threads.
_WITH_FRACTION = re.compile(_DATE_TIME + r"\.(?P<millis>[0-9]{3})" + _OFFSET)
_WITHOUT_FRACTION = re.compile(_DATE_TIME + _OFFSET)


def _parse_offset(text: str) -> timezone | None:
    if text == "Z":
        return timezone.utc
    sign = -1 if text[0] == "-" else 1
    digits = text[1:].replace(":", "")
    hours, minutes = int(digits[:2]), int(digits[2:])
    if hours > 23 or minutes > 59:
        return None
    delta = sign * timedelta(hours=hours, minutes=minutes)
    if not delta:
        return timezone.utc
    return timezone(delta)


def parse_date(text: str) -> datetime | None:
    """Parse a feed timestamp.

    Args:
        text: Timestamp string in one of the accepted RFC 3339 variants

    Returns:
        A timezone-aware datetime carrying the parsed offset, or None if the
        string is not an accepted timestamp or names an impossible date
    """
    if not isinstance(text, str) or len(text) <= _SEPARATOR_INDEX:
        return None
    if text[_SEPARATOR_INDEX] not in _SEPARATORS:
        return None

    pattern = _WITH_FRACTION if "." in text else _WITHOUT_FRACTION
    match = pattern.fullmatch(text)
    if match is None:
        return None

    tz = _parse_offset(match["offset"])
    if tz is None:
        return None

    millis = match.groupdict().get("millis")
    try:
        return datetime(
            int(match["year"]),
            int(match["month"]),
            int(match["day"]),
            int(match["hour"]),
            int(match["minute"]),
            int(match["second"]),
            int(millis) * 1000 if millis else 0,
            tzinfo=tz,
        )
    except ValueError:
        return None


def format_date(value: datetime) -> str:
    """Render a datetime in the canonical fixed-offset form.

    Naive datetimes are taken to be UTC. Sub-second precision is kept to the
    millisecond and omitted entirely when zero. A zero offset is written as
    ``Z``.
    """
    offset = value.utcoffset()
    if offset is None:
        value = value.replace(tzinfo=timezone.utc)
        offset = timedelta(0)
    elif offset % timedelta(minutes=1):
        # RFC 3339 offsets have no seconds field
        value = value.astimezone(timezone.utc)
        offset = timedelta(0)

    timespec = "milliseconds" if value.microsecond // 1000 else "seconds"
    text = value.isoformat(timespec=timespec)
    if not offset:
        text = text[:-6] + "Z"
    return text

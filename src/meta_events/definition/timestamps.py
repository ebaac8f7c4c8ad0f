"""Permissive timestamp parsing for definition audit fields.

Timestamps on versions, events and notes are only displayed, never compared
to the current time, so the parser favours accepting what people write in
definition files over strictness.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any

from ..exceptions import InvalidTimestampError

# Tried in order after ISO-8601 fails.
_FALLBACK_FORMATS = (
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%b %d, %Y",
    "%B %d, %Y",
    "%b %d %Y",
    "%B %d %Y",
    "%d %b %Y",
    "%d %B %Y",
    "%a, %d %b %Y %H:%M:%S %z",
)


def parse_timestamp(value: Any, field_name: str = "timestamp") -> datetime:
    """Parse a timestamp-like value into a ``datetime``.

    Accepts ``datetime`` (returned unchanged), ``date`` (midnight),
    int/float epoch seconds (UTC) and text in ISO-8601 or a handful of
    common human formats.

    Raises:
        InvalidTimestampError: naming ``field_name`` if nothing matches.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, bool):
        raise InvalidTimestampError(field_name, value, "booleans are not timestamps")
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise InvalidTimestampError(field_name, value, str(e)) from e
    if not isinstance(value, str):
        raise InvalidTimestampError(field_name, value, f"unsupported type {type(value).__name__}")

    text = value.strip()
    if not text:
        raise InvalidTimestampError(field_name, value, "empty")

    # Accept 'Z' by replacing with +00:00
    iso = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        return datetime.fromisoformat(iso)
    except ValueError:
        pass

    for fmt in _FALLBACK_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue

    raise InvalidTimestampError(field_name, value, "unrecognized format")

"""
Parsing of date query parameters into Unix timestamps.

Two formats are accepted: ``dd-mm-yyyy`` (midnight UTC) and RFC 3339
with an explicit offset.
"""

from datetime import datetime, timezone

from app.domain.market.errors import InvalidDateFormatError

DAY_FORMAT = "%d-%m-%Y"


def parse_date_to_unix(raw_value: str) -> int:
    """Convert a ``dd-mm-yyyy`` or RFC 3339 string to seconds since the epoch.

    Raises:
        InvalidDateFormatError: If the value matches neither format.
    """
    value = raw_value.strip()
    try:
        parsed = datetime.strptime(value, DAY_FORMAT).replace(tzinfo=timezone.utc)
        return int(parsed.timestamp())
    except ValueError:
        pass

    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise InvalidDateFormatError(raw_value) from exc
    # RFC 3339 timestamps always carry an offset
    if "T" not in value.upper() or parsed.tzinfo is None:
        raise InvalidDateFormatError(raw_value)
    return int(parsed.timestamp())

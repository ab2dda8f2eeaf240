"""The timestamp format shared by every wire document."""

from datetime import datetime

DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def parse_date(value: str) -> datetime:
    """Parse a wire timestamp such as ``2021-04-26T08:12:13-07:00``.

    A trailing ``Z`` is accepted for UTC.

    Raises:
        ValueError: If the text does not match the format
    """
    if not isinstance(value, str):
        raise TypeError(f"expected timestamp string, got {type(value).__name__}")
    return datetime.strptime(value, DATE_FORMAT)


def format_date(value: datetime) -> str:
    """Format a timezone-aware datetime for the wire."""
    if value.tzinfo is None:
        raise ValueError("timestamps sent to the API must be timezone aware")
    return value.isoformat(timespec="seconds")

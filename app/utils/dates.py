import re
from datetime import datetime, timezone
from typing import Optional

from app.errors import ValidationError

PUBLICATION_DATE_FORMAT = "MM/DD/YYYY HH:mm"
_DATE_PATTERN = re.compile(r"([0-9]{2})/([0-9]{2})/([0-9]{4}) ([0-9]{2}):([0-9]{2})")

MIN_YEAR = 1900
MAX_YEAR = 2100


def publication_date_error(value: str) -> Optional[str]:
    """Return a human-readable reason why ``value`` is not a valid
    ``MM/DD/YYYY HH:mm`` date, or None when it is valid.
    """
    match = _DATE_PATTERN.fullmatch(value)
    if not match:
        return (
            f"Publication date must be in format {PUBLICATION_DATE_FORMAT} "
            "(e.g. 01/15/2025 09:30)"
        )

    month, day, year, hour, minute = (int(part) for part in match.groups())

    if not 1 <= month <= 12:
        return "Month must be between 01 and 12"
    if not 1 <= day <= 31:
        return "Day must be between 01 and 31"
    if not MIN_YEAR <= year <= MAX_YEAR:
        return f"Year must be between {MIN_YEAR} and {MAX_YEAR}"
    if not 0 <= hour <= 23:
        return "Hours must be between 00 and 23"
    if not 0 <= minute <= 59:
        return "Minutes must be between 00 and 59"

    # datetime() refuses to roll 02/30 over into March
    try:
        datetime(year, month, day, hour, minute, tzinfo=timezone.utc)
    except ValueError:
        return "This date does not exist (e.g. February 30)"
    return None


def parse_publication_date(value: str) -> datetime:
    """Parse ``MM/DD/YYYY HH:mm`` into an aware UTC datetime.

    Raises ValidationError when the string does not match the format or does
    not describe a real calendar date and time.
    """
    error = publication_date_error(value)
    if error:
        raise ValidationError(error)
    match = _DATE_PATTERN.fullmatch(value)
    month, day, year, hour, minute = (int(part) for part in match.groups())
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


def format_publication_date(value: datetime) -> str:
    """Render a datetime back into the form field format, in UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%m/%d/%Y %H:%M")

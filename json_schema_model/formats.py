"""
Format checkers for the ``format`` keyword of string schemas.
"""

import logging
import re
from datetime import date
from typing import Callable, Dict, Optional

logger = logging.getLogger("json_schema_model")

FormatFunction = Callable[[str], bool]

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
URI_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:[^\s]*$")
UUID_PATTERN = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)
TIME_PATTERN = re.compile(
    r"^(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})(?:\.\d+)?"
    r"(?:[zZ]|[+-](?P<offset_hour>\d{2}):(?P<offset_minute>\d{2}))?$", re.ASCII
)


def is_email(value: str) -> bool:
    return EMAIL_PATTERN.fullmatch(value) is not None


def is_uri(value: str) -> bool:
    """Absolute URI: a scheme followed by ':' and no whitespace."""
    return URI_PATTERN.fullmatch(value) is not None


def is_uuid(value: str) -> bool:
    return UUID_PATTERN.fullmatch(value) is not None


def is_date(value: str) -> bool:
    """RFC 3339 full-date, checked against the calendar."""
    if DATE_PATTERN.fullmatch(value) is None:
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def is_time(value: str) -> bool:
    """RFC 3339 time: HH:MM:SS with optional fraction and zone offset."""
    match = TIME_PATTERN.fullmatch(value)
    if match is None:
        return False
    # 60 allows leap seconds
    if int(match["hour"]) > 23 or int(match["minute"]) > 59 or int(match["second"]) > 60:
        return False
    if match["offset_hour"] is not None:
        if int(match["offset_hour"]) > 23 or int(match["offset_minute"]) > 59:
            return False
    return True


def is_date_time(value: str) -> bool:
    """RFC 3339 date-time: a full-date, 'T', and a time."""
    date_part, separator, time_part = value.partition("T")
    if not separator:
        date_part, separator, time_part = value.partition("t")
    return bool(separator) and is_date(date_part) and is_time(time_part)


DEFAULT_FORMATS: Dict[str, FormatFunction] = {
    "email": is_email,
    "uri": is_uri,
    "uuid": is_uuid,
    "date": is_date,
    "time": is_time,
    "date-time": is_date_time,
}


class FormatChecker:
    """
    Checks strings against named formats.

    Unknown format names are treated as annotations and always pass.
    """

    def __init__(self, formats: Optional[Dict[str, FormatFunction]] = None):
        """
        Initialize a new format checker.

        Args:
            formats: Format functions by name (defaults to the built-in formats)
        """
        self.formats: Dict[str, FormatFunction] = dict(DEFAULT_FORMATS if formats is None else formats)

    def register(self, name: str, func: FormatFunction) -> "FormatChecker":
        """
        Register or replace a format.

        Args:
            name: Format name as used in the ``format`` keyword
            func: Total predicate on strings

        Returns:
            This checker, for chaining
        """
        self.formats[name] = func
        return self

    def is_known(self, name: str) -> bool:
        return name in self.formats

    def check(self, name: str, value: str) -> bool:
        """
        Check a string against a format.

        Args:
            name: Format name
            value: String to check

        Returns:
            True if the string conforms, or the format is unknown
        """
        func = self.formats.get(name)
        if func is None:
            logger.debug(f"Unknown format '{name}' is not validated")
            return True
        return bool(func(value))

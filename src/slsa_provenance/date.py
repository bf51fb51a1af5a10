"""RFC 3339 date-time handling.

.. |datetime| replace:: :class:`~datetime.datetime`
"""  # noqa RST304

from __future__ import annotations

import calendar
import re
from datetime import datetime, timezone

from dateutil import parser as date_parser

from slsa_provenance.error import FormatError

TIMESTAMP_FORMAT: str = "%Y-%m-%dT%H:%M:%SZ"
"""Format used to write |datetime| structures as date-time strings."""

DATE_TIME_RE = re.compile(
    r"^(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"
    r"[Tt](?P<hour>[0-9]{2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})"
    r"(?:\.[0-9]+)?"
    r"(?:[Zz]|[+-](?P<offset_hour>[0-9]{2}):(?P<offset_minute>[0-9]{2}))\Z"
)


def is_date_time(value: object) -> bool:
    """Check that *value* is an RFC 3339 ``date-time`` string.

    Only the syntax is checked, with the ranges implied by it: the date must
    exist in the calendar, hours go up to 23, minutes up to 59 and seconds up
    to 60 (leap seconds are accepted without checking their position).
    """
    if not isinstance(value, str):
        return False
    m = DATE_TIME_RE.match(value)
    if m is None:
        return False

    year, month, day = int(m["year"]), int(m["month"]), int(m["day"])
    if not 1 <= month <= 12:
        return False
    if not 1 <= day <= calendar.monthrange(year, month)[1]:
        return False
    if int(m["hour"]) > 23 or int(m["minute"]) > 59 or int(m["second"]) > 60:
        return False
    if m["offset_hour"] is not None:
        if int(m["offset_hour"]) > 23 or int(m["offset_minute"]) > 59:
            return False
    return True


def validate_date_time(value: str, path: str = "") -> None:
    """Validate an RFC 3339 ``date-time`` string.

    :param value: the string to check
    :param path: JSON pointer of the checked field, used in the error
    :raise FormatError: if *value* is not a valid date-time
    """
    if not is_date_time(value):
        raise FormatError(path, "date-time", value)


def parse_timestamp(value: str) -> datetime:
    """Convert a ``date-time`` string to a timezone aware |datetime|.

    A leap second is mapped to the 59th second of the same minute, as
    |datetime| cannot represent it.

    :raise FormatError: if *value* is not a valid date-time
    """
    validate_date_time(value)
    m = DATE_TIME_RE.match(value)
    if m is not None and m["second"] == "60":
        value = value[: m.start("second")] + "59" + value[m.end("second") :]
    return date_parser.isoparse(value.upper())


def format_timestamp(timestamp: datetime) -> str:
    """Convert a |datetime| to a ``date-time`` string.

    Naive datetimes are considered local time. The result is expressed in
    UTC and microseconds are dropped.

    :raise TypeError: if *timestamp* is not a |datetime|
    """
    if not isinstance(timestamp, datetime):
        raise TypeError(f"Invalid timestamp type {type(timestamp)}")
    return timestamp.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)

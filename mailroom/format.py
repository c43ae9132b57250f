"""Date and key formatting used by the email table."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

from .errors import MailboxError
from .model import EmailType

logger = logging.getLogger(__name__)

_VALID_TYPES = frozenset(t.value for t in EmailType)
_INTEGER = re.compile(r"[+-]?[0-9]+")


class FormatError(MailboxError, ValueError):
    """Base class for formatting errors."""


class InvalidFormatForTypeYearMonthError(FormatError):
    def __init__(self) -> None:
        super().__init__("invalid format: expecting type#year-month")


class InvalidEmailTypeError(FormatError):
    def __init__(self) -> None:
        super().__init__("invalid email type: expecting inbox or sent")


class InvalidEmailYearError(FormatError):
    def __init__(self) -> None:
        super().__init__("invalid email year: expecting 4 digit integer string")


class InvalidEmailMonthError(FormatError):
    def __init__(self) -> None:
        super().__init__("invalid email type: expecting 2 digit integer string")


def _to_utc(t: datetime) -> datetime:
    if t.tzinfo is None:
        return t
    return t.astimezone(timezone.utc)


def rfc3339(t: datetime) -> str:
    """Format a time as RFC 3339 with whole seconds; naive times count as UTC."""
    base = (
        f"{t.year:04d}-{t.month:02d}-{t.day:02d}"
        f"T{t.hour:02d}:{t.minute:02d}:{t.second:02d}"
    )
    offset = t.utcoffset()
    if not offset:
        return base + "Z"
    total = int(offset.total_seconds())
    sign = "-" if total < 0 else "+"
    hours, rest = divmod(abs(total), 3600)
    return f"{base}{sign}{hours:02d}:{rest // 60:02d}"


def date(value: str) -> str:
    """Convert an SMTP Date header to RFC 3339, or return "" if it cannot be parsed."""
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        return ""
    if parsed is None:
        return ""
    return rfc3339(parsed)


def type_year_month(email_type: str, t: datetime) -> str:
    """Build the "type#YYYY-MM" key for a time, using its UTC month."""
    if email_type not in _VALID_TYPES:
        raise InvalidEmailTypeError()
    u = _to_utc(t)
    return f"{email_type}#{u.year:04d}-{u.month:02d}"


def date_time(t: datetime) -> str:
    """Format a time as "DD-hh:mm:ss" in UTC."""
    u = _to_utc(t)
    return f"{u.day:02d}-{u.hour:02d}:{u.minute:02d}:{u.second:02d}"


def rejoin_date(ym: str, dt: str) -> str:
    """Join a "YYYY-MM" and a "DD-hh:mm:ss" back into an RFC 3339 UTC time."""
    return f"{ym}-{dt.replace('-', 'T', 1)}Z"


def _atoi(text: str) -> int | None:
    if _INTEGER.fullmatch(text) is None:
        return None
    return int(text)


def extract_type_year_month(s: str) -> tuple[str, str]:
    """Split a "type#year-month" key into its email type and year-month."""
    parts = s.split("#")
    if len(parts) != 2:
        logger.debug("extract_type_year_month(%s): expecting type#year-month", s)
        raise InvalidFormatForTypeYearMonthError()

    year_month = parts[1].split("-")
    if len(year_month) != 2:
        logger.debug("extract_type_year_month(%s): expecting type#year-month", s)
        raise InvalidFormatForTypeYearMonthError()

    email_type = parts[0]
    if email_type not in _VALID_TYPES:
        logger.debug("extract_type_year_month(%s): unknown type", s)
        raise InvalidEmailTypeError()

    year = _atoi(year_month[0])
    if year is None or year < 1000:
        logger.debug("extract_type_year_month(%s): year must be 4 digits", s)
        raise InvalidEmailYearError()

    month = _atoi(year_month[1])
    if month is None or not 1 <= month <= 12:
        logger.debug("extract_type_year_month(%s): month must be 1 to 12", s)
        raise InvalidEmailMonthError()

    return email_type, parts[1]
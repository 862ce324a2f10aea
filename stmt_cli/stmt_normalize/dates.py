"""Date parsing for the regional spellings found in bank exports."""

from __future__ import annotations

import calendar
import re
from datetime import date, datetime

from dateutil import parser as date_parser

from stmt_cli.shared.exceptions import DateParseError

# 31-Jul-23, 31 July 2023, 1/aug/2023
_DAY_MONTH_NAME_RE = re.compile(r"^(\d{1,2})[-/ ]([A-Za-z]{3,})[-/ ](\d{4}|\d{2})$")
# 05/03/2022, 5-3-22 (day first)
_DAY_MONTH_YEAR_RE = re.compile(r"^(\d{1,2})[/-](\d{1,2})[/-](\d{4}|\d{2})$")
# 2023-07-31, 2023-07-31T09:30:00Z
_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}")

_MONTH_ABBREVIATIONS = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

# Two defaults that differ in every component; a complete date parses identically against both.
_PROBE_DEFAULTS = (datetime(1904, 1, 1), datetime(1908, 12, 28))


def parse_date(raw: str) -> str:
    """Parse ``raw`` into an ISO ``YYYY-MM-DD`` string.

    Forms are tried in order: day + month name + year, numeric
    day/month/year, then a generic ISO-first parser. Two-digit years are
    read as 20YY. Raises :class:`DateParseError` when nothing matches or
    the matched form names a day the calendar does not have.
    """

    resolved = _resolve(raw)
    if isinstance(resolved, date):
        return resolved.isoformat()
    raise DateParseError(resolved)


def coerce_date(raw: str) -> str | None:
    """Like :func:`parse_date` but returns ``None`` instead of raising."""

    resolved = _resolve(raw)
    return resolved.isoformat() if isinstance(resolved, date) else None


def _resolve(raw: str) -> date | str:
    """Return the parsed date, or the reason it could not be parsed."""

    value = " ".join((raw or "").split())
    if not value:
        return "Empty date value"

    match = _DAY_MONTH_NAME_RE.match(value)
    if match:
        month = _MONTH_ABBREVIATIONS.get(match.group(2)[:3].lower())
        if month is not None:
            return _calendar_date(
                _expand_year(match.group(3)), month, int(match.group(1)), raw=value
            )

    match = _DAY_MONTH_YEAR_RE.match(value)
    if match:
        day, month, year = match.groups()
        return _calendar_date(_expand_year(year), int(month), int(day), raw=value)

    return _fallback(value)


def _expand_year(value: str) -> int:
    year = int(value)
    return 2000 + year if len(value) == 2 else year


def _calendar_date(year: int, month: int, day: int, *, raw: str) -> date | str:
    if not 1 <= year <= 9999 or not 1 <= month <= 12:
        return f"Invalid calendar date: {raw}"
    if not 1 <= day <= calendar.monthrange(year, month)[1]:
        return f"Invalid calendar date: {raw}"
    return date(year, month, day)


def _fallback(value: str) -> date | str:
    if _ISO_DATE_RE.match(value):
        try:
            return date_parser.isoparse(value).date()
        except ValueError:
            return f"Invalid ISO date: {value}"

    parsed: list[datetime] = []
    for default in _PROBE_DEFAULTS:
        try:
            parsed.append(date_parser.parse(value, default=default, dayfirst=False))
        except (ValueError, OverflowError):
            return f"Unrecognized date format: {value}"
    if parsed[0].date() != parsed[1].date():
        return f"Incomplete date: {value}"
    return parsed[0].date()

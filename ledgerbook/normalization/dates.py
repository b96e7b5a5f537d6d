"""Transaction date resolution.

Dates arrive from the sheet in several encodings. Resolution order is fixed
and the first encoding that yields a real calendar date wins:

1. Spreadsheet serial day-count (purely numeric text, or a number)
2. DD/MM/YYYY (or DD-MM-YYYY)
3. YYYY-MM-DD, optionally followed by a time part
4. Generic calendar parse (python-dateutil), day-first

A value that resolves under none of them raises UnparseableDateError. There is
no fallback to "today".
"""

import re
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation

from dateutil import parser as date_parser

from ledgerbook.exceptions import UnparseableDateError

# Day zero of the spreadsheet serial date system: serial 1 is 1899-12-31 and
# serial 45658 is 2025-01-01. Serials below 61 inherit the phantom 1900-02-29
# and are not corrected.
SPREADSHEET_EPOCH = date(1899, 12, 30)

_SERIAL_RE = re.compile(r"^\d+(?:\.\d+)?$")
_DMY_RE = re.compile(r"^(\d{1,2})[/-](\d{1,2})[/-](\d{4})$")
_YMD_RE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})(?:[T ].*)?$")

# Differ in year, month and day. A generic parse that comes back with two
# different dates took at least one component from the default.
_PROBE_DEFAULTS = (datetime(2000, 1, 1), datetime(2004, 12, 28))


def serial_to_date(serial: int | float | Decimal) -> date:
    """Convert a spreadsheet serial day-count to a calendar date.

    The fractional part (time of day) is discarded.

    Raises:
        ValueError: serial is negative or not a finite number.
        OverflowError: serial lies beyond the supported calendar range.
    """
    if isinstance(serial, Decimal) and not serial.is_finite():
        raise ValueError(f"Serial date must be finite: {serial}")
    days = int(serial)
    if days < 0:
        raise ValueError(f"Serial date must be non-negative: {serial}")
    return SPREADSHEET_EPOCH + timedelta(days=days)


def parse_transaction_date(raw: str | int | float | None) -> date:
    """Resolve a raw date cell to a calendar date.

    Raises:
        UnparseableDateError: no supported encoding produced a valid date.
    """
    if raw is None or isinstance(raw, bool):
        raise UnparseableDateError(raw)

    if isinstance(raw, int | float):
        try:
            return serial_to_date(raw)
        except (ValueError, OverflowError) as exc:
            raise UnparseableDateError(raw) from exc

    text = str(raw).strip()
    if not text:
        raise UnparseableDateError(raw)

    if _SERIAL_RE.match(text):
        try:
            return serial_to_date(Decimal(text))
        except (ValueError, OverflowError, InvalidOperation) as exc:
            raise UnparseableDateError(raw) from exc

    match = _DMY_RE.match(text)
    if match:
        day, month, year = (int(part) for part in match.groups())
        resolved = _checked_date(year, month, day)
        if resolved is not None:
            return resolved

    match = _YMD_RE.match(text)
    if match:
        year, month, day = (int(part) for part in match.groups())
        resolved = _checked_date(year, month, day)
        if resolved is not None:
            return resolved

    resolved = _generic_parse(text)
    if resolved is None:
        raise UnparseableDateError(raw)
    return resolved


def parse_timestamp(raw: str | None) -> datetime | None:
    """Parse an ISO-8601 source timestamp into an aware UTC datetime.

    Naive timestamps are taken as UTC. Returns None when absent or unparseable.
    """
    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        return None
    try:
        value = datetime.fromisoformat(text)
    except ValueError:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _checked_date(year: int, month: int, day: int) -> date | None:
    # The day is checked against the real month length: 31/02/2025 is not a
    # February row, it falls through and is rejected.
    if not (1 <= day <= 31 and 1 <= month <= 12):
        return None
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _generic_parse(text: str) -> date | None:
    try:
        first = date_parser.parse(text, dayfirst=True, default=_PROBE_DEFAULTS[0])
        second = date_parser.parse(text, dayfirst=True, default=_PROBE_DEFAULTS[1])
    except (ValueError, OverflowError):
        return None
    if first.date() != second.date():
        return None
    return first.date()

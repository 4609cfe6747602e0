"""
Date helpers for matching spreadsheet rows to a target day.

Cells in the date column are parsed with a fixed, ordered list of formats
instead of a lenient locale-dependent parser, so the same cell always
resolves to the same day on every host.
"""

import re
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from .models import NotApplicable

# Polish weekday names, Monday first (matches date.weekday())
POLISH_WEEKDAYS = (
    "poniedziałek",
    "wtorek",
    "środa",
    "czwartek",
    "piątek",
    "sobota",
    "niedziela",
)

# Google Sheets counts serial day numbers from this date
SHEETS_EPOCH = date(1899, 12, 30)

# (pattern, group order) pairs tried in sequence; group order maps the
# captured groups to (year, month, day)
DATE_PATTERNS = [
    # YYYY-MM-DD, optionally followed by a time part which is ignored
    (re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})(?:[T ].*)?$"), ("y", "m", "d")),
    # YYYY/MM/DD
    (re.compile(r"^(\d{4})/(\d{1,2})/(\d{1,2})$"), ("y", "m", "d")),
    # DD.MM.YYYY
    (re.compile(r"^(\d{1,2})\.(\d{1,2})\.(\d{4})$"), ("d", "m", "y")),
    # MM/DD/YYYY
    (re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$"), ("m", "d", "y")),
]

# Unformatted sheet values: five-digit serial numbers (years 1927-2173)
SERIAL_PATTERN = re.compile(r"^\d{5}$")


def format_date(value: date, day_offset: int = 0) -> str:
    """Format a date as YYYY-MM-DD after shifting it by whole calendar days.

    Args:
        value: The base date (a datetime is reduced to its date)
        day_offset: Number of days to add (may be negative)

    Returns:
        The shifted date as an ISO string
    """
    if isinstance(value, datetime):
        value = value.date()
    return (value + timedelta(days=day_offset)).isoformat()


def parse_date(text) -> date | NotApplicable:
    """Parse a spreadsheet date cell.

    Supported formats, tried in order:
        - YYYY-MM-DD (optionally with a trailing time, ignored)
        - YYYY/MM/DD
        - DD.MM.YYYY
        - MM/DD/YYYY
        - Google Sheets serial day number (e.g. 45833)

    Args:
        text: Cell content

    Returns:
        The parsed date, or NotApplicable if the text is not a real calendar date.
        Never raises.
    """
    if not isinstance(text, str):
        return NotApplicable(f"not text: {text!r}")

    text = text.strip()
    if not text:
        return NotApplicable("empty cell")

    for pattern, order in DATE_PATTERNS:
        match = pattern.match(text)
        if not match:
            continue
        parts = dict(zip(order, (int(g) for g in match.groups())))
        try:
            return date(parts["y"], parts["m"], parts["d"])
        except ValueError:
            return NotApplicable(f"not a calendar date: {text!r}")

    if SERIAL_PATTERN.match(text):
        return SHEETS_EPOCH + timedelta(days=int(text))

    return NotApplicable(f"unrecognized date format: {text!r}")


def same_day(a: date, b: date) -> bool:
    """Compare two dates (or datetimes) by year, month and day only."""
    return (a.year, a.month, a.day) == (b.year, b.month, b.day)


def weekday_name(value: date) -> str:
    """Return the Polish name of the weekday, e.g. "środa"."""
    return POLISH_WEEKDAYS[value.weekday()]


def target_date(tz_name: str = "Europe/Warsaw", day_offset: int = 0, now: datetime | None = None) -> date:
    """Get the calendar date a run should look for.

    Args:
        tz_name: IANA timezone in which "today" is evaluated
        day_offset: Days to shift from today
        now: Override for the current time (naive values are taken as-is)

    Returns:
        The target date
    """
    if now is None:
        now = datetime.now(ZoneInfo(tz_name))
    return now.date() + timedelta(days=day_offset)

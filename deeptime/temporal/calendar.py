"""
Calendar Dates
==============

Arbitrary-range proleptic Gregorian dates stored as an integer day count.

GUARANTEES:
- The day count is a Python int (never float): exact at any magnitude
- Day 0 is 1970-01-01; astronomical years (year 0 == 1 BCE)
- parse(date.to_iso()) == date for every representable date
- parse() never raises: malformed input yields None

The active display format is NOT global state. A DateFormatter is built
with an explicit DateFormat and handed to whoever needs to format.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple
import re


# Supports well beyond +/- 10 billion years; day counts stay inside int64.
YEAR_LIMIT = 100_000_000_000

# Days in a 400-year Gregorian cycle, and the offset of 1970-03-01 from 0000-03-01.
_DAYS_PER_ERA = 146097
_EPOCH_SHIFT = 719468

MONTH_ABBR = (
    'Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
    'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec',
)

_DATE_RE = re.compile(
    r"""
    ^\s*
    (?P<sign>[+-])?
    (?P<year>\d+)
    (?:-(?P<month>\d{1,2})
        (?:-(?P<day>\d{1,2}))?
    )?
    (?:T\d{1,2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:?\d{2})?)?
    (?:\s*(?P<era>BCE|BC|CE|AD))?
    \s*$
    """,
    re.IGNORECASE | re.VERBOSE,
)


# =============================================================================
# CIVIL <-> DAY COUNT (exact integer arithmetic, floor division throughout)
# =============================================================================

def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    if month == 2:
        return 29 if is_leap_year(year) else 28
    if month in (4, 6, 9, 11):
        return 30
    return 31


def days_from_civil(year: int, month: int, day: int) -> int:
    """Day count relative to 1970-01-01. No range validation."""
    y = year - 1 if month <= 2 else year
    era = y // 400
    yoe = y - era * 400
    mp = month - 3 if month > 2 else month + 9
    doy = (153 * mp + 2) // 5 + day - 1
    doe = yoe * 365 + yoe // 4 - yoe // 100 + doy
    return era * _DAYS_PER_ERA + doe - _EPOCH_SHIFT


def civil_from_days(day_count: int) -> Tuple[int, int, int]:
    """Inverse of days_from_civil: (year, month, day)."""
    z = day_count + _EPOCH_SHIFT
    era = z // _DAYS_PER_ERA
    doe = z - era * _DAYS_PER_ERA
    yoe = (doe - doe // 1460 + doe // 36524 - doe // 146096) // 365
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)
    mp = (5 * doy + 2) // 153
    day = doy - (153 * mp + 2) // 5 + 1
    month = mp + 3 if mp < 10 else mp - 9
    year = yoe + era * 400 + (1 if month <= 2 else 0)
    return year, month, day


# Day counts of -YEAR_LIMIT-01-01 and +YEAR_LIMIT-12-31, the range parse() accepts.
MIN_DAY_COUNT = days_from_civil(-YEAR_LIMIT, 1, 1)
MAX_DAY_COUNT = days_from_civil(YEAR_LIMIT, 12, 31)


# =============================================================================
# CALENDAR DATE
# =============================================================================

@dataclass(frozen=True, order=True)
class CalendarDate:
    """
    Immutable calendar date.

    Ordering, equality and hashing all follow the day count, so dates sort
    and deduplicate like the integers they wrap.
    """
    day_count: int

    def __post_init__(self):
        if isinstance(self.day_count, bool) or not isinstance(self.day_count, int):
            raise TypeError("CalendarDate day_count must be an int")
        if not MIN_DAY_COUNT <= self.day_count <= MAX_DAY_COUNT:
            raise ValueError(f"day count {self.day_count} outside +/-{YEAR_LIMIT} years")

    @staticmethod
    def from_day_count(day_count: int) -> CalendarDate:
        return CalendarDate(day_count=int(day_count))

    @staticmethod
    def from_ymd(year: int, month: int, day: int) -> CalendarDate:
        """Build from astronomical year, month, day. Raises ValueError if invalid."""
        if abs(year) > YEAR_LIMIT:
            raise ValueError(f"year {year} outside +/-{YEAR_LIMIT}")
        if not 1 <= month <= 12:
            raise ValueError(f"invalid month {month}")
        if not 1 <= day <= days_in_month(year, month):
            raise ValueError(f"invalid day {day} for {year}-{month:02d}")
        return CalendarDate(day_count=days_from_civil(year, month, day))

    @staticmethod
    def parse(text: Any) -> Optional[CalendarDate]:
        """
        Parse a calendar string into a date.

        Accepts YYYY-MM-DD, YYYY-MM and YYYY with an optional sign, an
        ignored ISO time suffix, or a BCE/BC/CE/AD era suffix on an
        unsigned year. Returns None for anything else.
        """
        if text is None or isinstance(text, bool):
            return None
        match = _DATE_RE.match(str(text))
        if not match:
            return None

        sign = match.group('sign')
        era = (match.group('era') or '').upper()
        year_digits = match.group('year').lstrip('0') or '0'
        if len(year_digits) > len(str(YEAR_LIMIT)):
            return None
        year = int(year_digits)
        month = int(match.group('month') or 1)
        day = int(match.group('day') or 1)

        if era:
            if sign:
                return None
            if era in ('BCE', 'BC'):
                if year == 0:
                    return None
                year = 1 - year
        elif sign == '-':
            year = -year

        try:
            return CalendarDate.from_ymd(year, month, day)
        except ValueError:
            return None

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def days_from_epoch(self) -> int:
        return self.day_count

    def ymd(self) -> Tuple[int, int, int]:
        return civil_from_days(self.day_count)

    @property
    def year(self) -> int:
        return self.ymd()[0]

    @property
    def month(self) -> int:
        return self.ymd()[1]

    @property
    def day(self) -> int:
        return self.ymd()[2]

    def add_days(self, days: int) -> CalendarDate:
        return CalendarDate(day_count=self.day_count + int(days))

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def is_before(self, other: CalendarDate) -> bool:
        return self.day_count < other.day_count

    def is_after(self, other: CalendarDate) -> bool:
        return self.day_count > other.day_count

    def is_same_day(self, other: CalendarDate) -> bool:
        return self.day_count == other.day_count

    # -------------------------------------------------------------------------
    # Formatting
    # -------------------------------------------------------------------------

    def to_iso(self) -> str:
        """Canonical signed ISO form, e.g. 2024-03-15, -0043-03-15, +12345-01-01."""
        year, month, day = self.ymd()
        return f"{format_iso_year(year)}-{month:02d}-{day:02d}"

    def __str__(self) -> str:
        return self.to_iso()


def format_iso_year(year: int) -> str:
    if year < 0:
        return f"-{-year:04d}"
    if year > 9999:
        return f"+{year}"
    return f"{year:04d}"


def era_year_label(year: int) -> str:
    """Astronomical year to a human era label: 2024, 44 BCE."""
    if year <= 0:
        return f"{1 - year} BCE"
    return str(year)


# =============================================================================
# DISPLAY FORMATTING
# =============================================================================

class DateFormat(Enum):
    """Display formats selectable in configuration."""
    ISO = "YYYY-MM-DD"
    DMY = "DD/MM/YYYY"
    MDY = "MM/DD/YYYY"
    LONG = "D MMM YYYY"


class DateFormatter:
    """
    Formats dates for display in one injected format.

    Only DateFormat.ISO output is guaranteed to parse back; the other
    formats are for labels.
    """

    def __init__(self, date_format: DateFormat = DateFormat.ISO):
        self._format = date_format

    @property
    def date_format(self) -> DateFormat:
        return self._format

    def format(self, date: CalendarDate) -> str:
        if self._format is DateFormat.ISO:
            return date.to_iso()

        year, month, day = date.ymd()
        if year <= 0:
            year_text, suffix = str(1 - year), " BCE"
        else:
            year_text, suffix = f"{year:04d}", ""

        if self._format is DateFormat.DMY:
            return f"{day:02d}/{month:02d}/{year_text}{suffix}"
        if self._format is DateFormat.MDY:
            return f"{month:02d}/{day:02d}/{year_text}{suffix}"
        return f"{day} {MONTH_ABBR[month - 1]} {year_text}{suffix}"

    def format_day(self, day_count: int) -> str:
        return self.format(CalendarDate.from_day_count(day_count))

    def __repr__(self) -> str:
        return f"DateFormatter({self._format.name})"

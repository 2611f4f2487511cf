"""
Calendar Date Tests
===================

INVARIANTS TESTED:
1. Day 0 is 1970-01-01 and day counts are exact ints
2. parse() accepts ISO, partial, signed and era forms and never raises
3. to_iso() output always parses back to the same day
4. Display formats are injected, not global
"""

import pytest

from deeptime.temporal.calendar import (
    MAX_DAY_COUNT, MIN_DAY_COUNT, YEAR_LIMIT, CalendarDate, DateFormat, DateFormatter,
    civil_from_days, days_from_civil, days_in_month, era_year_label,
    format_iso_year, is_leap_year,
)


# =============================================================================
# CIVIL ARITHMETIC
# =============================================================================

class TestCivilArithmetic:
    """Integer conversions between (year, month, day) and day counts."""

    def test_epoch_is_day_zero(self):
        assert days_from_civil(1970, 1, 1) == 0
        assert civil_from_days(0) == (1970, 1, 1)

    def test_known_days(self):
        assert days_from_civil(1969, 12, 31) == -1
        assert days_from_civil(2000, 1, 1) == 10957
        assert days_from_civil(2024, 1, 1) == 19723
        assert days_from_civil(2024, 3, 15) == 19797

    def test_leap_years(self):
        assert is_leap_year(2000)
        assert is_leap_year(2024)
        assert not is_leap_year(1900)
        assert not is_leap_year(2023)
        # astronomical year 0 (1 BCE) is a leap year
        assert is_leap_year(0)
        assert is_leap_year(-4)

    def test_days_in_month(self):
        assert days_in_month(2024, 2) == 29
        assert days_in_month(2023, 2) == 28
        assert days_in_month(2023, 4) == 30
        assert days_in_month(2023, 12) == 31

    def test_negative_years_round_trip(self):
        for ymd in [(-43, 3, 15), (0, 2, 29), (-1, 12, 31), (-10_000_000_000, 6, 30)]:
            assert civil_from_days(days_from_civil(*ymd)) == ymd


# =============================================================================
# CONSTRUCTION
# =============================================================================

class TestCalendarDateConstruction:

    def test_from_ymd(self):
        date = CalendarDate.from_ymd(2024, 3, 15)
        assert date.day_count == 19797
        assert date.ymd() == (2024, 3, 15)
        assert (date.year, date.month, date.day) == (2024, 3, 15)

    def test_from_ymd_rejects_invalid_dates(self):
        with pytest.raises(ValueError):
            CalendarDate.from_ymd(2023, 2, 29)
        with pytest.raises(ValueError):
            CalendarDate.from_ymd(2023, 13, 1)
        with pytest.raises(ValueError):
            CalendarDate.from_ymd(2023, 1, 0)
        with pytest.raises(ValueError):
            CalendarDate.from_ymd(YEAR_LIMIT + 1, 1, 1)

    def test_day_count_must_be_int(self):
        with pytest.raises(TypeError):
            CalendarDate(day_count=1.5)
        with pytest.raises(TypeError):
            CalendarDate(day_count=True)

    def test_day_count_must_stay_within_year_limit(self):
        with pytest.raises(ValueError):
            CalendarDate(day_count=2 ** 63 - 1)
        with pytest.raises(ValueError):
            CalendarDate(day_count=MAX_DAY_COUNT + 1)
        with pytest.raises(ValueError):
            CalendarDate.from_day_count(MIN_DAY_COUNT - 1)

    @pytest.mark.parametrize("day_count", [MIN_DAY_COUNT, MAX_DAY_COUNT])
    def test_extreme_dates_round_trip(self, day_count):
        date = CalendarDate.from_day_count(day_count)
        assert CalendarDate.parse(date.to_iso()) == date
        assert abs(date.year) == YEAR_LIMIT

    def test_year_limit_is_representable(self):
        date = CalendarDate.from_ymd(YEAR_LIMIT, 12, 31)
        assert date.year == YEAR_LIMIT
        assert CalendarDate.from_ymd(-YEAR_LIMIT, 1, 1).year == -YEAR_LIMIT

    def test_add_days(self):
        date = CalendarDate.from_ymd(2024, 2, 28)
        assert date.add_days(1).ymd() == (2024, 2, 29)
        assert date.add_days(2).ymd() == (2024, 3, 1)
        assert date.add_days(-59).ymd() == (2023, 12, 31)


# =============================================================================
# PARSING
# =============================================================================

class TestCalendarDateParse:
    """parse() returns None for anything it cannot read."""

    def test_full_date(self):
        assert CalendarDate.parse("2024-03-15").day_count == 19797

    def test_partial_dates_default_to_first(self):
        assert CalendarDate.parse("2024-03") == CalendarDate.from_ymd(2024, 3, 1)
        assert CalendarDate.parse("2024") == CalendarDate.from_ymd(2024, 1, 1)

    def test_single_digit_month_and_day(self):
        assert CalendarDate.parse("2024-3-5") == CalendarDate.from_ymd(2024, 3, 5)

    def test_signed_years(self):
        assert CalendarDate.parse("-0043-03-15").ymd() == (-43, 3, 15)
        assert CalendarDate.parse("+12345-01-01").year == 12345
        assert CalendarDate.parse("-4500000000").year == -4_500_000_000

    def test_time_suffix_is_ignored(self):
        expected = CalendarDate.parse("2024-03-15")
        assert CalendarDate.parse("2024-03-15T10:30:00Z") == expected
        assert CalendarDate.parse("2024-03-15T10:30") == expected
        assert CalendarDate.parse("2024-03-15T23:59:59.123+02:00") == expected

    def test_era_suffixes(self):
        assert CalendarDate.parse("44 BCE").year == -43
        assert CalendarDate.parse("44 bc").year == -43
        assert CalendarDate.parse("1 BCE").year == 0
        assert CalendarDate.parse("2024 AD").year == 2024
        assert CalendarDate.parse("2024 CE").year == 2024
        assert CalendarDate.parse("0044-03-15 BCE").ymd() == (-43, 3, 15)

    def test_invalid_era_combinations(self):
        assert CalendarDate.parse("0 BCE") is None
        assert CalendarDate.parse("-44 BCE") is None
        assert CalendarDate.parse("+44 AD") is None

    def test_integer_input_from_frontmatter(self):
        assert CalendarDate.parse(2024) == CalendarDate.from_ymd(2024, 1, 1)
        assert CalendarDate.parse(-500).year == -500

    @pytest.mark.parametrize("text", [
        "", "   ", "abc", "2024-13-01", "2023-02-29", "2024-00-10",
        "2024-01-32", "2024/01/01", "2024-01-01-01", "--2024",
        "100000000001", "9" * 5000,
    ])
    def test_malformed_returns_none(self, text):
        assert CalendarDate.parse(text) is None

    def test_non_text_returns_none(self):
        assert CalendarDate.parse(None) is None
        assert CalendarDate.parse(True) is None
        assert CalendarDate.parse(2024.5) is None


# =============================================================================
# ORDERING AND FORMATTING
# =============================================================================

class TestCalendarDateOrdering:

    def test_comparisons(self):
        a = CalendarDate.from_ymd(-43, 3, 15)
        b = CalendarDate.from_ymd(2024, 3, 15)
        assert a.is_before(b)
        assert b.is_after(a)
        assert a.is_same_day(CalendarDate.parse("44-03-15 BCE"))
        assert sorted([b, a]) == [a, b]

    def test_hash_follows_day_count(self):
        assert len({CalendarDate(5), CalendarDate(5), CalendarDate(6)}) == 2


class TestIsoFormatting:

    def test_year_padding_and_sign(self):
        assert format_iso_year(2024) == "2024"
        assert format_iso_year(44) == "0044"
        assert format_iso_year(0) == "0000"
        assert format_iso_year(-43) == "-0043"
        assert format_iso_year(12345) == "+12345"

    def test_to_iso(self):
        assert CalendarDate.from_ymd(2024, 3, 15).to_iso() == "2024-03-15"
        assert CalendarDate.from_ymd(-43, 3, 15).to_iso() == "-0043-03-15"
        assert str(CalendarDate.from_ymd(12345, 1, 1)) == "+12345-01-01"

    def test_era_year_label(self):
        assert era_year_label(2024) == "2024"
        assert era_year_label(0) == "1 BCE"
        assert era_year_label(-43) == "44 BCE"


class TestDateFormatter:
    """The display format is chosen per formatter instance."""

    def test_default_is_iso(self):
        formatter = DateFormatter()
        assert formatter.date_format is DateFormat.ISO
        assert formatter.format_day(19797) == "2024-03-15"

    @pytest.mark.parametrize("date_format,expected", [
        (DateFormat.ISO, "2024-03-15"),
        (DateFormat.DMY, "15/03/2024"),
        (DateFormat.MDY, "03/15/2024"),
        (DateFormat.LONG, "15 Mar 2024"),
    ])
    def test_formats(self, date_format, expected):
        date = CalendarDate.from_ymd(2024, 3, 15)
        assert DateFormatter(date_format).format(date) == expected

    def test_bce_display(self):
        date = CalendarDate.from_ymd(-43, 3, 15)
        assert DateFormatter(DateFormat.LONG).format(date) == "15 Mar 44 BCE"
        assert DateFormatter(DateFormat.DMY).format(date) == "15/03/44 BCE"
        assert DateFormatter(DateFormat.ISO).format(date) == "-0043-03-15"

    def test_formatters_are_independent(self):
        iso = DateFormatter(DateFormat.ISO)
        long = DateFormatter(DateFormat.LONG)
        assert iso.format_day(0) == "1970-01-01"
        assert long.format_day(0) == "1 Jan 1970"
        assert iso.format_day(0) == "1970-01-01"

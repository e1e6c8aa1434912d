#!/usr/bin/env python3
"""
Unit tests for the fiscal year resolver.

Tests year boundaries, the 52/53-week rule, contiguity and the rejection of
years before the anchor.
"""

import pytest
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fiscal.constants import ANCHOR, ANCHOR_FISCAL_YEAR, FINEST_UNIT
from fiscal.errors import FiscalCalendarError, UnsupportedYearError
from fiscal.year_resolver import is_leap_year, next_year_start, resolve_year, years_between


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


class TestAnchorYear:
    """Test the first fiscal year, which starts at the anchor."""

    def test_anchor_constant(self):
        """Anchor is midnight UTC on 25 September 2005."""
        assert ANCHOR == utc(2005, 9, 25)
        assert ANCHOR.microsecond == 0
        assert ANCHOR_FISCAL_YEAR == 2006

    def test_anchor_year_is_53_weeks(self):
        """52-week projection lands on Sep 24, so the year gets a 53rd week."""
        year = resolve_year(ANCHOR_FISCAL_YEAR)

        assert year.start == ANCHOR
        assert year.end == ANCHOR + timedelta(days=371) - FINEST_UNIT
        assert year.days == 371
        assert year.weeks == 53
        assert year.is_leap

    def test_unpacks_as_start_end(self):
        """Resolved years unpack into (start, end)."""
        start, end = resolve_year(2006)

        assert start == utc(2005, 9, 25)
        assert end == utc(2006, 9, 30, 23, 59, 59, 999999)


class TestKnownYears:
    """Test year boundaries computed by hand from the 52/53-week rule."""

    @pytest.mark.parametrize("number,start,last_day,days", [
        (2007, (2006, 10, 1), (2007, 9, 29), 364),
        (2008, (2007, 9, 30), (2008, 9, 27), 364),
        (2011, (2010, 9, 26), (2011, 9, 24), 364),
        (2012, (2011, 9, 25), (2012, 9, 29), 371),
        (2016, (2015, 9, 27), (2016, 9, 24), 364),
        (2017, (2016, 9, 25), (2017, 9, 30), 371),
        (2020, (2019, 9, 29), (2020, 9, 26), 364),
        (2023, (2022, 9, 25), (2023, 9, 30), 371),
        (2024, (2023, 10, 1), (2024, 9, 28), 364),
    ])
    def test_year_boundaries(self, number, start, last_day, days):
        """Test start, last day and length of selected years."""
        year = resolve_year(number)

        assert year.number == number
        assert year.start == utc(*start)
        assert year.end == utc(*last_day, 23, 59, 59, 999999)
        assert year.days == days

    def test_leap_years_2006_to_2024(self):
        """Only 2006, 2012, 2017 and 2023 have 53 weeks in this range."""
        leap = [y for y in range(2006, 2025) if is_leap_year(y)]
        assert leap == [2006, 2012, 2017, 2023]

    def test_year_ends_in_named_calendar_year(self):
        """Fiscal year N always ends in calendar year N."""
        for year in years_between(2006, 2100):
            assert year.end.year == year.number


class TestYearRule:
    """Test the 52/53-week decision rule and contiguity."""

    def test_next_year_start_adds_week_before_25th(self):
        """A projection landing before the 25th is pushed one week."""
        assert next_year_start(utc(2005, 9, 25)) == utc(2006, 10, 1)
        assert next_year_start(utc(2006, 10, 1)) == utc(2007, 9, 30)

    def test_years_are_contiguous(self):
        """Each year ends one microsecond before the next starts."""
        for number in range(2006, 2150):
            assert resolve_year(number).end + FINEST_UNIT == resolve_year(number + 1).start

    def test_year_lengths(self):
        """Every year is 364 or 371 days and starts on a Sunday."""
        for year in years_between(2006, 2200):
            assert year.days in (364, 371)
            assert year.is_leap == (year.days == 371)
            assert year.start.weekday() == 6

    def test_leap_iff_projection_before_25th(self):
        """Leap years are exactly those whose 364-day projection lands before the 25th."""
        for year in years_between(2006, 2200):
            projected = year.start + timedelta(days=364)
            assert year.is_leap == (projected.day < 25)

    def test_years_between_matches_resolve_year(self):
        """Chained resolution agrees with resolving each year from the anchor."""
        chained = years_between(2010, 2040)

        assert [y.number for y in chained] == list(range(2010, 2041))
        assert chained == [resolve_year(n) for n in range(2010, 2041)]

    def test_years_between_empty_range(self):
        """Reversed range gives no years."""
        assert years_between(2020, 2010) == []

    def test_far_future_year(self):
        """Far future years still resolve."""
        year = resolve_year(2500)
        assert year.end.year == 2500
        assert year.days in (364, 371)


class TestInvalidYears:
    """Test rejection of unsupported input."""

    @pytest.mark.parametrize("number", [2005, 2000, 0, -1])
    def test_year_before_anchor(self, number):
        """Years before the anchor year are rejected explicitly."""
        with pytest.raises(UnsupportedYearError, match="before the first supported fiscal year"):
            resolve_year(number)

    def test_error_hierarchy(self):
        """UnsupportedYearError is both a calendar error and a ValueError."""
        with pytest.raises(FiscalCalendarError):
            resolve_year(1999)
        with pytest.raises(ValueError):
            resolve_year(1999)

    def test_error_carries_year(self):
        """The rejected year is attached to the error."""
        with pytest.raises(UnsupportedYearError) as exc_info:
            resolve_year(1995)
        assert exc_info.value.year == 1995

    @pytest.mark.parametrize("number", ["2006", 2006.0, None, True])
    def test_non_integer_year(self, number):
        """Non-integer year numbers raise TypeError."""
        with pytest.raises(TypeError, match="Fiscal year must be an integer"):
            resolve_year(number)


class TestPurity:
    """Test that resolution is a pure function."""

    def test_repeated_calls_identical(self):
        """Repeated calls return equal values."""
        first = resolve_year(2031)
        for _ in range(5):
            assert resolve_year(2031) == first

    def test_year_is_immutable(self):
        """FiscalYear values are frozen."""
        year = resolve_year(2006)
        with pytest.raises(AttributeError):
            year.number = 2007

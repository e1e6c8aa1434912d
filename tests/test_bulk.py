#!/usr/bin/env python3
"""
Unit tests for vectorised date classification.
"""

import numpy as np
import pytest
import sys
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fiscal.bulk import classify_dates, period_boundaries
from fiscal.classifier import period_for_date, quarter_for_date
from fiscal.errors import UnsupportedYearError
from fiscal.period_resolver import resolve_period
from fiscal.quarter_resolver import resolve_quarter
from fiscal.year_resolver import resolve_year


class TestPeriodBoundaries:
    """Test the boundary lookup table."""

    def test_shape(self):
        starts, years, periods = period_boundaries(2020, 2022)

        assert len(starts) == 37  # 36 periods plus the closing boundary
        assert len(years) == len(periods) == 36
        assert starts.dtype == np.dtype("datetime64[us]")
        assert list(periods[:12]) == list(range(1, 13))

    def test_sorted(self):
        starts, _, _ = period_boundaries(2006, 2030)
        assert np.all(np.diff(starts) > np.timedelta64(0, "us"))

    def test_closing_boundary(self):
        starts, _, _ = period_boundaries(2024, 2024)
        assert starts[-1] == np.datetime64("2024-09-29T00:00:00", "us")

    def test_reversed_range(self):
        with pytest.raises(ValueError, match="is before first fiscal year"):
            period_boundaries(2024, 2020)


class TestClassifyDates:
    """Test bulk classification against the scalar classifier."""

    def test_agrees_with_scalar(self):
        days = [date(2005, 9, 25) + timedelta(days=i) for i in range(0, 6000, 3)]
        years, quarters, periods = classify_dates(days)

        for day, y, q, p in zip(days, years, quarters, periods):
            assert (y, p) == period_for_date(day)
            assert (y, q) == quarter_for_date(day)

    def test_datetimes_with_time_zones(self):
        eastern = timezone(timedelta(hours=-5))
        values = [
            datetime(2005, 12, 31, 21, 0, tzinfo=eastern),  # 2006-01-01 UTC
            datetime(2024, 4, 10, 12, 0),
        ]
        years, quarters, periods = classify_dates(values)

        assert list(years) == [2006, 2024]
        assert list(quarters) == [2, 3]
        assert list(periods) == [4, 7]

    def test_empty_input(self):
        years, quarters, periods = classify_dates([])
        assert len(years) == len(quarters) == len(periods) == 0

    def test_outside_explicit_range(self):
        with pytest.raises(UnsupportedYearError, match="outside fiscal years 2020-2021"):
            classify_dates([date(2024, 1, 1)], first=2020, last=2021)

    def test_before_anchor(self):
        with pytest.raises(UnsupportedYearError):
            classify_dates([date(2000, 1, 1)])


class TestResultsFeedResolvers:
    """Test that bulk results can be passed straight back to the resolvers."""

    def test_resolve_period_from_numpy_ints(self):
        years, quarters, periods = classify_dates([date(2024, 4, 10)])

        period = resolve_period(years[0], periods[0])
        assert period == resolve_period(2024, 7)
        assert type(period.year) is int
        assert type(period.index) is int

    def test_resolve_quarter_and_year_from_numpy_ints(self):
        years, quarters, _ = classify_dates([date(2024, 4, 10)])

        assert resolve_quarter(years[0], quarters[0]) == resolve_quarter(2024, 3)
        assert resolve_year(years[0]).number == 2024
        assert type(resolve_year(years[0]).number) is int

    def test_numpy_year_before_anchor_rejected(self):
        with pytest.raises(UnsupportedYearError, match="Fiscal year 2005"):
            resolve_year(np.int64(2005))

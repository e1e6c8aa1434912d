"""Value types for fiscal years, quarters, periods and weeks.

All spans are closed intervals ``[start, end]`` where ``end`` is the last
microsecond before the next span starts. Spans unpack into
``(start, end)`` pairs::

    start, end = resolve_year(2006)
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from .constants import FINEST_UNIT, NORMAL_YEAR_DAYS


@dataclass(frozen=True)
class FiscalSpan:
    start: datetime
    end: datetime

    def __iter__(self):
        yield self.start
        yield self.end

    @property
    def length(self) -> timedelta:
        """Exact length of the span (end is inclusive)."""
        return self.end + FINEST_UNIT - self.start

    @property
    def days(self) -> int:
        """Length of the span in whole days."""
        return self.length.days

    def contains(self, instant: datetime) -> bool:
        """True if ``instant`` lies inside the span, boundaries included."""
        return self.start <= instant <= self.end


@dataclass(frozen=True)
class FiscalYear(FiscalSpan):
    """A 52 or 53 week fiscal year."""

    number: int = 0

    @property
    def weeks(self) -> int:
        return self.days // 7

    @property
    def is_leap(self) -> bool:
        """True for 53-week (371 day) years."""
        return self.days > NORMAL_YEAR_DAYS

    def __repr__(self) -> str:
        return (
            f"FiscalYear(number={self.number}, start={self.start.isoformat()}, "
            f"end={self.end.isoformat()}, weeks={self.weeks})"
        )


@dataclass(frozen=True)
class FiscalQuarter(FiscalSpan):
    """Quarter 1-4 of a fiscal year; 91 days, or 98 for Q1 of a leap year."""

    year: int = 0
    index: int = 1

    def __repr__(self) -> str:
        return (
            f"FiscalQuarter(year={self.year}, index={self.index}, "
            f"start={self.start.isoformat()}, end={self.end.isoformat()})"
        )


@dataclass(frozen=True)
class FiscalPeriod(FiscalSpan):
    """Period 1-12 of a fiscal year (roughly a month, 28 or 35 days)."""

    year: int = 0
    index: int = 1

    @property
    def quarter(self) -> int:
        """Quarter (1-4) this period belongs to."""
        return (self.index - 1) // 3 + 1

    def __repr__(self) -> str:
        return (
            f"FiscalPeriod(year={self.year}, index={self.index}, "
            f"start={self.start.isoformat()}, end={self.end.isoformat()})"
        )


@dataclass(frozen=True)
class FiscalWeek(FiscalSpan):
    """Week 1-52 (or 53) of a fiscal year."""

    year: int = 0
    index: int = 1

    def __repr__(self) -> str:
        return (
            f"FiscalWeek(year={self.year}, index={self.index}, "
            f"start={self.start.isoformat()}, end={self.end.isoformat()})"
        )

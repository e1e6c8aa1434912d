"""Day-by-day fiscal calendar table.

Fiscal Year (FY) is named after the calendar year it ends in and runs 52 or
53 whole weeks from late September.
Example: FY2006 = Sep 25, 2005 through Sep 30, 2006 (53 weeks)

Quarters hold three periods of 5, 4 and 4 weeks:
- Q1: P1-P3 (P3 is 5 weeks in a 53-week year)
- Q2: P4-P6
- Q3: P7-P9
- Q4: P10-P12
"""

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, List, Optional

from .constants import ANCHOR_FISCAL_YEAR
from .period_resolver import periods_of_year
from .quarter_resolver import quarters_of_year
from .spans import FiscalPeriod, FiscalQuarter, FiscalYear
from .year_resolver import years_between

logger = logging.getLogger(__name__)


@dataclass
class FiscalDay:
    """Single day in the fiscal calendar."""

    date: date
    cal_year: int
    cal_month: int
    cal_day: int
    dow: str  # "Sunday", "Monday", ...

    # Fiscal position
    fiscal_year: int
    fiscal_quarter: int  # 1-4
    fiscal_period: int  # 1-12
    fiscal_week: int  # 1-52 (or 53)
    is_leap_year: bool  # 53-week fiscal year

    # Progress tracking (day 1 = first day)
    day_of_year: int
    days_into_quarter: int
    days_into_period: int
    fy_progress: float  # 0.0-1.0
    quarter_progress: float  # 0.0-1.0

    # Boundary flags
    is_period_start: bool
    is_period_end: bool
    is_quarter_start: bool
    is_quarter_end: bool
    is_fy_start: bool
    is_fy_end: bool


class FiscalCalendar:
    """Fiscal calendar covering one or more consecutive fiscal years.

    Builds one FiscalDay per calendar day and provides lookup methods.
    """

    def __init__(self, start_fy: int = ANCHOR_FISCAL_YEAR, num_years: int = 1):
        """Initialize fiscal calendar.

        Args:
            start_fy: First fiscal year covered (2006 or later)
            num_years: Number of consecutive fiscal years to cover

        Raises:
            ValueError: If num_years is not positive
            UnsupportedYearError: If start_fy is before 2006
        """
        if num_years < 1:
            raise ValueError("Number of fiscal years must be positive")

        self.start_fy = start_fy
        self.num_years = num_years

        self._years: List[FiscalYear] = years_between(start_fy, start_fy + num_years - 1)
        self._quarters: Dict[int, List[FiscalQuarter]] = {
            y.number: quarters_of_year(y.number) for y in self._years
        }
        self._periods: Dict[int, List[FiscalPeriod]] = {
            y.number: periods_of_year(y.number) for y in self._years
        }

        self.calendar: List[FiscalDay] = self._build_calendar()
        self._index: Dict[date, int] = {d.date: i for i, d in enumerate(self.calendar)}

        self.metadata = {
            "start_date": self.calendar[0].date,
            "end_date": self.calendar[-1].date,
            "fiscal_years_covered": [y.number for y in self._years],
            "leap_years": [y.number for y in self._years if y.is_leap],
            "total_days": len(self.calendar),
        }
        logger.debug("Built fiscal calendar %r", self)

    def _build_calendar(self) -> List[FiscalDay]:
        """Build complete day table."""
        calendar = []
        for year in self._years:
            for quarter in self._quarters[year.number]:
                for period in self._periods[year.number][(quarter.index - 1) * 3:quarter.index * 3]:
                    for offset in range(period.days):
                        current = period.start.date() + timedelta(days=offset)
                        calendar.append(self._build_fiscal_day(current, year, quarter, period))
        return calendar

    def _build_fiscal_day(
        self,
        current: date,
        year: FiscalYear,
        quarter: FiscalQuarter,
        period: FiscalPeriod,
    ) -> FiscalDay:
        """Build FiscalDay object for a single date."""
        day_of_year = (current - year.start.date()).days + 1
        days_into_quarter = (current - quarter.start.date()).days + 1
        days_into_period = (current - period.start.date()).days + 1

        return FiscalDay(
            date=current,
            cal_year=current.year,
            cal_month=current.month,
            cal_day=current.day,
            dow=current.strftime("%A"),
            fiscal_year=year.number,
            fiscal_quarter=quarter.index,
            fiscal_period=period.index,
            fiscal_week=(day_of_year - 1) // 7 + 1,
            is_leap_year=year.is_leap,
            day_of_year=day_of_year,
            days_into_quarter=days_into_quarter,
            days_into_period=days_into_period,
            fy_progress=(day_of_year - 1) / year.days,
            quarter_progress=(days_into_quarter - 1) / quarter.days,
            is_period_start=days_into_period == 1,
            is_period_end=days_into_period == period.days,
            is_quarter_start=days_into_quarter == 1,
            is_quarter_end=days_into_quarter == quarter.days,
            is_fy_start=day_of_year == 1,
            is_fy_end=day_of_year == year.days,
        )

    # Lookup methods

    def get_day(self, day: date) -> Optional[FiscalDay]:
        """Get fiscal day information for a calendar date.

        Args:
            day: Calendar date

        Returns:
            FiscalDay object or None if outside the covered years
        """
        i = self._index.get(day)
        return self.calendar[i] if i is not None else None

    def years(self) -> List[FiscalYear]:
        """Fiscal years covered, in order."""
        return list(self._years)

    def quarters(self, fiscal_year: int) -> List[FiscalQuarter]:
        """Quarters of a covered fiscal year (empty if not covered)."""
        return list(self._quarters.get(fiscal_year, []))

    def periods(self, fiscal_year: int) -> List[FiscalPeriod]:
        """Periods of a covered fiscal year (empty if not covered)."""
        return list(self._periods.get(fiscal_year, []))

    def _changed(self, day: date, attr: str) -> bool:
        current = self.get_day(day)
        if current is None:
            return False
        previous = self.get_day(day - timedelta(days=1))
        if previous is None:
            return True  # First covered day always starts a new span
        return getattr(current, attr) != getattr(previous, attr)

    def is_new_period(self, day: date) -> bool:
        """Check if date is the first day of a fiscal period."""
        return self._changed(day, "fiscal_period")

    def is_new_quarter(self, day: date) -> bool:
        """Check if date is the first day of a fiscal quarter."""
        return self._changed(day, "fiscal_quarter")

    def is_new_fy(self, day: date) -> bool:
        """Check if date is the first day of a fiscal year."""
        return self._changed(day, "fiscal_year")

    def __len__(self) -> int:
        return len(self.calendar)

    def __iter__(self):
        return iter(self.calendar)

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"FiscalCalendar(start_fy={self.start_fy}, num_years={self.num_years}, "
            f"start_date={self.metadata['start_date']}, "
            f"end_date={self.metadata['end_date']})"
        )

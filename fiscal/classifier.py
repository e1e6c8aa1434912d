"""Classify calendar dates into fiscal years, quarters, periods and weeks.

The containing fiscal year is found from the calendar year of the date. For
quarters and periods a first guess is made from the number of days since
the year started, divided by the longest possible span (98 days for a
quarter, 35 for a period). The guess is at most one span too high, so the
scan starts one span earlier, only moves forward, and stops at the last
index of the year.
"""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Tuple, Union

from .constants import (
    ANCHOR,
    ANCHOR_FISCAL_YEAR,
    FINEST_UNIT,
    MAX_PERIOD_DAYS,
    MAX_QUARTER_DAYS,
    PERIODS_PER_YEAR,
    QUARTERS_PER_YEAR,
)
from .errors import ClassificationError, UnsupportedYearError
from .period_resolver import resolve_period
from .quarter_resolver import resolve_quarter
from .spans import FiscalPeriod, FiscalQuarter, FiscalWeek, FiscalYear, FiscalSpan
from .year_resolver import resolve_year

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]

_HOUR = timedelta(hours=1)
_HALF_HOUR = timedelta(minutes=30)


def to_instant(value: DateLike) -> datetime:
    """Normalise a date or datetime into an aware UTC datetime.

    Dates become midnight UTC, naive datetimes are taken to be UTC and aware
    datetimes are converted to UTC.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    raise TypeError(f"Expected a date or datetime, got {type(value).__name__}")


def _containing_year(instant: datetime) -> FiscalYear:
    if instant < ANCHOR:
        raise UnsupportedYearError(
            f"{instant.isoformat()} is before the start of fiscal year "
            f"{ANCHOR_FISCAL_YEAR} ({ANCHOR.date().isoformat()})",
            year=instant.year,
        )
    year = resolve_year(max(instant.year, ANCHOR_FISCAL_YEAR))
    if year.end < instant:
        return resolve_year(year.number + 1)
    return year


def _days_since_start(instant: datetime, start: datetime) -> int:
    # Round to the nearest hour before truncating to whole days
    hours = (instant - start + _HALF_HOUR) // _HOUR
    return hours // 24


def _scan(
    instant: datetime,
    year: FiscalYear,
    seed: int,
    last: int,
    resolve: Callable[[int, int], FiscalSpan],
    unit: str,
) -> FiscalSpan:
    logger.debug("Scanning %ss of FY%d from seed %d", unit, year.number, seed)
    # Rounding to the hour can carry an instant in the last half hour of a
    # span into the next day, so the seed may be one too high
    for index in range(max(seed - 1, 1), last + 1):
        span = resolve(year.number, index)
        if span.contains(instant):
            return span
    raise ClassificationError(
        f"No {unit} of fiscal year {year.number} between {seed} and {last} "
        f"contains {instant.isoformat()}"
    )


def _quarter_containing(instant: datetime) -> FiscalQuarter:
    year = _containing_year(instant)
    days = _days_since_start(instant, year.start)
    return _scan(instant, year, 1 + days // MAX_QUARTER_DAYS, QUARTERS_PER_YEAR,
                 resolve_quarter, "quarter")


def _period_containing(instant: datetime) -> FiscalPeriod:
    year = _containing_year(instant)
    days = _days_since_start(instant, year.start)
    return _scan(instant, year, 1 + days // MAX_PERIOD_DAYS, PERIODS_PER_YEAR,
                 resolve_period, "period")


def resolve_week(number: int, index: int) -> FiscalWeek:
    """Return week ``index`` of fiscal year ``number``, clamped to the year."""
    year = resolve_year(number)
    index = int(min(max(index, 1), year.weeks))
    start = year.start + timedelta(weeks=index - 1)
    return FiscalWeek(
        start=start,
        end=start + timedelta(weeks=1) - FINEST_UNIT,
        year=year.number,
        index=index,
    )


def _week_containing(instant: datetime) -> FiscalWeek:
    year = _containing_year(instant)
    # Weeks have no irregularity, so the index is exact
    index = (instant - year.start) // timedelta(weeks=1) + 1
    return resolve_week(year.number, index)


def year_for_date(value: DateLike) -> int:
    """Return the fiscal year containing ``value``.

    Example:
        >>> year_for_date(date(2006, 10, 1))
        2007
    """
    return _containing_year(to_instant(value)).number


def quarter_for_date(value: DateLike) -> Tuple[int, int]:
    """Return ``(fiscal_year, quarter)`` for the quarter containing ``value``."""
    quarter = _quarter_containing(to_instant(value))
    return quarter.year, quarter.index


def period_for_date(value: DateLike) -> Tuple[int, int]:
    """Return ``(fiscal_year, period)`` for the period containing ``value``."""
    period = _period_containing(to_instant(value))
    return period.year, period.index


def week_for_date(value: DateLike) -> Tuple[int, int]:
    """Return ``(fiscal_year, week)`` for the week containing ``value``."""
    week = _week_containing(to_instant(value))
    return week.year, week.index


SPAN_UNITS = {
    "year": _containing_year,
    "quarter": _quarter_containing,
    "period": _period_containing,
    "week": _week_containing,
}


def span_for_date(value: DateLike, unit: str = "period") -> FiscalSpan:
    """Return the fiscal span object of the given unit containing ``value``.

    Args:
        value: Date or datetime to classify
        unit: One of 'year', 'quarter', 'period', 'week'

    Raises:
        ValueError: If ``unit`` is unknown
    """
    if unit not in SPAN_UNITS:
        raise ValueError(f"Unknown span unit '{unit}'. Must be one of: {list(SPAN_UNITS)}")
    return SPAN_UNITS[unit](to_instant(value))

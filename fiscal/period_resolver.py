"""Fiscal period boundaries.

Each quarter holds three periods of 5, 4 and 4 weeks. In a 53-week year
the third period (the last of Q1) grows to 5 weeks and every later period
shifts one week.
"""

from typing import List

from .constants import DAY, FINEST_UNIT, PERIODS_PER_QUARTER, PERIODS_PER_YEAR
from .quarter_resolver import clamp_quarter
from .spans import FiscalPeriod
from .year_resolver import resolve_year


def clamp_period(index: int) -> int:
    """Clamp a period index into 1..12."""
    return int(min(max(index, 1), PERIODS_PER_YEAR))


def resolve_period(number: int, index: int) -> FiscalPeriod:
    """Return the start and end of period ``index`` of fiscal year ``number``.

    Out-of-range indices are clamped to 1..12 rather than rejected.

    Args:
        number: Fiscal year (2006 or later)
        index: Period within the year

    Returns:
        FiscalPeriod ending on the last microsecond before the next period
    """
    year = resolve_year(number)
    index = clamp_period(index)
    p = index - 1

    start_days = p * 28 + ((p + 2) // 3) * 7
    end_days = (p + 1) * 28 + ((p + 3) // 3) * 7
    if year.is_leap:
        # 3rd period is 35 days
        start_days += ((p + 9) // 12) * 7
        end_days += ((p + 10) // 12) * 7

    return FiscalPeriod(
        start=year.start + start_days * DAY,
        end=year.start + end_days * DAY - FINEST_UNIT,
        year=year.number,
        index=index,
    )


def periods_of_year(number: int) -> List[FiscalPeriod]:
    """All twelve periods of fiscal year ``number`` in order."""
    return [resolve_period(number, p) for p in range(1, PERIODS_PER_YEAR + 1)]


def periods_of_quarter(number: int, quarter: int) -> List[FiscalPeriod]:
    """The three periods making up ``quarter`` (clamped to 1..4)."""
    quarter = clamp_quarter(quarter)
    first = (quarter - 1) * PERIODS_PER_QUARTER + 1
    return [resolve_period(number, p) for p in range(first, first + PERIODS_PER_QUARTER)]

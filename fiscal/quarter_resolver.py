"""Fiscal quarter boundaries.

Quarters are 91 days. In a 53-week year the extra week belongs to the
first quarter (98 days); quarters 2-4 keep their length and shift one week.
"""

from typing import List

from .constants import DAY, FINEST_UNIT, QUARTER_DAYS, QUARTERS_PER_YEAR
from .spans import FiscalQuarter
from .year_resolver import resolve_year


def clamp_quarter(index: int) -> int:
    """Clamp a quarter index into 1..4."""
    return int(min(max(index, 1), QUARTERS_PER_YEAR))


def resolve_quarter(number: int, index: int) -> FiscalQuarter:
    """Return the start and end of quarter ``index`` of fiscal year ``number``.

    Out-of-range indices are clamped to 1..4 rather than rejected.

    Args:
        number: Fiscal year (2006 or later)
        index: Quarter within the year

    Returns:
        FiscalQuarter ending on the last microsecond before the next quarter
    """
    year = resolve_year(number)
    index = clamp_quarter(index)
    q = index - 1

    start_days = q * QUARTER_DAYS
    end_days = (q + 1) * QUARTER_DAYS
    if year.is_leap:
        # Q1 absorbs the leap week
        start_days += ((q + 3) // 4) * 7
        end_days += ((q + 4) // 4) * 7

    return FiscalQuarter(
        start=year.start + start_days * DAY,
        end=year.start + end_days * DAY - FINEST_UNIT,
        year=year.number,
        index=index,
    )


def quarters_of_year(number: int) -> List[FiscalQuarter]:
    """All four quarters of fiscal year ``number`` in order."""
    return [resolve_quarter(number, q) for q in range(1, QUARTERS_PER_YEAR + 1)]

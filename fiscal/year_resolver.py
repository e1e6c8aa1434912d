"""Fiscal year boundaries.

A fiscal year is 52 weeks unless the 52-week projection would end before
the 25th of the month, in which case a 53rd week is added. Years are found
by walking forward from the anchor one year at a time, so resolving a year
costs time linear in its distance from FY2006. Results are memoised.
"""

import logging
import numbers
from datetime import datetime
from functools import lru_cache
from typing import List, Tuple

from .constants import (
    ANCHOR,
    ANCHOR_FISCAL_YEAR,
    FINEST_UNIT,
    NORMAL_YEAR_DAYS,
    DAY,
    WEEK,
    YEAR_END_THRESHOLD_DAY,
)
from .errors import UnsupportedYearError
from .spans import FiscalYear

logger = logging.getLogger(__name__)


def next_year_start(start: datetime) -> datetime:
    """Return the start of the fiscal year following the one at ``start``."""
    end = start + NORMAL_YEAR_DAYS * DAY
    if end.day < YEAR_END_THRESHOLD_DAY:
        end += WEEK
    return end


@lru_cache(maxsize=256)
def _year_bounds(number: int) -> Tuple[datetime, datetime]:
    start = ANCHOR
    steps = 0
    while True:
        end = next_year_start(start)
        steps += 1
        if end.year >= number:
            logger.debug("Resolved FY%d after %d step(s) from anchor", number, steps)
            return start, end - FINEST_UNIT
        start = end


def check_year(number) -> int:
    """Validate a fiscal year number and return it as a plain int.

    Any integral type is accepted (numpy integers included), bool is not.

    Raises:
        TypeError: If ``number`` is not an integer
        UnsupportedYearError: If ``number`` is before the anchor year
    """
    if isinstance(number, bool) or not isinstance(number, numbers.Integral):
        raise TypeError(f"Fiscal year must be an integer, got {type(number).__name__}")
    if number < ANCHOR_FISCAL_YEAR:
        raise UnsupportedYearError(
            f"Fiscal year {number} is before the first supported fiscal year "
            f"{ANCHOR_FISCAL_YEAR}",
            year=int(number),
        )
    return int(number)


def resolve_year(number: int) -> FiscalYear:
    """Return the start and end of fiscal year ``number``.

    Args:
        number: Fiscal year, named after the calendar year it ends in
            (2006 or later)

    Returns:
        FiscalYear whose ``end`` is the last microsecond before the next
        fiscal year starts

    Raises:
        UnsupportedYearError: If ``number`` is before 2006

    Example:
        >>> start, end = resolve_year(2006)
        >>> start.date(), end.date()
        (datetime.date(2005, 9, 25), datetime.date(2006, 9, 30))
    """
    number = check_year(number)
    start, end = _year_bounds(number)
    return FiscalYear(start=start, end=end, number=number)


def is_leap_year(number: int) -> bool:
    """True if fiscal year ``number`` has 53 weeks."""
    return resolve_year(number).is_leap


def years_between(first: int, last: int) -> List[FiscalYear]:
    """Resolve every fiscal year from ``first`` to ``last`` inclusive.

    Walks the chain of year starts once instead of resolving each year from
    the anchor.
    """
    first = check_year(first)
    last = check_year(last)
    if last < first:
        return []
    years = []
    current = resolve_year(first)
    years.append(current)
    for number in range(first + 1, last + 1):
        start = current.end + FINEST_UNIT
        current = FiscalYear(start=start, end=next_year_start(start) - FINEST_UNIT, number=number)
        years.append(current)
    return years

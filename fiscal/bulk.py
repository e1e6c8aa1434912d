"""Vectorised classification of many dates at once.

Period start boundaries for a range of fiscal years are laid out in one
sorted ``datetime64[us]`` array; each date is then located with
``np.searchsorted``. Agrees with the scalar classifier for every date inside
the covered range.
"""

import logging
from typing import Iterable, Optional, Tuple

import numpy as np

from .classifier import to_instant, year_for_date
from .constants import PERIODS_PER_QUARTER
from .errors import UnsupportedYearError
from .period_resolver import periods_of_year

logger = logging.getLogger(__name__)


def _to_datetime64(instant) -> np.datetime64:
    # numpy has no timezone support; instants are already UTC
    return np.datetime64(instant.replace(tzinfo=None), "us")


def period_boundaries(first: int, last: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Period start instants for fiscal years ``first`` to ``last``.

    Args:
        first: First fiscal year (2006 or later)
        last: Last fiscal year, inclusive

    Returns:
        Tuple of (starts, years, periods). ``starts`` has one extra trailing
        element: the start of the year after ``last``, closing the range.
    """
    if last < first:
        raise ValueError(f"Last fiscal year {last} is before first fiscal year {first}")

    starts = []
    years = []
    periods = []
    for number in range(first, last + 1):
        for period in periods_of_year(number):
            starts.append(_to_datetime64(period.start))
            years.append(number)
            periods.append(period.index)
    starts.append(_to_datetime64(periods_of_year(last)[-1].end) + np.timedelta64(1, "us"))

    return (
        np.array(starts, dtype="datetime64[us]"),
        np.array(years, dtype=np.int64),
        np.array(periods, dtype=np.int64),
    )


def classify_dates(
    dates: Iterable,
    first: Optional[int] = None,
    last: Optional[int] = None,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Classify many dates into fiscal year, quarter and period.

    Args:
        dates: Iterable of date/datetime values
        first: First fiscal year of the lookup table (default: from the data)
        last: Last fiscal year of the lookup table (default: from the data)

    Returns:
        Tuple of int64 arrays (years, quarters, periods), one entry per date

    Raises:
        UnsupportedYearError: If a date falls outside the lookup table
    """
    instants = [to_instant(d) for d in dates]
    if not instants:
        empty = np.array([], dtype=np.int64)
        return empty, empty.copy(), empty.copy()

    if first is None:
        first = year_for_date(min(instants))
    if last is None:
        last = year_for_date(max(instants))

    starts, years, periods = period_boundaries(first, last)
    values = np.array([_to_datetime64(i) for i in instants], dtype="datetime64[us]")

    positions = np.searchsorted(starts, values, side="right") - 1
    outside = (positions < 0) | (positions >= len(years))
    if outside.any():
        bad = instants[int(np.argmax(outside))]
        raise UnsupportedYearError(
            f"{bad.isoformat()} is outside fiscal years {first}-{last}",
            year=bad.year,
        )

    logger.debug("Classified %d dates against FY%d-FY%d", len(instants), first, last)
    out_periods = periods[positions]
    out_quarters = (out_periods - 1) // PERIODS_PER_QUARTER + 1
    return years[positions], out_quarters, out_periods

"""Exceptions raised by the fiscal calendar engine."""

from typing import Optional


class FiscalCalendarError(Exception):
    """Base class for fiscal calendar errors."""


class UnsupportedYearError(FiscalCalendarError, ValueError):
    """Raised for fiscal years or instants before the calendar anchor.

    The calendar is only defined forward from its anchor; there is no rule
    for extending it backwards.
    """

    def __init__(self, message: str, year: Optional[int] = None):
        super().__init__(message)
        self.year = year


class ClassificationError(FiscalCalendarError, RuntimeError):
    """Raised when no quarter/period/week of a fiscal year contains a date.

    Signals an internal inconsistency between the resolvers and the
    classifier, never bad user input.
    """

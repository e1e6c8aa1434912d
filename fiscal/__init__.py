"""52/53-week retail fiscal calendar engine."""

from .bulk import classify_dates, period_boundaries
from .classifier import (
    period_for_date,
    quarter_for_date,
    resolve_week,
    span_for_date,
    week_for_date,
    year_for_date,
)
from .constants import ANCHOR, ANCHOR_FISCAL_YEAR, FINEST_UNIT
from .errors import ClassificationError, FiscalCalendarError, UnsupportedYearError
from .fiscal_calendar import FiscalCalendar, FiscalDay
from .period_resolver import periods_of_quarter, periods_of_year, resolve_period
from .quarter_resolver import quarters_of_year, resolve_quarter
from .spans import FiscalPeriod, FiscalQuarter, FiscalWeek, FiscalYear
from .year_resolver import resolve_year, years_between

__all__ = [
    "ANCHOR",
    "ANCHOR_FISCAL_YEAR",
    "FINEST_UNIT",
    "ClassificationError",
    "FiscalCalendar",
    "FiscalCalendarError",
    "FiscalDay",
    "FiscalPeriod",
    "FiscalQuarter",
    "FiscalWeek",
    "FiscalYear",
    "UnsupportedYearError",
    "classify_dates",
    "period_boundaries",
    "period_for_date",
    "periods_of_quarter",
    "periods_of_year",
    "quarter_for_date",
    "quarters_of_year",
    "resolve_period",
    "resolve_quarter",
    "resolve_week",
    "resolve_year",
    "span_for_date",
    "week_for_date",
    "year_for_date",
    "years_between",
]

"""CSV/JSON export of fiscal calendar tables.

Exports one row per fiscal period, or one row per day of a FiscalCalendar.
"""

import csv
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

from fiscal.fiscal_calendar import FiscalCalendar
from fiscal.period_resolver import periods_of_year
from fiscal.year_resolver import years_between


# Column order of the period table
PERIOD_COLUMNS = [
    "fiscal_year",
    "fiscal_quarter",
    "fiscal_period",
    "start",
    "end",
    "days",
    "weeks",
    "is_leap_year",
]

# Column order of the day table
DAY_COLUMNS = [
    "date",
    "dow",
    "fiscal_year",
    "fiscal_quarter",
    "fiscal_period",
    "fiscal_week",
    "day_of_year",
    "days_into_quarter",
    "days_into_period",
    "is_period_end",
    "is_quarter_end",
    "is_fy_end",
    "is_leap_year",
]


def periods_as_records(first_year: int, num_years: int = 1) -> List[Dict[str, Any]]:
    """Build JSON-ready period rows for consecutive fiscal years.

    Args:
        first_year: First fiscal year (2006 or later)
        num_years: Number of fiscal years

    Returns:
        List of dicts keyed by PERIOD_COLUMNS; instants in ISO 8601
    """
    if num_years < 1:
        raise ValueError("Number of fiscal years must be positive")

    records = []
    for year in years_between(first_year, first_year + num_years - 1):
        for period in periods_of_year(year.number):
            records.append({
                "fiscal_year": year.number,
                "fiscal_quarter": period.quarter,
                "fiscal_period": period.index,
                "start": period.start.isoformat(),
                "end": period.end.isoformat(),
                "days": period.days,
                "weeks": period.days // 7,
                "is_leap_year": year.is_leap,
            })
    return records


def _open_output(output_path: Optional[str]) -> TextIO:
    if output_path is None:
        return sys.stdout
    # Create output directory if needed
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    return open(output_path, "w", newline="")


def export_periods_csv(
    output_path: Optional[str],
    first_year: int,
    num_years: int = 1,
) -> int:
    """Export the period table to CSV.

    Args:
        output_path: Output CSV file path (None = stdout)
        first_year: First fiscal year
        num_years: Number of fiscal years

    Returns:
        Number of rows exported
    """
    records = periods_as_records(first_year, num_years)
    out = _open_output(output_path)
    try:
        writer = csv.DictWriter(out, fieldnames=PERIOD_COLUMNS)
        writer.writeheader()
        writer.writerows(records)
    finally:
        if out is not sys.stdout:
            out.close()
    return len(records)


def export_periods_json(
    output_path: Optional[str],
    first_year: int,
    num_years: int = 1,
) -> int:
    """Export the period table to JSON (a list of row objects).

    Returns:
        Number of rows exported
    """
    records = periods_as_records(first_year, num_years)
    out = _open_output(output_path)
    try:
        json.dump(records, out, indent=2)
        out.write("\n")
    finally:
        if out is not sys.stdout:
            out.close()
    return len(records)


def export_days_csv(output_path: Optional[str], calendar: FiscalCalendar) -> int:
    """Export one row per day of a FiscalCalendar to CSV.

    Args:
        output_path: Output CSV file path (None = stdout)
        calendar: Calendar to export

    Returns:
        Number of rows exported
    """
    out = _open_output(output_path)
    row_count = 0
    try:
        writer = csv.DictWriter(out, fieldnames=DAY_COLUMNS)
        writer.writeheader()
        for day in calendar:
            row = {col: getattr(day, col) for col in DAY_COLUMNS}
            row["date"] = day.date.isoformat()
            # Booleans as 0/1 for spreadsheet tools
            for col in DAY_COLUMNS:
                if isinstance(row[col], bool):
                    row[col] = int(row[col])
            writer.writerow(row)
            row_count += 1
    finally:
        if out is not sys.stdout:
            out.close()
    return row_count

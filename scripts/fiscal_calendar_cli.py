#!/usr/bin/env python3
"""Fiscal calendar command line tool.

Usage:
    python scripts/fiscal_calendar_cli.py year 2024
    python scripts/fiscal_calendar_cli.py quarter 2024 1
    python scripts/fiscal_calendar_cli.py period 2024 7
    python scripts/fiscal_calendar_cli.py classify 2024-04-10
    python scripts/fiscal_calendar_cli.py classify-file dates.txt
    python scripts/fiscal_calendar_cli.py --format csv table --first 2020 --years 5 --output periods.csv
    python scripts/fiscal_calendar_cli.py finance-request 2024-04-10 --account 1 --vendor 85000000
"""

import argparse
import csv
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pydantic import ValidationError

from fiscal.bulk import classify_dates
from fiscal.classifier import span_for_date
from fiscal.errors import FiscalCalendarError
from fiscal.fiscal_calendar import FiscalCalendar
from fiscal.period_resolver import resolve_period
from fiscal.quarter_resolver import resolve_quarter
from fiscal.spans import FiscalSpan
from fiscal.year_resolver import resolve_year
from reporting.finance_request import FinanceReportRequest
from utils.config import CalendarToolConfig, load_config_from_yaml
from utils.export_calendar import (
    export_days_csv,
    export_periods_csv,
    export_periods_json,
    periods_as_records,
)

logger = logging.getLogger("fiscal_calendar_cli")

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "default.yaml"


def parse_date(value: str) -> datetime:
    """Parse YYYY-MM-DD, YYYYMMDD or a full ISO 8601 timestamp."""
    for fmt in ("%Y-%m-%d", "%Y%m%d"):
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date: '{value}'") from None


def span_to_dict(span: FiscalSpan) -> dict:
    """JSON-ready view of a fiscal span."""
    data = {"start": span.start.isoformat(), "end": span.end.isoformat(), "days": span.days}
    for attr in ("number", "year", "index"):
        if hasattr(span, attr):
            data[attr] = getattr(span, attr)
    return data


def print_span(label: str, span: FiscalSpan, config: CalendarToolConfig) -> None:
    """Print a span in the configured output format."""
    if config.output_format == "json":
        print(json.dumps(span_to_dict(span), indent=2))
    elif config.output_format == "csv":
        print("start,end,days")
        print(f"{span.start.isoformat()},{span.end.isoformat()},{span.days}")
    else:
        fmt = config.date_format
        print(f"{label}: {span.start.strftime(fmt)} - {span.end.strftime(fmt)} ({span.days} days)")


def cmd_year(args, config: CalendarToolConfig) -> int:
    year = resolve_year(args.fiscal_year)
    print_span(f"FY{year.number} ({year.weeks} weeks)", year, config)
    return 0


def cmd_quarter(args, config: CalendarToolConfig) -> int:
    quarter = resolve_quarter(args.fiscal_year, args.quarter)
    print_span(f"FY{quarter.year} Q{quarter.index}", quarter, config)
    return 0


def cmd_period(args, config: CalendarToolConfig) -> int:
    period = resolve_period(args.fiscal_year, args.period)
    print_span(f"FY{period.year} P{period.index}", period, config)
    return 0


def cmd_classify(args, config: CalendarToolConfig) -> int:
    spans = {unit: span_for_date(args.date, unit) for unit in ("year", "quarter", "period", "week")}
    if config.output_format == "json":
        print(json.dumps({unit: span_to_dict(s) for unit, s in spans.items()}, indent=2))
        return 0

    year = spans["year"]
    print(f"{args.date.isoformat()}")
    print(f"  Fiscal year: FY{year.number} ({year.weeks} weeks)")
    print(f"  Quarter:     Q{spans['quarter'].index}")
    print(f"  Period:      P{spans['period'].index}")
    print(f"  Week:        W{spans['week'].index}")
    return 0


def cmd_classify_file(args, config: CalendarToolConfig) -> int:
    values = []
    with open(args.path) as f:
        for lineno, line in enumerate(f, 1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            try:
                values.append(parse_date(line))
            except argparse.ArgumentTypeError as e:
                raise ValueError(f"{args.path}:{lineno}: {e}") from None

    years, quarters, periods = classify_dates(values)
    rows = [
        {
            "date": value.isoformat(),
            "fiscal_year": int(y),
            "fiscal_quarter": int(q),
            "fiscal_period": int(p),
        }
        for value, y, q, p in zip(values, years, quarters, periods)
    ]

    if config.output_format == "json":
        print(json.dumps(rows, indent=2))
    else:
        writer = csv.DictWriter(sys.stdout, fieldnames=["date", "fiscal_year", "fiscal_quarter", "fiscal_period"])
        writer.writeheader()
        writer.writerows(rows)
    logger.info("Classified %d dates from %s", len(rows), args.path)
    return 0


def cmd_table(args, config: CalendarToolConfig) -> int:
    first = args.first if args.first is not None else config.first_year
    num_years = args.years if args.years is not None else config.num_years

    if args.days:
        count = export_days_csv(args.output, FiscalCalendar(start_fy=first, num_years=num_years))
    elif config.output_format == "json":
        count = export_periods_json(args.output, first, num_years)
    elif config.output_format == "csv":
        count = export_periods_csv(args.output, first, num_years)
    else:
        records = periods_as_records(first, num_years)
        for r in records:
            leap = " *" if r["is_leap_year"] and r["fiscal_period"] == 3 else ""
            print(
                f"FY{r['fiscal_year']} Q{r['fiscal_quarter']} P{r['fiscal_period']:<2d} "
                f"{r['start'][:10]} - {r['end'][:10]} {r['weeks']}w{leap}"
            )
        count = len(records)

    if args.output:
        print(f"💾 Saved {count} rows to {args.output}")
    return 0


def cmd_finance_request(args, config: CalendarToolConfig) -> int:
    defaults = config.report
    request = FinanceReportRequest.for_date(
        args.date,
        account=args.account if args.account is not None else defaults.account,
        vendor=args.vendor if args.vendor is not None else defaults.vendor,
        region_code=args.region or defaults.region_code,
        report_type=defaults.report_type,
        mode=defaults.mode,
    )
    if config.output_format == "json":
        data = request.model_dump()
        data["queryInput"] = request.query_input()
        data["filename"] = request.report_filename()
        print(json.dumps(data, indent=2))
    else:
        print(f"Fiscal year:   {request.fiscal_year}")
        print(f"Fiscal period: {request.fiscal_period}")
        print(f"queryInput:    {request.query_input()}")
        print(f"File name:     {request.report_filename()}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="52/53-week fiscal calendar tool")
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration YAML file"
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=CalendarToolConfig.OUTPUT_FORMATS,
        default=None,
        help="Output format (overrides config)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("year", help="Show fiscal year boundaries")
    p.add_argument("fiscal_year", type=int)
    p.set_defaults(func=cmd_year)

    p = sub.add_parser("quarter", help="Show fiscal quarter boundaries")
    p.add_argument("fiscal_year", type=int)
    p.add_argument("quarter", type=int, help="Quarter 1-4 (clamped)")
    p.set_defaults(func=cmd_quarter)

    p = sub.add_parser("period", help="Show fiscal period boundaries")
    p.add_argument("fiscal_year", type=int)
    p.add_argument("period", type=int, help="Period 1-12 (clamped)")
    p.set_defaults(func=cmd_period)

    p = sub.add_parser("classify", help="Find the fiscal year, quarter, period and week of a date")
    p.add_argument("date", type=parse_date)
    p.set_defaults(func=cmd_classify)

    p = sub.add_parser("classify-file", help="Classify every date in a file (one per line)")
    p.add_argument("path", type=str)
    p.set_defaults(func=cmd_classify_file)

    p = sub.add_parser("table", help="List fiscal periods (or days) for a range of years")
    p.add_argument("--first", type=int, default=None, help="First fiscal year")
    p.add_argument("--years", type=int, default=None, help="Number of fiscal years")
    p.add_argument("--days", action="store_true", help="One CSV row per day instead of per period")
    p.add_argument("--output", type=str, default=None, help="Output file (default: stdout)")
    p.set_defaults(func=cmd_table)

    p = sub.add_parser("finance-request", help="Show finance report parameters for a date")
    p.add_argument("date", type=parse_date)
    p.add_argument("--account", type=int, default=None)
    p.add_argument("--vendor", type=int, default=None)
    p.add_argument("--region", type=str, default=None, help="Two-character region code")
    p.set_defaults(func=cmd_finance_request)

    return parser


def load_config(path: Optional[str]) -> CalendarToolConfig:
    """Load the given config file, the bundled default, or built-in defaults."""
    if path is not None:
        return load_config_from_yaml(path)
    if DEFAULT_CONFIG_PATH.exists():
        return load_config_from_yaml(str(DEFAULT_CONFIG_PATH))
    return CalendarToolConfig()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, ValidationError) as e:
        print(f"Error: cannot load config: {e}", file=sys.stderr)
        return 1
    if args.output_format is not None:
        config.output_format = args.output_format

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.debug("Running '%s' with %s", args.command, config)

    try:
        return args.func(args, config)
    except (FiscalCalendarError, ValidationError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Unit tests for calendar CSV/JSON export.
"""

import csv
import json
import pytest
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fiscal.fiscal_calendar import FiscalCalendar
from utils.export_calendar import (
    DAY_COLUMNS,
    PERIOD_COLUMNS,
    export_days_csv,
    export_periods_csv,
    export_periods_json,
    periods_as_records,
)


class TestPeriodRecords:
    """Test period row construction."""

    def test_row_count_and_columns(self):
        records = periods_as_records(2020, 3)

        assert len(records) == 36
        assert list(records[0].keys()) == PERIOD_COLUMNS

    def test_leap_year_rows(self):
        records = periods_as_records(2006)

        assert records[0]["start"] == "2005-09-25T00:00:00+00:00"
        assert records[2]["weeks"] == 5
        assert records[2]["is_leap_year"] is True
        assert [r["fiscal_quarter"] for r in records] == [1, 1, 1, 2, 2, 2, 3, 3, 3, 4, 4, 4]

    def test_invalid_num_years(self):
        with pytest.raises(ValueError, match="Number of fiscal years must be positive"):
            periods_as_records(2020, 0)


class TestExportFiles:
    """Test writing exports to disk."""

    def test_periods_csv(self, tmp_path):
        path = tmp_path / "out" / "periods.csv"
        count = export_periods_csv(str(path), 2023, 2)

        with open(path, newline="") as f:
            rows = list(csv.DictReader(f))
        assert count == len(rows) == 24
        assert rows[0]["fiscal_year"] == "2023"
        assert rows[23]["end"] == "2024-09-28T23:59:59.999999+00:00"

    def test_periods_json(self, tmp_path):
        path = tmp_path / "periods.json"
        count = export_periods_json(str(path), 2024)

        data = json.loads(path.read_text())
        assert count == len(data) == 12
        assert data[6]["start"].startswith("2024-03-31")

    def test_days_csv(self, tmp_path):
        path = tmp_path / "days.csv"
        count = export_days_csv(str(path), FiscalCalendar(start_fy=2024))

        with open(path, newline="") as f:
            reader = csv.DictReader(f)
            assert reader.fieldnames == DAY_COLUMNS
            rows = list(reader)
        assert count == len(rows) == 364
        assert rows[0]["date"] == "2023-10-01"
        assert rows[-1]["is_fy_end"] == "1"
        assert rows[0]["is_fy_end"] == "0"

    def test_csv_to_stdout(self, capsys):
        count = export_periods_csv(None, 2024)
        out = capsys.readouterr().out

        assert count == 12
        assert out.splitlines()[0] == ",".join(PERIOD_COLUMNS)

"""Fixed constants of the 52/53-week fiscal calendar.

Every fiscal year boundary is derived from ANCHOR by walking forward one
year at a time, so ANCHOR must never change.
"""

from datetime import datetime, timedelta, timezone

# Start of the first fiscal year (FY2006)
ANCHOR = datetime(2005, 9, 25, 0, 0, 0, 0, tzinfo=timezone.utc)
ANCHOR_FISCAL_YEAR = 2006

# Smallest datetime increment; span ends are "next start minus one unit"
FINEST_UNIT = timedelta(microseconds=1)

DAY = timedelta(days=1)
WEEK = timedelta(days=7)

# A fiscal year must end on or after this day of the month
YEAR_END_THRESHOLD_DAY = 25

NORMAL_YEAR_DAYS = 364  # 52 weeks
LEAP_YEAR_DAYS = 371  # 53 weeks

QUARTERS_PER_YEAR = 4
PERIODS_PER_YEAR = 12
PERIODS_PER_QUARTER = 3

QUARTER_DAYS = 91
# Longest possible spans, used to seed the classifier scans
MAX_QUARTER_DAYS = 98
MAX_PERIOD_DAYS = 35

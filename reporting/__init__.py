"""Parameters for finance report requests keyed by fiscal year and period."""

from .finance_request import FinanceReportRequest

__all__ = ["FinanceReportRequest"]

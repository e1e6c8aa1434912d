"""Finance report request parameters.

The finance reporting service identifies a report by fiscal year and
fiscal period. This module validates those parameters and renders them in
the service's query syntax; it never talks to the service itself.
"""

import json
from datetime import date
from typing import ClassVar, Tuple
from urllib.parse import quote_plus

from pydantic import BaseModel, Field, field_validator

from fiscal.classifier import DateLike, period_for_date

SALES_ENDPOINT = "https://reportingitc-reporter-sh-prz.apple.com/reportservice/sales/v1"
FINANCE_ENDPOINT = "https://reportingitc-reporter-sh-prz.apple.com/reportservice/finance/v1"
REPORTER_VERSION = "2.1"


class FinanceReportRequest(BaseModel):
    """Validated parameters of a Finance.getReport request.

    Example:
        >>> req = FinanceReportRequest.for_date(date(2024, 4, 10), account=1, vendor=85000000)
        >>> req.fiscal_year, req.fiscal_period
        (2024, 7)
    """

    model_config = {"frozen": True}

    account: int = Field(description="Account number")
    vendor: int = Field(description="Vendor number")
    region_code: str = Field(default="US", description="Two-character region code")
    report_type: str = Field(default="Financial", description="Report type")
    fiscal_year: int = Field(description="Fiscal year of the report")
    fiscal_period: int = Field(description="Fiscal period of the report (1-12)")
    mode: str = Field(default="Normal", description="Reporter mode")

    MODES: ClassVar[Tuple[str, ...]] = ("Normal", "Robot.xml")

    @field_validator("account")
    @classmethod
    def validate_account(cls, v):
        """Account number must be positive."""
        if v <= 0:
            raise ValueError("wrong account number")
        return v

    @field_validator("vendor")
    @classmethod
    def validate_vendor(cls, v):
        """Vendor number must be positive."""
        if v <= 0:
            raise ValueError("wrong vendor number")
        return v

    @field_validator("region_code")
    @classmethod
    def validate_region_code(cls, v):
        """Region code must be two characters."""
        if len(v) != 2:
            raise ValueError("wrong region code")
        return v

    @field_validator("report_type")
    @classmethod
    def validate_report_type(cls, v):
        """Only Financial reports are available."""
        if v != "Financial":
            raise ValueError("wrong report type: Currently only one report type is available: Financial")
        return v

    @field_validator("fiscal_year")
    @classmethod
    def validate_fiscal_year(cls, v):
        """Reports exist up to one year ahead of the current calendar year."""
        if v <= 0 or v > date.today().year + 1:
            raise ValueError("wrong fiscal year")
        return v

    @field_validator("fiscal_period")
    @classmethod
    def validate_fiscal_period(cls, v):
        """Fiscal period must be 1-12."""
        if v < 1 or v > 12:
            raise ValueError("wrong fiscal period, it should be: 1-12")
        return v

    @field_validator("mode")
    @classmethod
    def validate_mode(cls, v):
        """Mode must be one of MODES."""
        if v not in cls.MODES:
            raise ValueError("undefined mode. Use available modes: Normal or Robot.xml")
        return v

    @classmethod
    def for_date(
        cls,
        value: DateLike,
        account: int,
        vendor: int,
        region_code: str = "US",
        report_type: str = "Financial",
        mode: str = "Normal",
    ) -> "FinanceReportRequest":
        """Build a request for the fiscal period containing ``value``."""
        fiscal_year, fiscal_period = period_for_date(value)
        return cls(
            account=account,
            vendor=vendor,
            region_code=region_code,
            report_type=report_type,
            fiscal_year=fiscal_year,
            fiscal_period=fiscal_period,
            mode=mode,
        )

    def query_input(self) -> str:
        """Render the URL-escaped queryInput value for this request."""
        command = (
            f"[p=Reporter.properties, m={self.mode}, Finance.getReport, "
            f"{self.vendor},{self.region_code},{self.report_type},"
            f"{self.fiscal_year},{self.fiscal_period}]"
        )
        return quote_plus(command)

    def form_body(self, access_token: str) -> str:
        """Render the form-encoded request body.

        Args:
            access_token: Reporter access token

        Raises:
            ValueError: If access_token is empty
        """
        if not access_token:
            raise ValueError("access token not set")
        payload = {
            "accesstoken": quote_plus(access_token),
            "account": quote_plus(str(self.account)),
            "version": quote_plus(REPORTER_VERSION),
            "mode": quote_plus(self.mode),
            "salesurl": quote_plus(SALES_ENDPOINT),
            "financeurl": quote_plus(FINANCE_ENDPOINT),
            "queryInput": self.query_input(),
        }
        return f"jsonRequest={json.dumps(payload, separators=(',', ':'))}"

    def report_filename(self) -> str:
        """File name for the downloaded report."""
        return f"FinanceReport_{self.fiscal_year}_{self.fiscal_period:02d}.gz"

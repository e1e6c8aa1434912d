"""Fiscal calendar tool configuration with Pydantic validation.

The calendar anchor is fixed in fiscal.constants and is deliberately not
part of this configuration.
"""

from typing import ClassVar, Tuple
from pydantic import BaseModel, Field, field_validator

from fiscal.constants import ANCHOR_FISCAL_YEAR


class ReportDefaults(BaseModel):
    """Default parameters for finance report requests.

    Mode matches the reporting service: Normal for ad-hoc use, Robot.xml for
    scripted use.
    """

    account: int = Field(default=0, ge=0, description="Account number (0 = not set)")
    vendor: int = Field(default=0, ge=0, description="Vendor number (0 = not set)")
    region_code: str = Field(default="US", description="Two-character region code")
    report_type: str = Field(default="Financial", description="Finance report type")
    mode: str = Field(default="Normal", description="Reporter mode (Normal or Robot.xml)")

    MODES: ClassVar[Tuple[str, ...]] = ("Normal", "Robot.xml")

    @field_validator("mode")
    @classmethod
    def validate_mode(cls, v):
        """Ensure mode is one the reporting service understands."""
        if v not in cls.MODES:
            raise ValueError(
                f"Invalid mode '{v}'. Must be one of: {list(cls.MODES)}"
            )
        return v

    @field_validator("region_code")
    @classmethod
    def validate_region_code(cls, v):
        """Region codes are two characters."""
        if len(v) != 2:
            raise ValueError(f"Region code must be two characters, got '{v}'")
        return v.upper()


class CalendarToolConfig(BaseModel):
    """Main configuration for the fiscal calendar command line tool."""

    # Table range
    first_year: int = Field(
        default=ANCHOR_FISCAL_YEAR,
        ge=ANCHOR_FISCAL_YEAR,
        description="First fiscal year listed by the table command",
    )
    num_years: int = Field(default=1, ge=1, le=100, description="Number of fiscal years listed")

    # Output
    output_format: str = Field(default="text", description="Output format (text, json, csv)")
    date_format: str = Field(default="%Y-%m-%d", description="strftime format for dates in text output")

    # Logging
    log_level: str = Field(default="WARNING", description="Logging level name")

    report: ReportDefaults = Field(default_factory=ReportDefaults)

    OUTPUT_FORMATS: ClassVar[Tuple[str, ...]] = ("text", "json", "csv")
    LOG_LEVELS: ClassVar[Tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

    @field_validator("output_format")
    @classmethod
    def validate_output_format(cls, v):
        """Ensure output_format is valid."""
        if v not in cls.OUTPUT_FORMATS:
            raise ValueError(
                f"Invalid output_format '{v}'. Must be one of: {list(cls.OUTPUT_FORMATS)}"
            )
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Accept level names in any case."""
        v = v.upper()
        if v not in cls.LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level '{v}'. Must be one of: {list(cls.LOG_LEVELS)}"
            )
        return v

    @property
    def last_year(self) -> int:
        """Last fiscal year listed by the table command."""
        return self.first_year + self.num_years - 1


def load_config_from_yaml(path: str) -> CalendarToolConfig:
    """Load configuration from YAML file.

    Args:
        path: Path to YAML configuration file

    Returns:
        Validated CalendarToolConfig object
    """
    import yaml

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    return CalendarToolConfig(**(data or {}))


def save_config_to_yaml(config: CalendarToolConfig, path: str) -> None:
    """Save configuration to YAML file.

    Args:
        config: CalendarToolConfig object
        path: Output YAML path
    """
    import yaml

    with open(path, "w") as f:
        yaml.dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)

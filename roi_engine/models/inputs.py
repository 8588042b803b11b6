"""Input records for the ROI engine.

``ROIInputs`` is the loose request shape produced by upstream extraction:
any field may be absent, numbers may arrive as strings, ranges or
percentages. ``NormalizedInputs`` is the canonical record every engine stage
consumes after ``normalize_inputs`` has filled defaults and coerced units.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Values as they arrive from the conversational layer: a number, a string
# such as "$1,200", "10-20" or "12%", a [low, high] pair or {"min", "max"}.
RawValue = Union[float, int, str, list[float], dict[str, float]]

CORE_FIELDS = (
    "process_name",
    "weekly_hours",
    "team_size",
    "hourly_rate",
    "automation_percentage",
    "timeframe_months",
)

REQUIRED_NUMERIC_FIELDS = (
    "weekly_hours",
    "team_size",
    "hourly_rate",
    "automation_percentage",
    "implementation_cost",
)

RATE_FIELDS = ("discount_rate_annual", "inflation_rate_annual")


class ROIInputs(BaseModel):
    """Raw ROI request; every field is optional until normalization."""

    model_config = ConfigDict(extra="forbid")

    process_name: Optional[str] = None
    weekly_hours: Optional[RawValue] = Field(
        default=None, description="Hours per team member per week spent on the process"
    )
    team_size: Optional[RawValue] = None
    hourly_rate: Optional[RawValue] = None
    automation_percentage: Optional[RawValue] = Field(
        default=None, description="Share of the process automated, 0-100"
    )
    implementation_cost: Optional[RawValue] = None
    timeframe_months: Optional[RawValue] = None
    discount_rate_annual: Optional[RawValue] = Field(
        default=None, description="Annual discount rate as a fraction (0.10 = 10%)"
    )
    inflation_rate_annual: Optional[RawValue] = Field(
        default=None, description="Annual inflation rate as a fraction"
    )
    maintenance_cost_annual: Optional[RawValue] = None
    risk_factor: Optional[RawValue] = None

    def provided_fields(self) -> set[str]:
        """Names of fields the caller actually supplied a value for."""
        return {
            name
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }


class IndustryBenchmark(BaseModel):
    """Reference values for the industry alignment confidence factor."""

    automation_percentage: Optional[float] = Field(default=None, gt=0, le=100)
    hourly_rate: Optional[float] = Field(default=None, gt=0)
    weekly_hours: Optional[float] = Field(default=None, gt=0)
    source: str = ""

    def supplied(self) -> dict[str, float]:
        return {
            name: value
            for name, value in (
                ("automation_percentage", self.automation_percentage),
                ("hourly_rate", self.hourly_rate),
                ("weekly_hours", self.weekly_hours),
            )
            if value is not None
        }


class CalculationOptions(BaseModel):
    """Per-call knobs for ``calculate``."""

    model_config = ConfigDict(extra="forbid")

    sensitivity_variables: Optional[list[str]] = Field(
        default=None, description="Variables to perturb; settings default when omitted"
    )
    sensitivity_range: Optional[float] = Field(
        default=None, gt=0, lt=1, description="Fractional perturbation, 0.20 = +/-20%"
    )
    is_historical: bool = Field(
        default=False, description="Inputs were measured rather than estimated"
    )
    industry_benchmark: Optional[IndustryBenchmark] = None


@dataclass(frozen=True)
class NormalizedInputs:
    """Fully populated, validated inputs with provenance of every value."""

    process_name: str
    weekly_hours: float
    team_size: int
    hourly_rate: float
    automation_percentage: float
    implementation_cost: float
    timeframe_months: int
    discount_rate_annual: float
    inflation_rate_annual: float
    maintenance_cost_annual: float
    risk_factor: float
    provided_fields: frozenset[str] = frozenset()
    defaulted_fields: tuple[str, ...] = ()
    coercion_notes: tuple[str, ...] = ()

    @property
    def total_investment(self) -> float:
        return self.implementation_cost

    @property
    def annual_benefit(self) -> float:
        """Labor value recovered per year by automating the process."""
        return (
            self.weekly_hours
            * 52
            * self.team_size
            * self.hourly_rate
            * (self.automation_percentage / 100)
            / self.risk_factor
        )

    def is_defaulted(self, field_name: str) -> bool:
        return field_name in self.defaulted_fields

    def values(self) -> dict[str, Any]:
        """Plain field values, suitable for feeding back into the normalizer."""
        data = asdict(self)
        for key in ("provided_fields", "defaulted_fields", "coercion_notes"):
            data.pop(key)
        return data

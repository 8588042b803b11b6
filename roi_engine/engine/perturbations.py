"""Perturbation rules for every input the sensitivity sweep can vary.

Each function takes the normalized base value and a scale factor
(``1 - range`` or ``1 + range``) and returns the value to feed back into
the normalizer.
"""

from roi_engine.engine.variables import register_variable


@register_variable(
    name="automation_percentage",
    label="Automation Percentage",
    description="Share of process effort removed by automation, capped at 100%.",
    unit="percent",
)
def perturb_automation_percentage(base: float, factor: float) -> float:
    return min(base * factor, 100.0)


@register_variable(
    name="hourly_rate",
    label="Hourly Rate",
    description="Fully loaded labor cost per hour.",
    unit="currency",
)
def perturb_hourly_rate(base: float, factor: float) -> float:
    return base * factor


@register_variable(
    name="implementation_cost",
    label="Implementation Cost",
    description="Up-front investment paid in period 0.",
    unit="currency",
)
def perturb_implementation_cost(base: float, factor: float) -> float:
    return base * factor


@register_variable(
    name="timeframe_months",
    label="Projection Horizon",
    description="Number of months projected; rounded to whole months, at least one.",
    unit="months",
)
def perturb_timeframe_months(base: float, factor: float) -> float:
    return max(1, round(base * factor))


@register_variable(
    name="weekly_hours",
    label="Weekly Hours",
    description="Hours per team member per week spent on the process.",
    unit="hours",
)
def perturb_weekly_hours(base: float, factor: float) -> float:
    return base * factor


@register_variable(
    name="team_size",
    label="Team Size",
    description="People working the process; rounded, at least one.",
    unit="people",
)
def perturb_team_size(base: float, factor: float) -> float:
    return max(1, round(base * factor))


@register_variable(
    name="maintenance_cost_annual",
    label="Annual Maintenance Cost",
    description="Recurring yearly cost of running the automation.",
    unit="currency",
)
def perturb_maintenance_cost_annual(base: float, factor: float) -> float:
    return base * factor


@register_variable(
    name="discount_rate_annual",
    label="Discount Rate",
    description="Annual discount rate as a fraction.",
    unit="rate",
)
def perturb_discount_rate_annual(base: float, factor: float) -> float:
    return base * factor


@register_variable(
    name="inflation_rate_annual",
    label="Inflation Rate",
    description="Annual benefit inflation as a fraction.",
    unit="rate",
)
def perturb_inflation_rate_annual(base: float, factor: float) -> float:
    return base * factor

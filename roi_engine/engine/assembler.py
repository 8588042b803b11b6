"""Merge metrics, confidence and sensitivity into the final report."""

from __future__ import annotations

import logging
from dataclasses import replace
from types import MappingProxyType
from typing import Optional, Sequence

from roi_engine.config.settings import EngineSettings, get_settings
from roi_engine.engine.confidence import confidence_level_from_score
from roi_engine.engine.pipeline import PipelineRun
from roi_engine.engine.result import (
    ConfidenceAssessment,
    IRRNonConvergent,
    ROIResult,
    ScenarioResult,
)
from roi_engine.engine.sensitivity import SensitivityReport
from roi_engine.models.inputs import NormalizedInputs

logger = logging.getLogger(__name__)

_FIELD_LABELS = {
    "process_name": "Process name",
    "timeframe_months": "Projection horizon",
    "discount_rate_annual": "Discount rate",
    "inflation_rate_annual": "Inflation rate",
    "maintenance_cost_annual": "Annual maintenance cost",
    "risk_factor": "Risk factor",
}

MODEL_LIMITATIONS = (
    "Benefits start in month 1 at full value; no adoption ramp-up is modeled.",
    "Rates are annual and compounded monthly; taxes and financing costs are excluded.",
    "Maintenance is a flat annual cost spread evenly across months.",
)


def _format_assumption(field_name: str, value: object) -> str:
    if field_name in ("discount_rate_annual", "inflation_rate_annual"):
        return f"{value:.1%} per year"
    if field_name == "timeframe_months":
        return f"{value} months"
    if field_name == "maintenance_cost_annual":
        return f"${value:,.0f} per year"
    return str(value)


def assumption_limitations(inputs: NormalizedInputs) -> dict[str, str]:
    """One limitation per defaulted field, keyed by field name."""
    limitations: dict[str, str] = {}
    for field_name in inputs.defaulted_fields:
        label = _FIELD_LABELS.get(field_name, field_name)
        value = getattr(inputs, field_name)
        limitations[field_name] = (
            f"{label} not provided; assumed {_format_assumption(field_name, value)}."
        )
    return limitations


def build_warnings(
    run: PipelineRun,
    confidence_score: int,
    settings: EngineSettings,
    scenarios: Sequence[ScenarioResult] = (),
) -> list[str]:
    inputs, metrics = run.inputs, run.metrics
    warnings: list[str] = list(inputs.coercion_notes)

    if inputs.automation_percentage == 0:
        warnings.append(
            "Automation percentage is 0%, so the projected benefit is zero. "
            "Re-review the automation scope before relying on this result."
        )
    if inputs.timeframe_months > settings.long_horizon_months:
        warnings.append(
            f"Projection horizon of {inputs.timeframe_months} months exceeds "
            f"{settings.long_horizon_months} months; long-range projections are "
            f"uncertain and confidence is capped at {settings.long_horizon_confidence_cap}."
        )
    if metrics.payback_period_months is None:
        warnings.append(
            f"The investment is not recovered within {inputs.timeframe_months} months."
        )
    else:
        for scenario in scenarios:
            if scenario.payback_period_months is None:
                warnings.append(
                    f"In the {scenario.scenario.value} scenario "
                    f"({scenario.benefit_multiplier:.0%} of projected benefit) the "
                    f"investment is not recovered within {inputs.timeframe_months} months."
                )
    if isinstance(metrics.internal_rate_of_return, IRRNonConvergent):
        warnings.append(
            "IRR could not be calculated: "
            f"{metrics.internal_rate_of_return.reason}."
        )
    if metrics.return_on_investment_percent < settings.modest_roi_threshold * 100:
        warnings.append(
            f"ROI of {metrics.return_on_investment_percent:.1f}% is below "
            f"{settings.modest_roi_threshold:.0%}; this is a modest return."
        )
    if confidence_score < settings.high_uncertainty_threshold:
        warnings.append(
            f"Confidence score {confidence_score} is below "
            f"{settings.high_uncertainty_threshold}; treat the figures with caution."
        )
    return warnings


def apply_confidence_cap(
    confidence: ConfidenceAssessment,
    inputs: NormalizedInputs,
    settings: EngineSettings,
) -> ConfidenceAssessment:
    """Cap confidence for projections beyond the long-horizon threshold."""
    if inputs.timeframe_months <= settings.long_horizon_months:
        return confidence
    capped = min(confidence.score, settings.long_horizon_confidence_cap)
    return replace(confidence, score=capped, level=confidence_level_from_score(capped))


def assemble_result(
    run: PipelineRun,
    confidence: ConfidenceAssessment,
    sensitivity: SensitivityReport,
    settings: Optional[EngineSettings] = None,
    scenarios: Sequence[ScenarioResult] = (),
) -> ROIResult:
    settings = settings or get_settings()
    inputs, metrics = run.inputs, run.metrics

    confidence = apply_confidence_cap(confidence, inputs, settings)
    warnings = build_warnings(run, confidence.score, settings, scenarios)
    warnings.extend(sensitivity.skipped)

    limitations = list(assumption_limitations(inputs).values())
    limitations.extend(MODEL_LIMITATIONS)

    logger.info(
        f"ROI for {inputs.process_name!r}: NPV {metrics.net_present_value:,.2f}, "
        f"ROI {metrics.return_on_investment_percent:.1f}%, "
        f"confidence {confidence.score}, {len(warnings)} warning(s)"
    )

    return ROIResult(
        process_name=inputs.process_name,
        net_present_value=metrics.net_present_value,
        internal_rate_of_return=metrics.internal_rate_of_return,
        payback_period_months=metrics.payback_period_months,
        total_cost_of_ownership=metrics.total_cost_of_ownership,
        return_on_investment_percent=metrics.return_on_investment_percent,
        profitability_index=metrics.profitability_index,
        benefit_cost_ratio=metrics.benefit_cost_ratio,
        confidence_score=confidence.score,
        confidence_breakdown=MappingProxyType(dict(confidence.breakdown)),
        confidence_level=confidence.level,
        annual_benefit=inputs.annual_benefit,
        total_benefit=metrics.total_benefit,
        cash_flows=tuple(run.cash_flows),
        sensitivity=tuple(sensitivity.variables),
        scenarios=tuple(scenarios),
        assumptions=MappingProxyType(
            {name: getattr(inputs, name) for name in inputs.defaulted_fields}
        ),
        warnings=tuple(warnings),
        limitations=tuple(limitations),
    )

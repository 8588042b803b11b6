"""Confidence scoring for ROI results.

The score rates how far the inputs can be trusted; it never looks at the
cash-flow math.
"""

from __future__ import annotations

from typing import Iterable, Optional

from roi_engine.config.settings import EngineSettings, get_settings
from roi_engine.engine.result import ConfidenceAssessment
from roi_engine.models.enums import ConfidenceFactor, ConfidenceLevel
from roi_engine.models.inputs import CORE_FIELDS, IndustryBenchmark, NormalizedInputs

CONFIDENCE_WEIGHTS = {
    ConfidenceFactor.COMPLETENESS: 0.30,
    ConfidenceFactor.DATA_QUALITY: 0.25,
    ConfidenceFactor.HISTORICAL_BASIS: 0.20,
    ConfidenceFactor.INDUSTRY_ALIGNMENT: 0.15,
    ConfidenceFactor.ASSUMPTION_DOCUMENTATION: 0.10,
}


def compute_completeness(inputs: NormalizedInputs) -> float:
    """Share of the six core fields the caller supplied."""
    provided = sum(1 for name in CORE_FIELDS if name in inputs.provided_fields)
    return provided / len(CORE_FIELDS)


def compute_data_quality(inputs: NormalizedInputs, settings: EngineSettings) -> float:
    """Share of plausibility checks the inputs pass."""
    checks = [
        0 <= inputs.automation_percentage <= 100,
        settings.min_hourly_rate <= inputs.hourly_rate <= settings.max_hourly_rate,
        inputs.weekly_hours <= settings.max_weekly_hours,
        0 <= inputs.discount_rate_annual <= settings.max_discount_rate_annual,
        0 <= inputs.inflation_rate_annual <= settings.max_inflation_rate_annual,
    ]
    return sum(1 for passed in checks if passed) / len(checks)


def compute_historical_basis(is_historical: bool, settings: EngineSettings) -> float:
    return 1.0 if is_historical else settings.estimated_basis_score


def compute_industry_alignment(
    inputs: NormalizedInputs,
    benchmark: Optional[IndustryBenchmark],
    settings: EngineSettings,
) -> float:
    """Mean closeness of the inputs to the supplied benchmark values.

    Closeness is ``1 - relative deviation``, floored at zero. Without a
    benchmark the configured neutral value is returned.
    """
    if benchmark is None:
        return settings.default_industry_alignment
    reference = benchmark.supplied()
    if not reference:
        return settings.default_industry_alignment

    scores = [
        max(0.0, 1.0 - abs(getattr(inputs, name) - expected) / expected)
        for name, expected in reference.items()
    ]
    return sum(scores) / len(scores)


def compute_assumption_documentation(
    inputs: NormalizedInputs, documented_fields: Iterable[str]
) -> float:
    """1.0 when every defaulted field is flagged in the output, else 0."""
    documented = set(documented_fields)
    return 1.0 if all(name in documented for name in inputs.defaulted_fields) else 0.0


def compute_confidence_score(factors: dict[ConfidenceFactor, float]) -> int:
    """Weighted composite on a 0-100 integer scale.

    Weights: completeness=0.30, data_quality=0.25, historical_basis=0.20,
    industry_alignment=0.15, assumption_documentation=0.10.
    """
    raw = sum(CONFIDENCE_WEIGHTS[factor] * value for factor, value in factors.items())
    return max(0, min(100, round(100 * raw)))


def confidence_level_from_score(score: int) -> ConfidenceLevel:
    """Map a 0-100 score to a level.

    >= 75 -> HIGH
    >= 50 -> MEDIUM
    <  50 -> LOW
    """
    if score >= 75:
        return ConfidenceLevel.HIGH
    if score >= 50:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW


def estimate_confidence(
    inputs: NormalizedInputs,
    is_historical: bool = False,
    benchmark: Optional[IndustryBenchmark] = None,
    documented_fields: Iterable[str] = (),
    settings: Optional[EngineSettings] = None,
) -> ConfidenceAssessment:
    settings = settings or get_settings()
    factors = {
        ConfidenceFactor.COMPLETENESS: compute_completeness(inputs),
        ConfidenceFactor.DATA_QUALITY: compute_data_quality(inputs, settings),
        ConfidenceFactor.HISTORICAL_BASIS: compute_historical_basis(is_historical, settings),
        ConfidenceFactor.INDUSTRY_ALIGNMENT: compute_industry_alignment(
            inputs, benchmark, settings
        ),
        ConfidenceFactor.ASSUMPTION_DOCUMENTATION: compute_assumption_documentation(
            inputs, documented_fields
        ),
    }
    score = compute_confidence_score(factors)
    return ConfidenceAssessment(
        score=score,
        breakdown={factor.value: value for factor, value in factors.items()},
        level=confidence_level_from_score(score),
    )

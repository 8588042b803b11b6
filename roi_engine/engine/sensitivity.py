"""One-at-a-time sensitivity sweep producing tornado-ordered variables."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Optional, Sequence

# Ensure all perturbation rules are registered on import
import roi_engine.engine.perturbations  # noqa: F401
from roi_engine.config.settings import EngineSettings, get_settings
from roi_engine.engine.pipeline import PipelineRun, run_pipeline
from roi_engine.engine.result import SensitivityVariable
from roi_engine.engine.variables import SensitivityVariableDefinition, get_variable
from roi_engine.errors import InvalidInputError
from roi_engine.models.inputs import NormalizedInputs

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SensitivityReport:
    variables: list[SensitivityVariable]
    skipped: list[str] = field(default_factory=list)


def resolve_variables(names: Sequence[str]) -> list[SensitivityVariableDefinition]:
    """Map requested names to registered definitions, dropping duplicates."""
    resolved: list[SensitivityVariableDefinition] = []
    seen: set[str] = set()
    for name in names:
        if name in seen:
            continue
        resolved.append(get_variable(name))
        seen.add(name)
    return resolved


def _run_perturbed(
    inputs: NormalizedInputs,
    definition: SensitivityVariableDefinition,
    factor: float,
    settings: EngineSettings,
) -> tuple[float, PipelineRun]:
    values = inputs.values()
    perturbed_value = definition.perturb(values[definition.name], factor)
    values[definition.name] = perturbed_value
    return perturbed_value, run_pipeline(values, settings)


def analyze_sensitivity(
    inputs: NormalizedInputs,
    variables: Optional[Sequence[str]] = None,
    sensitivity_range: Optional[float] = None,
    settings: Optional[EngineSettings] = None,
) -> SensitivityReport:
    """Re-run the pipeline with each variable at base*(1-r) and base*(1+r).

    Every perturbation is independent, so the 2*N recomputations run on a
    thread pool. The returned list is sorted by ROI impact, largest first;
    ties keep the requested variable order.
    """
    settings = settings or get_settings()
    names = list(variables) if variables is not None else list(settings.sensitivity_variables)
    sensitivity_range = (
        settings.sensitivity_range if sensitivity_range is None else sensitivity_range
    )
    if not 0 < sensitivity_range < 1:
        raise InvalidInputError("sensitivity_range", "must be between 0 and 1 (exclusive)")

    definitions = resolve_variables(names)
    if not definitions:
        return SensitivityReport(variables=[])

    factors = {"low": 1 - sensitivity_range, "high": 1 + sensitivity_range}
    max_workers = max(1, min(settings.sensitivity_max_workers, 2 * len(definitions)))

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = {
            (definition.name, side): pool.submit(
                _run_perturbed, inputs, definition, factor, settings
            )
            for definition in definitions
            for side, factor in factors.items()
        }

        results: list[SensitivityVariable] = []
        skipped: list[str] = []
        for definition in definitions:
            try:
                low_value, low_run = futures[(definition.name, "low")].result()
                high_value, high_run = futures[(definition.name, "high")].result()
            except InvalidInputError as e:
                logger.warning(f"Sensitivity for {definition.name} skipped: {e}")
                skipped.append(
                    f"Sensitivity for {definition.label} skipped: {e.message}"
                )
                continue

            low_roi = low_run.metrics.return_on_investment_percent
            high_roi = high_run.metrics.return_on_investment_percent
            results.append(
                SensitivityVariable(
                    name=definition.name,
                    base_value=float(getattr(inputs, definition.name)),
                    low_value=float(low_value),
                    high_value=float(high_value),
                    low_roi_percent=low_roi,
                    high_roi_percent=high_roi,
                    impact=abs(high_roi - low_roi),
                    low_npv=low_run.metrics.net_present_value,
                    high_npv=high_run.metrics.net_present_value,
                )
            )

    results.sort(key=lambda variable: variable.impact, reverse=True)
    logger.debug(f"Sensitivity ranking: {[v.name for v in results]}")
    return SensitivityReport(variables=results, skipped=skipped)

"""Core calculation engine.

Takes a raw ROI request plus options -> produces an ROIResult with cash
flows, metrics, confidence, sensitivity, scenarios, warnings and limitations.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from roi_engine.config.settings import EngineSettings, get_settings
from roi_engine.engine.assembler import assemble_result, assumption_limitations
from roi_engine.engine.confidence import estimate_confidence
from roi_engine.engine.pipeline import run_pipeline
from roi_engine.engine.result import ROIResult
from roi_engine.engine.scenarios import run_scenarios
from roi_engine.engine.sensitivity import analyze_sensitivity, resolve_variables
from roi_engine.errors import InvalidInputError
from roi_engine.models.inputs import CalculationOptions, ROIInputs

logger = logging.getLogger(__name__)


def _to_options(
    options: Union[CalculationOptions, Mapping[str, Any], None],
) -> CalculationOptions:
    if options is None:
        return CalculationOptions()
    if isinstance(options, CalculationOptions):
        return options
    try:
        return CalculationOptions.model_validate(dict(options))
    except ValidationError as e:
        first = e.errors()[0]
        field_name = str(first["loc"][0]) if first.get("loc") else "options"
        raise InvalidInputError(field_name, first["msg"]) from e


class ROICalculationEngine:
    """Stateless engine that runs ROI calculations."""

    def __init__(self, settings: Optional[EngineSettings] = None):
        self.settings = settings or get_settings()

    def calculate(
        self,
        inputs: Union[ROIInputs, Mapping[str, Any]],
        options: Union[CalculationOptions, Mapping[str, Any], None] = None,
    ) -> ROIResult:
        """Run the full ROI calculation.

        Raises:
            InvalidInputError: inputs or options are structurally invalid.
                Nothing is computed in that case.
        """
        settings = self.settings
        opts = _to_options(options)
        variable_names = (
            opts.sensitivity_variables
            if opts.sensitivity_variables is not None
            else settings.sensitivity_variables
        )
        # Reject unknown variables before any cash flow is built
        resolve_variables(variable_names)

        run = run_pipeline(inputs, settings)
        logger.debug(f"Primary pipeline complete for {run.inputs.process_name!r}")

        confidence = estimate_confidence(
            run.inputs,
            is_historical=opts.is_historical,
            benchmark=opts.industry_benchmark,
            documented_fields=assumption_limitations(run.inputs).keys(),
            settings=settings,
        )
        sensitivity = analyze_sensitivity(
            run.inputs,
            variables=variable_names,
            sensitivity_range=opts.sensitivity_range,
            settings=settings,
        )
        scenarios = run_scenarios(run, settings)
        return assemble_result(run, confidence, sensitivity, settings, scenarios)


def calculate(
    inputs: Union[ROIInputs, Mapping[str, Any]],
    options: Union[CalculationOptions, Mapping[str, Any], None] = None,
    settings: Optional[EngineSettings] = None,
) -> ROIResult:
    """Convenience wrapper around ``ROICalculationEngine.calculate``."""
    return ROICalculationEngine(settings).calculate(inputs, options)

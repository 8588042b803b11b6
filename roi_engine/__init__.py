"""Deterministic ROI calculation engine for process automation cases."""

from roi_engine.engine.calculator import ROICalculationEngine, calculate
from roi_engine.engine.result import ROIResult, result_to_dict
from roi_engine.errors import InvalidInputError, ROIEngineError
from roi_engine.models.enums import Scenario
from roi_engine.models.inputs import CalculationOptions, ROIInputs

__all__ = [
    "CalculationOptions",
    "InvalidInputError",
    "ROICalculationEngine",
    "ROIEngineError",
    "ROIInputs",
    "ROIResult",
    "Scenario",
    "calculate",
    "result_to_dict",
]

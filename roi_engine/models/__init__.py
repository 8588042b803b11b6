from .enums import ConfidenceLevel, IRRStatus, Scenario
from .inputs import CalculationOptions, IndustryBenchmark, NormalizedInputs, ROIInputs

__all__ = [
    "CalculationOptions",
    "ConfidenceLevel",
    "IRRStatus",
    "IndustryBenchmark",
    "NormalizedInputs",
    "ROIInputs",
    "Scenario",
]

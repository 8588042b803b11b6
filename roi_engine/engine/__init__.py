from .assembler import assemble_result
from .calculator import ROICalculationEngine, calculate
from .cashflow import project_cash_flows
from .confidence import estimate_confidence
from .metrics import calculate_irr, calculate_metrics, calculate_payback_period
from .normalizer import normalize_inputs
from .result import (
    CashFlowEntry,
    IRRConverged,
    IRRNonConvergent,
    ROIResult,
    ScenarioResult,
    SensitivityVariable,
    result_to_dict,
)
from .scenarios import run_scenarios
from .sensitivity import analyze_sensitivity

__all__ = [
    "CashFlowEntry",
    "IRRConverged",
    "IRRNonConvergent",
    "ROICalculationEngine",
    "ROIResult",
    "ScenarioResult",
    "SensitivityVariable",
    "analyze_sensitivity",
    "assemble_result",
    "calculate",
    "calculate_irr",
    "calculate_metrics",
    "calculate_payback_period",
    "estimate_confidence",
    "normalize_inputs",
    "project_cash_flows",
    "result_to_dict",
    "run_scenarios",
]

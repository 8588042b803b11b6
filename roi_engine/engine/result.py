"""Immutable result and cash-flow data structures."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, is_dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from roi_engine.models.enums import ConfidenceLevel, IRRStatus, Scenario


@dataclass(frozen=True)
class CashFlowEntry:
    """One month of the projection; period 0 is the investment."""

    period: int
    inflow: float
    outflow: float
    net_cash_flow: float
    cumulative_cash_flow: float
    present_value: float


@dataclass(frozen=True)
class IRRConverged:
    """Newton-Raphson found an annual rate where NPV is zero."""

    rate: float
    iterations: int
    status: IRRStatus = IRRStatus.CONVERGED

    @property
    def converged(self) -> bool:
        return True


@dataclass(frozen=True)
class IRRNonConvergent:
    """No rate was found; ``reason`` says why the search stopped."""

    reason: str
    iterations: int
    status: IRRStatus = IRRStatus.NON_CONVERGENT

    @property
    def converged(self) -> bool:
        return False


IRROutcome = Union[IRRConverged, IRRNonConvergent]


@dataclass(frozen=True)
class FinancialMetrics:
    """Metrics derived from a single cash-flow schedule."""

    net_present_value: float
    internal_rate_of_return: IRROutcome
    payback_period_months: Optional[float]
    total_cost_of_ownership: float
    return_on_investment_percent: float
    profitability_index: float
    benefit_cost_ratio: float
    total_benefit: float
    total_investment: float


@dataclass(frozen=True)
class SensitivityVariable:
    """Tornado bar for one perturbed input."""

    name: str
    base_value: float
    low_value: float
    high_value: float
    low_roi_percent: float
    high_roi_percent: float
    impact: float
    low_npv: float = 0.0
    high_npv: float = 0.0


@dataclass(frozen=True)
class ScenarioResult:
    """Headline metrics with the projected benefit scaled by one multiplier."""

    scenario: Scenario
    benefit_multiplier: float
    annual_benefit: float
    net_present_value: float
    internal_rate_of_return: IRROutcome
    payback_period_months: Optional[float]
    return_on_investment_percent: float
    benefit_cost_ratio: float


@dataclass(frozen=True)
class ConfidenceAssessment:
    """Weighted reliability estimate and the factors behind it."""

    score: int
    breakdown: dict[str, float]
    level: ConfidenceLevel


@dataclass(frozen=True)
class ROIResult:
    """Top-level report for one ``calculate`` call.

    Collections are tuples and read-only mappings so a result can be shared
    between callers without copying.
    """

    process_name: str
    net_present_value: float
    internal_rate_of_return: IRROutcome
    payback_period_months: Optional[float]
    total_cost_of_ownership: float
    return_on_investment_percent: float
    profitability_index: float
    benefit_cost_ratio: float
    confidence_score: int
    confidence_breakdown: Mapping[str, float]
    confidence_level: ConfidenceLevel
    annual_benefit: float
    total_benefit: float
    cash_flows: tuple[CashFlowEntry, ...] = ()
    sensitivity: tuple[SensitivityVariable, ...] = ()
    scenarios: tuple[ScenarioResult, ...] = ()
    assumptions: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    warnings: tuple[str, ...] = ()
    limitations: tuple[str, ...] = ()

    @property
    def pays_back(self) -> bool:
        return self.payback_period_months is not None

    def scenario(self, scenario: Union[Scenario, str]) -> ScenarioResult:
        wanted = Scenario(scenario)
        for entry in self.scenarios:
            if entry.scenario == wanted:
                return entry
        raise KeyError(wanted.value)


def irr_to_dict(irr: IRROutcome) -> dict[str, Any]:
    if isinstance(irr, IRRConverged):
        return {
            "status": irr.status.value,
            "rate": irr.rate,
            "iterations": irr.iterations,
        }
    return {
        "status": irr.status.value,
        "reason": irr.reason,
        "iterations": irr.iterations,
    }


def _payback_to_primitive(months: Optional[float]) -> Union[float, str]:
    return "never" if months is None else months


def scenario_to_dict(scenario: ScenarioResult) -> dict[str, Any]:
    return {
        "benefit_multiplier": scenario.benefit_multiplier,
        "annual_benefit": scenario.annual_benefit,
        "net_present_value": scenario.net_present_value,
        "internal_rate_of_return": irr_to_dict(scenario.internal_rate_of_return),
        "payback_period_months": _payback_to_primitive(scenario.payback_period_months),
        "return_on_investment_percent": scenario.return_on_investment_percent,
        "benefit_cost_ratio": scenario.benefit_cost_ratio,
    }


def _to_primitive(value: Any) -> Any:
    if is_dataclass(value):
        return asdict(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Mapping):
        return {key: _to_primitive(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_primitive(item) for item in value]
    return value


def result_to_dict(result: ROIResult) -> dict[str, Any]:
    """Render a result as JSON-ready primitives.

    The IRR becomes a tagged object, a payback that never happens is
    rendered as the string ``"never"`` and scenarios are keyed by name.
    """
    data = {f.name: _to_primitive(getattr(result, f.name)) for f in fields(result)}
    data["internal_rate_of_return"] = irr_to_dict(result.internal_rate_of_return)
    data["payback_period_months"] = _payback_to_primitive(result.payback_period_months)
    data["scenarios"] = {
        entry.scenario.value: scenario_to_dict(entry) for entry in result.scenarios
    }
    return data

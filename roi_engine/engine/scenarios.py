"""Conservative, base and aggressive views of one normalized request.

Each scenario re-projects the schedule with the annual benefit scaled by the
configured multiplier. Investment, maintenance and rates stay as entered.
"""

from __future__ import annotations

import logging
from typing import Optional

from roi_engine.config.settings import EngineSettings, get_settings
from roi_engine.engine.cashflow import project_cash_flows
from roi_engine.engine.metrics import calculate_metrics
from roi_engine.engine.pipeline import PipelineRun
from roi_engine.engine.result import FinancialMetrics, ScenarioResult
from roi_engine.models.enums import Scenario

logger = logging.getLogger(__name__)


def _scenario_result(
    scenario: Scenario,
    multiplier: float,
    annual_benefit: float,
    metrics: FinancialMetrics,
) -> ScenarioResult:
    return ScenarioResult(
        scenario=scenario,
        benefit_multiplier=multiplier,
        annual_benefit=annual_benefit * multiplier,
        net_present_value=metrics.net_present_value,
        internal_rate_of_return=metrics.internal_rate_of_return,
        payback_period_months=metrics.payback_period_months,
        return_on_investment_percent=metrics.return_on_investment_percent,
        benefit_cost_ratio=metrics.benefit_cost_ratio,
    )


def run_scenarios(
    run: PipelineRun,
    settings: Optional[EngineSettings] = None,
) -> tuple[ScenarioResult, ...]:
    """Score every configured scenario, in the order the settings list them.

    A multiplier of exactly 1.0 reuses the primary run's metrics.
    """
    settings = settings or get_settings()
    results = []
    for scenario, multiplier in settings.scenario_benefit_multipliers.items():
        if multiplier == 1.0:
            metrics = run.metrics
        else:
            cash_flows = project_cash_flows(run.inputs, benefit_multiplier=multiplier)
            metrics = calculate_metrics(cash_flows, settings)
        results.append(
            _scenario_result(scenario, multiplier, run.inputs.annual_benefit, metrics)
        )
    logger.debug(
        "Scenario ROI: "
        + ", ".join(f"{r.scenario.value}={r.return_on_investment_percent:.1f}%" for r in results)
    )
    return tuple(results)

"""Financial metrics computed from a monthly cash-flow schedule.

All rates are annual fractions; cash flows are monthly, so period ``t`` is
discounted by ``(1 + rate) ** (t / 12)``.
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Sequence

from roi_engine.config.settings import EngineSettings, get_settings
from roi_engine.engine.result import (
    CashFlowEntry,
    FinancialMetrics,
    IRRConverged,
    IRRNonConvergent,
    IRROutcome,
)
from roi_engine.errors import InvalidInputError

logger = logging.getLogger(__name__)

# Relative step below which Newton has reached a floating-point fixed point.
_STEP_EPSILON = 1e-10


def _total_investment(cash_flows: Sequence[CashFlowEntry]) -> float:
    if not cash_flows:
        raise InvalidInputError("cash_flows", "schedule is empty")
    investment = -cash_flows[0].net_cash_flow
    if investment <= 0:
        raise InvalidInputError(
            "implementation_cost",
            "total investment must be greater than zero",
        )
    return investment


def calculate_npv(cash_flows: Sequence[CashFlowEntry]) -> float:
    """Sum of present values; period 0 is already undiscounted."""
    return sum(entry.present_value for entry in cash_flows)


def npv_at_rate(cash_flows: Sequence[CashFlowEntry], rate: float) -> float:
    """NPV of the schedule at an arbitrary annual rate."""
    return sum(
        entry.net_cash_flow / (1 + rate) ** (entry.period / 12)
        for entry in cash_flows
    )


def npv_derivative(cash_flows: Sequence[CashFlowEntry], rate: float) -> float:
    """dNPV/drate for the monthly schedule."""
    return sum(
        -entry.net_cash_flow * (entry.period / 12) / (1 + rate) ** (entry.period / 12 + 1)
        for entry in cash_flows
        if entry.period > 0
    )


def calculate_irr(
    cash_flows: Sequence[CashFlowEntry],
    settings: Optional[EngineSettings] = None,
) -> IRROutcome:
    """Solve NPV(rate) = 0 with Newton-Raphson.

    The search starts from the simple annualized return (future net cash per
    unit invested, per year of horizon) and gives up when the slope goes
    flat, the rate leaves the plausible domain, or the iteration budget runs
    out. Failure is reported as ``IRRNonConvergent``, never as a zero rate.
    """
    settings = settings or get_settings()
    investment = _total_investment(cash_flows)
    tolerance = settings.irr_tolerance
    horizon_years = (len(cash_flows) - 1) / 12
    if horizon_years <= 0:
        return IRRNonConvergent(reason="no periods after the investment", iterations=0)

    future_net = sum(entry.net_cash_flow for entry in cash_flows[1:])
    rate = future_net / investment / horizon_years
    # Keep the starting point inside the domain where (1 + rate) > 0.
    rate = min(max(rate, settings.irr_min_rate / 2), settings.irr_max_rate)

    for iteration in range(1, settings.irr_max_iterations + 1):
        try:
            npv = npv_at_rate(cash_flows, rate)
            if abs(npv) < tolerance:
                return IRRConverged(rate=rate, iterations=iteration)

            slope = npv_derivative(cash_flows, rate)
            if abs(slope) < tolerance:
                logger.warning(f"IRR search hit a flat slope at rate {rate:.6f}")
                return IRRNonConvergent(
                    reason=f"derivative vanished near rate {rate:.6f}",
                    iterations=iteration,
                )
            next_rate = rate - npv / slope
        except (OverflowError, ZeroDivisionError):
            logger.warning(f"IRR search overflowed at rate {rate:.6f}")
            return IRRNonConvergent(
                reason=f"numeric overflow near rate {rate:.6f}",
                iterations=iteration,
            )

        if math.isnan(next_rate):
            return IRRNonConvergent(reason="rate became undefined (NaN)", iterations=iteration)
        if next_rate < settings.irr_min_rate or next_rate > settings.irr_max_rate:
            logger.warning(f"IRR search left the domain with rate {next_rate:.4f}")
            return IRRNonConvergent(
                reason=(
                    f"rate {next_rate:.4f} outside [{settings.irr_min_rate}, "
                    f"{settings.irr_max_rate}]"
                ),
                iterations=iteration,
            )
        if abs(next_rate - rate) <= _STEP_EPSILON * max(1.0, abs(rate)):
            return IRRConverged(rate=next_rate, iterations=iteration)
        rate = next_rate

    logger.warning(f"IRR did not converge in {settings.irr_max_iterations} iterations")
    return IRRNonConvergent(
        reason=f"no convergence within {settings.irr_max_iterations} iterations",
        iterations=settings.irr_max_iterations,
    )


def calculate_payback_period(cash_flows: Sequence[CashFlowEntry]) -> Optional[float]:
    """Months until cumulative cash flow turns non-negative.

    Interpolates linearly inside the crossing month. Returns ``None`` when
    the horizon ends before the investment is recovered.
    """
    for position, entry in enumerate(cash_flows):
        if entry.cumulative_cash_flow >= 0:
            if position == 0:
                return 0.0
            previous = cash_flows[position - 1]
            return (entry.period - 1) + abs(previous.cumulative_cash_flow) / entry.net_cash_flow
    return None


def calculate_tco(cash_flows: Sequence[CashFlowEntry]) -> float:
    """Implementation cost plus all maintenance over the horizon."""
    return cash_flows[0].outflow + sum(entry.outflow for entry in cash_flows[1:])


def calculate_metrics(
    cash_flows: Sequence[CashFlowEntry],
    settings: Optional[EngineSettings] = None,
) -> FinancialMetrics:
    """Compute every headline metric for one schedule."""
    settings = settings or get_settings()
    investment = _total_investment(cash_flows)

    npv = calculate_npv(cash_flows)
    future_net = sum(entry.net_cash_flow for entry in cash_flows[1:])
    total_benefit = sum(entry.inflow for entry in cash_flows[1:])
    tco = calculate_tco(cash_flows)

    return FinancialMetrics(
        net_present_value=npv,
        internal_rate_of_return=calculate_irr(cash_flows, settings),
        payback_period_months=calculate_payback_period(cash_flows),
        total_cost_of_ownership=tco,
        return_on_investment_percent=(future_net - investment) / investment * 100,
        profitability_index=(npv + investment) / investment,
        benefit_cost_ratio=total_benefit / tco,
        total_benefit=total_benefit,
        total_investment=investment,
    )

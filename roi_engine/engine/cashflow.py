"""Monthly cash-flow schedule construction."""

from __future__ import annotations

import logging
import math

from roi_engine.engine.result import CashFlowEntry
from roi_engine.errors import InvalidInputError
from roi_engine.models.inputs import NormalizedInputs

logger = logging.getLogger(__name__)


def project_cash_flows(
    inputs: NormalizedInputs, benefit_multiplier: float = 1.0
) -> list[CashFlowEntry]:
    """Build the schedule for periods 0..timeframe_months.

    Period 0 carries the implementation outflow only. Each later month earns
    the inflation-compounded share of the annual benefit, pays a flat
    monthly maintenance cost, and is discounted back to period 0 at the
    annual discount rate compounded monthly. ``benefit_multiplier`` scales
    the benefit for scenario runs; costs are never scaled.

    Raises:
        InvalidInputError: when the compounded rates run past the float
            range over the requested horizon.
    """
    investment = inputs.total_investment
    entries = [
        CashFlowEntry(
            period=0,
            inflow=0.0,
            outflow=investment,
            net_cash_flow=-investment,
            cumulative_cash_flow=-investment,
            present_value=-investment,
        )
    ]

    monthly_base_benefit = inputs.annual_benefit * benefit_multiplier / 12
    monthly_maintenance = inputs.maintenance_cost_annual / 12
    cumulative = -investment

    for month in range(1, inputs.timeframe_months + 1):
        try:
            inflation_adjustment = (1 + inputs.inflation_rate_annual) ** (month / 12)
            discount_factor = (1 + inputs.discount_rate_annual) ** (month / 12)
        except OverflowError as e:
            logger.warning(
                f"Compounding overflowed at month {month} for {inputs.process_name!r}"
            )
            raise InvalidInputError(
                "timeframe_months",
                f"rates compound beyond a representable value by month {month}",
            ) from e
        monthly_benefit = monthly_base_benefit * inflation_adjustment
        net = monthly_benefit - monthly_maintenance
        cumulative += net
        if not math.isfinite(cumulative):
            raise InvalidInputError(
                "timeframe_months",
                f"cumulative cash flow is no longer finite at month {month}",
            )
        entries.append(
            CashFlowEntry(
                period=month,
                inflow=monthly_benefit,
                outflow=monthly_maintenance,
                net_cash_flow=net,
                cumulative_cash_flow=cumulative,
                present_value=net / discount_factor,
            )
        )

    logger.debug(
        f"Projected {len(entries)} periods for {inputs.process_name!r}, "
        f"final cumulative {cumulative:,.2f}"
    )
    return entries

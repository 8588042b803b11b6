"""Edge case tests -- zero automation, long horizons, no payback, bad inputs."""

import pytest

from roi_engine.engine.result import IRRNonConvergent
from roi_engine.errors import InvalidInputError


class TestEdgeCases:
    def test_zero_implementation_cost_raises(self, engine, invoice_matching):
        with pytest.raises(InvalidInputError) as exc_info:
            engine.calculate({**invoice_matching, "implementation_cost": 0})
        assert exc_info.value.field == "implementation_cost"

    def test_zero_automation_yields_maintenance_only(self, engine, invoice_matching):
        result = engine.calculate(
            {**invoice_matching, "automation_percentage": 0, "maintenance_cost_annual": 2_400}
        )
        for entry in result.cash_flows[1:]:
            assert entry.net_cash_flow == pytest.approx(-200)
        assert any("Automation percentage is 0%" in w for w in result.warnings)
        assert result.payback_period_months is None
        assert not result.pays_back

    def test_zero_automation_without_maintenance(self, engine, invoice_matching):
        result = engine.calculate({**invoice_matching, "automation_percentage": 0})
        assert all(e.net_cash_flow == 0 for e in result.cash_flows[1:])
        assert isinstance(result.internal_rate_of_return, IRRNonConvergent)
        assert any("IRR could not be calculated" in w for w in result.warnings)

    def test_payback_never_warning(self, engine, invoice_matching):
        result = engine.calculate({**invoice_matching, "implementation_cost": 5_000_000})
        assert result.payback_period_months is None
        assert any("not recovered" in w for w in result.warnings)

    def test_maintenance_never_shortens_payback(self, engine, invoice_matching):
        paybacks = [
            engine.calculate(
                {**invoice_matching, "maintenance_cost_annual": maintenance},
                {"sensitivity_variables": []},
            ).payback_period_months
            for maintenance in (0, 6_000, 24_000, 60_000, 90_000, 120_000)
        ]
        previous = 0.0
        for payback in paybacks:
            if payback is None:
                previous = None
                continue
            assert previous is not None, "payback returned after becoming 'never'"
            assert payback >= previous
            previous = payback
        assert paybacks[-1] is None

    def test_fifty_year_horizon_caps_confidence(self, engine, invoice_matching):
        inputs = {
            **invoice_matching,
            "timeframe_months": 600,
            "inflation_rate_annual": 0.03,
            "maintenance_cost_annual": 0,
            "risk_factor": 1.0,
        }
        options = {
            "is_historical": True,
            "industry_benchmark": {"automation_percentage": 60, "hourly_rate": 75},
        }
        result = engine.calculate(inputs, options)
        assert result.confidence_score <= 60
        assert any("exceeds 120 months" in w for w in result.warnings)

    def test_long_horizon_threshold_configurable(self, settings, invoice_matching):
        from roi_engine.engine.calculator import ROICalculationEngine

        strict = settings.model_copy(
            update={"long_horizon_months": 24, "long_horizon_confidence_cap": 40}
        )
        result = ROICalculationEngine(strict).calculate(invoice_matching)
        assert result.confidence_score <= 40
        assert any("exceeds 24 months" in w for w in result.warnings)

    def test_range_inputs_noted_in_warnings(self, engine, invoice_matching):
        result = engine.calculate({**invoice_matching, "weekly_hours": "30-50"})
        assert any("midpoint 40" in w for w in result.warnings)

    def test_modest_return_warning(self, engine, invoice_matching):
        result = engine.calculate({**invoice_matching, "implementation_cost": 260_000})
        assert result.return_on_investment_percent < 15
        assert any("modest return" in w for w in result.warnings)

    @pytest.mark.parametrize("rate", [-1.5, "-150%"])
    def test_inflation_below_minus_one_raises(self, engine, invoice_matching, rate):
        with pytest.raises(InvalidInputError) as exc_info:
            engine.calculate({**invoice_matching, "inflation_rate_annual": rate})
        assert exc_info.value.field == "inflation_rate_annual"

    def test_runaway_inflation_raises_invalid_input(self, engine, invoice_matching):
        inputs = {**invoice_matching, "inflation_rate_annual": 50, "timeframe_months": 3000}
        with pytest.raises(InvalidInputError) as exc_info:
            engine.calculate(inputs)
        assert exc_info.value.field == "timeframe_months"

    def test_deep_deflation_perturbation_skipped(self, engine, invoice_matching):
        # -0.9 * 1.2 crosses -100%, so only that variable drops out
        result = engine.calculate(
            {**invoice_matching, "inflation_rate_annual": -0.9},
            {"sensitivity_variables": ["inflation_rate_annual", "hourly_rate"]},
        )
        assert [v.name for v in result.sensitivity] == ["hourly_rate"]
        assert any("Sensitivity for Inflation Rate skipped" in w for w in result.warnings)

    def test_discount_perturbation_below_minus_one_skipped(self, engine, invoice_matching):
        result = engine.calculate(
            {**invoice_matching, "discount_rate_annual": -0.9},
            {"sensitivity_variables": ["discount_rate_annual"]},
        )
        assert result.sensitivity == ()
        assert any(
            w.startswith("Sensitivity for Discount Rate skipped") for w in result.warnings
        )

"""Integration tests for the calculation engine."""

import math
from dataclasses import FrozenInstanceError

import pytest

from roi_engine.engine.calculator import ROICalculationEngine, calculate
from roi_engine.engine.result import IRRConverged, ROIResult, result_to_dict
from roi_engine.errors import InvalidInputError
from roi_engine.models.enums import ConfidenceLevel
from roi_engine.models.inputs import CalculationOptions, ROIInputs


class TestCalculationEngine:
    def test_returns_roi_result(self, engine, invoice_matching):
        result = engine.calculate(invoice_matching)
        assert isinstance(result, ROIResult)
        assert result.process_name == "Invoice matching"

    def test_cash_flow_invariants(self, engine, invoice_matching):
        result = engine.calculate(invoice_matching)
        first = result.cash_flows[0]
        assert first.net_cash_flow == -invoice_matching["implementation_cost"]
        assert first.cumulative_cash_flow == first.net_cash_flow
        assert len(result.cash_flows) == invoice_matching["timeframe_months"] + 1

    def test_npv_equals_sum_of_present_values(self, engine, invoice_matching):
        result = engine.calculate(invoice_matching)
        assert result.net_present_value == pytest.approx(
            sum(e.present_value for e in result.cash_flows), abs=1e-6
        )

    def test_confidence_is_bounded_integer(self, engine, invoice_matching, minimal_inputs):
        for inputs in (invoice_matching, minimal_inputs):
            result = engine.calculate(inputs)
            assert isinstance(result.confidence_score, int)
            assert 0 <= result.confidence_score <= 100

    def test_sensitivity_in_tornado_order(self, engine, invoice_matching):
        result = engine.calculate(invoice_matching)
        assert len(result.sensitivity) == 4
        for current, following in zip(result.sensitivity, result.sensitivity[1:]):
            assert current.impact >= following.impact

    def test_deterministic(self, engine, invoice_matching):
        assert engine.calculate(invoice_matching) == engine.calculate(invoice_matching)

    def test_module_level_calculate(self, settings, invoice_matching):
        result = calculate(invoice_matching, settings=settings)
        assert result == ROICalculationEngine(settings).calculate(invoice_matching)

    def test_accepts_models(self, engine):
        inputs = ROIInputs(
            process_name="Claims intake",
            weekly_hours=30,
            team_size=2,
            hourly_rate=45,
            automation_percentage=50,
            implementation_cost=25_000,
        )
        options = CalculationOptions(sensitivity_variables=["hourly_rate"])
        result = engine.calculate(inputs, options)
        assert [v.name for v in result.sensitivity] == ["hourly_rate"]

    def test_options_from_mapping(self, engine, invoice_matching):
        result = engine.calculate(
            invoice_matching,
            {"sensitivity_variables": ["team_size", "weekly_hours"], "sensitivity_range": 0.1},
        )
        assert {v.name for v in result.sensitivity} == {"team_size", "weekly_hours"}

    def test_invalid_options_raise(self, engine, invoice_matching):
        with pytest.raises(InvalidInputError) as exc_info:
            engine.calculate(invoice_matching, {"sensitivity_range": 2})
        assert exc_info.value.field == "sensitivity_range"

    def test_unknown_sensitivity_variable_raises(self, engine, invoice_matching):
        with pytest.raises(InvalidInputError) as exc_info:
            engine.calculate(invoice_matching, {"sensitivity_variables": ["tax_rate"]})
        assert exc_info.value.field == "sensitivity_variables"

    def test_historical_benchmark_raises_confidence(self, engine, invoice_matching):
        baseline = engine.calculate(invoice_matching)
        informed = engine.calculate(
            invoice_matching,
            {
                "is_historical": True,
                "industry_benchmark": {"automation_percentage": 60, "hourly_rate": 75},
            },
        )
        assert informed.confidence_score > baseline.confidence_score
        assert informed.confidence_level == ConfidenceLevel.HIGH

    def test_assumptions_and_limitations_for_defaults(self, engine, minimal_inputs):
        result = engine.calculate(minimal_inputs)
        assert result.assumptions["timeframe_months"] == 24
        assert result.assumptions["discount_rate_annual"] == pytest.approx(0.10)
        assert any("Discount rate not provided" in item for item in result.limitations)
        assert any("Projection horizon not provided" in item for item in result.limitations)
        assert result.confidence_breakdown["assumption_documentation"] == 1.0

    def test_irr_converges_for_invoice_case(self, engine, invoice_matching):
        result = engine.calculate(invoice_matching)
        assert isinstance(result.internal_rate_of_return, IRRConverged)
        assert result.internal_rate_of_return.rate > 0

    def test_no_nan_in_results(self, engine, invoice_matching):
        result = engine.calculate(invoice_matching)
        for value in (
            result.net_present_value,
            result.total_cost_of_ownership,
            result.return_on_investment_percent,
            result.profitability_index,
            result.benefit_cost_ratio,
            result.payback_period_months,
        ):
            assert not math.isnan(value)


class TestResultImmutability:
    def test_collections_are_tuples(self, engine, invoice_matching):
        result = engine.calculate(invoice_matching)
        for name in ("cash_flows", "sensitivity", "scenarios", "warnings", "limitations"):
            assert isinstance(getattr(result, name), tuple), name

    def test_mappings_reject_writes(self, engine, minimal_inputs):
        result = engine.calculate(minimal_inputs)
        with pytest.raises(TypeError):
            result.assumptions["timeframe_months"] = 12
        with pytest.raises(TypeError):
            result.confidence_breakdown["completeness"] = 1.0

    def test_fields_cannot_be_reassigned(self, engine, invoice_matching):
        result = engine.calculate(invoice_matching)
        with pytest.raises(FrozenInstanceError):
            result.warnings = ()

    def test_serialized_copy_is_independent(self, engine, invoice_matching):
        result = engine.calculate(invoice_matching)
        data = result_to_dict(result)
        data["warnings"].append("edited")
        data["assumptions"]["inflation_rate_annual"] = 0.5
        assert "edited" not in result.warnings
        assert result.assumptions["inflation_rate_annual"] == pytest.approx(0.03)

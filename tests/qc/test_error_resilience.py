"""Tests for error resilience -- concurrent use and failure isolation."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from roi_engine.engine.result import IRRNonConvergent
from roi_engine.errors import InvalidInputError


class TestErrorResilience:
    """Verify the engine stays usable under concurrency and awkward inputs."""

    def test_concurrent_calls_match_serial_results(self, engine, invoice_matching, invoice_team):
        """calculate() shares no state between calls."""
        cases = [invoice_matching, invoice_team] * 4
        serial = [engine.calculate(case) for case in cases]
        with ThreadPoolExecutor(max_workers=4) as pool:
            concurrent = list(pool.map(engine.calculate, cases))
        assert concurrent == serial

    def test_failed_call_does_not_affect_next(self, engine, invoice_matching):
        """An InvalidInputError leaves the engine ready for the next request."""
        baseline = engine.calculate(invoice_matching)
        with pytest.raises(InvalidInputError):
            engine.calculate({**invoice_matching, "timeframe_months": 0})
        assert engine.calculate(invoice_matching) == baseline

    def test_non_convergence_still_returns_report(self, engine, invoice_team):
        """IRR failure is embedded; other metrics are still produced."""
        result = engine.calculate(invoice_team)
        assert isinstance(result.internal_rate_of_return, IRRNonConvergent)
        assert result.net_present_value > 0
        assert result.payback_period_months is not None
        assert result.sensitivity

    def test_caller_inputs_not_mutated(self, engine, invoice_matching):
        snapshot = dict(invoice_matching)
        engine.calculate(invoice_matching)
        assert invoice_matching == snapshot

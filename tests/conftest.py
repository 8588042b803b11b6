"""Shared test fixtures for the ROI engine test suite."""

import pytest

from roi_engine.config.settings import EngineSettings
from roi_engine.engine.calculator import ROICalculationEngine
from roi_engine.engine.normalizer import normalize_inputs


@pytest.fixture
def settings() -> EngineSettings:
    """Settings built from code defaults, isolated from the environment."""
    return EngineSettings(_env_file=None)


@pytest.fixture
def engine(settings) -> ROICalculationEngine:
    return ROICalculationEngine(settings)


@pytest.fixture
def invoice_matching() -> dict:
    """Single analyst matching invoices 40h/week, 60% automatable.

    Annual benefit: 40 * 52 * 1 * 75 * 0.60 = $93,600.
    """
    return {
        "process_name": "Invoice matching",
        "weekly_hours": 40,
        "team_size": 1,
        "hourly_rate": 75,
        "automation_percentage": 60,
        "implementation_cost": 50_000,
        "timeframe_months": 36,
        "discount_rate_annual": 0.10,
    }


@pytest.fixture
def invoice_team(invoice_matching) -> dict:
    """Same process worked by a team of five (annual benefit $468,000)."""
    return {**invoice_matching, "team_size": 5}


@pytest.fixture
def minimal_inputs() -> dict:
    """Only the fields the normalizer cannot default."""
    return {
        "weekly_hours": 10,
        "team_size": 3,
        "hourly_rate": 50,
        "automation_percentage": 40,
        "implementation_cost": 20_000,
    }


@pytest.fixture
def normalized_invoice(invoice_matching, settings):
    return normalize_inputs(invoice_matching, settings)

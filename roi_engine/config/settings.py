from functools import lru_cache

from pydantic_settings import BaseSettings

from roi_engine.models.enums import Scenario


class EngineSettings(BaseSettings):
    """Engine assumptions and thresholds.

    Every value can be overridden through ``ROI_ENGINE_<NAME>`` environment
    variables or a ``.env`` file. Instances are frozen and passed explicitly
    to each calculation.
    """

    # Defaults applied to absent inputs
    default_timeframe_months: int = 24
    default_discount_rate_annual: float = 0.10
    default_inflation_rate_annual: float = 0.03
    default_maintenance_cost_annual: float = 0.0
    default_risk_factor: float = 1.0
    default_process_name: str = "Unnamed process"

    # IRR root finding
    irr_max_iterations: int = 100
    irr_tolerance: float = 1e-5
    irr_min_rate: float = -0.99
    irr_max_rate: float = 10.0

    # Sensitivity sweep
    sensitivity_range: float = 0.20
    sensitivity_variables: list[str] = [
        "automation_percentage",
        "hourly_rate",
        "implementation_cost",
        "timeframe_months",
    ]
    sensitivity_max_workers: int = 8

    # Benefit scaling for the scenario band, ordered worst to best
    scenario_benefit_multipliers: dict[Scenario, float] = {
        Scenario.CONSERVATIVE: 0.8,
        Scenario.BASE: 1.0,
        Scenario.AGGRESSIVE: 1.2,
    }

    # Warning policy
    long_horizon_months: int = 120
    long_horizon_confidence_cap: int = 60
    modest_roi_threshold: float = 0.15
    high_uncertainty_threshold: int = 70

    # Plausibility bands used by the data quality factor
    min_hourly_rate: float = 15.0
    max_hourly_rate: float = 500.0
    max_weekly_hours: float = 60.0
    max_discount_rate_annual: float = 0.50
    max_inflation_rate_annual: float = 0.20

    # Confidence factor constants
    estimated_basis_score: float = 0.5
    default_industry_alignment: float = 0.5

    class Config:
        env_prefix = "ROI_ENGINE_"
        env_file = ".env"
        frozen = True


@lru_cache
def get_settings() -> EngineSettings:
    """Return the process-wide settings loaded from the environment."""
    return EngineSettings()

from enum import Enum


class ConfidenceLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class IRRStatus(str, Enum):
    CONVERGED = "converged"
    NON_CONVERGENT = "non_convergent"


class ConfidenceFactor(str, Enum):
    COMPLETENESS = "completeness"
    DATA_QUALITY = "data_quality"
    HISTORICAL_BASIS = "historical_basis"
    INDUSTRY_ALIGNMENT = "industry_alignment"
    ASSUMPTION_DOCUMENTATION = "assumption_documentation"


class Scenario(str, Enum):
    CONSERVATIVE = "conservative"
    BASE = "base"
    AGGRESSIVE = "aggressive"

"""Normalizer -> projector -> metrics composition shared by every caller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from roi_engine.config.settings import EngineSettings, get_settings
from roi_engine.engine.cashflow import project_cash_flows
from roi_engine.engine.metrics import calculate_metrics
from roi_engine.engine.normalizer import normalize_inputs
from roi_engine.engine.result import CashFlowEntry, FinancialMetrics
from roi_engine.models.inputs import NormalizedInputs, ROIInputs


@dataclass(frozen=True)
class PipelineRun:
    inputs: NormalizedInputs
    cash_flows: list[CashFlowEntry]
    metrics: FinancialMetrics


def run_pipeline(
    raw: Union[ROIInputs, Mapping[str, Any]],
    settings: Optional[EngineSettings] = None,
) -> PipelineRun:
    settings = settings or get_settings()
    inputs = normalize_inputs(raw, settings)
    cash_flows = project_cash_flows(inputs)
    metrics = calculate_metrics(cash_flows, settings)
    return PipelineRun(inputs=inputs, cash_flows=cash_flows, metrics=metrics)

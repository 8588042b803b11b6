"""Input normalization: defaults, unit coercion and structural validation.

Everything downstream assumes the record returned here is complete and
expressed in canonical units (rates as annual fractions, automation as
0-100, integer team size and horizon).
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from roi_engine.config.settings import EngineSettings, get_settings
from roi_engine.errors import InvalidInputError
from roi_engine.models.inputs import (
    RATE_FIELDS,
    REQUIRED_NUMERIC_FIELDS,
    NormalizedInputs,
    ROIInputs,
)

logger = logging.getLogger(__name__)

_RANGE_PATTERN = re.compile(
    r"^\s*(-?[\d.,]+\s*[km]?)\s*(?:-|–|to)\s*(-?[\d.,]+\s*[km]?)\s*$", re.IGNORECASE
)
_SUFFIX_MULTIPLIERS = {"k": 1_000.0, "m": 1_000_000.0}


def _parse_number(text: str, field_name: str) -> float:
    """Parse "$1,200", "50k", "12.5" into a float."""
    cleaned = text.strip().lower().replace(",", "").replace("$", "").replace(" ", "")
    multiplier = 1.0
    if cleaned and cleaned[-1] in _SUFFIX_MULTIPLIERS:
        multiplier = _SUFFIX_MULTIPLIERS[cleaned[-1]]
        cleaned = cleaned[:-1]
    try:
        return float(cleaned) * multiplier
    except ValueError:
        raise InvalidInputError(field_name, f"could not read a number from {text!r}")


def _coerce_value(
    value: Any, field_name: str, notes: list[str]
) -> tuple[float, bool]:
    """Reduce a raw value to a float.

    Returns the number and whether it was written as a percentage ("12%").
    Ranges collapse to their midpoint and are noted.
    """
    if isinstance(value, bool):
        raise InvalidInputError(field_name, "expected a number, got a boolean")

    if isinstance(value, (int, float)):
        return float(value), False

    if isinstance(value, (list, tuple)):
        if len(value) != 2:
            raise InvalidInputError(field_name, "a range must have exactly two values")
        low, _ = _coerce_value(value[0], field_name, notes)
        high, _ = _coerce_value(value[1], field_name, notes)
        return _midpoint(low, high, field_name, notes), False

    if isinstance(value, Mapping):
        if "min" not in value or "max" not in value:
            raise InvalidInputError(field_name, "a range needs 'min' and 'max'")
        low, _ = _coerce_value(value["min"], field_name, notes)
        high, _ = _coerce_value(value["max"], field_name, notes)
        return _midpoint(low, high, field_name, notes), False

    if isinstance(value, str):
        text = value.strip()
        is_percent = text.endswith("%")
        if is_percent:
            text = text[:-1]
        match = _RANGE_PATTERN.match(text)
        if match:
            low = _parse_number(match.group(1), field_name)
            high = _parse_number(match.group(2), field_name)
            return _midpoint(low, high, field_name, notes), is_percent
        return _parse_number(text, field_name), is_percent

    raise InvalidInputError(field_name, f"unsupported value type {type(value).__name__}")


def _midpoint(low: float, high: float, field_name: str, notes: list[str]) -> float:
    if low > high:
        low, high = high, low
    mid = (low + high) / 2
    notes.append(f"{field_name} given as a range {low:g}-{high:g}; midpoint {mid:g} used")
    return mid


def _coerce_rate(value: Any, field_name: str, notes: list[str]) -> float:
    number, is_percent = _coerce_value(value, field_name, notes)
    if is_percent:
        notes.append(f"{field_name} of {number:g}% converted to {number / 100:g}")
        return number / 100
    return number


def _coerce_integer(value: Any, field_name: str, notes: list[str]) -> int:
    number, _ = _coerce_value(value, field_name, notes)
    rounded = int(round(number))
    if rounded != number:
        notes.append(f"{field_name} of {number:g} rounded to {rounded}")
    return rounded


def _to_raw(raw: Union[ROIInputs, Mapping[str, Any]]) -> ROIInputs:
    if isinstance(raw, ROIInputs):
        return raw
    try:
        return ROIInputs.model_validate(dict(raw))
    except ValidationError as e:
        first = e.errors()[0]
        field_name = str(first["loc"][0]) if first.get("loc") else "inputs"
        raise InvalidInputError(field_name, first["msg"]) from e


def normalize_inputs(
    raw: Union[ROIInputs, Mapping[str, Any]],
    settings: Optional[EngineSettings] = None,
) -> NormalizedInputs:
    """Fill defaults, coerce units and validate a raw ROI request.

    Raises:
        InvalidInputError: when the inputs cannot describe a calculable
            investment (missing drivers, negative values, zero investment,
            non-positive horizon, discount or inflation rate at or below
            -100%).
    """
    settings = settings or get_settings()
    raw_inputs = _to_raw(raw)
    provided = raw_inputs.provided_fields()
    notes: list[str] = []
    defaulted: list[str] = []

    for field_name in REQUIRED_NUMERIC_FIELDS:
        if field_name not in provided:
            raise InvalidInputError(field_name, "value is required")

    def pick(field_name: str, default: Any) -> Any:
        if field_name in provided:
            return getattr(raw_inputs, field_name)
        defaulted.append(field_name)
        return default

    process_name = pick("process_name", settings.default_process_name)
    timeframe_raw = pick("timeframe_months", settings.default_timeframe_months)
    discount_raw = pick("discount_rate_annual", settings.default_discount_rate_annual)
    inflation_raw = pick("inflation_rate_annual", settings.default_inflation_rate_annual)
    maintenance_raw = pick(
        "maintenance_cost_annual", settings.default_maintenance_cost_annual
    )
    risk_raw = pick("risk_factor", settings.default_risk_factor)

    values: dict[str, Any] = {
        "process_name": str(process_name).strip() or settings.default_process_name,
        "weekly_hours": _coerce_value(raw_inputs.weekly_hours, "weekly_hours", notes)[0],
        "team_size": _coerce_integer(raw_inputs.team_size, "team_size", notes),
        "hourly_rate": _coerce_value(raw_inputs.hourly_rate, "hourly_rate", notes)[0],
        "automation_percentage": _coerce_value(
            raw_inputs.automation_percentage, "automation_percentage", notes
        )[0],
        "implementation_cost": _coerce_value(
            raw_inputs.implementation_cost, "implementation_cost", notes
        )[0],
        "timeframe_months": _coerce_integer(timeframe_raw, "timeframe_months", notes),
        "maintenance_cost_annual": _coerce_value(
            maintenance_raw, "maintenance_cost_annual", notes
        )[0],
        "risk_factor": _coerce_value(risk_raw, "risk_factor", notes)[0],
    }
    for field_name, raw_value in zip(RATE_FIELDS, (discount_raw, inflation_raw)):
        values[field_name] = _coerce_rate(raw_value, field_name, notes)

    _validate(values)

    normalized = NormalizedInputs(
        **values,
        provided_fields=frozenset(provided),
        defaulted_fields=tuple(defaulted),
        coercion_notes=tuple(notes),
    )
    logger.debug(
        f"Normalized inputs for {normalized.process_name!r}: "
        f"defaulted={list(normalized.defaulted_fields)}"
    )
    return normalized


def _validate(values: dict[str, Any]) -> None:
    for field_name, value in values.items():
        if isinstance(value, float) and not math.isfinite(value):
            raise InvalidInputError(field_name, "value must be finite")

    for field_name in ("weekly_hours", "hourly_rate", "risk_factor"):
        if values[field_name] <= 0:
            raise InvalidInputError(field_name, "must be greater than zero")
    if values["team_size"] < 1:
        raise InvalidInputError("team_size", "must be at least 1")
    for field_name in ("automation_percentage", "implementation_cost", "maintenance_cost_annual"):
        if values[field_name] < 0:
            raise InvalidInputError(field_name, "cannot be negative")

    annual_benefit = (
        values["weekly_hours"]
        * 52
        * values["team_size"]
        * values["hourly_rate"]
        * (values["automation_percentage"] / 100)
    )
    if values["implementation_cost"] == 0 and annual_benefit == 0:
        raise InvalidInputError(
            "implementation_cost",
            "zero investment and zero benefit describe no scenario to evaluate",
        )
    if values["implementation_cost"] == 0:
        raise InvalidInputError(
            "implementation_cost",
            "must be greater than zero; ROI and profitability index are undefined",
        )
    if values["timeframe_months"] <= 0:
        raise InvalidInputError("timeframe_months", "must be at least one month")
    if values["discount_rate_annual"] <= -1:
        raise InvalidInputError("discount_rate_annual", "must be greater than -1 (-100%)")
    if values["inflation_rate_annual"] <= -1:
        raise InvalidInputError("inflation_rate_annual", "must be greater than -1 (-100%)")

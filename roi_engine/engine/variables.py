"""Registry of inputs the sensitivity sweep may perturb.

Perturbation rules register themselves with ``@register_variable`` when
``roi_engine.engine.perturbations`` is imported. Lookups are by the input
field name used in ``ROIInputs``; an unknown name is a caller error and is
reported against the ``sensitivity_variables`` option.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping

from roi_engine.errors import InvalidInputError

_VARIABLES: dict[str, SensitivityVariableDefinition] = {}


@dataclass(frozen=True)
class SensitivityVariableDefinition:
    """An input the sensitivity sweep knows how to perturb."""

    name: str
    label: str
    description: str
    perturb_fn: Callable[[float, float], float]
    unit: str = "number"

    def perturb(self, base_value: float, factor: float) -> float:
        return self.perturb_fn(base_value, factor)


def register_variable(
    name: str,
    label: str,
    description: str,
    unit: str = "number",
) -> Callable:
    """Register the decorated ``(base, factor) -> value`` rule for ``name``.

    Registering the same name twice is a programming error.
    """

    def decorator(fn: Callable[[float, float], float]) -> Callable[[float, float], float]:
        if name in _VARIABLES:
            raise ValueError(f"sensitivity variable {name!r} is already registered")
        _VARIABLES[name] = SensitivityVariableDefinition(
            name=name,
            label=label,
            description=description,
            perturb_fn=fn,
            unit=unit,
        )
        return fn

    return decorator


def get_variable(name: str) -> SensitivityVariableDefinition:
    """Look up a variable, naming the known ones when ``name`` is not registered."""
    try:
        return _VARIABLES[name]
    except KeyError:
        known = ", ".join(sorted(_VARIABLES))
        raise InvalidInputError(
            "sensitivity_variables",
            f"unknown sensitivity variable {name!r}; expected one of: {known}",
        ) from None


def get_all_variables() -> Mapping[str, SensitivityVariableDefinition]:
    return MappingProxyType(_VARIABLES)

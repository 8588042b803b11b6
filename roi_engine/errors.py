"""Exception types raised across the ROI engine boundary."""

from __future__ import annotations

from typing import Any


class ROIEngineError(Exception):
    """Base class for all engine errors."""


class InvalidInputError(ROIEngineError):
    """Inputs are structurally unusable; no result can be produced.

    ``field`` names the offending input so callers can ask a clarifying
    question or surface a 4xx error pointing at it.
    """

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message, "field": self.field}

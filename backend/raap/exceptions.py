"""Custom exception hierarchy for the RaaP feasibility engine."""

from __future__ import annotations


class RaapError(Exception):
    """Base exception for all RaaP errors."""


class ProjectValidationError(RaapError):
    """Raised when project attributes fail validation.

    ``field`` names the offending attribute.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class ProjectNotFoundError(RaapError):
    """Raised when a project id is unknown."""


class CostBreakdownNotFoundError(RaapError):
    """Raised when a cost breakdown id is malformed or unknown."""


class StageLockedError(RaapError):
    """Raised when completing a workflow stage whose predecessor is incomplete."""

"""Domain models for the RaaP feasibility engine."""

from raap.models.cost_breakdown import (
    CostBreakdown,
    CostBreakdownCreate,
    CostBreakdownSummary,
    CostBreakdownUpdate,
)
from raap.models.enums import ProjectType, ScoreCategory, WorkflowStage
from raap.models.feasibility import FeasibilityResult, TimelinePhases
from raap.models.project import (
    Project,
    ProjectAttributes,
    ProjectCreate,
    ProjectUpdate,
    WorkflowStatus,
)

__all__ = [
    "CostBreakdown",
    "CostBreakdownCreate",
    "CostBreakdownSummary",
    "CostBreakdownUpdate",
    "FeasibilityResult",
    "Project",
    "ProjectAttributes",
    "ProjectCreate",
    "ProjectType",
    "ProjectUpdate",
    "ScoreCategory",
    "TimelinePhases",
    "WorkflowStage",
    "WorkflowStatus",
]

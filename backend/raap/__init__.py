"""RaaP modular construction feasibility engine.

Usage::

    from raap import ProjectAttributes, compute_feasibility

    result = compute_feasibility(
        ProjectAttributes(project_type="affordable", target_floors=3,
                          one_bed_units=6, two_bed_units=12, three_bed_units=6)
    )
    print(result.overall_score)
"""

from raap.data.repository import ProjectRepository
from raap.engine import FeasibilityEngine, compute_feasibility
from raap.exceptions import (
    CostBreakdownNotFoundError,
    ProjectNotFoundError,
    ProjectValidationError,
    RaapError,
    StageLockedError,
)
from raap.factory import create_default_engine, create_default_repository
from raap.models.cost_breakdown import CostBreakdown, CostBreakdownSummary
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
    "CostBreakdownNotFoundError",
    "CostBreakdownSummary",
    "FeasibilityEngine",
    "FeasibilityResult",
    "Project",
    "ProjectAttributes",
    "ProjectCreate",
    "ProjectNotFoundError",
    "ProjectRepository",
    "ProjectType",
    "ProjectUpdate",
    "ProjectValidationError",
    "RaapError",
    "ScoreCategory",
    "StageLockedError",
    "TimelinePhases",
    "WorkflowStage",
    "WorkflowStatus",
    "compute_feasibility",
    "create_default_engine",
    "create_default_repository",
]

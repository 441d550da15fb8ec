"""In-memory project repository.

Stores projects together with their last computed feasibility result and
their MasterFormat cost breakdown rows. The result is recomputed on create
and whenever an update changes a scoring-relevant attribute.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from raap import workflow
from raap.exceptions import CostBreakdownNotFoundError, ProjectNotFoundError
from raap.models.cost_breakdown import (
    CostBreakdown,
    CostBreakdownCreate,
    CostBreakdownSummary,
    CostBreakdownUpdate,
)
from raap.models.project import (
    SCORING_FIELDS,
    Project,
    ProjectAttributes,
    ProjectCreate,
    ProjectUpdate,
)

if TYPE_CHECKING:
    from raap.engine import FeasibilityEngine
    from raap.models.enums import WorkflowStage

logger = logging.getLogger(__name__)

# Project fields that may be explicitly cleared with null in an update.
_NULLABLE_FIELDS = frozenset({
    "construction_type",
    "target_parking_spaces",
    "building_dimensions",
})

_BREAKDOWN_ID_DELIMITER = "::"


class ProjectRepository:
    """Repository for project records.

    Wraps an in-memory dict and keeps each project's feasibility result in
    step with its attributes by calling the scoring engine on write.
    """

    def __init__(self, engine: FeasibilityEngine) -> None:
        self._engine = engine
        self._projects: dict[str, Project] = {}
        self._breakdowns: dict[str, list[CostBreakdownCreate]] = {}

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    def create(self, payload: ProjectCreate, user_id: str) -> Project:
        """Create a project and attach its freshly computed feasibility result."""
        attributes = payload.to_attributes()
        project = Project(
            user_id=user_id,
            name=payload.name,
            address=payload.address,
            construction_type=payload.construction_type,
            target_parking_spaces=payload.target_parking_spaces,
            attributes=attributes,
            feasibility=self._engine.assess(attributes),
        )
        self._projects[project.id] = project
        self._breakdowns[project.id] = []
        logger.info(
            "Created project %s (%s) with overall score %.1f",
            project.id, project.name, project.feasibility.overall_score,
        )
        return project

    def get(self, project_id: str) -> Project:
        project = self._projects.get(project_id)
        if project is None:
            msg = f"Project '{project_id}' not found"
            raise ProjectNotFoundError(msg)
        return project

    def list_projects(self, user_id: str | None = None) -> list[Project]:
        """List projects, most recently updated first."""
        projects = [
            p for p in list(self._projects.values())
            if user_id is None or p.user_id == user_id
        ]
        return sorted(projects, key=lambda p: p.updated_at, reverse=True)

    def find_by_name(self, name: str, user_id: str) -> Project | None:
        for project in list(self._projects.values()):
            if project.name == name and project.user_id == user_id:
                return project
        return None

    def update(self, project_id: str, changes: ProjectUpdate) -> Project:
        """Merge the set fields of ``changes`` into the stored project.

        The feasibility result is recomputed only when a scoring-relevant
        attribute changes value.
        """
        project = self.get(project_id)
        fields = {
            name: value
            for name, value in changes.model_dump(exclude_unset=True).items()
            if value is not None or name in _NULLABLE_FIELDS
        }

        attribute_changes = {
            name: value for name, value in fields.items()
            if name in SCORING_FIELDS and getattr(project.attributes, name) != value
        }
        record_changes = {
            name: value for name, value in fields.items() if name not in SCORING_FIELDS
        }

        update: dict[str, object] = dict(record_changes)
        if attribute_changes:
            merged = project.attributes.model_dump()
            merged.update(attribute_changes)
            attributes = ProjectAttributes.model_validate(merged)
            update["attributes"] = attributes
            update["feasibility"] = self._engine.assess(attributes)
            logger.info(
                "Recomputed feasibility for project %s after changes to %s",
                project_id, ", ".join(sorted(attribute_changes)),
            )

        if not update:
            return project

        update["updated_at"] = datetime.now(UTC)
        updated = project.model_copy(update=update)
        self._projects[project_id] = updated
        logger.debug("Updated project %s fields: %s", project_id, sorted(update))
        return updated

    def delete(self, project_id: str) -> None:
        self.get(project_id)
        del self._projects[project_id]
        self._breakdowns.pop(project_id, None)
        logger.info("Deleted project %s", project_id)

    def complete_stage(self, project_id: str, stage: WorkflowStage) -> Project:
        """Mark a workflow stage complete. Never recomputes feasibility.

        Raises:
            StageLockedError: If the previous stage is not complete.
        """
        project = self.get(project_id)
        status = workflow.complete_stage(project.workflow, stage)
        if status is project.workflow:
            return project

        updated = project.model_copy(
            update={"workflow": status, "updated_at": datetime.now(UTC)},
        )
        self._projects[project_id] = updated
        logger.info("Project %s completed stage %s", project_id, stage)
        return updated

    # ------------------------------------------------------------------
    # Cost breakdowns
    # ------------------------------------------------------------------

    def list_cost_breakdowns(self, project_id: str) -> list[CostBreakdown]:
        self.get(project_id)
        return [
            self._to_breakdown(project_id, index, row)
            for index, row in enumerate(self._breakdowns[project_id])
        ]

    def add_cost_breakdown(
        self, project_id: str, row: CostBreakdownCreate,
    ) -> CostBreakdown:
        self.get(project_id)
        rows = self._breakdowns[project_id]
        rows.append(CostBreakdownCreate.model_validate(row.model_dump()))
        return self._to_breakdown(project_id, len(rows) - 1, rows[-1])

    def update_cost_breakdown(
        self, breakdown_id: str, changes: CostBreakdownUpdate,
    ) -> CostBreakdown:
        project_id, index = self._parse_breakdown_id(breakdown_id)
        rows = self._breakdowns[project_id]
        fields = changes.model_dump(exclude_unset=True, exclude_none=True)
        rows[index] = rows[index].model_copy(update=fields)
        return self._to_breakdown(project_id, index, rows[index])

    def summarize_cost_breakdowns(self, project_id: str) -> CostBreakdownSummary:
        """Totals across the project's breakdown rows, with per-unit costs."""
        project = self.get(project_id)
        rows = self.list_cost_breakdowns(project_id)

        site_built_total = sum(r.site_built_cost for r in rows)
        modular_total = sum(r.raap_total_cost for r in rows)
        savings = site_built_total - modular_total
        units = project.attributes.total_units

        return CostBreakdownSummary(
            site_built_total=site_built_total,
            modular_total=modular_total,
            savings_amount=savings,
            savings_percent=(
                round(savings / site_built_total * 100, 1) if site_built_total > 0 else 0.0
            ),
            site_built_cost_per_unit=site_built_total / units if units > 0 else 0.0,
            modular_cost_per_unit=modular_total / units if units > 0 else 0.0,
            num_categories=len(rows),
        )

    def _parse_breakdown_id(self, breakdown_id: str) -> tuple[str, int]:
        project_id, sep, index_str = breakdown_id.rpartition(_BREAKDOWN_ID_DELIMITER)
        if not sep or not project_id or not index_str.isdigit():
            msg = (
                f"Invalid cost breakdown id '{breakdown_id}'; "
                f"expected '<project_id>{_BREAKDOWN_ID_DELIMITER}<index>'"
            )
            raise CostBreakdownNotFoundError(msg)

        index = int(index_str)
        rows = self._breakdowns.get(project_id)
        if rows is None or index >= len(rows):
            msg = f"Cost breakdown '{breakdown_id}' not found"
            raise CostBreakdownNotFoundError(msg)
        return project_id, index

    @staticmethod
    def _to_breakdown(
        project_id: str, index: int, row: CostBreakdownCreate,
    ) -> CostBreakdown:
        return CostBreakdown(
            id=f"{project_id}{_BREAKDOWN_ID_DELIMITER}{index}",
            project_id=project_id,
            **row.model_dump(),
        )

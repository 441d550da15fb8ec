"""Workflow stage ordering and gating.

Projects move through four stages in a fixed order. A stage is unlocked
once its predecessor is complete; the first stage is always unlocked.
"""

from __future__ import annotations

from datetime import UTC, datetime

from raap.exceptions import StageLockedError
from raap.models.enums import WorkflowStage
from raap.models.project import WorkflowStatus

STAGE_ORDER: tuple[WorkflowStage, ...] = (
    WorkflowStage.MODULAR_FEASIBILITY,
    WorkflowStage.SMART_START,
    WorkflowStage.FAB_ASSURE,
    WorkflowStage.EASY_DESIGN,
)


def previous_stage(stage: WorkflowStage) -> WorkflowStage | None:
    index = STAGE_ORDER.index(stage)
    return STAGE_ORDER[index - 1] if index > 0 else None


def is_unlocked(status: WorkflowStatus, stage: WorkflowStage) -> bool:
    """Whether ``stage`` may be worked on given the current completion flags."""
    prior = previous_stage(stage)
    return prior is None or status.is_complete(prior)


def current_stage(status: WorkflowStatus) -> WorkflowStage | None:
    """First incomplete stage, or None once every stage is done."""
    for stage in STAGE_ORDER:
        if not status.is_complete(stage):
            return stage
    return None


def complete_stage(
    status: WorkflowStatus,
    stage: WorkflowStage,
    now: datetime | None = None,
) -> WorkflowStatus:
    """Return a copy of ``status`` with ``stage`` marked complete.

    Completing an already complete stage returns the status unchanged.

    Raises:
        StageLockedError: If the previous stage is not complete.
    """
    if status.is_complete(stage):
        return status
    if not is_unlocked(status, stage):
        prior = previous_stage(stage)
        msg = f"Stage '{stage}' is locked until '{prior}' is complete"
        raise StageLockedError(msg)

    completed_at = dict(status.completed_at)
    completed_at[stage] = now or datetime.now(UTC)
    return status.model_copy(
        update={f"{stage.value}_complete": True, "completed_at": completed_at},
    )

"""Project domain models for the RaaP feasibility engine."""

from __future__ import annotations

import re
import uuid
from datetime import UTC, datetime

from pydantic import BaseModel, Field, field_validator

from raap.models.enums import ProjectType, WorkflowStage
from raap.models.feasibility import FeasibilityResult

# Matches "146' X 66'", "146 x 66", "146.5' × 66'"
_DIMENSIONS_RE = re.compile(
    r"^\s*(\d+(?:\.\d+)?)\s*'?\s*[xX×]\s*(\d+(?:\.\d+)?)\s*'?\s*$"
)

# Fields of ProjectAttributes, i.e. the inputs of the scoring engine.
SCORING_FIELDS: frozenset[str] = frozenset({
    "project_type",
    "target_floors",
    "studio_units",
    "one_bed_units",
    "two_bed_units",
    "three_bed_units",
    "building_dimensions",
})


def parse_building_dimensions(value: str) -> tuple[float, float] | None:
    """Parse a ``"W' X D'"`` footprint string into (width_ft, depth_ft)."""
    match = _DIMENSIONS_RE.match(value)
    if match is None:
        return None
    return float(match.group(1)), float(match.group(2))


def _check_dimensions(v: str | None) -> str | None:
    if v is not None and parse_building_dimensions(v) is None:
        msg = f"building_dimensions must look like \"146' X 66'\", got {v!r}"
        raise ValueError(msg)
    return v


class ProjectAttributes(BaseModel):
    """Input to the feasibility scoring engine.

    A snapshot of the scoring-relevant parameters of a project: program
    type, height and unit mix.

    Counts are strict integers: bools, numeric strings and floats are
    rejected instead of coerced.
    """

    project_type: ProjectType
    target_floors: int = Field(ge=1, strict=True)
    studio_units: int = Field(default=0, ge=0, strict=True)
    one_bed_units: int = Field(default=0, ge=0, strict=True)
    two_bed_units: int = Field(default=0, ge=0, strict=True)
    three_bed_units: int = Field(default=0, ge=0, strict=True)
    building_dimensions: str | None = None

    @field_validator("building_dimensions")
    @classmethod
    def dimensions_must_parse(cls, v: str | None) -> str | None:
        return _check_dimensions(v)

    @property
    def total_units(self) -> int:
        return (
            self.studio_units
            + self.one_bed_units
            + self.two_bed_units
            + self.three_bed_units
        )

    @property
    def footprint_sf(self) -> float | None:
        """Building footprint area in square feet, if dimensions are known."""
        if self.building_dimensions is None:
            return None
        parsed = parse_building_dimensions(self.building_dimensions)
        if parsed is None:
            return None
        width, depth = parsed
        return width * depth


class ProjectCreate(ProjectAttributes):
    """Payload for creating a project."""

    name: str = Field(min_length=1)
    address: str = Field(min_length=1)
    construction_type: str | None = None
    target_parking_spaces: int | None = Field(default=None, ge=0)

    def to_attributes(self) -> ProjectAttributes:
        return ProjectAttributes(**self.model_dump(include=set(SCORING_FIELDS)))


class ProjectUpdate(BaseModel):
    """Partial update of a project. Only fields that are set are applied."""

    name: str | None = Field(default=None, min_length=1)
    address: str | None = Field(default=None, min_length=1)
    construction_type: str | None = None
    target_parking_spaces: int | None = Field(default=None, ge=0)

    project_type: ProjectType | None = None
    target_floors: int | None = Field(default=None, ge=1, strict=True)
    studio_units: int | None = Field(default=None, ge=0, strict=True)
    one_bed_units: int | None = Field(default=None, ge=0, strict=True)
    two_bed_units: int | None = Field(default=None, ge=0, strict=True)
    three_bed_units: int | None = Field(default=None, ge=0, strict=True)
    building_dimensions: str | None = None

    @field_validator("building_dimensions")
    @classmethod
    def dimensions_must_parse(cls, v: str | None) -> str | None:
        return _check_dimensions(v)


class WorkflowStatus(BaseModel):
    """Completion flags for the four workflow stages."""

    modular_feasibility_complete: bool = False
    smart_start_complete: bool = False
    fab_assure_complete: bool = False
    easy_design_complete: bool = False
    completed_at: dict[WorkflowStage, datetime] = Field(default_factory=dict)

    def is_complete(self, stage: WorkflowStage) -> bool:
        return bool(getattr(self, f"{stage.value}_complete"))


class Project(BaseModel):
    """A persisted project: attributes, last computed result and workflow state."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str
    name: str
    address: str
    construction_type: str | None = None
    target_parking_spaces: int | None = None
    attributes: ProjectAttributes
    feasibility: FeasibilityResult
    workflow: WorkflowStatus = Field(default_factory=WorkflowStatus)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

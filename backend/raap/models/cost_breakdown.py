"""MasterFormat cost breakdown models.

Breakdown rows are entered by users or loaded from sample data; they are
never derived by the scoring engine.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, Field, computed_field

_CATEGORY_CODE_RE = re.compile(r"^\s*(\d{2})\b")


class CostBreakdownCreate(BaseModel):
    """One MasterFormat category row, e.g. ``"03 Concrete"``."""

    category: str = Field(min_length=1)
    site_built_cost: float = Field(default=0.0, ge=0)
    raap_gc_cost: float = Field(default=0.0, ge=0)
    raap_fab_cost: float = Field(default=0.0, ge=0)


class CostBreakdownUpdate(BaseModel):
    category: str | None = Field(default=None, min_length=1)
    site_built_cost: float | None = Field(default=None, ge=0)
    raap_gc_cost: float | None = Field(default=None, ge=0)
    raap_fab_cost: float | None = Field(default=None, ge=0)


class CostBreakdown(CostBreakdownCreate):
    """A stored cost breakdown row.

    ``id`` has the form ``<project_id>::<index>``.
    """

    id: str
    project_id: str

    @computed_field  # type: ignore[prop-decorator]
    @property
    def raap_total_cost(self) -> float:
        return self.raap_gc_cost + self.raap_fab_cost

    @computed_field  # type: ignore[prop-decorator]
    @property
    def category_code(self) -> str:
        match = _CATEGORY_CODE_RE.match(self.category)
        return match.group(1) if match else self.category.strip()


class CostBreakdownSummary(BaseModel):
    """Totals across all breakdown rows of a project."""

    site_built_total: float
    modular_total: float
    savings_amount: float
    savings_percent: float
    site_built_cost_per_unit: float
    modular_cost_per_unit: float
    num_categories: int

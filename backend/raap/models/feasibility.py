"""Feasibility assessment output models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from raap.models.enums import ScoreCategory


class TimelinePhases(BaseModel):
    """Split of a construction timeline into its phases, in months."""

    design_months: float = Field(ge=0)
    fabrication_months: float = Field(default=0.0, ge=0)
    site_work_months: float = Field(default=0.0, ge=0)
    construction_months: float = Field(default=0.0, ge=0)


class FeasibilityResult(BaseModel):
    """Complete output of the feasibility scoring engine.

    Stored on the project record and recomputed whenever a
    scoring-relevant attribute changes. Scores are on a 1.0-5.0 scale with
    one decimal place; totals are whole dollars.
    """

    total_units: int = Field(ge=0)
    gross_sf: float = Field(ge=0)

    zoning_score: float = Field(ge=1.0, le=5.0)
    massing_score: float = Field(ge=1.0, le=5.0)
    cost_score: float = Field(ge=1.0, le=5.0)
    sustainability_score: float = Field(ge=1.0, le=5.0)
    logistics_score: float = Field(ge=1.0, le=5.0)
    build_time_score: float = Field(ge=1.0, le=5.0)
    overall_score: float = Field(ge=1.0, le=5.0)

    zoning_justification: str
    massing_justification: str
    cost_justification: str
    sustainability_justification: str
    logistics_justification: str
    build_time_justification: str

    modular_total_cost: float = Field(ge=0)
    site_built_total_cost: float = Field(ge=0)
    modular_cost_per_unit: float = Field(ge=0)
    site_built_cost_per_unit: float = Field(ge=0)
    modular_cost_per_sf: float = Field(ge=0)
    site_built_cost_per_sf: float = Field(ge=0)
    cost_savings_percent: float
    cost_savings_amount: float

    modular_timeline_months: int = Field(gt=0)
    site_built_timeline_months: int = Field(gt=0)
    time_savings_months: int = Field(gt=0)
    time_savings_percent: float
    modular_phases: TimelinePhases
    site_built_phases: TimelinePhases

    density_bonus_eligible: bool = False

    def category_scores(self) -> dict[ScoreCategory, float]:
        """Map each scoring category to its score."""
        return {
            ScoreCategory.ZONING: self.zoning_score,
            ScoreCategory.MASSING: self.massing_score,
            ScoreCategory.COST: self.cost_score,
            ScoreCategory.SUSTAINABILITY: self.sustainability_score,
            ScoreCategory.LOGISTICS: self.logistics_score,
            ScoreCategory.BUILD_TIME: self.build_time_score,
        }

    def justifications(self) -> dict[ScoreCategory, str]:
        return {
            ScoreCategory.ZONING: self.zoning_justification,
            ScoreCategory.MASSING: self.massing_justification,
            ScoreCategory.COST: self.cost_justification,
            ScoreCategory.SUSTAINABILITY: self.sustainability_justification,
            ScoreCategory.LOGISTICS: self.logistics_justification,
            ScoreCategory.BUILD_TIME: self.build_time_justification,
        }

    def to_summary_dict(self) -> dict[str, Any]:
        """Produce a flat summary dict for frontend consumption.

        Returns a dict with formatted strings for direct display in the
        project cards and the feasibility tab.
        """
        from raap.formatting import (
            format_cost_per_sf,
            format_currency,
            format_currency_short,
            format_months,
            format_score,
        )

        justifications = self.justifications()
        return {
            "overall_score_formatted": format_score(self.overall_score),
            "categories": [
                {
                    "category": category.value,
                    "score": score,
                    "score_formatted": format_score(score),
                    "justification": justifications[category],
                }
                for category, score in self.category_scores().items()
            ],
            "total_units": self.total_units,
            "modular_total_cost_short": format_currency_short(self.modular_total_cost),
            "site_built_total_cost_short": format_currency_short(
                self.site_built_total_cost,
            ),
            "modular_total_cost_formatted": format_currency(self.modular_total_cost),
            "site_built_total_cost_formatted": format_currency(self.site_built_total_cost),
            "modular_cost_per_unit_formatted": format_currency(self.modular_cost_per_unit),
            "site_built_cost_per_unit_formatted": format_currency(
                self.site_built_cost_per_unit,
            ),
            "modular_cost_per_sf_formatted": format_cost_per_sf(self.modular_cost_per_sf),
            "site_built_cost_per_sf_formatted": format_cost_per_sf(
                self.site_built_cost_per_sf,
            ),
            "cost_savings_formatted": f"{self.cost_savings_percent:.1f}%",
            "modular_timeline_formatted": format_months(self.modular_timeline_months),
            "site_built_timeline_formatted": format_months(self.site_built_timeline_months),
            "time_savings_formatted": format_months(self.time_savings_months),
            "density_bonus_eligible": self.density_bonus_eligible,
        }

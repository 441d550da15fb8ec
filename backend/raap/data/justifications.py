"""Canned justification text for each feasibility category.

Each category has four tiers, evaluated top-down: the first tier whose
threshold the score meets wins, and the final tier (threshold ``None``)
catches everything else. Templates are ``str.format`` strings and may
reference ``total_units``, ``cost_savings_percent`` and
``time_savings_months``.
"""

from __future__ import annotations

from decimal import Decimal

from raap.models.enums import ScoreCategory

JustificationTier = tuple[Decimal | None, str]

EXCELLENT = Decimal("4.5")
GOOD = Decimal("4.0")
MODERATE = Decimal("3.5")

JUSTIFICATIONS: dict[ScoreCategory, tuple[JustificationTier, ...]] = {
    ScoreCategory.ZONING: (
        (EXCELLENT, "Excellent zoning compatibility with a streamlined approval "
                    "process and favorable regulations."),
        (GOOD, "Good zoning fit with minor concessions required for the optimal "
               "project configuration."),
        (MODERATE, "Moderate zoning compatibility with some restrictions and "
                   "waiver requirements."),
        (None, "Challenging zoning situation requiring significant variances "
               "and concessions."),
    ),
    ScoreCategory.MASSING: (
        (EXCELLENT, "Excellent modular efficiency with {total_units} units "
                    "configured for optimal factory construction."),
        (GOOD, "Good modular fit achieving the target unit count with efficient "
               "repetitive layouts."),
        (MODERATE, "Moderate modular compatibility with some design adaptations "
                   "needed."),
        (None, "Challenging massing configuration requiring significant modular "
               "design modifications."),
    ),
    ScoreCategory.COST: (
        (EXCELLENT, "Strong cost advantages with {cost_savings_percent:.1f}% "
                    "savings over site-built construction."),
        (GOOD, "Cost competitive with {cost_savings_percent:.1f}% savings through "
               "modular efficiencies."),
        (MODERATE, "Moderate cost benefits with {cost_savings_percent:.1f}% "
                   "savings over traditional construction."),
        (None, "Limited cost advantage: {cost_savings_percent:.1f}% savings, close "
               "to site-built construction."),
    ),
    ScoreCategory.SUSTAINABILITY: (
        (EXCELLENT, "Excellent sustainability alignment with Net Zero Energy and "
                    "PHIUS certification potential."),
        (GOOD, "Good sustainability benefits through factory waste reduction and "
               "efficiency."),
        (MODERATE, "Moderate sustainability improvements over traditional "
                   "construction methods."),
        (None, "Limited sustainability advantages with the modular construction "
               "approach."),
    ),
    ScoreCategory.LOGISTICS: (
        (EXCELLENT, "Excellent logistics with optimal factory proximity, highway "
                    "access, and staging capabilities."),
        (GOOD, "Good logistics setup with reasonable transportation routes and "
               "adequate staging space."),
        (MODERATE, "Moderate logistics challenges with some transportation or "
                   "staging constraints."),
        (None, "Significant logistics obstacles requiring careful planning and "
               "coordination."),
    ),
    ScoreCategory.BUILD_TIME: (
        (EXCELLENT, "Excellent time savings of {time_savings_months} months through "
                    "parallel site work and factory production."),
        (GOOD, "Good time advantage with {time_savings_months} months saved over a "
               "traditional construction timeline."),
        (MODERATE, "Moderate time benefit with a {time_savings_months} month "
                   "reduction in the project schedule."),
        (None, "Minimal time advantage ({time_savings_months} months) over "
               "site-built construction methods."),
    ),
}


def justify(
    category: ScoreCategory,
    score: Decimal,
    **context: object,
) -> str:
    """Return the justification sentence for ``score`` in ``category``."""
    for threshold, template in JUSTIFICATIONS[category]:
        if threshold is None or score >= threshold:
            return template.format(**context)
    # Unreachable while every table ends with a catch-all tier.
    msg = f"No justification tier matched {category} score {score}"
    raise ValueError(msg)

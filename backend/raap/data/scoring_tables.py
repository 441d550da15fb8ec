"""Constants for the modular feasibility scoring model.

All scores are on a 1.0-5.0 scale and kept as ``Decimal`` so that the
0.1-step adjustments stay exact.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from raap.models.enums import ProjectType, ScoreCategory

SCORE_MIN = Decimal("1.0")
SCORE_MAX = Decimal("5.0")

# Starting point before any project-type override.
BASE_SCORES: dict[ScoreCategory, Decimal] = {
    ScoreCategory.ZONING: Decimal("3.5"),
    ScoreCategory.MASSING: Decimal("4.0"),
    ScoreCategory.COST: Decimal("4.0"),
    ScoreCategory.SUSTAINABILITY: Decimal("4.0"),
    ScoreCategory.LOGISTICS: Decimal("4.0"),
    ScoreCategory.BUILD_TIME: Decimal("4.0"),
}

# Per-type overrides. Values replace the base score; they do not add to it.
PROJECT_TYPE_OVERRIDES: dict[ProjectType, dict[ScoreCategory, Decimal]] = {
    ProjectType.AFFORDABLE: {
        ScoreCategory.ZONING: Decimal("4.0"),
        ScoreCategory.SUSTAINABILITY: Decimal("5.0"),
    },
    ProjectType.SENIOR: {
        ScoreCategory.ZONING: Decimal("4.2"),
        ScoreCategory.COST: Decimal("4.5"),
    },
    ProjectType.WORKFORCE: {
        ScoreCategory.ZONING: Decimal("4.8"),
        ScoreCategory.COST: Decimal("4.8"),
        ScoreCategory.BUILD_TIME: Decimal("5.0"),
    },
    ProjectType.STUDENT: {
        ScoreCategory.ZONING: Decimal("3.5"),
        ScoreCategory.LOGISTICS: Decimal("3.5"),
    },
    ProjectType.MARKET_RATE: {},
}

# Weights of each category in the overall score. Must sum to 1.00.
SCORE_WEIGHTS: dict[ScoreCategory, Decimal] = {
    ScoreCategory.ZONING: Decimal("0.20"),
    ScoreCategory.MASSING: Decimal("0.15"),
    ScoreCategory.COST: Decimal("0.20"),
    ScoreCategory.SUSTAINABILITY: Decimal("0.20"),
    ScoreCategory.LOGISTICS: Decimal("0.15"),
    ScoreCategory.BUILD_TIME: Decimal("0.10"),
}


@dataclass(frozen=True)
class ScoreAdjustment:
    """A clamped additive adjustment to a single category score.

    ``bound`` is an upper clamp for positive deltas and a lower clamp for
    negative ones.
    """

    category: ScoreCategory
    delta: Decimal
    bound: Decimal

    def apply(self, score: Decimal) -> Decimal:
        if self.delta >= 0:
            return min(self.bound, score + self.delta)
        return max(self.bound, score + self.delta)


# Unit-count rules: large projects gain repetition, small ones lose economy of scale.
LARGE_PROJECT_MIN_UNITS = 30
SMALL_PROJECT_MAX_UNITS = 20  # exclusive

LARGE_PROJECT_ADJUSTMENTS: tuple[ScoreAdjustment, ...] = (
    ScoreAdjustment(ScoreCategory.MASSING, Decimal("0.5"), Decimal("5.0")),
    ScoreAdjustment(ScoreCategory.COST, Decimal("0.3"), Decimal("5.0")),
)
SMALL_PROJECT_ADJUSTMENTS: tuple[ScoreAdjustment, ...] = (
    ScoreAdjustment(ScoreCategory.COST, Decimal("-0.3"), Decimal("3.0")),
)

# Floor-count rules.
HIGH_RISE_MIN_FLOORS = 5
LOW_RISE_MAX_FLOORS = 3

HIGH_RISE_ADJUSTMENTS: tuple[ScoreAdjustment, ...] = (
    ScoreAdjustment(ScoreCategory.MASSING, Decimal("-0.3"), Decimal("3.5")),
    ScoreAdjustment(ScoreCategory.LOGISTICS, Decimal("-0.3"), Decimal("3.5")),
)
LOW_RISE_ADJUSTMENTS: tuple[ScoreAdjustment, ...] = (
    ScoreAdjustment(ScoreCategory.SUSTAINABILITY, Decimal("0.3"), Decimal("5.0")),
)

# Modular construction cost per unit, whole dollars.
BASE_COST_PER_UNIT: dict[ProjectType, int] = {
    ProjectType.AFFORDABLE: 451_000,
    ProjectType.SENIOR: 515_000,
    ProjectType.WORKFORCE: 480_000,
    ProjectType.STUDENT: 512_000,
    ProjectType.MARKET_RATE: 512_000,
}
# Per-unit costs are priced in whole thousands so that a one-decimal percent
# premium on the modular total is always a whole-dollar amount.
COST_PER_UNIT_STEP = 1_000

# (minimum cost score, site-built premium in percent), evaluated top-down.
COST_SAVINGS_STEPS: tuple[tuple[Decimal, Decimal], ...] = (
    (Decimal("4.5"), Decimal("4.5")),
    (Decimal("4.0"), Decimal("1.2")),
)
DEFAULT_COST_SAVINGS_PERCENT = Decimal("0.8")

# (minimum build-time score, months saved), evaluated top-down.
TIME_SAVINGS_STEPS: tuple[tuple[Decimal, int], ...] = (
    (Decimal("4.5"), 6),
    (Decimal("4.0"), 4),
)
DEFAULT_TIME_SAVINGS_MONTHS = 3

BASE_MODULAR_TIMELINE_MONTHS = 9
HIGH_RISE_TIMELINE_PENALTY_MONTHS = 2

# Used for $/SF when no building dimensions are recorded.
DEFAULT_SF_PER_UNIT = 720

# Share of each timeline spent per phase.
MODULAR_PHASE_SPLIT: dict[str, Decimal] = {
    "design_months": Decimal("0.3"),
    "fabrication_months": Decimal("0.5"),
    "site_work_months": Decimal("0.2"),
}
SITE_BUILT_PHASE_SPLIT: dict[str, Decimal] = {
    "design_months": Decimal("0.2"),
    "construction_months": Decimal("0.8"),
}

DENSITY_BONUS_PROJECT_TYPES: frozenset[ProjectType] = frozenset({
    ProjectType.AFFORDABLE,
    ProjectType.WORKFORCE,
})

"""Core feasibility scoring engine for the RaaP modular feasibility library.

The FeasibilityEngine maps a project's attributes to a modular construction
feasibility assessment:

1. **Base scores**: Start every category at its base score, then overwrite
   the categories the project type cares about.
2. **Unit-count adjustment**: Large projects (30+ units) gain massing and
   cost; small ones (under 20 units) lose cost.
3. **Floor-count adjustment**: Taller buildings (5+ floors) lose massing and
   logistics; low-rise (3 floors or fewer) gains sustainability.
4. **Overall score**: Weighted sum of the six category scores.
5. **Justifications**: One canned sentence per category, picked by score tier.
6. **Cost estimate**: Modular cost from a per-unit base; site-built cost is
   the modular cost plus a premium stepped on the cost score.
7. **Timeline estimate**: Modular months from the floor count; site-built
   months add a saving stepped on the build-time score.

All arithmetic is done in ``Decimal``. Every adjustment is a multiple of 0.1,
so category scores are exact and the savings steps read the same value that
is reported.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, TypeVar

from pydantic import ValidationError

from raap.data.justifications import justify
from raap.data.scoring_tables import (
    BASE_COST_PER_UNIT,
    BASE_MODULAR_TIMELINE_MONTHS,
    BASE_SCORES,
    COST_PER_UNIT_STEP,
    COST_SAVINGS_STEPS,
    DEFAULT_COST_SAVINGS_PERCENT,
    DEFAULT_SF_PER_UNIT,
    DEFAULT_TIME_SAVINGS_MONTHS,
    DENSITY_BONUS_PROJECT_TYPES,
    HIGH_RISE_ADJUSTMENTS,
    HIGH_RISE_MIN_FLOORS,
    HIGH_RISE_TIMELINE_PENALTY_MONTHS,
    LARGE_PROJECT_ADJUSTMENTS,
    LARGE_PROJECT_MIN_UNITS,
    LOW_RISE_ADJUSTMENTS,
    LOW_RISE_MAX_FLOORS,
    MODULAR_PHASE_SPLIT,
    PROJECT_TYPE_OVERRIDES,
    SCORE_MAX,
    SCORE_MIN,
    SCORE_WEIGHTS,
    SITE_BUILT_PHASE_SPLIT,
    SMALL_PROJECT_ADJUSTMENTS,
    SMALL_PROJECT_MAX_UNITS,
    TIME_SAVINGS_STEPS,
    ScoreAdjustment,
)
from raap.exceptions import ProjectValidationError
from raap.models.enums import ProjectType, ScoreCategory
from raap.models.feasibility import FeasibilityResult, TimelinePhases
from raap.models.project import ProjectAttributes

ENGINE_VERSION = "0.1.0"

_ONE_DECIMAL = Decimal("0.1")
_CENTS = Decimal("0.01")
_DOLLARS = Decimal("1")

_T = TypeVar("_T")


class FeasibilityEngine:
    """Pure scoring engine that converts ProjectAttributes into a FeasibilityResult.

    The engine holds no mutable state and performs no I/O, so one instance
    can be shared across request handlers.

    Args:
        base_cost_per_unit: Optional override of the modular cost per unit by
            project type. Defaults to the built-in table. Every project type
            needs an entry, in whole thousands of dollars: the site-built
            premium has one decimal place of percent, so only then is the
            site-built total an exact whole-dollar amount.

    Raises:
        ValueError: If the cost table misses a project type or holds an
            amount that is negative or not a multiple of 1000.

    Example::

        engine = FeasibilityEngine()
        result = engine.assess(
            ProjectAttributes(project_type="affordable", target_floors=3,
                              one_bed_units=6, two_bed_units=12,
                              three_bed_units=6)
        )
    """

    def __init__(
        self,
        base_cost_per_unit: Mapping[ProjectType, int] | None = None,
    ) -> None:
        costs = dict(base_cost_per_unit or BASE_COST_PER_UNIT)
        missing = [t.value for t in ProjectType if t not in costs]
        if missing:
            msg = f"base_cost_per_unit is missing project types: {', '.join(missing)}"
            raise ValueError(msg)
        for project_type, cost in costs.items():
            if cost < 0 or cost % COST_PER_UNIT_STEP != 0:
                msg = (
                    f"base_cost_per_unit[{project_type}] must be a non-negative "
                    f"multiple of {COST_PER_UNIT_STEP}, got {cost}"
                )
                raise ValueError(msg)
        self._base_cost_per_unit = costs

    def assess(
        self,
        attributes: ProjectAttributes | Mapping[str, Any],
    ) -> FeasibilityResult:
        """Score a project for modular construction feasibility.

        Args:
            attributes: The project's scoring inputs, as a model or a plain
                mapping of field name to value.

        Returns:
            The six category scores, the overall score, justifications and
            the modular vs. site-built cost and timeline comparison.

        Raises:
            ProjectValidationError: If any attribute is missing or invalid.
        """
        attrs = validate_attributes(attributes)
        total_units = attrs.total_units

        # 1. Base scores with project-type overrides
        scores: dict[ScoreCategory, Decimal] = dict(BASE_SCORES)
        scores.update(PROJECT_TYPE_OVERRIDES[attrs.project_type])

        # 2. Unit-count adjustment
        if total_units >= LARGE_PROJECT_MIN_UNITS:
            _apply(scores, LARGE_PROJECT_ADJUSTMENTS)
        elif total_units < SMALL_PROJECT_MAX_UNITS:
            _apply(scores, SMALL_PROJECT_ADJUSTMENTS)

        # 3. Floor-count adjustment
        if attrs.target_floors >= HIGH_RISE_MIN_FLOORS:
            _apply(scores, HIGH_RISE_ADJUSTMENTS)
        elif attrs.target_floors <= LOW_RISE_MAX_FLOORS:
            _apply(scores, LOW_RISE_ADJUSTMENTS)

        # 4. Round and weight
        rounded = {category: round_score(score) for category, score in scores.items()}
        overall = round_score(
            sum(
                (rounded[category] * weight for category, weight in SCORE_WEIGHTS.items()),
                Decimal("0"),
            )
        )

        # 6. Cost estimate
        cost_score = rounded[ScoreCategory.COST]
        cost_savings_percent = _step(
            cost_score, COST_SAVINGS_STEPS, DEFAULT_COST_SAVINGS_PERCENT,
        )
        base_cost = self._base_cost_per_unit[attrs.project_type]
        modular_total = Decimal(total_units * base_cost)
        site_built_total = (
            modular_total * (1 + cost_savings_percent / 100)
        ).quantize(_DOLLARS, rounding=ROUND_HALF_UP)
        gross_sf = _gross_sf(attrs)

        # 7. Timeline estimate
        modular_months = BASE_MODULAR_TIMELINE_MONTHS
        if attrs.target_floors >= HIGH_RISE_MIN_FLOORS:
            modular_months += HIGH_RISE_TIMELINE_PENALTY_MONTHS
        time_savings_months = _step(
            rounded[ScoreCategory.BUILD_TIME],
            TIME_SAVINGS_STEPS,
            DEFAULT_TIME_SAVINGS_MONTHS,
        )
        site_built_months = modular_months + time_savings_months

        # 5. Justifications (after 6 and 7, which they quote)
        context = {
            "total_units": total_units,
            "cost_savings_percent": cost_savings_percent,
            "time_savings_months": time_savings_months,
        }
        texts = {
            category: justify(category, score, **context)
            for category, score in rounded.items()
        }

        return FeasibilityResult(
            total_units=total_units,
            gross_sf=float(gross_sf),
            zoning_score=float(rounded[ScoreCategory.ZONING]),
            massing_score=float(rounded[ScoreCategory.MASSING]),
            cost_score=float(cost_score),
            sustainability_score=float(rounded[ScoreCategory.SUSTAINABILITY]),
            logistics_score=float(rounded[ScoreCategory.LOGISTICS]),
            build_time_score=float(rounded[ScoreCategory.BUILD_TIME]),
            overall_score=float(overall),
            zoning_justification=texts[ScoreCategory.ZONING],
            massing_justification=texts[ScoreCategory.MASSING],
            cost_justification=texts[ScoreCategory.COST],
            sustainability_justification=texts[ScoreCategory.SUSTAINABILITY],
            logistics_justification=texts[ScoreCategory.LOGISTICS],
            build_time_justification=texts[ScoreCategory.BUILD_TIME],
            modular_total_cost=float(modular_total),
            site_built_total_cost=float(site_built_total),
            modular_cost_per_unit=float(_per(modular_total, Decimal(total_units))),
            site_built_cost_per_unit=float(_per(site_built_total, Decimal(total_units))),
            modular_cost_per_sf=float(_per(modular_total, gross_sf)),
            site_built_cost_per_sf=float(_per(site_built_total, gross_sf)),
            cost_savings_percent=float(cost_savings_percent),
            cost_savings_amount=float(site_built_total - modular_total),
            modular_timeline_months=modular_months,
            site_built_timeline_months=site_built_months,
            time_savings_months=time_savings_months,
            time_savings_percent=float(
                (Decimal(time_savings_months) * 100 / site_built_months).quantize(
                    _ONE_DECIMAL, rounding=ROUND_HALF_UP,
                )
            ),
            modular_phases=_phases(modular_months, MODULAR_PHASE_SPLIT),
            site_built_phases=_phases(site_built_months, SITE_BUILT_PHASE_SPLIT),
            density_bonus_eligible=attrs.project_type in DENSITY_BONUS_PROJECT_TYPES,
        )


def compute_feasibility(
    attributes: ProjectAttributes | Mapping[str, Any],
) -> FeasibilityResult:
    """Score a project with the default engine configuration."""
    return _DEFAULT_ENGINE.assess(attributes)


def validate_attributes(
    attributes: ProjectAttributes | Mapping[str, Any],
) -> ProjectAttributes:
    """Re-validate engine input, naming the first offending field on failure.

    Models are re-checked too, since ``model_construct`` and attribute
    assignment both bypass validation.
    """
    if isinstance(attributes, ProjectAttributes):
        data = {
            name: getattr(attributes, name, None)
            for name in ProjectAttributes.model_fields
        }
    else:
        data = dict(attributes)

    try:
        return ProjectAttributes.model_validate(data)
    except ValidationError as exc:
        error = exc.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or "attributes"
        raise ProjectValidationError(field, error["msg"]) from exc


def round_score(score: Decimal) -> Decimal:
    """Clamp to the 1.0-5.0 scale and round half-up to one decimal place."""
    clamped = max(SCORE_MIN, min(SCORE_MAX, score))
    return clamped.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)


def _apply(
    scores: dict[ScoreCategory, Decimal],
    adjustments: tuple[ScoreAdjustment, ...],
) -> None:
    for adjustment in adjustments:
        scores[adjustment.category] = adjustment.apply(scores[adjustment.category])


def _step(score: Decimal, steps: tuple[tuple[Decimal, _T], ...], default: _T) -> _T:
    for minimum, value in steps:
        if score >= minimum:
            return value
    return default


def _gross_sf(attrs: ProjectAttributes) -> Decimal:
    footprint = attrs.footprint_sf
    if footprint is not None:
        return Decimal(str(footprint)) * attrs.target_floors
    return Decimal(attrs.total_units * DEFAULT_SF_PER_UNIT)


def _per(total: Decimal, quantity: Decimal) -> Decimal:
    """Divide ``total`` by ``quantity`` to cents; zero quantity yields zero."""
    if quantity <= 0:
        return Decimal("0")
    return (total / quantity).quantize(_CENTS, rounding=ROUND_HALF_UP)


def _phases(months: int, split: dict[str, Decimal]) -> TimelinePhases:
    return TimelinePhases(**{
        phase: float((months * share).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))
        for phase, share in split.items()
    })


_DEFAULT_ENGINE = FeasibilityEngine()

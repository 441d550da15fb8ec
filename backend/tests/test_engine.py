"""Tests for the FeasibilityEngine, the core scoring model."""

from __future__ import annotations

import itertools
from decimal import ROUND_HALF_UP, Decimal

import pytest

from raap.data.scoring_tables import SCORE_WEIGHTS
from raap.engine import FeasibilityEngine, compute_feasibility
from raap.exceptions import ProjectValidationError
from raap.models.enums import ProjectType, ScoreCategory
from raap.models.feasibility import FeasibilityResult
from raap.models.project import ProjectAttributes


@pytest.fixture()
def engine() -> FeasibilityEngine:
    return FeasibilityEngine()


# ---------------------------------------------------------------------------
# Helper builders
# ---------------------------------------------------------------------------


def _attrs(
    project_type: ProjectType = ProjectType.MARKET_RATE,
    target_floors: int = 4,
    units: tuple[int, int, int, int] = (0, 10, 10, 4),
    building_dimensions: str | None = None,
) -> ProjectAttributes:
    studio, one_bed, two_bed, three_bed = units
    return ProjectAttributes(
        project_type=project_type,
        target_floors=target_floors,
        studio_units=studio,
        one_bed_units=one_bed,
        two_bed_units=two_bed,
        three_bed_units=three_bed,
        building_dimensions=building_dimensions,
    )


def _serenity_village(building_dimensions: str | None = None) -> ProjectAttributes:
    """Affordable, 3 floors, 24 units (0 studio / 6 1BR / 12 2BR / 6 3BR)."""
    return _attrs(
        project_type=ProjectType.AFFORDABLE,
        target_floors=3,
        units=(0, 6, 12, 6),
        building_dimensions=building_dimensions,
    )


def _workforce_high_rise() -> ProjectAttributes:
    """Workforce, 6 floors, 32 units."""
    return _attrs(
        project_type=ProjectType.WORKFORCE,
        target_floors=6,
        units=(0, 16, 16, 0),
    )


def _d(value: float) -> Decimal:
    return Decimal(str(value))


# ---------------------------------------------------------------------------
# Scenario tests
# ---------------------------------------------------------------------------


class TestSerenityVillage:
    """Affordable low-rise with a mid-size unit count."""

    def test_category_scores(self, engine: FeasibilityEngine) -> None:
        result = engine.assess(_serenity_village())
        assert result.zoning_score == 4.0
        # 5.0 base, +0.3 low-rise bonus clamped back to 5.0
        assert result.sustainability_score == 5.0
        # 24 units: neither the 30+ nor the under-20 rule applies
        assert result.massing_score == 4.0
        assert result.cost_score == 4.0
        assert result.logistics_score == 4.0
        assert result.build_time_score == 4.0

    def test_overall_score(self, engine: FeasibilityEngine) -> None:
        # 4.0*.20 + 4.0*.15 + 4.0*.20 + 5.0*.20 + 4.0*.15 + 4.0*.10 = 4.2
        result = engine.assess(_serenity_village())
        assert result.overall_score == 4.2

    def test_costs(self, engine: FeasibilityEngine) -> None:
        result = engine.assess(_serenity_village())
        assert result.total_units == 24
        assert result.cost_savings_percent == 1.2
        assert result.modular_total_cost == 10_824_000
        # 10,824,000 * 1.012
        assert result.site_built_total_cost == 10_953_888
        assert result.modular_cost_per_unit == 451_000
        assert result.site_built_cost_per_unit == 456_412
        assert result.cost_savings_amount == 129_888

    def test_timeline(self, engine: FeasibilityEngine) -> None:
        result = engine.assess(_serenity_village())
        assert result.modular_timeline_months == 9
        assert result.time_savings_months == 4
        assert result.site_built_timeline_months == 13
        assert result.time_savings_percent == 30.8

    def test_timeline_phases(self, engine: FeasibilityEngine) -> None:
        result = engine.assess(_serenity_village())
        assert result.modular_phases.design_months == 2.7
        assert result.modular_phases.fabrication_months == 4.5
        assert result.modular_phases.site_work_months == 1.8
        assert result.site_built_phases.design_months == 2.6
        assert result.site_built_phases.construction_months == 10.4

    def test_density_bonus(self, engine: FeasibilityEngine) -> None:
        assert engine.assess(_serenity_village()).density_bonus_eligible is True

    def test_justifications_quote_savings(self, engine: FeasibilityEngine) -> None:
        result = engine.assess(_serenity_village())
        assert "1.2%" in result.cost_justification
        assert result.cost_justification.startswith("Cost competitive")
        assert "4 months" in result.build_time_justification
        assert result.sustainability_justification.startswith("Excellent")
        assert result.zoning_justification.startswith("Good")


class TestWorkforceHighRise:
    """Multi-rule interaction: 30+ units and 5+ floors on the same project."""

    def test_type_overrides(self, engine: FeasibilityEngine) -> None:
        result = engine.assess(_workforce_high_rise())
        assert result.zoning_score == 4.8
        assert result.build_time_score == 5.0
        assert result.sustainability_score == 4.0

    def test_cost_hits_upper_clamp(self, engine: FeasibilityEngine) -> None:
        # 4.8 + 0.3 = 5.1, clamped to 5.0
        assert engine.assess(_workforce_high_rise()).cost_score == 5.0

    def test_massing_unit_bonus_then_floor_penalty(
        self, engine: FeasibilityEngine,
    ) -> None:
        # 4.0 + 0.5 (units) = 4.5, then 4.5 - 0.3 (floors) = 4.2
        assert engine.assess(_workforce_high_rise()).massing_score == 4.2

    def test_logistics_floor_penalty(self, engine: FeasibilityEngine) -> None:
        assert engine.assess(_workforce_high_rise()).logistics_score == 3.7

    def test_overall_score(self, engine: FeasibilityEngine) -> None:
        # .96 + .63 + 1.0 + .8 + .555 + .5 = 4.445 -> 4.4
        assert engine.assess(_workforce_high_rise()).overall_score == 4.4

    def test_costs_and_timeline(self, engine: FeasibilityEngine) -> None:
        result = engine.assess(_workforce_high_rise())
        assert result.cost_savings_percent == 4.5
        assert result.modular_total_cost == 15_360_000
        assert result.site_built_total_cost == 16_051_200
        assert result.modular_timeline_months == 11
        assert result.time_savings_months == 6
        assert result.site_built_timeline_months == 17

    def test_logistics_justification_is_moderate(
        self, engine: FeasibilityEngine,
    ) -> None:
        result = engine.assess(_workforce_high_rise())
        assert result.logistics_justification.startswith("Moderate")


class TestProjectTypes:
    def test_market_rate_keeps_base_scores(self, engine: FeasibilityEngine) -> None:
        result = engine.assess(_attrs(ProjectType.MARKET_RATE, target_floors=4))
        assert result.zoning_score == 3.5
        assert result.massing_score == 4.0
        assert result.cost_score == 4.0
        assert result.logistics_score == 4.0
        assert result.density_bonus_eligible is False

    def test_senior_small_project_loses_cost(self, engine: FeasibilityEngine) -> None:
        result = engine.assess(
            _attrs(ProjectType.SENIOR, target_floors=4, units=(2, 4, 4, 0)),
        )
        assert result.zoning_score == 4.2
        # 4.5 - 0.3 for fewer than 20 units
        assert result.cost_score == 4.2
        assert result.overall_score == 4.1

    def test_student_logistics_lower_clamp(self, engine: FeasibilityEngine) -> None:
        # 3.5 - 0.3 would be 3.2; the floor penalty never goes below 3.5
        result = engine.assess(
            _attrs(ProjectType.STUDENT, target_floors=5, units=(24, 24, 0, 0)),
        )
        assert result.logistics_score == 3.5
        assert result.zoning_score == 3.5

    def test_student_mid_rise(self, engine: FeasibilityEngine) -> None:
        result = engine.assess(
            _attrs(ProjectType.STUDENT, target_floors=4, units=(24, 24, 0, 0)),
        )
        assert result.massing_score == 4.5
        assert result.cost_score == 4.3
        # .7 + .675 + .86 + .8 + .525 + .4 = 3.96 -> 4.0
        assert result.overall_score == 4.0

    @pytest.mark.parametrize(
        ("project_type", "per_unit"),
        [
            (ProjectType.AFFORDABLE, 451_000),
            (ProjectType.SENIOR, 515_000),
            (ProjectType.WORKFORCE, 480_000),
            (ProjectType.STUDENT, 512_000),
            (ProjectType.MARKET_RATE, 512_000),
        ],
    )
    def test_base_cost_per_unit(
        self,
        engine: FeasibilityEngine,
        project_type: ProjectType,
        per_unit: int,
    ) -> None:
        result = engine.assess(_attrs(project_type, units=(0, 10, 10, 4)))
        assert result.modular_cost_per_unit == per_unit
        assert result.modular_total_cost == per_unit * 24


class TestSavingsSteps:
    def test_low_cost_score_gets_smallest_premium(
        self, engine: FeasibilityEngine,
    ) -> None:
        # Market rate with 10 units: cost 4.0 - 0.3 = 3.7
        result = engine.assess(_attrs(units=(0, 5, 5, 0)))
        assert result.cost_score == 3.7
        assert result.cost_savings_percent == 0.8
        assert result.modular_total_cost == 5_120_000
        assert result.site_built_total_cost == 5_160_960
        assert "0.8%" in result.cost_justification
        assert result.cost_justification.startswith("Moderate")

    def test_large_market_rate_high_rise(self, engine: FeasibilityEngine) -> None:
        result = engine.assess(_attrs(target_floors=5, units=(5, 10, 15, 5)))
        assert result.massing_score == 4.2
        assert result.cost_score == 4.3
        assert result.cost_savings_percent == 1.2
        assert result.overall_score == 3.9
        assert result.site_built_total_cost == 18_135_040

    def test_build_time_below_top_tier(self, engine: FeasibilityEngine) -> None:
        result = engine.assess(_attrs())
        assert result.build_time_score == 4.0
        assert result.time_savings_months == 4


class TestSquareFootage:
    def test_default_area_per_unit(self, engine: FeasibilityEngine) -> None:
        result = engine.assess(_serenity_village())
        assert result.gross_sf == 24 * 720

    def test_dimensions_times_floors(self, engine: FeasibilityEngine) -> None:
        result = engine.assess(_serenity_village("146' X 66'"))
        assert result.gross_sf == 146 * 66 * 3
        assert result.modular_cost_per_sf == pytest.approx(10_824_000 / 28_908, abs=0.01)
        assert result.site_built_cost_per_sf == pytest.approx(
            10_953_888 / 28_908, abs=0.01,
        )

    def test_dimensions_do_not_change_scores(self, engine: FeasibilityEngine) -> None:
        without = engine.assess(_serenity_village())
        with_dims = engine.assess(_serenity_village("146' X 66'"))
        assert with_dims.category_scores() == without.category_scores()
        assert with_dims.modular_total_cost == without.modular_total_cost


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


def _all_inputs() -> list[ProjectAttributes]:
    unit_mixes = [(0, 0, 0, 0), (1, 0, 0, 0), (0, 5, 10, 4), (0, 10, 10, 0),
                  (0, 10, 10, 9), (0, 15, 15, 0), (40, 40, 20, 10)]
    floors = [1, 3, 4, 5, 6, 12]
    return [
        _attrs(project_type, target_floors, units)
        for project_type, target_floors, units in itertools.product(
            ProjectType, floors, unit_mixes,
        )
    ]


class TestProperties:
    def test_deterministic(self, engine: FeasibilityEngine) -> None:
        for attrs in _all_inputs():
            assert engine.assess(attrs) == engine.assess(attrs)

    def test_weights_sum_to_one(self) -> None:
        assert sum(SCORE_WEIGHTS.values()) == Decimal("1.00")
        assert set(SCORE_WEIGHTS) == set(ScoreCategory)

    def test_overall_is_weighted_sum(self, engine: FeasibilityEngine) -> None:
        for attrs in _all_inputs():
            result = engine.assess(attrs)
            expected = sum(
                _d(score) * SCORE_WEIGHTS[category]
                for category, score in result.category_scores().items()
            ).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
            assert _d(result.overall_score) == expected

    def test_scores_within_bounds(self, engine: FeasibilityEngine) -> None:
        for attrs in _all_inputs():
            result = engine.assess(attrs)
            for score in [*result.category_scores().values(), result.overall_score]:
                assert 1.0 <= score <= 5.0
                assert _d(score) == _d(score).quantize(Decimal("0.1"))

    def test_cost_identity(self, engine: FeasibilityEngine) -> None:
        for attrs in _all_inputs():
            result = engine.assess(attrs)
            assert _d(result.site_built_total_cost) == _d(result.modular_total_cost) * (
                1 + _d(result.cost_savings_percent) / 100
            )

    def test_timeline_identity(self, engine: FeasibilityEngine) -> None:
        for attrs in _all_inputs():
            result = engine.assess(attrs)
            assert result.site_built_timeline_months == (
                result.modular_timeline_months + result.time_savings_months
            )
            assert result.modular_timeline_months > 0
            assert result.time_savings_months > 0

    def test_per_unit_is_total_over_units(self, engine: FeasibilityEngine) -> None:
        for attrs in _all_inputs():
            result = engine.assess(attrs)
            if result.total_units == 0:
                continue
            assert result.modular_cost_per_unit == pytest.approx(
                result.modular_total_cost / result.total_units, abs=0.005,
            )
            assert result.site_built_cost_per_unit == pytest.approx(
                result.site_built_total_cost / result.total_units, abs=0.005,
            )


# ---------------------------------------------------------------------------
# Edge cases
# ---------------------------------------------------------------------------


class TestZeroUnits:
    def test_does_not_raise(self, engine: FeasibilityEngine) -> None:
        result = engine.assess(_attrs(units=(0, 0, 0, 0)))
        assert isinstance(result, FeasibilityResult)

    def test_costs_are_zero(self, engine: FeasibilityEngine) -> None:
        result = engine.assess(_attrs(units=(0, 0, 0, 0)))
        assert result.modular_total_cost == 0
        assert result.site_built_total_cost == 0
        assert result.modular_cost_per_unit == 0
        assert result.site_built_cost_per_unit == 0
        assert result.modular_cost_per_sf == 0
        assert result.site_built_cost_per_sf == 0
        assert result.gross_sf == 0

    def test_zero_units_with_dimensions(self, engine: FeasibilityEngine) -> None:
        result = engine.assess(
            _attrs(units=(0, 0, 0, 0), building_dimensions="100' X 50'"),
        )
        assert result.gross_sf == 100 * 50 * 4
        assert result.modular_cost_per_sf == 0

    def test_scores_still_computed(self, engine: FeasibilityEngine) -> None:
        result = engine.assess(_attrs(units=(0, 0, 0, 0)))
        # Zero counts as a small project
        assert result.cost_score == 3.7
        assert result.modular_timeline_months == 9


class TestValidation:
    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("target_floors", True),
            ("target_floors", "3"),
            ("target_floors", 3.0),
            ("one_bed_units", "24"),
            ("one_bed_units", 24.0),
            ("three_bed_units", False),
        ],
    )
    def test_wrong_typed_counts_are_not_coerced(
        self, field: str, value: object,
    ) -> None:
        attrs: dict[str, object] = {"project_type": "affordable", "target_floors": 3}
        attrs[field] = value
        with pytest.raises(ProjectValidationError) as exc_info:
            compute_feasibility(attrs)
        assert exc_info.value.field == field

    def test_unknown_project_type(self) -> None:
        with pytest.raises(ProjectValidationError) as exc_info:
            compute_feasibility({"project_type": "luxury", "target_floors": 3})
        assert exc_info.value.field == "project_type"

    def test_negative_units(self) -> None:
        with pytest.raises(ProjectValidationError) as exc_info:
            compute_feasibility(
                {"project_type": "affordable", "target_floors": 3, "studio_units": -1},
            )
        assert exc_info.value.field == "studio_units"

    def test_zero_floors(self) -> None:
        with pytest.raises(ProjectValidationError) as exc_info:
            compute_feasibility({"project_type": "senior", "target_floors": 0})
        assert exc_info.value.field == "target_floors"

    def test_missing_floors(self) -> None:
        with pytest.raises(ProjectValidationError) as exc_info:
            compute_feasibility({"project_type": "senior"})
        assert exc_info.value.field == "target_floors"

    def test_unvalidated_model_is_rechecked(self) -> None:
        attrs = ProjectAttributes.model_construct(
            project_type=ProjectType.AFFORDABLE,
            target_floors=3,
            studio_units=0,
            one_bed_units=-4,
            two_bed_units=0,
            three_bed_units=0,
            building_dimensions=None,
        )
        with pytest.raises(ProjectValidationError) as exc_info:
            compute_feasibility(attrs)
        assert exc_info.value.field == "one_bed_units"

    def test_mapping_input_matches_model_input(self) -> None:
        mapping = {
            "project_type": "affordable",
            "target_floors": 3,
            "one_bed_units": 6,
            "two_bed_units": 12,
            "three_bed_units": 6,
        }
        assert compute_feasibility(mapping) == compute_feasibility(_serenity_village())


class TestEngineConfiguration:
    def test_cost_table_must_be_whole_thousands(self) -> None:
        costs = {t: 100_000 for t in ProjectType}
        costs[ProjectType.AFFORDABLE] = 100_001
        with pytest.raises(ValueError, match="multiple of 1000"):
            FeasibilityEngine(base_cost_per_unit=costs)

    def test_cost_table_rejects_negative(self) -> None:
        costs = {t: 100_000 for t in ProjectType}
        costs[ProjectType.SENIOR] = -1_000
        with pytest.raises(ValueError, match="non-negative"):
            FeasibilityEngine(base_cost_per_unit=costs)

    def test_cost_table_must_cover_every_type(self) -> None:
        with pytest.raises(ValueError, match="student"):
            FeasibilityEngine(
                base_cost_per_unit={
                    t: 100_000 for t in ProjectType if t is not ProjectType.STUDENT
                },
            )

    def test_custom_table_keeps_cost_identity(self) -> None:
        engine = FeasibilityEngine(
            base_cost_per_unit={t: 101_000 for t in ProjectType},
        )
        for units in [(1, 0, 0, 0), (0, 7, 0, 0), (0, 10, 10, 4), (9, 9, 9, 9)]:
            result = engine.assess(
                _attrs(ProjectType.AFFORDABLE, target_floors=3, units=units),
            )
            assert _d(result.site_built_total_cost) == _d(result.modular_total_cost) * (
                1 + _d(result.cost_savings_percent) / 100
            )

    def test_custom_cost_table(self) -> None:
        engine = FeasibilityEngine(
            base_cost_per_unit={t: 100_000 for t in ProjectType},
        )
        result = engine.assess(_serenity_village())
        assert result.modular_total_cost == 2_400_000
        assert result.site_built_total_cost == 2_428_800

    def test_module_function_uses_default_tables(
        self, engine: FeasibilityEngine,
    ) -> None:
        assert compute_feasibility(_serenity_village()) == engine.assess(
            _serenity_village(),
        )

"""Sample projects and cost breakdowns for demos and tests.

Only the recorded project parameters are seeded. Feasibility results are
always produced by the engine when the projects are created.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from raap.models.cost_breakdown import CostBreakdownCreate
from raap.models.enums import ProjectType
from raap.models.project import ProjectCreate

if TYPE_CHECKING:
    from raap.data.repository import ProjectRepository
    from raap.models.project import Project

logger = logging.getLogger(__name__)

SAMPLE_PROJECTS: list[ProjectCreate] = [
    ProjectCreate(
        name="Serenity Village",
        address="5224 Chestnut Road, Olivehurst, CA",
        project_type=ProjectType.AFFORDABLE,
        target_floors=3,
        studio_units=0,
        one_bed_units=6,
        two_bed_units=12,
        three_bed_units=6,
        target_parking_spaces=24,
        building_dimensions="146' X 66'",
        construction_type="Type V-A",
    ),
    ProjectCreate(
        name="Mountain View Apartments",
        address="1425 Castro Street, Mountain View, CA",
        project_type=ProjectType.SENIOR,
        target_floors=4,
        studio_units=8,
        one_bed_units=20,
        two_bed_units=8,
        three_bed_units=0,
        target_parking_spaces=36,
        building_dimensions="180' X 75'",
        construction_type="Type V-A",
    ),
    ProjectCreate(
        name="University Housing Complex",
        address="2100 17th Street, Boulder, CO",
        project_type=ProjectType.STUDENT,
        target_floors=4,
        studio_units=24,
        one_bed_units=24,
        two_bed_units=0,
        three_bed_units=0,
        target_parking_spaces=24,
        building_dimensions="200' X 60'",
        construction_type="Type III-A",
    ),
    ProjectCreate(
        name="Workforce Commons",
        address="875 Elm Avenue, Denver, CO",
        project_type=ProjectType.WORKFORCE,
        target_floors=4,
        studio_units=0,
        one_bed_units=16,
        two_bed_units=16,
        three_bed_units=0,
        target_parking_spaces=40,
        building_dimensions="165' X 70'",
        construction_type="Type V-A",
    ),
]

# MasterFormat rows keyed by sample project name.
SAMPLE_COST_BREAKDOWNS: dict[str, list[CostBreakdownCreate]] = {
    "Serenity Village": [
        CostBreakdownCreate(
            category="03 Concrete",
            site_built_cost=407_021,
            raap_gc_cost=285_136,
            raap_fab_cost=164_393,
        ),
        CostBreakdownCreate(
            category="06 Wood & Plastics",
            site_built_cost=1_982_860,
            raap_gc_cost=14_171,
            raap_fab_cost=2_137_612,
        ),
        CostBreakdownCreate(
            category="07 Thermal & Moisture",
            site_built_cost=490_766,
            raap_gc_cost=289_407,
            raap_fab_cost=293_030,
        ),
        CostBreakdownCreate(
            category="22 Plumbing",
            site_built_cost=767_391,
            raap_gc_cost=431_516,
            raap_fab_cost=306_882,
        ),
        CostBreakdownCreate(
            category="26 Electrical",
            site_built_cost=978_984,
            raap_gc_cost=776_008,
            raap_fab_cost=170_998,
        ),
    ],
}


def seed_sample_data(repository: ProjectRepository, user_id: str) -> list[Project]:
    """Load the sample projects for ``user_id``. Safe to call repeatedly.

    Projects already present (matched by name) are left untouched, so their
    cost breakdowns are not duplicated.
    """
    seeded: list[Project] = []
    for payload in SAMPLE_PROJECTS:
        existing = repository.find_by_name(payload.name, user_id)
        if existing is not None:
            seeded.append(existing)
            continue

        project = repository.create(payload, user_id)
        for row in SAMPLE_COST_BREAKDOWNS.get(payload.name, []):
            repository.add_cost_breakdown(project.id, row)
        seeded.append(project)

    logger.info("Seeded %d sample projects for user %s", len(seeded), user_id)
    return seeded

"""Enums for the RaaP domain models.

These enums represent the project parameters a developer records and the
categories the feasibility assessment scores.
"""

from enum import StrEnum


class ProjectType(StrEnum):
    """Multifamily housing program types."""

    AFFORDABLE = "affordable"
    SENIOR = "senior"
    WORKFORCE = "workforce"
    STUDENT = "student"
    MARKET_RATE = "market_rate"


class ScoreCategory(StrEnum):
    """The six criteria of the modular feasibility assessment."""

    ZONING = "zoning"
    MASSING = "massing"
    COST = "cost"
    SUSTAINABILITY = "sustainability"
    LOGISTICS = "logistics"
    BUILD_TIME = "build_time"


class WorkflowStage(StrEnum):
    """Project workflow stages, in the order they must be completed."""

    MODULAR_FEASIBILITY = "modular_feasibility"
    SMART_START = "smart_start"
    FAB_ASSURE = "fab_assure"
    EASY_DESIGN = "easy_design"

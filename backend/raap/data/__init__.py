"""Scoring tables, sample data and the project repository."""

from raap.data.repository import ProjectRepository
from raap.data.seed import SAMPLE_COST_BREAKDOWNS, SAMPLE_PROJECTS, seed_sample_data

__all__ = [
    "SAMPLE_COST_BREAKDOWNS",
    "SAMPLE_PROJECTS",
    "ProjectRepository",
    "seed_sample_data",
]

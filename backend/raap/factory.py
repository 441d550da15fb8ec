"""Factory functions for creating pre-configured engines and repositories."""

from __future__ import annotations

from raap.data.repository import ProjectRepository
from raap.data.seed import seed_sample_data
from raap.engine import FeasibilityEngine


def create_default_engine() -> FeasibilityEngine:
    """Create a FeasibilityEngine with the built-in scoring tables."""
    return FeasibilityEngine()


def create_default_repository(
    engine: FeasibilityEngine | None = None,
    *,
    seed_user_id: str | None = None,
) -> ProjectRepository:
    """Create an in-memory ProjectRepository.

    This is the recommended way to get a working persistence layer. When
    ``seed_user_id`` is given, the sample projects are loaded for that user
    once, at construction time.

    Example::

        from raap import create_default_repository

        repository = create_default_repository(seed_user_id="demo")
        projects = repository.list_projects("demo")
    """
    repository = ProjectRepository(engine or create_default_engine())
    if seed_user_id is not None:
        seed_sample_data(repository, seed_user_id)
    return repository

"""Dependency wiring for FastAPI endpoints, configured from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from raap.data.repository import ProjectRepository
from raap.factory import create_default_engine, create_default_repository

logger = logging.getLogger(__name__)

_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    """Runtime settings read from environment variables."""

    seed_sample_data: bool = True
    demo_user_id: str = "demo"
    cors_origins: list[str] = field(
        default_factory=lambda: ["http://localhost:3000"],
    )


def load_settings() -> Settings:
    """Read settings from the environment.

    - ``RAAP_SEED_SAMPLE_DATA``: load sample projects at startup (default on)
    - ``RAAP_DEMO_USER_ID``: user id used when a request names none
    - ``RAAP_CORS_ORIGINS``: comma-separated allowed origins
    """
    seed = os.environ.get("RAAP_SEED_SAMPLE_DATA", "true").strip().lower()
    origins = os.environ.get("RAAP_CORS_ORIGINS", "http://localhost:3000")
    return Settings(
        seed_sample_data=seed not in _FALSE_VALUES,
        demo_user_id=os.environ.get("RAAP_DEMO_USER_ID", "demo").strip() or "demo",
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
    )


def create_repository(settings: Settings) -> ProjectRepository:
    """Create the process-wide repository, seeding sample data if enabled."""
    seed_user_id = settings.demo_user_id if settings.seed_sample_data else None
    repository = create_default_repository(
        create_default_engine(), seed_user_id=seed_user_id,
    )
    if seed_user_id is None:
        logger.info("Sample data seeding disabled")
    return repository

"""FastAPI application: create_app factory with /api endpoints."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

# Load .env from project root (backend/../.env or backend/.env)
_backend_dir = Path(__file__).resolve().parent.parent.parent
_project_root = _backend_dir.parent
load_dotenv(_project_root / ".env")
load_dotenv(_backend_dir / ".env")

from raap import workflow
from raap.engine import ENGINE_VERSION
from raap.exceptions import (
    CostBreakdownNotFoundError,
    ProjectNotFoundError,
    ProjectValidationError,
    StageLockedError,
)
from raap.models.cost_breakdown import (  # noqa: TCH001 (FastAPI resolves at runtime)
    CostBreakdownCreate,
    CostBreakdownUpdate,
)
from raap.models.enums import WorkflowStage  # noqa: TCH001
from raap.models.project import ProjectCreate, ProjectUpdate  # noqa: TCH001

if TYPE_CHECKING:
    from raap.api.deps import Settings
    from raap.data.repository import ProjectRepository
    from raap.engine import FeasibilityEngine
    from raap.models.project import Project

logger = logging.getLogger(__name__)


def create_app(
    *,
    repository: ProjectRepository | None = None,
    engine: FeasibilityEngine | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    repository
        Optional pre-built repository for dependency injection (e.g. tests).
        If not provided, one is created from environment settings, with the
        sample projects seeded once here rather than per request.
    engine
        Optional scoring engine for /api/feasibility. Defaults to
        create_default_engine.
    settings
        Optional settings; read from the environment when omitted.
    """
    from raap.api.deps import create_repository, load_settings
    from raap.factory import create_default_engine

    settings = settings or load_settings()
    engine = engine or create_default_engine()
    if repository is None:
        repository = create_repository(settings)

    app = FastAPI(title="RaaP Feasibility", version=ENGINE_VERSION)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Store on app state so tests can inspect or swap them
    app.state.repository = repository
    app.state.engine = engine
    app.state.settings = settings
    logger.info(
        "RaaP API ready with %d stored projects", len(repository.list_projects()),
    )

    def _repo() -> ProjectRepository:
        repo: ProjectRepository = app.state.repository
        return repo

    def _user(user_id: str | None) -> str:
        return user_id or app.state.settings.demo_user_id

    # ------------------------------------------------------------------
    # Error mapping
    # ------------------------------------------------------------------

    @app.exception_handler(ProjectValidationError)
    async def _validation_error(_: Request, exc: ProjectValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"detail": exc.message, "field": exc.field},
        )

    @app.exception_handler(ProjectNotFoundError)
    @app.exception_handler(CostBreakdownNotFoundError)
    async def _not_found(_: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(StageLockedError)
    async def _stage_locked(_: Request, exc: StageLockedError) -> JSONResponse:
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    # ------------------------------------------------------------------
    # GET /api/health
    # ------------------------------------------------------------------

    @app.get("/api/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "version": ENGINE_VERSION}

    # ------------------------------------------------------------------
    # POST /api/feasibility
    # ------------------------------------------------------------------

    @app.post("/api/feasibility")
    def feasibility(attributes: dict[str, Any]) -> dict[str, Any]:
        # Validated by the engine so errors name the offending field
        result = app.state.engine.assess(attributes)
        return {
            "result": result.model_dump(mode="json"),
            "summary_dict": result.to_summary_dict(),
        }

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    @app.get("/api/projects")
    def list_projects(user_id: str | None = None) -> list[dict[str, Any]]:
        return [_project_payload(p) for p in _repo().list_projects(_user(user_id))]

    @app.post("/api/projects", status_code=201)
    def create_project(
        payload: ProjectCreate, user_id: str | None = None,
    ) -> dict[str, Any]:
        project = _repo().create(payload, _user(user_id))
        return _project_payload(project)

    @app.get("/api/projects/{project_id}")
    def get_project(project_id: str) -> dict[str, Any]:
        return _project_payload(_repo().get(project_id))

    @app.patch("/api/projects/{project_id}")
    def update_project(project_id: str, changes: ProjectUpdate) -> dict[str, Any]:
        return _project_payload(_repo().update(project_id, changes))

    @app.delete("/api/projects/{project_id}", status_code=204)
    def delete_project(project_id: str) -> Response:
        _repo().delete(project_id)
        return Response(status_code=204)

    @app.get("/api/projects/{project_id}/summary")
    def project_summary(project_id: str) -> dict[str, Any]:
        project = _repo().get(project_id)
        return {
            "project_name": project.name,
            "address": project.address,
            "project_type": project.attributes.project_type.value,
            "target_floors": project.attributes.target_floors,
            **project.feasibility.to_summary_dict(),
        }

    @app.post("/api/projects/{project_id}/stages/{stage}/complete")
    def complete_stage(project_id: str, stage: WorkflowStage) -> dict[str, Any]:
        return _project_payload(_repo().complete_stage(project_id, stage))

    # ------------------------------------------------------------------
    # Cost breakdowns
    # ------------------------------------------------------------------

    @app.get("/api/projects/{project_id}/cost-breakdowns")
    def list_cost_breakdowns(project_id: str) -> list[dict[str, Any]]:
        return [
            b.model_dump(mode="json") for b in _repo().list_cost_breakdowns(project_id)
        ]

    @app.post("/api/projects/{project_id}/cost-breakdowns", status_code=201)
    def add_cost_breakdown(
        project_id: str, row: CostBreakdownCreate,
    ) -> dict[str, Any]:
        return _repo().add_cost_breakdown(project_id, row).model_dump(mode="json")

    @app.patch("/api/cost-breakdowns/{breakdown_id}")
    def update_cost_breakdown(
        breakdown_id: str, changes: CostBreakdownUpdate,
    ) -> dict[str, Any]:
        return _repo().update_cost_breakdown(breakdown_id, changes).model_dump(
            mode="json",
        )

    @app.get("/api/projects/{project_id}/cost-summary")
    def cost_summary(project_id: str) -> dict[str, Any]:
        return _repo().summarize_cost_breakdowns(project_id).model_dump(mode="json")

    return app


def _project_payload(project: Project) -> dict[str, Any]:
    """Serialize a project with its derived workflow position."""
    current = workflow.current_stage(project.workflow)
    payload = project.model_dump(mode="json")
    payload["total_units"] = project.attributes.total_units
    payload["current_stage"] = current.value if current is not None else None
    payload["unlocked_stages"] = [
        stage.value
        for stage in workflow.STAGE_ORDER
        if workflow.is_unlocked(project.workflow, stage)
    ]
    return payload

"""FastAPI router for project creation and lookup."""

import uuid

from fastapi import APIRouter, Depends, HTTPException

from sketchify.config import logger
from sketchify.core import kv_ops
from sketchify.models import DesignItem
from sketchify.routers.auth.dependencies import get_current_user
from sketchify.services.project_service import create_project

router = APIRouter(prefix="/api/v1", tags=["Projects"])


@router.post("/projects", response_model=DesignItem, response_model_by_alias=True)
async def create_project_endpoint(
    draft: DesignItem,
    user: dict = Depends(get_current_user),
) -> DesignItem:
    """Finalize and persist a draft project."""

    updates = {}
    if not draft.id:
        updates["id"] = uuid.uuid4().hex
    if draft.owner_id is None:
        updates["owner_id"] = user["id"]
    if updates:
        draft = draft.model_copy(update=updates)

    logger.info("Project creation requested", extra={"project_id": draft.id, "user_id": user["id"]})

    try:
        project = await create_project(draft)
    except Exception as exc:
        logger.error("Unexpected error creating project", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to create project: {exc}")

    if project is None:
        raise HTTPException(
            status_code=422,
            detail="Source image is missing; cannot create project.",
        )

    return project


@router.get("/projects/{project_id}")
async def get_project(project_id: str, user: dict = Depends(get_current_user)) -> dict:
    """Retrieve a stored project record owned by the current user."""

    try:
        record = await kv_ops.kv_get(kv_ops.project_key(project_id))
    except Exception as exc:
        logger.error(
            "Error retrieving project",
            extra={"project_id": project_id, "error": str(exc)},
        )
        raise HTTPException(status_code=500, detail=f"Failed to retrieve project: {exc}")

    # Records owned by someone else are reported as missing
    if not record or record.get("ownerId") != user["id"]:
        raise HTTPException(status_code=404, detail=f"Project not found: {project_id}")

    return {"success": True, "project": record}


@router.get("/health")
async def health_check() -> dict:
    """Simple health check endpoint."""

    return {
        "status": "healthy",
        "service": "sketchify-api",
        "version": "1.0.0",
    }

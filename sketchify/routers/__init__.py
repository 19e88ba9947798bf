"""Router package exposing all API routers."""

from fastapi import APIRouter

from .auth.router import router as auth_router
from .projects.router import router as projects_router
from .render.router import router as render_router
from .uploads.router import router as uploads_router

router = APIRouter()
router.include_router(uploads_router)
router.include_router(render_router)
router.include_router(projects_router)
router.include_router(auth_router)

__all__ = ["router", "auth_router", "projects_router", "render_router", "uploads_router"]

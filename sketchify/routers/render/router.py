"""FastAPI router for render generation."""

from fastapi import APIRouter, HTTPException

from sketchify.config import logger
from sketchify.core.errors import FetchError, ReadError
from sketchify.core.render import generate_render
from sketchify.models import RenderRequest, RenderResponse

router = APIRouter(prefix="/api/v1", tags=["Render"])


@router.post("/render", response_model=RenderResponse, response_model_by_alias=True)
async def render_image(payload: RenderRequest) -> RenderResponse:
    """Generate a rendered image for a source image. Safe to retry with the same input."""

    try:
        result = await generate_render(payload.source_image)
    except FetchError as exc:
        raise HTTPException(
            status_code=502,
            detail={"error": exc.message, "status": exc.status, "retryable": True},
        )
    except ReadError as exc:
        raise HTTPException(
            status_code=400,
            detail={"error": exc.message, "status": None, "retryable": True},
        )
    except Exception as exc:
        logger.error("Unexpected error generating render", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to generate render: {exc}")

    return RenderResponse(
        rendered_image=result.rendered_image,
        rendered_path=result.rendered_path,
    )

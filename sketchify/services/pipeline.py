"""Upload completion handoff: render the inline image and create the project."""

import uuid
from typing import Optional

from sketchify.config import logger
from sketchify.core.errors import ProjectCreationFailed
from sketchify.core.render import generate_render
from sketchify.models import DesignItem
from sketchify.services.project_service import now_millis, create_project


async def finalize_upload(
    inline_image: str,
    name: Optional[str] = None,
    owner_id: Optional[str] = None,
) -> DesignItem:
    """
    Run the render step for a freshly ingested image and persist the project.

    Raises:
        FetchError, ReadError: Render generation failed (retryable)
        ProjectCreationFailed: The project could not be created
    """
    render = await generate_render(inline_image)

    draft = DesignItem(
        id=uuid.uuid4().hex,
        name=name,
        source_image=inline_image,
        rendered_image=render.rendered_image,
        rendered_path=render.rendered_path,
        timestamp=now_millis(),
        owner_id=owner_id,
    )

    logger.info(f"Creating project {draft.id} from upload {name or ''}".rstrip())
    project = await create_project(draft)
    if project is None:
        raise ProjectCreationFailed(draft.id)

    return project

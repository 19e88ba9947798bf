from unittest.mock import AsyncMock, patch

import pytest

from sketchify.core.errors import FetchError, ProjectCreationFailed
from sketchify.core.render import RenderResult
from sketchify.services.pipeline import finalize_upload

INLINE = "data:image/png;base64,AAAA"


@pytest.mark.asyncio
async def test_finalize_upload_builds_draft_from_render():
    async def finalize(draft):
        return draft

    with patch("sketchify.services.pipeline.create_project", side_effect=finalize) as create:
        project = await finalize_upload(INLINE, name="plan.png", owner_id="user-1")

    draft = create.await_args.args[0]
    assert len(draft.id) == 32
    assert draft.source_image == INLINE
    assert draft.rendered_image == INLINE
    assert draft.owner_id == "user-1"
    assert draft.timestamp > 0
    assert project.name == "plan.png"


@pytest.mark.asyncio
async def test_finalize_upload_raises_when_project_cannot_be_created():
    with patch("sketchify.services.pipeline.create_project", new_callable=AsyncMock, return_value=None):
        with pytest.raises(ProjectCreationFailed):
            await finalize_upload(INLINE)


@pytest.mark.asyncio
async def test_render_failure_propagates_before_persisting():
    with patch(
        "sketchify.services.pipeline.generate_render",
        new_callable=AsyncMock,
        side_effect=FetchError(404, "Not Found"),
    ), patch("sketchify.services.pipeline.create_project", new_callable=AsyncMock) as create:
        with pytest.raises(FetchError):
            await finalize_upload("https://cdn.example.com/missing.png")

    create.assert_not_awaited()


@pytest.mark.asyncio
async def test_rendered_path_is_kept_off_the_record():
    with patch(
        "sketchify.services.pipeline.generate_render",
        new_callable=AsyncMock,
        return_value=RenderResult(rendered_image=INLINE, rendered_path="renders/p.png"),
    ), patch("sketchify.services.pipeline.create_project", new_callable=AsyncMock) as create:
        create.side_effect = lambda draft: draft
        await finalize_upload(INLINE)

    draft = create.await_args.args[0]
    assert draft.rendered_path == "renders/p.png"
    assert "renderedPath" not in draft.model_dump(by_alias=True)

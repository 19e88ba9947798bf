"""
Unit tests for project creation: hosting fallback, missing source image,
best-effort key-value storage.
"""
from unittest.mock import AsyncMock, patch

import pytest

from sketchify.core.contexts import HostedAsset, HostingConfig
from sketchify.core.errors import HostingUnavailable, KvWriteFailed, UploadFailed
from sketchify.models import DesignItem
from sketchify.services.project_service import create_project

HOSTING = HostingConfig(
    bucket="sketchify",
    public_base_url="https://proj.supabase.co/storage/v1/object/public/sketchify",
)
INLINE = "data:image/png;base64,AAAA"
RENDER = "data:image/png;base64,BBBB"


def _hosted(label):
    return HostedAsset(url=f"{HOSTING.public_base_url}/projects/p1/{label}.png")


@pytest.fixture
def collaborators():
    with patch(
        "sketchify.services.project_service.hosting_ops.get_or_create_hosting_config",
        new_callable=AsyncMock,
    ) as get_hosting, patch(
        "sketchify.services.project_service.hosting_ops.upload_image_to_hosting",
        new_callable=AsyncMock,
    ) as upload, patch(
        "sketchify.services.project_service.kv_ops.kv_set",
        new_callable=AsyncMock,
    ) as kv_set:
        get_hosting.return_value = HOSTING
        upload.side_effect = lambda hosting, url, project_id, label: _hosted(label)
        yield get_hosting, upload, kv_set


@pytest.mark.asyncio
async def test_hosted_urls_replace_inline_images(collaborators):
    _, upload, kv_set = collaborators
    draft = DesignItem(id="p1", name="Flat", source_image=INLINE, rendered_image=RENDER, timestamp=123)

    project = await create_project(draft)

    assert project.source_image.endswith("/projects/p1/source.png")
    assert project.rendered_image.endswith("/projects/p1/rendered.png")
    assert project.timestamp == 123
    assert project.name == "Flat"
    assert [call.kwargs["label"] for call in upload.await_args_list] == ["source", "rendered"]

    kv_set.assert_awaited_once()
    key, value = kv_set.await_args.args
    assert key == "project:p1"
    assert value["sourceImage"] == project.source_image


@pytest.mark.asyncio
async def test_failed_hosting_and_storage_keep_original_images(collaborators):
    get_hosting, upload, kv_set = collaborators
    get_hosting.side_effect = HostingUnavailable()
    upload.side_effect = lambda hosting, url, project_id, label: HostedAsset(
        error=UploadFailed(label, "bucket offline")
    )
    kv_set.side_effect = KvWriteFailed("project:p1", "table missing")
    draft = DesignItem(id="p1", source_image=INLINE, rendered_image=RENDER)

    project = await create_project(draft)

    assert project is not None
    assert project.source_image == INLINE
    assert project.rendered_image == RENDER
    assert upload.await_args_list[0].kwargs["hosting"] is None


@pytest.mark.asyncio
async def test_unexpected_storage_error_is_absorbed(collaborators):
    _, _, kv_set = collaborators
    kv_set.side_effect = RuntimeError("boom")

    project = await create_project(DesignItem(id="p1", source_image=INLINE))

    assert project is not None


@pytest.mark.asyncio
async def test_remote_source_url_is_kept_verbatim_on_upload_failure(collaborators):
    _, upload, _ = collaborators
    upload.side_effect = lambda hosting, url, project_id, label: HostedAsset(error=UploadFailed(label, "x"))
    remote = "https://cdn.example.com/plan.png"

    project = await create_project(DesignItem(id="p1", source_image=remote))

    assert project.source_image == remote
    assert project.rendered_image is None


@pytest.mark.asyncio
async def test_missing_source_image_returns_none(collaborators):
    _, upload, kv_set = collaborators
    upload.side_effect = lambda hosting, url, project_id, label: HostedAsset(error=UploadFailed(label, "empty"))

    assert await create_project(DesignItem(id="p1", source_image=None)) is None
    assert await create_project(DesignItem(id="p1", source_image="")) is None
    kv_set.assert_not_awaited()


@pytest.mark.asyncio
async def test_without_id_no_upload_is_attempted(collaborators):
    _, upload, kv_set = collaborators

    project = await create_project(DesignItem(source_image=INLINE, rendered_image=RENDER))

    upload.assert_not_awaited()
    assert project.source_image == INLINE
    assert project.rendered_image == RENDER
    assert kv_set.await_args.args[0] == "project:None"


@pytest.mark.asyncio
async def test_rendered_image_upload_skipped_when_absent(collaborators):
    _, upload, _ = collaborators

    project = await create_project(DesignItem(id="p1", source_image=INLINE))

    assert upload.await_count == 1
    assert project.rendered_image is None


@pytest.mark.asyncio
async def test_finalized_record_is_a_new_object(collaborators):
    draft = DesignItem(
        id="p1",
        source_image=INLINE,
        source_path="tmp/source.png",
        rendered_path="tmp/rendered.png",
        public_path="public/p1",
        owner_id="user-1",
    )

    project = await create_project(draft)

    assert project is not draft
    assert draft.source_image == INLINE
    assert draft.timestamp is None
    assert project.timestamp is not None
    assert project.source_path is None
    assert project.rendered_path is None
    assert project.public_path is None
    assert project.owner_id == "user-1"

    dumped = project.model_dump(by_alias=True)
    assert "sourcePath" not in dumped
    assert dumped["ownerId"] == "user-1"


@pytest.mark.asyncio
async def test_stored_record_uses_camel_case_owner_key(collaborators):
    _, _, kv_set = collaborators

    await create_project(DesignItem(id="p1", source_image=INLINE, owner_id="user-1"))

    stored = kv_set.await_args.args[1]
    assert stored["ownerId"] == "user-1"
    assert "owner_id" not in stored

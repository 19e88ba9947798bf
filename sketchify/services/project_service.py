"""Project creation with best-effort hosting and key-value persistence."""

from __future__ import annotations

import logging
import time
from typing import Any, Optional

from sketchify.config import logger
from sketchify.constants import DERIVED_PATH_FIELDS, RENDERED_LABEL, SOURCE_LABEL
from sketchify.core import hosting_ops, kv_ops
from sketchify.core.contexts import HostedAsset, HostingConfig
from sketchify.core.errors import KvWriteFailed, MissingSourceImage
from sketchify.models import DesignItem


def _log(level: int, message: str, **context: Any) -> None:
    """Helper to emit structured logs with contextual metadata."""
    logger.log(level, "%s | context=%s", message, context)


def now_millis() -> int:
    return int(time.time() * 1000)


async def _acquire_hosting() -> Optional[HostingConfig]:
    try:
        return await hosting_ops.get_or_create_hosting_config()
    except Exception as exc:
        _log(logging.WARNING, "hosting_unavailable", error=str(exc))
        return None


async def _host_image(
    hosting: Optional[HostingConfig],
    url: Optional[str],
    project_id: str,
    label: str,
) -> HostedAsset:
    asset = await hosting_ops.upload_image_to_hosting(
        hosting=hosting,
        url=url,
        project_id=project_id,
        label=label,
    )
    if not asset.ok:
        _log(
            logging.WARNING,
            "hosting_upload_skipped",
            project_id=project_id,
            label=label,
            error=str(asset.error),
        )
    return asset


async def _store_project(record: DesignItem) -> Optional[KvWriteFailed]:
    key = kv_ops.project_key(record.id)
    try:
        await kv_ops.kv_set(key, record.model_dump(mode="json", by_alias=True))
    except KvWriteFailed as exc:
        return exc
    except Exception as exc:
        return KvWriteFailed(key, str(exc))
    return None


async def create_project(draft: DesignItem) -> Optional[DesignItem]:
    """
    Finalize a draft project.

    Hosts the source and rendered images when possible, falls back to the
    draft's own references otherwise, and stores the result in the key-value
    store on a best-effort basis. The draft is never mutated.

    Args:
        draft: Project record built by the caller after ingestion and render

    Returns:
        The finalized record, or None when no source image can be resolved
    """
    project_id = draft.id

    hosting = await _acquire_hosting()

    hosted_source: Optional[HostedAsset] = None
    hosted_render: Optional[HostedAsset] = None
    if project_id:
        hosted_source = await _host_image(hosting, draft.source_image, project_id, SOURCE_LABEL)
        if draft.rendered_image:
            hosted_render = await _host_image(
                hosting, draft.rendered_image, project_id, RENDERED_LABEL
            )

    resolved_source = (hosted_source.url if hosted_source else None) or draft.source_image
    if not resolved_source:
        _log(logging.ERROR, "project_rejected", project_id=project_id, error=MissingSourceImage().message)
        return None

    resolved_render = (hosted_render.url if hosted_render else None) or draft.rendered_image or None

    fields = draft.model_dump(exclude=set(DERIVED_PATH_FIELDS))
    fields.update(
        source_image=resolved_source,
        rendered_image=resolved_render,
        timestamp=draft.timestamp if draft.timestamp is not None else now_millis(),
    )
    record = DesignItem.model_validate(fields)

    failure = await _store_project(record)
    if failure is not None:
        _log(
            logging.WARNING,
            "project_store_failed",
            project_id=project_id,
            error=failure.message,
        )

    _log(
        logging.INFO,
        "project_created",
        project_id=project_id,
        source_hosted=bool(hosted_source and hosted_source.ok),
        render_hosted=bool(hosted_render and hosted_render.ok),
        stored=failure is None,
    )
    return record

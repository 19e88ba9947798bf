"""
Hosting operations module for Supabase Storage.
Provisions the public bucket and uploads project images under a project/label path.
"""

from typing import Optional, Tuple

import httpx

from sketchify.config import logger, STORAGE_BUCKET, SUPABASE_URL
from sketchify.constants import FETCH_TIMEOUT_SECONDS
from sketchify.core.contexts import HostedAsset, HostingConfig
from sketchify.core.encoding import is_data_url, parse_data_url
from sketchify.core.errors import HostingUnavailable, UploadFailed
from sketchify.db import get_supabase_client

EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
}


async def get_or_create_hosting_config(bucket: str = STORAGE_BUCKET) -> HostingConfig:
    """
    Make sure the public storage bucket exists and describe where files land.

    Args:
        bucket: Storage bucket name

    Returns:
        HostingConfig: Bucket name and its public URL prefix

    Raises:
        HostingUnavailable: If Supabase is not configured or the bucket cannot be provisioned
    """
    try:
        client = get_supabase_client()
        storage = client.storage

        existing = {b.name for b in storage.list_buckets()}
        if bucket not in existing:
            logger.info(f"Creating storage bucket: {bucket}")
            storage.create_bucket(bucket, options={"public": True})

        public_base_url = f"{SUPABASE_URL.rstrip('/')}/storage/v1/object/public/{bucket}"
        logger.debug(f"Hosting ready at {public_base_url}")
        return HostingConfig(bucket=bucket, public_base_url=public_base_url)

    except Exception as e:
        logger.error(f"Error provisioning hosting bucket {bucket}: {e}")
        raise HostingUnavailable(f"Hosting is not available: {e}") from e


def is_hosted_url(url: Optional[str], hosting: Optional[HostingConfig]) -> bool:
    """Return True when ``url`` already points into the hosting bucket."""
    if not url or hosting is None:
        return False
    return url.startswith(hosting.public_base_url + "/")


def build_storage_path(project_id: str, label: str, mime_type: str) -> str:
    extension = EXTENSIONS.get(mime_type, "bin")
    return f"projects/{project_id}/{label}.{extension}"


async def _resolve_bytes(url: str) -> Tuple[bytes, str]:
    if is_data_url(url):
        mime_type, data = parse_data_url(url)
        return data, mime_type

    async with httpx.AsyncClient(timeout=FETCH_TIMEOUT_SECONDS) as client:
        response = await client.get(url)
        response.raise_for_status()

    mime_type = response.headers.get("content-type", "image/png").split(";", 1)[0].strip()
    return response.content, mime_type


async def upload_image_to_hosting(
    hosting: Optional[HostingConfig],
    url: Optional[str],
    project_id: str,
    label: str,
) -> HostedAsset:
    """
    Upload one project image to the hosting bucket.

    Never raises: every failure is logged and reported through ``HostedAsset.error``
    so the caller can fall back to the original reference.

    Args:
        hosting: Provisioned hosting, or None to skip hosting entirely
        url: Data URL or remote URL of the image
        project_id: Owning project identifier
        label: Image role within the project ("source" or "rendered")

    Returns:
        HostedAsset: ``url`` set on success, ``error`` set otherwise
    """
    if hosting is None:
        return HostedAsset(error=HostingUnavailable())

    if not url:
        return HostedAsset(error=UploadFailed(label, "no image to upload"))

    if is_hosted_url(url, hosting):
        return HostedAsset(url=url)

    try:
        data, mime_type = await _resolve_bytes(url)
        storage_path = build_storage_path(project_id, label, mime_type)

        logger.info(f"Uploading {label} image for project {project_id}: {storage_path}")

        client = get_supabase_client()
        bucket = client.storage.from_(hosting.bucket)
        bucket.upload(
            path=storage_path,
            file=data,
            file_options={"content-type": mime_type, "upsert": "true"},
        )
        public_url = bucket.get_public_url(storage_path)

        logger.info(f"Successfully hosted {label} image at: {public_url}")
        return HostedAsset(url=public_url)

    except Exception as e:
        logger.warning(f"Error hosting {label} image for project {project_id}: {e}")
        return HostedAsset(error=UploadFailed(label, str(e)))


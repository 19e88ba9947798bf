"""
Render generation.
Currently a passthrough for inline images and a fetch-and-encode for remote URLs.
"""

from dataclasses import dataclass
from typing import Optional

import httpx

from sketchify.config import logger
from sketchify.constants import FETCH_TIMEOUT_SECONDS
from sketchify.core.encoding import is_data_url, to_data_url
from sketchify.core.errors import FetchError, ReadError


@dataclass
class RenderResult:
    rendered_image: str
    rendered_path: Optional[str] = None


async def fetch_as_data_url(
    url: str,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = FETCH_TIMEOUT_SECONDS,
) -> str:
    """
    Download a remote image and return it as a data URL.

    Args:
        url: Remote image URL
        client: Optional shared AsyncClient (a short-lived one is created otherwise)
        timeout: Request timeout in seconds when creating a client

    Raises:
        FetchError: If the request fails or returns a non-success status
        ReadError: If the response body cannot be encoded
    """
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout) as owned_client:
                response = await owned_client.get(url)
        else:
            response = await client.get(url)
    except (httpx.RequestError, httpx.InvalidURL) as exc:
        raise FetchError(None, str(exc)) from exc

    if not response.is_success:
        raise FetchError(response.status_code, response.reason_phrase)

    mime_type = response.headers.get("content-type", "application/octet-stream")
    mime_type = mime_type.split(";", 1)[0].strip() or "application/octet-stream"

    try:
        content = response.content
        if not content:
            raise ValueError("empty response body")
        return to_data_url(content, mime_type)
    except Exception as exc:
        raise ReadError("Failed to read blob as Data URL") from exc


async def generate_render(
    source_image: str,
    client: Optional[httpx.AsyncClient] = None,
) -> RenderResult:
    """
    Produce a rendered image reference for ``source_image``.

    Inline data URLs are returned unchanged without any network call. Remote
    URLs are fetched and re-encoded inline. Safe to call again with the same
    input after a failure.

    Raises:
        FetchError: The remote image could not be fetched
        ReadError: The fetched bytes could not be encoded
    """
    if is_data_url(source_image):
        logger.debug("Render passthrough for inline image")
        return RenderResult(rendered_image=source_image)

    logger.info(f"Fetching source image for render: {source_image}")
    try:
        rendered = await fetch_as_data_url(source_image, client=client)
    except (FetchError, ReadError) as exc:
        logger.error(f"Render generation failed: {exc.message}")
        raise

    return RenderResult(rendered_image=rendered)

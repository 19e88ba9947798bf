"""Data URL encoding for image bytes."""

import base64
import binascii
from typing import Tuple

from sketchify.config import logger
from sketchify.core.contexts import CandidateFile
from sketchify.core.errors import ReadError

DATA_URL_PREFIX = "data:"


def is_data_url(value: str) -> bool:
    return isinstance(value, str) and value.startswith(DATA_URL_PREFIX)


def to_data_url(data: bytes, mime_type: str) -> str:
    """Return ``data:<mime>;base64,<payload>`` for the given bytes."""
    payload = base64.b64encode(data).decode("utf-8")
    return f"{DATA_URL_PREFIX}{mime_type};base64,{payload}"


def parse_data_url(value: str) -> Tuple[str, bytes]:
    """
    Split a base64 data URL into its MIME type and decoded bytes.

    Raises:
        ReadError: If the value is not a well-formed base64 data URL
    """
    if not is_data_url(value):
        raise ReadError("Invalid data URI provided for image input")

    try:
        header, payload = value[len(DATA_URL_PREFIX):].split(",", 1)
    except ValueError as exc:
        raise ReadError("Invalid data URI provided for image input") from exc

    if not header.endswith(";base64"):
        raise ReadError("Only base64 data URIs are supported")

    mime_type = header[: -len(";base64")] or "application/octet-stream"
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ReadError("Provided image string is not valid base64") from exc

    return mime_type, data


async def encode_file(candidate: CandidateFile) -> str:
    """
    Read a candidate file and return it as an inline data URL.

    Args:
        candidate: An already validated file

    Returns:
        str: ``data:`` URL carrying the file's MIME type and base64 payload

    Raises:
        ReadError: If reading fails or produces no bytes
    """
    try:
        data = await candidate.reader()
    except ReadError as exc:
        logger.warning(f"Failed to read {candidate.name}: {exc.message}")
        raise
    except Exception as exc:
        logger.warning(f"Failed to read {candidate.name}: {exc}")
        raise ReadError() from exc

    if not data:
        logger.warning(f"Read returned no bytes for {candidate.name}")
        raise ReadError()

    logger.debug(f"Encoded {candidate.name} ({len(data)} bytes)")
    return to_data_url(data, candidate.mime_type or "application/octet-stream")

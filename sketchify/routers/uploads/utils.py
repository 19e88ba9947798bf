"""Utility helpers for the uploads router."""

import base64
import binascii
import os
from typing import Any, Dict

from fastapi import UploadFile

from sketchify.constants import MAX_UPLOAD_SIZE, MAX_UPLOAD_SIZE_MIB
from sketchify.core.contexts import CandidateFile
from sketchify.core.errors import ReadError, TooLarge, UnsupportedType, ValidationError


def status_for_validation_error(error: ValidationError) -> int:
    if isinstance(error, UnsupportedType):
        return 415
    if isinstance(error, TooLarge):
        return 413
    return 400


def _declared_size(upload: UploadFile) -> int:
    """Size of the spooled upload without reading its content."""
    if upload.size is not None:
        return upload.size
    position = upload.file.tell()
    upload.file.seek(0, os.SEEK_END)
    size = upload.file.tell()
    upload.file.seek(position)
    return size


def candidate_from_upload(upload: UploadFile) -> CandidateFile:
    return CandidateFile(
        name=upload.filename or "upload",
        mime_type=upload.content_type,
        size=_declared_size(upload),
        reader=upload.read,
    )


def candidate_from_message(payload: Dict[str, Any]) -> CandidateFile:
    """
    Build a candidate from a websocket ``pick``/``drop`` message.

    ``data`` is base64 and only decoded when the encoder reads the file. The
    decoded bytes must match the declared ``size``.

    Raises:
        ValueError: If ``data``, ``name``, ``mime_type`` or ``size`` has the wrong type
    """
    data = payload.get("data") or ""
    name = payload.get("name")
    mime_type = payload.get("mime_type")
    declared = payload.get("size")

    if not isinstance(data, str):
        raise ValueError("'data' must be a base64 string")
    if name is not None and not isinstance(name, str):
        raise ValueError("'name' must be a string")
    if mime_type is not None and not isinstance(mime_type, str):
        raise ValueError("'mime_type' must be a string")
    if declared is not None and (
        isinstance(declared, bool) or not isinstance(declared, int) or declared < 0
    ):
        raise ValueError("'size' must be a non-negative integer")

    size = declared if declared is not None else len(data) * 3 // 4

    async def reader() -> bytes:
        try:
            decoded = base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ReadError() from exc
        if declared is not None and len(decoded) != declared:
            raise ReadError("File size does not match the declared size.")
        if len(decoded) > MAX_UPLOAD_SIZE:
            raise ReadError(TooLarge(MAX_UPLOAD_SIZE_MIB).message)
        return decoded

    return CandidateFile(
        name=name or "upload",
        mime_type=mime_type,
        size=size,
        reader=reader,
    )

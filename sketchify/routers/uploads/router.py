"""FastAPI router for image uploads (single request and live websocket session)."""

import json
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, WebSocket
from starlette.websockets import WebSocketDisconnect

from sketchify.config import logger
from sketchify.core import auth
from sketchify.core.encoding import encode_file
from sketchify.core.errors import ReadError
from sketchify.core.validation import validate_file
from sketchify.models import UploadResponse
from sketchify.routers.auth.dependencies import get_current_user

from .utils import candidate_from_upload, status_for_validation_error
from .ws_session import UploadSocketHandler

router = APIRouter(prefix="/api/v1", tags=["Uploads"])


@router.post("/uploads", response_model=UploadResponse)
async def upload_image(
    file: UploadFile = File(..., description="Floor plan image (JPG or PNG, max 50 MB)"),
    user: dict = Depends(get_current_user),
) -> UploadResponse:
    """Validate an image and return it as an inline data URL."""

    candidate = candidate_from_upload(file)
    logger.info(
        "Upload received",
        extra={"file_name": candidate.name, "size": candidate.size, "user_id": user["id"]},
    )

    result = validate_file(candidate)
    if not result.accepted:
        raise HTTPException(
            status_code=status_for_validation_error(result.error),
            detail=result.error.message,
        )

    try:
        inline_image = await encode_file(candidate)
    except ReadError as exc:
        raise HTTPException(status_code=400, detail=exc.message)

    return UploadResponse(
        success=True,
        name=candidate.name,
        mime_type=candidate.mime_type,
        size=candidate.size,
        inline_image=inline_image,
    )


@router.websocket("/uploads/ws")
async def upload_socket(websocket: WebSocket, token: Optional[str] = Query(default=None)):
    """Run a live upload session: drag events, pick/drop, progress and completion."""
    await websocket.accept()

    user = await auth.get_current_user(token)
    handler = UploadSocketHandler(websocket, user)
    handler.start()

    try:
        while True:
            try:
                raw = await websocket.receive_text()
            except WebSocketDisconnect:
                break
            try:
                payload = json.loads(raw)
            except json.JSONDecodeError:
                handler.reject("Payload must be JSON")
                continue
            if not isinstance(payload, dict):
                handler.reject("Payload must be an object")
                continue
            await handler.handle(payload)
    finally:
        await handler.close()

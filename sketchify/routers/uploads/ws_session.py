"""Drive one ingestion session over a websocket connection."""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional, Set

from fastapi import WebSocket

from sketchify.config import logger
from sketchify.core import auth
from sketchify.core.contexts import UploadSessionState
from sketchify.core.errors import FetchError, ProjectCreationFailed, ReadError
from sketchify.core.ingestion import IngestionSession
from sketchify.services.pipeline import finalize_upload

from .utils import candidate_from_message


class UploadSocketHandler:
    """Translate websocket messages into ingestion events and push state back."""

    def __init__(self, websocket: WebSocket, user: Optional[dict]) -> None:
        self.websocket = websocket
        self.user = user
        self.session = IngestionSession(
            is_signed_in=lambda: auth.is_signed_in(self.user),
            on_complete=self._on_complete,
            on_change=self._on_change,
        )
        self._outbox: asyncio.Queue = asyncio.Queue()
        self._sender: Optional[asyncio.Task] = None
        self._tasks: Set[asyncio.Task] = set()
        self._last_inline_image: Optional[str] = None
        self._last_name: Optional[str] = None
        self._finalizing = False

    def start(self) -> None:
        self._sender = asyncio.get_running_loop().create_task(self._send_loop())
        self._on_change(self.session.state)

    async def handle(self, payload: Dict[str, Any]) -> None:
        kind = payload.get("type")

        if kind == "dragenter":
            self.session.on_drag_enter()
        elif kind == "dragover":
            self.session.on_drag_over()
        elif kind == "dragleave":
            self.session.on_drag_leave()
        elif kind in ("pick", "drop"):
            try:
                candidate = candidate_from_message(payload)
            except ValueError as exc:
                self.reject(f"Malformed {kind} message: {exc}")
                return
            handler = self.session.on_pick if kind == "pick" else self.session.on_drop
            self._spawn(handler(candidate))
        elif kind == "retry":
            if self._last_inline_image is None:
                self.reject("Nothing to retry")
            elif self._finalizing:
                self.reject("A project is already being created")
            else:
                self._finalizing = True
                self._spawn(self._finalize(self._last_inline_image))
        else:
            self.reject(f"Unknown message type: {kind}")

    def reject(self, detail: str) -> None:
        self._emit({"type": "error", "detail": detail, "retryable": False})

    async def close(self) -> None:
        self.session.teardown()
        self.session.cancel_completions()
        for task in list(self._tasks):
            task.cancel()
        if self._sender is not None:
            self._sender.cancel()
            await asyncio.gather(self._sender, return_exceptions=True)

    # -------------------------
    # Session callbacks
    # -------------------------
    def _on_change(self, state: UploadSessionState) -> None:
        self._emit({"type": "state", "signed_in": auth.is_signed_in(self.user), **state.to_dict()})

    async def _on_complete(self, inline_image: str) -> None:
        self._last_inline_image = inline_image
        selected = self.session.state.selected_file
        self._last_name = selected.name if selected else None
        self._emit({"type": "complete", "inline_image": inline_image})
        self._finalizing = True
        await self._finalize(inline_image)

    async def _finalize(self, inline_image: str) -> None:
        owner_id = self.user.get("id") if self.user else None
        try:
            project = await finalize_upload(inline_image, name=self._last_name, owner_id=owner_id)
        except (FetchError, ReadError) as exc:
            logger.warning("Render generation failed", extra={"error": exc.message})
            self._emit({"type": "error", "detail": exc.message, "retryable": True})
            return
        except ProjectCreationFailed as exc:
            logger.error("Project creation failed", extra={"error": exc.message})
            self._emit({"type": "error", "detail": exc.message, "retryable": False})
            return
        finally:
            self._finalizing = False

        self._emit({"type": "project", "project": project.model_dump(mode="json", by_alias=True)})

    # -------------------------
    # Plumbing
    # -------------------------
    def _emit(self, message: Dict[str, Any]) -> None:
        self._outbox.put_nowait(message)

    def _spawn(self, coro) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _send_loop(self) -> None:
        while True:
            message = await self._outbox.get()
            try:
                await self.websocket.send_json(message)
            except Exception as exc:
                logger.debug(f"Dropping websocket message: {exc}")
                return

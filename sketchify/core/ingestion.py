"""
Upload session state machine.
Drives validation, encoding and simulated progress for pick and drag-drop input.
"""

import asyncio
import inspect
from typing import Any, Callable, Optional, Set

from sketchify.config import logger
from sketchify.core.contexts import CandidateFile, UploadSessionState
from sketchify.core.encoding import encode_file
from sketchify.core.errors import ReadError
from sketchify.core.progress import ProgressSimulator
from sketchify.core.validation import validate_file


class IngestionSession:
    """
    Own the observable upload state for one mounted uploader.

    Every input handler first checks ``is_signed_in``; when it returns False the
    handler does nothing. Each accepted pick or drop starts a new attempt, and
    results from superseded attempts are discarded.
    """

    def __init__(
        self,
        is_signed_in: Callable[[], bool],
        on_complete: Optional[Callable[[str], Any]] = None,
        simulator: Optional[ProgressSimulator] = None,
        on_change: Optional[Callable[[UploadSessionState], None]] = None,
    ) -> None:
        self.is_signed_in = is_signed_in
        self.on_complete = on_complete
        self.on_change = on_change
        self.state = UploadSessionState()
        self.simulator = simulator or ProgressSimulator()
        self.simulator.on_progress = self._on_progress

        self._attempt = 0
        self._closed = False
        self._pending: Set[asyncio.Task] = set()

    # -------------------------
    # Drag handlers
    # -------------------------
    def on_drag_enter(self) -> None:
        if not self._accepting_input():
            return
        self._update(dragging=True)

    def on_drag_over(self) -> None:
        if not self._accepting_input():
            return
        if not self.state.dragging:
            self._update(dragging=True)

    def on_drag_leave(self) -> None:
        if not self._accepting_input():
            return
        self._update(dragging=False)

    # -------------------------
    # File handlers
    # -------------------------
    async def on_pick(self, candidate: Optional[CandidateFile]) -> None:
        if not self._accepting_input():
            return
        if candidate is not None:
            await self._process(candidate)

    async def on_drop(self, candidate: Optional[CandidateFile]) -> None:
        if not self._accepting_input():
            return
        self._update(dragging=False)
        if candidate is not None:
            await self._process(candidate)

    def teardown(self) -> None:
        """Stop the progress timer; no callback fires after this returns."""
        self._closed = True
        self._attempt += 1
        self.simulator.cancel()
        logger.debug("Ingestion session torn down")

    def cancel_completions(self) -> None:
        """Cancel completion handlers that are still running."""
        for task in list(self._pending):
            task.cancel()

    # -------------------------
    # Internals
    # -------------------------
    def _accepting_input(self) -> bool:
        return not self._closed and bool(self.is_signed_in())

    async def _process(self, candidate: CandidateFile) -> None:
        self._attempt += 1
        attempt = self._attempt
        self.simulator.cancel()

        result = validate_file(candidate)
        if not result.accepted:
            logger.info(
                "Upload rejected",
                extra={"file_name": candidate.name, "reason": result.error.message},
            )
            self._update(selected_file=None, progress=0, dragging=False, error=result.error)
            return

        self._update(selected_file=candidate, dragging=False, error=None, progress=0)

        try:
            inline_image = await encode_file(candidate)
        except ReadError as exc:
            if attempt != self._attempt:
                return
            self._update(selected_file=None, progress=0, dragging=False, error=exc)
            return

        if attempt != self._attempt:
            logger.debug(f"Discarding superseded upload attempt {attempt}")
            return

        self.simulator.start(lambda: self._complete(attempt, inline_image))

    def _complete(self, attempt: int, inline_image: str) -> None:
        if attempt != self._attempt or self.on_complete is None:
            return

        outcome = self.on_complete(inline_image)
        if inspect.isawaitable(outcome):
            # Scheduled, not awaited: session state never depends on it
            task = asyncio.ensure_future(outcome)
            self._pending.add(task)
            task.add_done_callback(self._on_complete_done)

    def _on_complete_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Upload completion handler failed", exc_info=exc)

    def _on_progress(self, value: int) -> None:
        self._update(progress=value)

    def _update(self, **changes: Any) -> None:
        for key, value in changes.items():
            setattr(self.state, key, value)
        if self.on_change is not None:
            self.on_change(self.state)

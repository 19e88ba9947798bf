"""Timer-driven simulated progress with a single completion callback."""

import asyncio
from enum import Enum
from typing import Callable, Optional

from sketchify.config import logger
from sketchify.constants import PROGRESS_INTERVAL_MS, PROGRESS_STEP, REDIRECT_DELAY_MS


class ProgressState(str, Enum):
    IDLE = "idle"
    TICKING = "ticking"
    COMPLETING = "completing"


class ProgressSimulator:
    """
    Produce a 0-100 progress signal on a fixed tick, then call ``on_done`` once.

    The run lives in an asyncio task owned by this instance. ``start`` replaces
    any previous run; ``cancel`` stops the current one and guarantees its
    ``on_done`` is never invoked.
    """

    def __init__(
        self,
        on_progress: Optional[Callable[[int], None]] = None,
        interval_ms: int = PROGRESS_INTERVAL_MS,
        step: int = PROGRESS_STEP,
        completion_delay_ms: int = REDIRECT_DELAY_MS,
    ) -> None:
        if step <= 0:
            raise ValueError("step must be positive")

        self.on_progress = on_progress
        self.interval = interval_ms / 1000
        self.step = step
        self.completion_delay = completion_delay_ms / 1000

        self.progress = 0
        self.state = ProgressState.IDLE
        self._task: Optional[asyncio.Task] = None

    def start(self, on_done: Callable[[], None]) -> None:
        """Reset to 0 and begin ticking. Must be called from a running loop."""
        self.cancel()
        self._set_progress(0)
        self.state = ProgressState.TICKING
        self._task = asyncio.get_running_loop().create_task(self._run(on_done))

    def cancel(self) -> None:
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
        self.state = ProgressState.IDLE

    async def _run(self, on_done: Callable[[], None]) -> None:
        while self.state is ProgressState.TICKING:
            await asyncio.sleep(self.interval)
            self._set_progress(min(self.progress + self.step, 100))
            if self.progress == 100:
                self.state = ProgressState.COMPLETING

        await asyncio.sleep(self.completion_delay)

        self.state = ProgressState.IDLE
        self._task = None
        try:
            on_done()
        except Exception:
            logger.error("Progress completion callback failed", exc_info=True)

    def _set_progress(self, value: int) -> None:
        self.progress = value
        if self.on_progress is not None:
            self.on_progress(value)

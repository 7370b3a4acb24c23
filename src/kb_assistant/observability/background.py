"""Fire-and-forget side effects that must not block the answer path."""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine

from kb_assistant.observability.logger import get_logger


class BackgroundTasks:
    """Owns detached tasks until they finish and logs their failures."""

    def __init__(self, logger=None) -> None:
        self._tasks: set[asyncio.Task] = set()
        self._log = logger or get_logger("background")

    def spawn(self, coro: Coroutine, name: str) -> asyncio.Task:
        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            self._log.warning("background_task_cancelled", task=task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            self._log.error("background_task_failed", task=task.get_name(), error=str(exc))

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait for all outstanding tasks. Failures are already logged."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

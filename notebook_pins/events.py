"""Workspace notifications and the debounced panel refresh."""

import asyncio
import logging
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)

AsyncCallback = Callable[[], Awaitable[Any]]


class Debouncer:
    """Coalesces bursts of triggers into one call after a quiet period."""

    def __init__(self, callback: AsyncCallback, wait_ms: int) -> None:
        self._callback = callback
        self._wait = wait_ms / 1000
        self._handle: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self) -> None:
        """(Re)start the quiet period. Must be called from the event loop."""
        if self._handle:
            self._handle.cancel()
        self._handle = asyncio.get_running_loop().call_later(self._wait, self._fire)

    def cancel(self) -> None:
        if self._handle:
            self._handle.cancel()
            self._handle = None

    async def flush(self) -> None:
        """Run a pending callback now instead of waiting for the timer."""
        if not self._handle:
            return
        self.cancel()
        await self._callback()

    def _fire(self) -> None:
        self._handle = None
        task = asyncio.ensure_future(self._run())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self) -> None:
        try:
            await self._callback()
        except Exception:
            logger.exception("Debounced callback failed")


class WorkspaceEvents:
    """Routes host workspace notifications to the panel and the pins service.

    Selection changes and sync notifications come in bursts, so they share a
    debounced refresh. Folder selection refreshes immediately.
    """

    def __init__(
        self,
        *,
        refresh: AsyncCallback,
        handle_note_change: Callable[[str], Awaitable[Any]],
        reconcile: AsyncCallback | None = None,
        debounce_ms: int = 150,
    ):
        self._refresh = refresh
        self._handle_note_change = handle_note_change
        self._reconcile = reconcile
        self.debounced_refresh = Debouncer(refresh, debounce_ms)

    async def on_note_selection_change(self) -> None:
        self.debounced_refresh.trigger()

    async def on_folder_selection_change(self) -> None:
        self.debounced_refresh.cancel()
        await self._refresh()

    async def on_note_change(self, event: Any) -> None:
        note_id = event.get("id") if isinstance(event, dict) else None
        if isinstance(note_id, str) and note_id:
            await self._handle_note_change(note_id)
        self.debounced_refresh.trigger()

    async def on_sync_complete(self) -> None:
        if self._reconcile:
            await self._reconcile()
        self.debounced_refresh.trigger()

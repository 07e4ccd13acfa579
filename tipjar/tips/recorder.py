"""Counter updates for shown/dismissed tips and debounced persistence."""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from tipjar.tips.stats import StatsStore

logger = logging.getLogger(__name__)


class DebouncedSaver:
    """Coalesces many mutations into one delayed write.

    ``mark_dirty()`` bumps a revision counter and makes sure exactly one flush
    task is pending. The task waits ``delay`` seconds, then writes until the
    saved revision catches up. A failed write keeps the saver dirty; the next
    mutation or ``close()`` retries it.
    """

    def __init__(self, save: Callable[[], Awaitable[None]], delay: float = 0.0):
        self._save = save
        self.delay = delay
        self._revision = 0
        self._saved_revision = 0
        self._handle: Optional[asyncio.Task] = None
        self._sleeping = False
        self._lock = asyncio.Lock()
        self.writes = 0

    @property
    def dirty(self) -> bool:
        return self._revision != self._saved_revision

    @property
    def pending(self) -> bool:
        return self._handle is not None and not self._handle.done()

    def mark_dirty(self):
        self._revision += 1
        if self.pending:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, deferring save until flush()")
            return
        self._sleeping = True
        self._handle = loop.create_task(self._run())

    async def _run(self):
        try:
            await asyncio.sleep(self.delay)
        finally:
            self._sleeping = False
        while self.dirty:
            if not await self.flush():
                break

    async def flush(self) -> bool:
        """Write the current state now if anything changed. Returns success."""
        async with self._lock:
            if not self.dirty:
                return True
            revision = self._revision
            try:
                await self._save()
            except Exception as e:
                logger.warning(f"Saving tip stats failed, will retry: {e}")
                return False
            self._saved_revision = revision
            self.writes += 1
            return True

    async def join(self):
        """Wait for the pending flush task, if any."""
        if self._handle is not None:
            await self._handle

    async def close(self) -> bool:
        """Cancel the pending timer and force a final write.

        A flush task that is already past its delay is awaited instead, so a
        write in progress is never started twice.
        """
        handle, self._handle = self._handle, None
        if handle is not None and not handle.done():
            if self._sleeping:
                handle.cancel()
                try:
                    await handle
                except asyncio.CancelledError:
                    pass
                self._sleeping = False
            else:
                await handle
        return await self.flush()


class InteractionRecorder:
    """Applies show/dismiss/trigger events to the stats and schedules a save."""

    def __init__(self, store: StatsStore, saver: DebouncedSaver):
        self.store = store
        self.saver = saver

    def record_shown(self, tip_id: str, context: Optional[str] = None):
        stats = self.store.ensure(tip_id)
        stats.shown_count += 1
        if context is not None:
            stats.shown_context[context] = stats.shown_context.get(context, 0) + 1
        self.saver.mark_dirty()

    def record_dismissed(self, tip_id: str):
        self.store.ensure(tip_id).dismissed_count += 1
        self.saver.mark_dirty()

    def record_trigger_open(self):
        self.store.triggered_open += 1
        self.saver.mark_dirty()

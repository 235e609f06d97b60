"""Periodic notification refresh bound to the lifetime of a connection."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class NotificationPoller(Generic[T]):
    """Run ``fetch`` every ``interval`` seconds and hand the result to ``deliver``.

    One task per poller. ``start`` and ``stop`` are tied to the owner's
    lifetime, and ``refresh`` triggers an immediate fetch unless one is
    already in flight, so a manual refresh never duplicates the periodic one.
    Each delivery replaces the previous result wholesale.
    """

    def __init__(
        self,
        fetch: Callable[[], Awaitable[T]],
        deliver: Callable[[T], Awaitable[None]],
        *,
        interval: float,
    ) -> None:
        if interval <= 0:
            raise ValueError("Polling interval must be positive")
        self._fetch = fetch
        self._deliver = deliver
        self._interval = interval
        self._task: asyncio.Task[None] | None = None
        self._in_flight = False

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def start(self) -> None:
        """Start the periodic task. Calling it again while running is a no-op."""

        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        """Cancel the periodic task and wait for it to finish."""

        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def refresh(self) -> bool:
        """Fetch and deliver once. Returns ``False`` if a fetch was already running."""

        if self._in_flight:
            return False
        self._in_flight = True
        try:
            result = await self._fetch()
            await self._deliver(result)
        finally:
            self._in_flight = False
        return True

    async def _run(self) -> None:
        while True:
            try:
                await self.refresh()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Notification refresh failed; retrying next interval")
            await asyncio.sleep(self._interval)


__all__ = ["NotificationPoller"]

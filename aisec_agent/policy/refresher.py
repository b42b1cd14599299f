"""Policy refresher: recurring background task reserved for policy retrieval.

At most one refresh loop runs per refresher; ``start`` replaces a running
loop instead of stacking a second one. Each tick fires the refresh hook as
its own task so a slow hook never delays the cadence.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

RefreshHook = Callable[[], Awaitable[None]]


async def fetch_policies() -> None:
    """Placeholder for fetching enforcement policies from the backend."""
    logger.debug("Policy fetch placeholder")


class PolicyRefresher:
    """Runs a refresh hook every ``interval_ms`` until stopped."""

    def __init__(self, hook: RefreshHook = fetch_policies) -> None:
        self.hook = hook
        self.interval_ms: int | None = None
        self.tick_count = 0
        self._task: asyncio.Task[None] | None = None
        self._hook_tasks: set[asyncio.Task[None]] = set()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, interval_ms: int) -> None:
        """Cancel any running loop and start a new one at ``interval_ms``.

        Must be called with a running event loop; otherwise refreshing is
        skipped with a warning.
        """
        self.stop()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop, policy refresh not started")
            return
        self.interval_ms = interval_ms
        self._task = loop.create_task(self._run_loop(interval_ms / 1000))
        logger.info("Policy refresher started (interval=%dms)", interval_ms)

    def stop(self) -> None:
        """Cancel the refresh loop and any in-flight hook runs."""
        for task in self._hook_tasks:
            task.cancel()
        self._hook_tasks.clear()
        if self._task is None:
            return
        if not self._task.done():
            self._task.cancel()
            logger.info("Policy refresher stopped")
        self._task = None
        self.interval_ms = None

    async def aclose(self) -> None:
        """Stop and wait for the cancelled loop to finish."""
        task = self._task
        self.stop()
        if task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await task

    async def _run_loop(self, interval_seconds: float) -> None:
        while True:
            await asyncio.sleep(interval_seconds)
            self.tick_count += 1
            task = asyncio.create_task(self._run_hook())
            self._hook_tasks.add(task)
            task.add_done_callback(self._hook_tasks.discard)

    async def _run_hook(self) -> None:
        try:
            await self.hook()
        except Exception:
            logger.exception("Failed to fetch policies")

"""Background task that reclaims abandoned priority leases."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from council_portal.coordination.coordinator import EditCoordinator

logger = logging.getLogger(__name__)


class LeaseSweeper:
    """Periodically expires stale leases across all editable containers.

    Runs as a background task within the FastAPI lifespan. The first sweep
    happens immediately on start.
    """

    def __init__(self, coordinators: Sequence[EditCoordinator], interval_seconds: float) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._coordinators = list(coordinators)
        self._interval = interval_seconds
        self._running = False
        self._task: asyncio.Task | None = None

    async def start(self) -> None:
        """Start sweeping in a background task."""
        if self._task is not None:
            return
        self._running = True
        self._task = asyncio.create_task(self._sweep_loop())
        logger.info("Lease sweeper started (interval=%ss)", self._interval)

    async def stop(self) -> None:
        """Stop the sweeper gracefully."""
        self._running = False
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
        logger.info("Lease sweeper stopped")

    async def sweep_once(self) -> int:
        """Run one sweep over every coordinator and return the leases cleared."""
        total = 0
        for coordinator in self._coordinators:
            try:
                total += await coordinator.expire_stale_leases()
            except Exception:
                logger.exception("Failed to expire stale leases in %s", coordinator.kind)
        return total

    async def _sweep_loop(self) -> None:
        while self._running:
            await self.sweep_once()
            await asyncio.sleep(self._interval)

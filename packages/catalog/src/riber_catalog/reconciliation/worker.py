"""ImageReconciliationWorker — runs the reconciliation job on a timer."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING

from riber_core.ports.background_worker import IBackgroundWorker

from ..config import CatalogSettings

if TYPE_CHECKING:
    from .job import ImageReconciliationJob, ReconciliationSummary

logger = logging.getLogger("riber.reconciliation")


class ImageReconciliationWorker(IBackgroundWorker):
    """Calls :meth:`ImageReconciliationJob.run` every ``poll_interval`` seconds.

    :meth:`trigger` wakes it early. Sweeps never overlap: the loop awaits
    each run before waiting again. A failing sweep is logged and the loop
    keeps going.
    """

    def __init__(
        self,
        job: ImageReconciliationJob,
        poll_interval: float | None = None,
        *,
        settings: CatalogSettings | None = None,
    ) -> None:
        if poll_interval is None:
            poll_interval = (settings or CatalogSettings()).reconciliation_poll_interval
        self._job = job
        self._poll_interval = poll_interval
        self._running = False
        self._task: asyncio.Task[None] | None = None
        self._trigger = asyncio.Event()

    @property
    def is_running(self) -> bool:
        return self._running

    def trigger(self) -> None:
        """Wake the worker immediately."""
        self._trigger.set()

    async def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._task = asyncio.create_task(self._run_loop())
        logger.info(
            "ImageReconciliationWorker started (poll_interval=%.1fs)",
            self._poll_interval,
        )

    async def stop(self) -> None:
        self._running = False
        self._trigger.set()
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError, asyncio.TimeoutError):
                await asyncio.wait_for(self._task, timeout=5.0)
            self._task = None
        logger.info("ImageReconciliationWorker stopped")

    async def run_once(self) -> ReconciliationSummary:
        """Execute a single sweep (useful in tests)."""
        return await self._job.run()

    async def _run_loop(self) -> None:
        while self._running:
            with contextlib.suppress(asyncio.TimeoutError):
                await asyncio.wait_for(
                    self._trigger.wait(), timeout=self._poll_interval
                )
            self._trigger.clear()
            if not self._running:
                break
            try:
                await self._job.run()
            except Exception:
                logger.exception("ImageReconciliationWorker error")

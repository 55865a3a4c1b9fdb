# quotesync Scheduler
# Periodic reconcile trigger on the running asyncio loop (APScheduler)

import asyncio
from datetime import datetime, timezone
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from quotesync.logger import SyncLogger, get_logger
from quotesync.sync.engine import SyncEngine

SYNC_JOB_ID = "quotesync-reconcile"


class Scheduler:
    """
    Triggers ``SyncEngine.reconcile()`` on a fixed interval.

    The interval job only launches a reconcile task and returns, so a slow
    fetch does not stretch the interval. Overlapping triggers are absorbed
    by the engine's own guard.
    """

    def __init__(self, engine: SyncEngine, *, logger: Optional[SyncLogger] = None):
        self.engine = engine
        self.logger = get_logger(logger)
        self.interval_seconds: Optional[float] = None
        self.ticks = 0
        self._scheduler: Optional[AsyncIOScheduler] = None
        self._generation = 0
        self._runs: set[asyncio.Task] = set()

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    def start(self, interval_seconds: float) -> None:
        """
        Trigger a reconcile now, then every ``interval_seconds``.

        Must be called from inside a running event loop.

        Raises:
            ValueError: If the interval is not positive.
            RuntimeError: If already started or no loop is running.
        """
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        if self.running:
            raise RuntimeError("Scheduler is already running")

        loop = asyncio.get_running_loop()
        self.interval_seconds = interval_seconds
        self._generation += 1

        scheduler = AsyncIOScheduler(event_loop=loop, timezone=timezone.utc)
        scheduler.add_job(
            self._tick,
            IntervalTrigger(seconds=interval_seconds, timezone=timezone.utc),
            args=[self._generation],
            id=SYNC_JOB_ID,
            name="Reconcile quotes with remote",
            next_run_time=datetime.now(timezone.utc),
            coalesce=True,
            replace_existing=True,
        )
        scheduler.start()
        self._scheduler = scheduler
        self.logger.debug(f"Scheduler started, syncing every {interval_seconds:g}s")

    def stop(self) -> None:
        """
        Stop triggering. No reconcile starts after this returns.

        A reconcile that already started is left to finish.
        """
        if self._scheduler is None:
            return
        self._generation += 1
        # A wakeup queued by start() must find no job left to fire
        self._scheduler.remove_all_jobs()
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
        self._scheduler = None
        self.logger.debug("Scheduler stopped")

    async def wait_idle(self) -> None:
        """Wait for reconciles already triggered to finish."""
        while self._runs:
            await asyncio.gather(*list(self._runs), return_exceptions=True)

    async def _tick(self, generation: int) -> None:
        if generation != self._generation:
            return
        self.ticks += 1
        task = asyncio.get_running_loop().create_task(self._run_once(generation))
        self._runs.add(task)
        task.add_done_callback(self._runs.discard)

    async def _run_once(self, generation: int) -> None:
        # Queued before stop() but not started yet
        if generation != self._generation:
            return
        try:
            await self.engine.reconcile()
        except Exception as e:
            # A failed tick is retried by the next one
            self.logger.error(f"Scheduled sync crashed: {e}")

from typing import List, Optional
import asyncio
import logging

from app.db.memory import MailStore

logger = logging.getLogger(__name__)

class ExpirySweeper:
    """
    Periodically evicts expired addresses from a MailStore.

    ``start()`` schedules the loop on the running event loop and returns the
    task; ``stop()`` cancels it. ``run_once()`` performs a single sweep and
    can be called directly without any loop.
    """

    def __init__(self, store: MailStore, interval_seconds: float = 60):
        self.store = store
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def run_once(self) -> List[str]:
        expired = self.store.sweep()
        if expired:
            logger.info(f"Sweep removed {len(expired)} expired address(es)")
        return expired

    async def _loop(self):
        logger.info(f"Expiry sweeper started with interval {self.interval_seconds}s")
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                self.run_once()
            except Exception as e:
                logger.exception(f"Sweep failed: {e}")

    def start(self) -> asyncio.Task:
        if self.running:
            logger.warning("Expiry sweeper is already running")
            return self._task
        self._task = asyncio.get_running_loop().create_task(self._loop())
        return self._task

    async def stop(self):
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Expiry sweeper stopped")

"""
In-process background queue for work detached from the HTTP response
"""

import asyncio
import logging
from typing import Awaitable, Callable, Set

logger = logging.getLogger(__name__)

Job = Callable[[], Awaitable[None]]


class BackgroundQueue:
    """Runs each submitted job as its own task on the application's event loop.

    Jobs are independent: one job sleeping does not hold back another.
    They are best-effort, an exception is logged and never propagated.
    Nothing is persisted; ``stop()`` gives in-flight jobs a grace period and
    then cancels whatever is still running.
    """

    def __init__(self, name: str = "background", shutdown_grace: float = 1.0):
        self.name = name
        self.shutdown_grace = shutdown_grace
        self._tasks: Set[asyncio.Task] = set()
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def start(self) -> None:
        """Accept jobs until stop()"""
        if self._running:
            return
        self._running = True
        logger.info(f"Background queue '{self.name}' started")

    def submit(self, job: Job, description: str = "job") -> asyncio.Task:
        if not self._running:
            raise RuntimeError(f"Background queue '{self.name}' is not running")
        task = asyncio.get_running_loop().create_task(self._run(job, description))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        logger.debug(f"Queued {description}")
        return task

    async def join(self) -> None:
        """Wait until every submitted job has finished, including jobs submitted meanwhile"""
        while self._tasks:
            await asyncio.wait(set(self._tasks))

    async def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        if self._tasks:
            await asyncio.wait(set(self._tasks), timeout=self.shutdown_grace)
        dropped = list(self._tasks)
        for task in dropped:
            task.cancel()
        if dropped:
            await asyncio.gather(*dropped, return_exceptions=True)
            logger.warning(f"Background queue '{self.name}' stopped with {len(dropped)} pending job(s) dropped")
        else:
            logger.info(f"Background queue '{self.name}' stopped")

    async def _run(self, job: Job, description: str) -> None:
        try:
            await job()
        except asyncio.CancelledError:
            logger.warning(f"Background {description} cancelled")
            raise
        except Exception as e:
            logger.exception(f"Background {description} failed: {e}")

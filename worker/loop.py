"""
Worker loop — one consumer pulling jobs from the shared queue.

Each pass:

    dequeue_job()
      ├─ QueueFailure → log, idle wait, next pass
      ├─ None         → idle wait (5s by default), next pass
      └─ job          → executor.run(job)
                          ├─ ok     → update_job_status(Completed)
                          └─ raises → update_job_status(Failed), log, next pass

Nothing a single job or a single dequeue does can kill the loop. The only
way out is stop() (or cancelling the task running run()); both are noticed
at the two waits: the idle wait and the simulated work.

Many workers (in many processes) can run this loop against the same Redis.
They never coordinate with each other: LPOP hands each id to one worker.
"""

import asyncio
import logging

from config.settings import settings
from models.enums import JobStatus
from models.job import ComputeJob
from jobqueue.client import JobQueue
from jobqueue.errors import QueueError
from worker.executor import JobCancelledError, JobExecutor

logger = logging.getLogger(__name__)


class Worker:

    def __init__(
        self,
        queue: JobQueue,
        executor: JobExecutor | None = None,
        idle_interval: float | None = None,
    ):
        self._queue = queue
        self._executor = executor or JobExecutor()
        self.idle_interval = (
            settings.WORKER_IDLE_INTERVAL if idle_interval is None else idle_interval
        )
        self._stop_event = asyncio.Event()
        self.processed = 0
        self.failed = 0

    @property
    def stopping(self) -> bool:
        return self._stop_event.is_set()

    def stop(self) -> None:
        """Ask the loop to exit. Safe to call from a signal handler on the loop."""
        if not self._stop_event.is_set():
            logger.info("Worker stop requested")
        self._stop_event.set()

    async def run(self) -> None:
        logger.info("Worker loop started")

        while not self.stopping:
            try:
                job = await self._queue.dequeue_job()
            except QueueError as e:
                logger.error(f"Dequeue failed: {e}", exc_info=True)
                await self._idle()
                continue

            if job is None:
                await self._idle()
                continue

            try:
                await self._process(job)
            except JobCancelledError as e:
                logger.warning(str(e))
                break
            except Exception as e:
                logger.error(f"Error processing job {job.id}: {e}", exc_info=True)

        logger.info(
            f"Worker loop stopped ({self.processed} completed, {self.failed} failed)"
        )

    async def _process(self, job: ComputeJob) -> None:
        logger.info(f"Processing job {job.id} of type {job.job_type}")
        try:
            await self._executor.run(job, self._stop_event)
            await self._queue.update_job_status(job.id, JobStatus.COMPLETED)
        except asyncio.CancelledError:
            await self._mark_failed(job)
            raise
        except Exception:
            await self._mark_failed(job)
            raise

        self.processed += 1
        logger.info(f"Completed job {job.id}")

    async def _mark_failed(self, job: ComputeJob) -> None:
        self.failed += 1
        try:
            await self._queue.update_job_status(job.id, JobStatus.FAILED)
        except QueueError as e:
            # the job stays Running in the store; nothing retries it later
            logger.error(f"Could not mark job {job.id} as Failed: {e}")

    async def _idle(self) -> None:
        """Wait idle_interval seconds, or less if stop() is called."""
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=self.idle_interval)
        except asyncio.TimeoutError:
            pass

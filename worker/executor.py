"""
Job executor — runs the (simulated) work for a single job.

A ComputeJob carries no payload, only a duration. "Running" it means
waiting duration_seconds * time_scale seconds. The wait watches the
worker's stop event, so a shutdown interrupts a long job instead of
waiting it out.
"""

import asyncio
import logging
from uuid import UUID

from config.settings import settings
from models.job import ComputeJob

logger = logging.getLogger(__name__)


class JobCancelledError(Exception):
    """The worker was told to stop while this job was still running."""

    def __init__(self, job_id: UUID):
        self.job_id = job_id
        super().__init__(f"Job {job_id} cancelled before it finished")


class JobExecutor:

    def __init__(self, time_scale: float | None = None):
        # seconds of real time per unit of duration_seconds; tests shrink this
        self.time_scale = settings.WORKER_TIME_SCALE if time_scale is None else time_scale

    async def run(self, job: ComputeJob, stop_event: asyncio.Event) -> None:
        """
        Simulate the job's workload.

        Raises:
            JobCancelledError: stop_event was set before the work finished.
        """
        seconds = job.duration_seconds * self.time_scale
        logger.debug(f"Job {job.id} simulating {seconds:.2f}s of work")

        if stop_event.is_set():
            raise JobCancelledError(job.id)
        try:
            await asyncio.wait_for(stop_event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            return  # the full duration elapsed without a stop
        raise JobCancelledError(job.id)

"""
Queue client — the enqueue/dequeue/status protocol on top of a JobStore.

On-store layout:

    jobs:queue          list   ids waiting for a worker, RPUSH in / LPOP out
    jobs:data:<id>      string the full ComputeJob as JSON
    jobs:processing     set    ids claimed by a worker, not yet terminal
    jobs:failed         set    ids whose terminal status is Failed

Lifecycle of one job:

    enqueue_job        SET body, RPUSH id                  → Queued
    dequeue_job        LPOP id, GET body, SADD processing,
                       SET body                            → Running
    update_job_status  GET body, SET body, SREM processing
                       (+ SADD failed)                     → Completed / Failed

The LPOP is the only step that needs to be atomic across workers: two
workers popping at the same time always get different ids. The steps after
it are NOT one transaction. A worker that dies between LPOP and the Running
update loses that job: it is off the queue and nobody will pop it again.
This queue is at-most-once; there is no lease or visibility timeout.
"""

import logging
from uuid import UUID

from models.enums import JobStatus
from models.job import ComputeJob
from jobqueue.errors import InvalidStatusTransitionError, JobNotFoundError
from jobqueue.retry import RetryPolicy, with_retry
from jobqueue.store import JobStore

logger = logging.getLogger(__name__)


class JobQueue:

    # Redis key names — shared by the API and the worker process
    QUEUE_KEY = "jobs:queue"
    DATA_KEY_PREFIX = "jobs:data:"
    PROCESSING_KEY = "jobs:processing"
    FAILED_KEY = "jobs:failed"

    def __init__(self, store: JobStore, retry_policy: RetryPolicy | None = None):
        self._store = store
        self.retry_policy = retry_policy or RetryPolicy.from_settings()

    @classmethod
    def data_key(cls, job_id: UUID | str) -> str:
        return f"{cls.DATA_KEY_PREFIX}{job_id}"

    @with_retry
    async def enqueue_job(self, job: ComputeJob) -> None:
        """
        Store the body, then append the id to the queue.

        The body goes first so a worker can never pop an id whose body has
        not been written yet. No duplicate check: ids are fresh UUIDs.
        """
        await self._store.set_string(self.data_key(job.id), job.to_json())
        await self._store.list_push_end(self.QUEUE_KEY, str(job.id))
        logger.info(f"Enqueued job {job.id} of type {job.job_type}")

    @with_retry
    async def dequeue_job(self) -> ComputeJob | None:
        """
        Claim the oldest queued job and mark it Running.

        Returns None when the queue is empty, and also when the popped id has
        no body or a body that is no longer Queued (both logged as a data
        anomaly; the id is not pushed back). The second case happens when
        an id sits on the queue twice, e.g. an RPUSH whose reply timed out
        and was retried.
        """
        job_id = await self._store.list_pop_other_end(self.QUEUE_KEY)
        if job_id is None:
            logger.debug("No jobs in queue")
            return None

        raw = await self._store.get_string(self.data_key(job_id))
        if raw is None:
            logger.warning(f"Data anomaly: job {job_id} was queued but has no body, skipping")
            return None

        job = ComputeJob.from_json(raw)
        if job.status != JobStatus.QUEUED:
            logger.warning(
                f"Data anomaly: job {job_id} was queued but is already "
                f"{job.status.value}, skipping"
            )
            return None

        await self._store.set_add(self.PROCESSING_KEY, job_id)
        job.status = JobStatus.RUNNING
        await self._store.set_string(self.data_key(job_id), job.to_json())

        logger.info(f"Dequeued job {job_id}")
        return job

    @with_retry
    async def update_job_status(self, job_id: UUID | str, status: JobStatus) -> None:
        """
        Persist a new status and keep the processing/failed sets in step.

        Raises:
            JobNotFoundError: no body for job_id.
            InvalidStatusTransitionError: the change would move the job
                backward or out of a terminal state.
        """
        job = await self._load(job_id)
        if not job.can_transition_to(status):
            raise InvalidStatusTransitionError(job_id, job.status.value, status.value)

        job.status = status
        await self._store.set_string(self.data_key(job_id), job.to_json())

        if status.is_terminal:
            await self._store.set_remove(self.PROCESSING_KEY, str(job_id))
        if status == JobStatus.FAILED:
            await self._store.set_add(self.FAILED_KEY, str(job_id))

        logger.info(f"Updated job {job_id} status to {status.value}")

    @with_retry
    async def get_job(self, job_id: UUID | str) -> ComputeJob:
        return await self._load(job_id)

    @with_retry
    async def get_all_jobs(self) -> list[ComputeJob]:
        """
        Jobs still waiting in jobs:queue, oldest first.

        Running and finished jobs are NOT included: the listing follows the
        queue, not the body table. Ids without a body are skipped.
        """
        job_ids = await self._store.list_range(self.QUEUE_KEY)
        return await self._load_many(job_ids)

    @with_retry
    async def get_processing_job_ids(self) -> set[str]:
        return await self._store.set_members(self.PROCESSING_KEY)

    @with_retry
    async def get_failed_job_ids(self) -> set[str]:
        return await self._store.set_members(self.FAILED_KEY)

    @with_retry
    async def get_failed_jobs(self) -> list[ComputeJob]:
        job_ids = await self._store.set_members(self.FAILED_KEY)
        jobs = await self._load_many(job_ids)
        return sorted(jobs, key=lambda j: j.created_at)

    @with_retry
    async def ping(self) -> bool:
        return await self._store.ping()

    async def _load(self, job_id: UUID | str) -> ComputeJob:
        raw = await self._store.get_string(self.data_key(job_id))
        if raw is None:
            raise JobNotFoundError(job_id)
        return ComputeJob.from_json(raw)

    async def _load_many(self, job_ids) -> list[ComputeJob]:
        jobs = []
        for job_id in job_ids:
            raw = await self._store.get_string(self.data_key(job_id))
            if raw is not None:
                jobs.append(ComputeJob.from_json(raw))
        return jobs

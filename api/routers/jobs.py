"""
Job endpoints.

POST /api/jobs           → Submit a new job (body in Redis, id on jobs:queue)
GET  /api/jobs           → Jobs still waiting in the queue
GET  /api/jobs/failed    → Jobs that ended Failed
GET  /api/jobs/{job_id}  → One job by id, whatever its status

The API layer is intentionally thin: validate input, call the JobQueue,
return the record. It never executes jobs; that's the worker's job.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response

from api.dependencies import get_queue
from api.schemas.job import JobCreate
from jobqueue.client import JobQueue
from jobqueue.errors import JobNotFoundError
from models.job import ComputeJob

router = APIRouter(prefix="/api/jobs", tags=["jobs"])


@router.post("", response_model=ComputeJob, status_code=201)
async def create_job(
    job_in: JobCreate,
    response: Response,
    queue: JobQueue = Depends(get_queue),
) -> ComputeJob:
    """
    Submit a new job.

    The server assigns id, createdAt and status=Queued, then enqueues it.
    A worker picks it up on its next dequeue.
    """
    job = job_in.to_job()
    await queue.enqueue_job(job)
    response.headers["Location"] = f"/api/jobs/{job.id}"
    return job


@router.get("", response_model=list[ComputeJob])
async def list_jobs(queue: JobQueue = Depends(get_queue)) -> list[ComputeJob]:
    """
    Jobs that are still Queued, oldest first.

    Running and finished jobs are not listed; fetch them by id.
    """
    return await queue.get_all_jobs()


@router.get("/failed", response_model=list[ComputeJob])
async def list_failed_jobs(queue: JobQueue = Depends(get_queue)) -> list[ComputeJob]:
    return await queue.get_failed_jobs()


@router.get("/{job_id}", response_model=ComputeJob)
async def get_job(
    job_id: UUID,
    queue: JobQueue = Depends(get_queue),
) -> ComputeJob:
    """Get a single job by its UUID."""
    try:
        return await queue.get_job(job_id)
    except JobNotFoundError:
        raise HTTPException(status_code=404, detail=f"Job {job_id} not found")

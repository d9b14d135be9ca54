"""
Health check endpoint.

Load balancers and container orchestrators hit this to decide whether the
API can take traffic. The only dependency worth checking is Redis.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_queue
from jobqueue.client import JobQueue

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(queue: JobQueue = Depends(get_queue)) -> dict:
    """Check that Redis is reachable."""
    await queue.ping()
    return {"status": "healthy", "redis": "ok"}

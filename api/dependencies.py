"""
FastAPI dependency injection.

An endpoint declares `queue: JobQueue = Depends(get_queue)` and receives the
JobQueue built during startup. Tests swap it out with
app.dependency_overrides[get_queue] to run against fakeredis.
"""

from fastapi import Request

from jobqueue.client import JobQueue


async def get_queue(request: Request) -> JobQueue:
    """Returns the JobQueue stored on the app during startup."""
    return request.app.state.queue

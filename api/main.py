"""
FastAPI application factory — the producer side of the queue.

This file:
1. Creates the FastAPI app
2. Opens the shared Redis store on startup and builds one JobQueue
3. Registers the routers (jobs, health)
4. Closes the store on shutdown

The `lifespan` context manager is FastAPI's way of handling startup/shutdown.

To run:  uvicorn api.main:app --host 0.0.0.0 --port 8000 --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.settings import settings
from jobqueue.client import JobQueue
from jobqueue.errors import QueueFailure
from jobqueue.store import RedisStore
from api.routers import jobs, health

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup: connect to Redis and build the JobQueue every request shares.
    Shutdown: close the Redis connection.
    """
    # ── Startup ─────────────────────────────────────────────────
    store = RedisStore(settings.redis_url)
    await store.open()
    app.state.queue = JobQueue(store)
    logger.info("API ready")

    yield  # app is running and serving requests between startup and shutdown

    # ── Shutdown ────────────────────────────────────────────────
    await store.close()
    logger.info("API shut down")


async def queue_failure_handler(request: Request, exc: QueueFailure) -> JSONResponse:
    """The store is unreachable or returned garbage: a server-side problem, not the client's."""
    logger.error(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=503, content={"detail": str(exc)})


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    app = FastAPI(
        title="NetHub Job Queue",
        description="Submit compute jobs to a Redis-backed queue and track their status",
        version="1.0.0",
        lifespan=lifespan,
    )

    # the browser front-end is served from another origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(QueueFailure, queue_failure_handler)

    app.include_router(health.router)
    app.include_router(jobs.router)

    return app


# This is what uvicorn imports: `uvicorn api.main:app`
app = create_app()

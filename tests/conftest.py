"""
Shared test fixtures.

These replace real infrastructure with lightweight in-memory alternatives:
- Redis → fakeredis (pure Python Redis mock)
- HTTP server → httpx.AsyncClient with ASGI transport (no network)

This means tests:
- Run without Docker
- Run in milliseconds (no network, zero retry backoff)
- Are fully isolated (each test gets a fresh fake Redis)
"""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from fakeredis.aioredis import FakeRedis

from api.main import create_app
from api.dependencies import get_queue
from jobqueue.client import JobQueue
from jobqueue.retry import RetryPolicy
from jobqueue.store import RedisStore
from models.job import ComputeJob

# same number of retries as production, without the waiting
FAST_RETRY = RetryPolicy(max_retries=3, base_delay=0.0)


@pytest_asyncio.fixture
async def fake_redis():
    """Create a fake Redis instance (in-memory, no real Redis needed)."""
    r = FakeRedis(decode_responses=True)
    yield r
    await r.flushall()


@pytest_asyncio.fixture
async def store(fake_redis):
    s = RedisStore(client=fake_redis)
    await s.open()
    yield s
    await s.close()


@pytest.fixture
def queue(store):
    return JobQueue(store, retry_policy=FAST_RETRY)


@pytest.fixture
def make_job():
    """Build a Queued ComputeJob with sensible defaults."""

    def _make(job_type: str = "Simulation", duration_seconds: int = 1) -> ComputeJob:
        return ComputeJob(job_type=job_type, duration_seconds=duration_seconds)

    return _make


@pytest_asyncio.fixture
async def client(queue):
    """
    Create a test HTTP client that talks directly to the FastAPI app.

    dependency_overrides swaps the real JobQueue (built in the lifespan,
    which ASGITransport never runs) for one on fakeredis.
    """
    app = create_app()

    async def override_get_queue():
        return queue

    app.dependency_overrides[get_queue] = override_get_queue

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

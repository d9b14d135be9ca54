"""
Worker process entry point.

This is a SEPARATE process from the FastAPI API server. It owns one
Redis connection for its whole lifetime and runs one Worker loop on it:

    RedisStore.open()  →  Worker(JobQueue(store)).run()  →  RedisStore.close()

If Redis is not up yet, open() is retried every WORKER_IDLE_INTERVAL
seconds instead of the process exiting.

Ctrl+C (SIGINT) or a kill signal (SIGTERM) calls worker.stop(). The loop
notices at its next wait, marks an interrupted job as Failed, and returns.

To run:
    python -m worker.main

Scale out by starting more of these processes; they share nothing but Redis.
"""

import asyncio
import logging
import signal

from config.settings import settings
from jobqueue.client import JobQueue
from jobqueue.errors import TransientStoreError
from jobqueue.store import RedisStore
from worker.loop import Worker

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


async def open_store(store: RedisStore, retry_interval: float | None = None) -> None:
    """
    Open the store, waiting for Redis instead of exiting if it is not up yet.

    Only transient errors (connection refused, timeout) are retried.
    """
    if retry_interval is None:
        retry_interval = settings.WORKER_IDLE_INTERVAL
    while True:
        try:
            await store.open()
            return
        except TransientStoreError as e:
            logger.error(f"Store not reachable, retrying in {retry_interval:.1f}s: {e}")
            await asyncio.sleep(retry_interval)


async def run_worker() -> None:
    store = RedisStore(settings.redis_url)
    await open_store(store)

    worker = Worker(JobQueue(store))

    # ── Graceful shutdown on Ctrl+C or SIGTERM ──────────────────
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        try:
            loop.add_signal_handler(sig, worker.stop)
        except NotImplementedError:
            # Windows event loops have no add_signal_handler
            signal.signal(sig, lambda signum, frame: loop.call_soon_threadsafe(worker.stop))

    logger.info("Worker process running. Press Ctrl+C to stop.")
    try:
        await worker.run()
    finally:
        await store.close()


def main():
    asyncio.run(run_worker())
    logger.info("Worker process exited")


if __name__ == "__main__":
    main()

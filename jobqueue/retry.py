"""
Retry policy — decides what happens when a store call fails.

Every JobQueue operation is wrapped by @with_retry. The decorator looks at
the exception type:

    TransientStoreError  → sleep, try the whole operation again
                           (0.2s, 0.4s, 0.8s with the defaults), then give up
                           with QueueFailure
    JobNotFoundError,
    InvalidStatusTransitionError,
    QueueFailure         → re-raised at once, never retried
    anything else        → wrapped in QueueFailure at once (StoreError, or a
                           body that no longer parses as a ComputeJob)

asyncio.CancelledError is a BaseException, so it passes straight through
and a cancelled worker never sits in a backoff sleep.

Note that dequeue_job is retried as a whole: if LPOP succeeded and a later
step hit a transient error, the retry pops the NEXT id. The first one is
gone from the queue (at-most-once, same as a worker crash at that point).
"""

import asyncio
import functools
import logging
from dataclasses import dataclass

from config.settings import settings
from jobqueue.errors import (
    InvalidStatusTransitionError,
    JobNotFoundError,
    QueueFailure,
    TransientStoreError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    max_retries: int = 3
    base_delay: float = 0.2
    multiplier: float = 2.0

    @classmethod
    def from_settings(cls) -> "RetryPolicy":
        return cls(
            max_retries=settings.QUEUE_MAX_RETRIES,
            base_delay=settings.QUEUE_RETRY_BASE_DELAY,
        )

    def delays(self) -> list[float]:
        """Backoff before each retry, in seconds."""
        return [self.base_delay * self.multiplier ** i for i in range(self.max_retries)]


def with_retry(method):
    """
    Wrap an async JobQueue method with the instance's retry_policy.

    The operation name used in logs and QueueFailure is the method name.
    """
    operation = method.__name__

    @functools.wraps(method)
    async def wrapper(self, *args, **kwargs):
        policy: RetryPolicy = self.retry_policy
        delays = policy.delays()
        attempt = 0

        while True:
            try:
                return await method(self, *args, **kwargs)
            except TransientStoreError as e:
                if attempt >= len(delays):
                    logger.error(
                        f"{operation} gave up after {attempt} retries: {e}"
                    )
                    raise QueueFailure(operation, e) from e
                delay = delays[attempt]
                attempt += 1
                logger.warning(
                    f"{operation} hit a transient store error, "
                    f"retry {attempt}/{len(delays)} in {delay:.2f}s: {e}"
                )
                await asyncio.sleep(delay)
            except (JobNotFoundError, InvalidStatusTransitionError, QueueFailure):
                raise
            except Exception as e:
                logger.error(
                    f"{operation} failed with a non-retryable error: {e}",
                    exc_info=True,
                )
                raise QueueFailure(operation, e) from e

    return wrapper

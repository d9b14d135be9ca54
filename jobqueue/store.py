"""
Store adapter — the minimal key/list/set backend the queue client runs on.

JobStore is the contract: single-key operations only, each one atomic on
the server. The client never needs a multi-key transaction; the only
cross-worker synchronization is list_pop_other_end being one atomic pop.

RedisStore implements it with redis.asyncio:

    list_push_end       → RPUSH   (producers append at the tail)
    list_pop_other_end  → LPOP    (workers take from the head → FIFO)
    list_range          → LRANGE 0 -1  (oldest first)
    set_add/set_remove  → SADD / SREM

The connection is process-wide: create one RedisStore at startup, open() it,
hand it to the JobQueue, close() it on shutdown. redis-py's connection pool
already makes a single client safe to share between coroutines, so there is
no locking here.
"""

import functools
import logging
from typing import Protocol

from redis import exceptions as redis_exceptions
from redis.asyncio import Redis

from config.settings import settings
from jobqueue.errors import StoreError, TransientStoreError

logger = logging.getLogger(__name__)


class JobStore(Protocol):

    async def open(self) -> None: ...
    async def close(self) -> None: ...
    async def ping(self) -> bool: ...

    async def get_string(self, key: str) -> str | None: ...
    async def set_string(self, key: str, value: str) -> None: ...

    async def list_push_end(self, key: str, value: str) -> None: ...
    async def list_pop_other_end(self, key: str) -> str | None: ...
    async def list_range(self, key: str) -> list[str]: ...

    async def set_add(self, key: str, member: str) -> None: ...
    async def set_remove(self, key: str, member: str) -> None: ...
    async def set_members(self, key: str) -> set[str]: ...


def _decode(value) -> str | None:
    if value is None:
        return None
    return value.decode() if isinstance(value, bytes) else value


def _translate_errors(method):
    """Turn redis exceptions into TransientStoreError / StoreError."""

    @functools.wraps(method)
    async def wrapper(self, *args, **kwargs):
        try:
            return await method(self, *args, **kwargs)
        except (redis_exceptions.ConnectionError, redis_exceptions.TimeoutError) as e:
            raise TransientStoreError(f"{method.__name__}: {e}") from e
        except redis_exceptions.RedisError as e:
            raise StoreError(f"{method.__name__}: {e}") from e

    return wrapper


class RedisStore:

    def __init__(self, url: str | None = None, client: Redis | None = None):
        """
        Args:
            url: redis:// URL; defaults to settings.redis_url. Ignored if client is given.
            client: an already-built client (tests pass a fakeredis instance).
                    The store does not close clients it did not create.
        """
        self._url = url or settings.redis_url
        self._redis: Redis | None = client
        self._owns_client = client is None

    @property
    def redis(self) -> Redis:
        if self._redis is None:
            raise StoreError("RedisStore used before open()")
        return self._redis

    @_translate_errors
    async def open(self) -> None:
        if self._redis is None:
            self._redis = Redis.from_url(
                self._url,
                socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
                decode_responses=True,
            )
        await self._redis.ping()
        logger.info(f"Connected to store at {self._url}")

    async def close(self) -> None:
        if self._redis is None:
            return
        if self._owns_client:
            await self._redis.aclose()
            self._redis = None
        logger.info("Store connection closed")

    @_translate_errors
    async def ping(self) -> bool:
        return bool(await self.redis.ping())

    # ── Strings ─────────────────────────────────────────────────

    @_translate_errors
    async def get_string(self, key: str) -> str | None:
        return _decode(await self.redis.get(key))

    @_translate_errors
    async def set_string(self, key: str, value: str) -> None:
        await self.redis.set(key, value)

    # ── Lists ───────────────────────────────────────────────────

    @_translate_errors
    async def list_push_end(self, key: str, value: str) -> None:
        await self.redis.rpush(key, value)

    @_translate_errors
    async def list_pop_other_end(self, key: str) -> str | None:
        return _decode(await self.redis.lpop(key))

    @_translate_errors
    async def list_range(self, key: str) -> list[str]:
        return [_decode(v) for v in await self.redis.lrange(key, 0, -1)]

    # ── Sets ────────────────────────────────────────────────────

    @_translate_errors
    async def set_add(self, key: str, member: str) -> None:
        await self.redis.sadd(key, member)

    @_translate_errors
    async def set_remove(self, key: str, member: str) -> None:
        await self.redis.srem(key, member)

    @_translate_errors
    async def set_members(self, key: str) -> set[str]:
        return {_decode(m) for m in await self.redis.smembers(key)}

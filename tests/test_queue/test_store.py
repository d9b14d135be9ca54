"""Tests for RedisStore: the list/set primitives and redis error translation."""

import pytest
import pytest_asyncio
from fakeredis import FakeServer
from fakeredis.aioredis import FakeRedis

from jobqueue.errors import StoreError, TransientStoreError
from jobqueue.store import RedisStore


@pytest.mark.asyncio
async def test_list_is_fifo(store):
    for value in ("a", "b", "c"):
        await store.list_push_end("q", value)

    assert await store.list_range("q") == ["a", "b", "c"]
    assert await store.list_pop_other_end("q") == "a"
    assert await store.list_pop_other_end("q") == "b"
    assert await store.list_range("q") == ["c"]


@pytest.mark.asyncio
async def test_pop_empty_list_returns_none(store):
    assert await store.list_pop_other_end("empty") is None


@pytest.mark.asyncio
async def test_strings(store):
    assert await store.get_string("k") is None
    await store.set_string("k", "v")
    assert await store.get_string("k") == "v"


@pytest.mark.asyncio
async def test_sets(store):
    await store.set_add("s", "x")
    await store.set_add("s", "y")
    await store.set_remove("s", "x")
    await store.set_remove("s", "missing")  # no error
    assert await store.set_members("s") == {"y"}


@pytest.mark.asyncio
async def test_bytes_responses_are_decoded():
    """Clients built without decode_responses still hand back str."""
    store = RedisStore(client=FakeRedis())
    await store.open()
    await store.set_string("k", "v")
    await store.list_push_end("q", "a")

    assert await store.get_string("k") == "v"
    assert await store.list_range("q") == ["a"]
    assert await store.list_pop_other_end("q") == "a"


@pytest_asyncio.fixture
async def disconnected_store():
    server = FakeServer()
    s = RedisStore(client=FakeRedis(server=server))
    await s.open()
    server.connected = False
    return s


@pytest.mark.asyncio
async def test_connection_error_is_transient(disconnected_store):
    with pytest.raises(TransientStoreError):
        await disconnected_store.get_string("k")


@pytest.mark.asyncio
async def test_wrong_type_is_store_error(store):
    await store.set_string("k", "v")
    with pytest.raises(StoreError):
        await store.list_push_end("k", "a")


@pytest.mark.asyncio
async def test_use_before_open_raises():
    store = RedisStore("redis://localhost:6379/0")
    with pytest.raises(StoreError):
        await store.get_string("k")


@pytest.mark.asyncio
async def test_close_keeps_injected_client(fake_redis):
    store = RedisStore(client=fake_redis)
    await store.open()
    await store.close()
    # the caller still owns the client
    assert await fake_redis.ping()

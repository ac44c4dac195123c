import asyncio
import logging

import pytest

from paye.config import Settings
from paye.counter import NullCounterStore, RedisCounterStore, build_counter_store
from tests.fixtures.fake_redis import FakeRedis, make_slow_client, make_unreachable_client

KEY = "oduko:user-count"


@pytest.mark.asyncio
async def test_get_count_reads_persisted_value():
    store = RedisCounterStore(FakeRedis({KEY: "42"}), KEY)
    assert await store.get_count() == 42


@pytest.mark.asyncio
async def test_get_count_missing_key_is_zero():
    store = RedisCounterStore(FakeRedis(), KEY)
    assert await store.get_count() == 0


@pytest.mark.asyncio
async def test_get_count_ignores_garbage():
    store = RedisCounterStore(FakeRedis({KEY: "lots"}), KEY)
    assert await store.get_count() == 0


@pytest.mark.asyncio
async def test_save_count_persists_without_expiry():
    client = FakeRedis()
    store = RedisCounterStore(client, KEY)
    await store.save_count(7)
    assert client.data[KEY] == "7"
    await store.save_count("seven")  # type: ignore[arg-type]
    assert client.data[KEY] == "0"
    await store.save_count(-3)
    assert client.data[KEY] == "0"


@pytest.mark.asyncio
async def test_increment_is_atomic_under_concurrency():
    client = FakeRedis({KEY: "10"})
    store = RedisCounterStore(client, KEY)
    results = await asyncio.gather(*(store.increment_count() for _ in range(50)))
    assert sorted(results) == list(range(11, 61))
    assert await store.get_count() == 60


@pytest.mark.asyncio
async def test_unreachable_store_degrades_to_defaults(caplog):
    client = make_unreachable_client()
    store = RedisCounterStore(client, KEY)
    with caplog.at_level(logging.ERROR, logger="paye.counter"):
        await store.connect()
        assert store.connected is False
        assert await store.get_count() == 0
        await store.save_count(5)
        assert [await store.increment_count() for _ in range(3)] == [1, 1, 1]
    assert "Error incrementing visit count" in caplog.text
    client.set.assert_awaited_with(KEY, "5")


@pytest.mark.asyncio
async def test_slow_increment_times_out_to_one(caplog):
    store = RedisCounterStore(make_slow_client(), KEY, increment_timeout=0.05)
    with caplog.at_level(logging.WARNING, logger="paye.counter"):
        assert await store.increment_count() == 1
    assert "timed out" in caplog.text


@pytest.mark.asyncio
async def test_slow_ping_does_not_block_connect():
    store = RedisCounterStore(make_slow_client(), KEY, connect_timeout=0.05)
    await store.connect()
    assert store.connected is False


@pytest.mark.asyncio
async def test_connect_and_close():
    client = FakeRedis()
    store = RedisCounterStore(client, KEY)
    await store.connect()
    assert store.connected is True
    await store.close()
    assert client.closed is True
    assert store.connected is False


@pytest.mark.asyncio
async def test_close_failure_is_swallowed():
    store = RedisCounterStore(make_unreachable_client(), KEY)
    store.client.aclose.side_effect = ConnectionResetError("gone")
    await store.close()


@pytest.mark.asyncio
async def test_null_store_defaults():
    store = NullCounterStore()
    await store.connect()
    assert await store.get_count() == 0
    await store.save_count(12)
    assert await store.increment_count() == 1
    assert await store.increment_count() == 1
    await store.close()


def test_build_store_without_url_is_null():
    assert isinstance(build_counter_store(Settings()), NullCounterStore)


def test_build_store_redis_without_url_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="paye.counter"):
        store = build_counter_store(Settings(counter_backend="redis"))
    assert isinstance(store, NullCounterStore)
    assert "REDIS_URL is not configured" in caplog.text


def test_build_store_null_backend_ignores_url():
    store = build_counter_store(Settings(redis_url="redis://localhost:6379/0", counter_backend="null"))
    assert store.backend == "null"


def test_build_store_with_url_is_redis():
    settings = Settings(redis_url="redis://localhost:6379/3", counter_key="visits", counter_increment_timeout=0.5)
    store = build_counter_store(settings)
    assert isinstance(store, RedisCounterStore)
    assert store.key == "visits"
    assert store.increment_timeout == 0.5


def test_build_store_with_bad_url_falls_back(caplog):
    with caplog.at_level(logging.ERROR, logger="paye.counter"):
        store = build_counter_store(Settings(redis_url="not-a-url"))
    assert isinstance(store, NullCounterStore)
    assert "Failed to create Redis client" in caplog.text

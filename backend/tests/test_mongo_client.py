# tests/test_mongo_client.py
from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest
from pymongo.errors import ConnectionFailure, OperationFailure

from app.db.mongo_client import ConnectionState, MongoConfigError, MongoConnectionCache
from conftest import TEST_DB, ClientFactory, FakeMongoClient, make_settings

N_CALLERS = 8


def _run_concurrently(cache, gate):
    """Start N acquire() calls, open the gate once they are all in flight."""
    entered = threading.Semaphore(0)

    def call():
        entered.release()
        try:
            return cache.acquire()
        except Exception as e:
            return e

    with ThreadPoolExecutor(max_workers=N_CALLERS) as pool:
        futures = [pool.submit(call) for _ in range(N_CALLERS)]
        for _ in range(N_CALLERS):
            assert entered.acquire(timeout=5)
        time.sleep(0.1)
        assert cache.state is ConnectionState.CONNECTING
        gate.set()
        return [f.result(timeout=5) for f in futures]


def test_first_acquire_connects_and_later_calls_reuse(cache, factory):
    assert cache.state is ConnectionState.UNINITIALIZED

    db1 = cache.acquire()
    db2 = cache.acquire()

    assert db1 is db2
    assert db1.name == TEST_DB
    assert len(factory.calls) == 1
    assert cache.state is ConnectionState.READY


def test_connect_passes_configured_timeouts():
    factory = ClientFactory()
    settings = make_settings(
        MONGO_SERVER_SELECTION_TIMEOUT_MS=1500,
        MONGO_CONNECT_TIMEOUT_MS=2500,
        MONGO_SOCKET_TIMEOUT_MS=3500,
    )
    MongoConnectionCache(settings, client_factory=factory).acquire()

    uri, kwargs = factory.calls[0]
    assert uri == settings.MONGO_URI
    assert kwargs == {
        "serverSelectionTimeoutMS": 1500,
        "connectTimeoutMS": 2500,
        "socketTimeoutMS": 3500,
    }


def test_missing_uri_fails_before_any_connection_attempt():
    factory = ClientFactory()
    cache = MongoConnectionCache(make_settings(MONGO_URI=""), client_factory=factory)

    with pytest.raises(MongoConfigError):
        cache.acquire()

    assert factory.calls == []
    assert cache.state is ConnectionState.UNINITIALIZED


def test_concurrent_first_calls_share_one_attempt():
    gate = threading.Event()
    client = FakeMongoClient()
    calls = []

    def slow_factory(uri, **kwargs):
        calls.append(uri)
        gate.wait(5)
        return client

    cache = MongoConnectionCache(make_settings(), client_factory=slow_factory)
    results = _run_concurrently(cache, gate)

    assert len(calls) == 1
    assert all(r is results[0] for r in results)
    assert cache.state is ConnectionState.READY


def test_failed_attempt_reaches_every_waiter_then_retries():
    gate = threading.Event()
    boom = ConnectionFailure("cluster unreachable")
    client = FakeMongoClient()
    calls = []

    def flaky_factory(uri, **kwargs):
        calls.append(uri)
        if len(calls) == 1:
            gate.wait(5)
            raise boom
        return client

    cache = MongoConnectionCache(make_settings(), client_factory=flaky_factory)
    results = _run_concurrently(cache, gate)

    assert len(calls) == 1
    assert all(r is boom for r in results)
    assert cache.state is ConnectionState.UNINITIALIZED

    db = cache.acquire()
    assert len(calls) == 2
    assert db.name == TEST_DB
    assert cache.state is ConnectionState.READY


def test_failed_ping_closes_client_and_does_not_cache():
    bad = FakeMongoClient(fail_ping=OperationFailure("auth failed"))
    factory = ClientFactory(bad)
    cache = MongoConnectionCache(make_settings(), client_factory=factory)

    with pytest.raises(OperationFailure):
        cache.acquire()
    assert bad.closed
    assert cache.state is ConnectionState.UNINITIALIZED

    bad.fail_ping = None
    cache.acquire()
    assert len(factory.calls) == 2
    assert cache.state is ConnectionState.READY


def test_close_releases_client_and_allows_reconnect(cache, factory):
    cache.acquire()
    cache.close()

    assert factory.client.closed
    assert cache.state is ConnectionState.UNINITIALIZED

    cache.acquire()
    assert len(factory.calls) == 2


def test_close_without_connection_is_noop(cache, factory):
    cache.close()
    assert not factory.client.closed
    assert factory.calls == []


class _Interrupted(BaseException):
    pass


def test_interrupted_attempt_is_cleared_and_retried():
    client = FakeMongoClient()
    calls = []

    def factory(uri, **kwargs):
        calls.append(uri)
        if len(calls) == 1:
            raise _Interrupted()
        return client

    cache = MongoConnectionCache(make_settings(), client_factory=factory)

    with pytest.raises(_Interrupted):
        cache.acquire()
    assert cache.state is ConnectionState.UNINITIALIZED

    db = cache.acquire()
    assert db.name == TEST_DB
    assert len(calls) == 2

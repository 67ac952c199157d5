import threading
import time

import pytest
from sqlalchemy.exc import OperationalError

from devevent.core.database import DatabaseHandle
from devevent.errors import DatabaseUnavailableError

pytestmark = pytest.mark.unit


def _run_concurrently(target, count):
    results, errors = [], []

    def _call():
        try:
            results.append(target())
        except DatabaseUnavailableError as exc:
            errors.append(exc)

    threads = [threading.Thread(target=_call) for _ in range(count)]
    for thread in threads:
        thread.start()
    return threads, results, errors


def test_connect_reuses_established_engine():
    calls = []
    engine = object()

    def connector():
        calls.append(1)
        return engine

    handle = DatabaseHandle(connector)
    assert not handle.connected
    assert handle.connect() is engine
    assert handle.connect() is engine
    assert handle.connected
    assert len(calls) == 1


def test_concurrent_first_callers_share_one_attempt():
    calls = []
    release = threading.Event()
    engine = object()

    def connector():
        calls.append(1)
        release.wait(timeout=5)
        return engine

    handle = DatabaseHandle(connector)
    threads, results, errors = _run_concurrently(handle.connect, 8)
    time.sleep(0.1)
    release.set()
    for thread in threads:
        thread.join(timeout=5)

    assert len(calls) == 1
    assert errors == []
    assert results == [engine] * 8


def test_concurrent_callers_share_failure_and_next_call_retries():
    calls = []
    release = threading.Event()
    engine = object()

    def connector():
        calls.append(1)
        if len(calls) == 1:
            release.wait(timeout=5)
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))
        return engine

    handle = DatabaseHandle(connector)
    threads, results, errors = _run_concurrently(handle.connect, 4)
    time.sleep(0.1)
    release.set()
    for thread in threads:
        thread.join(timeout=5)

    # Every caller that joined the failed attempt sees the failure.
    assert len(calls) == 1
    assert results == []
    assert len(errors) == 4
    assert not handle.connected

    assert handle.connect() is engine
    assert len(calls) == 2


def test_reset_forces_a_new_connection():
    calls = []
    handle = DatabaseHandle(lambda: calls.append(1) or object())
    first = handle.connect()
    handle.reset()
    assert handle.connect() is not first
    assert len(calls) == 2


@pytest.mark.integration
def test_unavailable_database_is_generic_500(app, client):
    def connector():
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    app.extensions["database"] = DatabaseHandle(connector)
    resp = client.get("/api/events")
    assert resp.status_code == 500
    body = resp.get_json()
    assert body["error"] == "server_error"
    assert "connection refused" not in body["message"]


def test_unexpected_connector_error_is_not_cached():
    calls = []
    engine = object()

    def connector():
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("driver missing")
        return engine

    handle = DatabaseHandle(connector)
    with pytest.raises(RuntimeError, match="driver missing"):
        handle.connect()

    results = []
    retry = threading.Thread(target=lambda: results.append(handle.connect()))
    retry.start()
    retry.join(timeout=2)

    assert not retry.is_alive()
    assert results == [engine]
    assert len(calls) == 2


def test_followers_of_unexpected_failure_are_released():
    release = threading.Event()
    calls = []

    def connector():
        calls.append(1)
        release.wait(timeout=5)
        raise RuntimeError("driver missing")

    handle = DatabaseHandle(connector)
    failures = []

    def _call():
        try:
            handle.connect()
        except RuntimeError as exc:
            failures.append(exc)

    threads = [threading.Thread(target=_call) for _ in range(4)]
    for thread in threads:
        thread.start()
    time.sleep(0.1)
    release.set()
    for thread in threads:
        thread.join(timeout=2)

    assert not any(thread.is_alive() for thread in threads)
    assert len(calls) == 1
    assert len(failures) == 4

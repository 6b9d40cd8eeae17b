"""Tests for the commit locks."""

import threading
from unittest.mock import MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from orderdesk.services.lock_service import (
    COMMIT_LOCK_KEY,
    CommitLockBusy,
    LocalCommitLock,
    RedisCommitLock,
    _RELEASE_LUA,
    build_commit_lock,
    default_commit_lock,
)
from orderdesk.services import lock_service


class TestLocalCommitLock:
    def test_hold_and_release(self):
        lock = LocalCommitLock(timeout=0.1)

        with lock.hold():
            pass
        with lock.hold():
            pass

    def test_busy_when_held_elsewhere(self):
        lock = LocalCommitLock(timeout=0.05)
        entered = threading.Event()
        leave = threading.Event()

        def holder():
            with lock.hold():
                entered.set()
                leave.wait(2)

        t = threading.Thread(target=holder)
        t.start()
        entered.wait(2)
        try:
            with pytest.raises(CommitLockBusy):
                with lock.hold():
                    pass
        finally:
            leave.set()
            t.join()

    def test_released_on_exception(self):
        lock = LocalCommitLock(timeout=0.05)

        with pytest.raises(ValueError):
            with lock.hold():
                raise ValueError("fail inside")

        with lock.hold():
            pass


class TestRedisCommitLock:
    def test_set_nx_then_compare_and_delete(self):
        client = MagicMock()
        client.set.return_value = True
        client.eval.return_value = 1
        lock = RedisCommitLock(client=client, ttl=10)

        with lock.hold():
            pass

        kwargs = client.set.call_args.kwargs
        assert kwargs["name"] == COMMIT_LOCK_KEY
        assert kwargs["nx"] is True
        assert kwargs["ex"] == 10
        client.eval.assert_called_once_with(_RELEASE_LUA, 1, COMMIT_LOCK_KEY, kwargs["value"])

    def test_busy_does_not_release(self):
        client = MagicMock()
        client.set.return_value = None
        lock = RedisCommitLock(client=client)

        with pytest.raises(CommitLockBusy):
            with lock.hold():
                pass

        client.eval.assert_not_called()

    def test_retries_transient_redis_errors(self):
        client = MagicMock()
        client.set.side_effect = [RedisConnectionError("blip"), True]
        lock = RedisCommitLock(client=client)

        assert lock.acquire("token") is True
        assert client.set.call_count == 2


def test_build_commit_lock_picks_backend():
    assert isinstance(build_commit_lock(""), LocalCommitLock)
    assert isinstance(build_commit_lock("redis://localhost:6379/0"), RedisCommitLock)


def test_default_lock_is_built_once_across_threads(monkeypatch):
    built = []
    start = threading.Barrier(8)

    def slow_build():
        lock = LocalCommitLock()
        built.append(lock)
        threading.Event().wait(0.05)
        return lock

    monkeypatch.setattr(lock_service, "_default_lock", None)
    monkeypatch.setattr(lock_service, "build_commit_lock", slow_build)
    seen = []

    def worker():
        start.wait(2)
        seen.append(default_commit_lock())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(built) == 1
    assert len(seen) == 8
    assert all(lock is built[0] for lock in seen)

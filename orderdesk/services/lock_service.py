import threading
import uuid
from contextlib import contextmanager

import redis

from orderdesk.utils.retry import redis_retry
from orderdesk.utils.settings import REDIS_URL, COMMIT_LOCK_TTL_SECONDS
from orderdesk.utils.logging import get_logger

logger = get_logger(__name__)

#compare and delete in one step, only the holder's token may release
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""

COMMIT_LOCK_KEY = "orderdesk:commit:lock"


class CommitLockBusy(RuntimeError):
    pass


class LocalCommitLock:
    """
    In-process commit lock. Enough while the catalog and the order history
    live in one process.
    """

    def __init__(self, timeout: float = COMMIT_LOCK_TTL_SECONDS):
        self._lock = threading.Lock()
        self.timeout = timeout

    @contextmanager
    def hold(self):
        if not self._lock.acquire(timeout=self.timeout):
            raise CommitLockBusy("Another order is being committed")
        try:
            yield
        finally:
            self._lock.release()


class RedisCommitLock:
    """
    -lock on commit shared between processes
    -SET NX EX so a crashed holder never blocks forever
    -release through lua, atomic compare and delete
    """

    def __init__(self, url: str | None = None, client=None, ttl: int = COMMIT_LOCK_TTL_SECONDS):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.ttl = ttl

    @redis_retry()
    def acquire(self, token: str) -> bool:
        logger.info(f"Acquire lock {COMMIT_LOCK_KEY} ({token})")
        return bool(self.redis.set(
            name=COMMIT_LOCK_KEY,
            value=token,
            nx=True,
            ex=self.ttl,
        ))

    @redis_retry()
    def release(self, token: str) -> bool:
        logger.info(f"Release lock {COMMIT_LOCK_KEY} ({token})")
        res = self.redis.eval(_RELEASE_LUA, 1, COMMIT_LOCK_KEY, token)
        return bool(res)

    @contextmanager
    def hold(self):
        token = uuid.uuid4().hex
        if not self.acquire(token):
            raise CommitLockBusy("Another order is being committed")
        try:
            yield
        finally:
            self.release(token)


def build_commit_lock(url: str | None = None):
    url = url if url is not None else REDIS_URL
    if url:
        return RedisCommitLock(url=url)
    return LocalCommitLock()


_default_lock = None
_default_lock_guard = threading.Lock()


def default_commit_lock():
    """Process-wide lock shared by every OrderService built without an explicit one."""
    global _default_lock
    with _default_lock_guard:
        if _default_lock is None:
            _default_lock = build_commit_lock()
    return _default_lock

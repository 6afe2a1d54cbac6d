from sqlalchemy.exc import OperationalError

from app.core.cache import MemoryCacheBackend
from app.core.exceptions import CacheBackendError


class FailingCacheBackend(MemoryCacheBackend):
    """Memory backend that raises on the operations named in ``fail_on``."""

    def __init__(self, fail_on=(), fail_keys=None):
        super().__init__()
        self.fail_on = set(fail_on)
        self.fail_keys = fail_keys

    def _should_fail(self, operation, key):
        if operation not in self.fail_on:
            return False
        return self.fail_keys is None or key in self.fail_keys

    async def get(self, key):
        if self._should_fail("get", key):
            raise CacheBackendError("get", key, ConnectionError("cache down"))
        return await super().get(key)

    async def set(self, key, value, ttl):
        if self._should_fail("set", key):
            raise CacheBackendError("set", key, ConnectionError("cache down"))
        return await super().set(key, value, ttl)

    async def delete(self, key):
        if self._should_fail("delete", key):
            raise CacheBackendError("delete", key, ConnectionError("cache down"))
        return await super().delete(key)


class CacheErrorRecorder:
    def __init__(self):
        self.calls = []

    def __call__(self, operation, key, exc):
        self.calls.append((operation, key))

    @property
    def operations(self):
        return [operation for operation, _ in self.calls]


def store_failure(*args, **kwargs):
    raise OperationalError("SELECT 1", {}, Exception("connection refused"))

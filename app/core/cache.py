import asyncio
from abc import ABC, abstractmethod
from typing import Any, Optional, Dict, Union
import time
import logging

from app.core.config import Settings
from app.core.exceptions import CacheBackendError

logger = logging.getLogger(__name__)

CacheValue = Union[str, bytes]

class CacheBackend(ABC):
    """Key-value store holding serialized values with a fixed time-to-live.

    Expiry is the backend's job: ``get`` never returns an expired entry.
    Failures raise ``CacheBackendError``; a missing key is not a failure.
    """

    name = "base"

    @abstractmethod
    async def get(self, key: str) -> Optional[CacheValue]:
        pass

    @abstractmethod
    async def set(self, key: str, value: CacheValue, ttl: int) -> bool:
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        pass

    @abstractmethod
    async def clear(self) -> bool:
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        pass

    @abstractmethod
    async def ping(self) -> bool:
        pass

    @abstractmethod
    async def info(self) -> Dict[str, Any]:
        pass

    async def close(self) -> None:
        pass

class MemoryCacheBackend(CacheBackend):
    name = "memory"

    def __init__(self):
        self._cache: Dict[str, Dict] = {}
        self._lock = asyncio.Lock()
        self._hits = 0
        self._misses = 0

    async def get(self, key: str) -> Optional[CacheValue]:
        async with self._lock:
            await self._cleanup_expired()
            item = self._cache.get(key)
            if item and (item.get("expiry", 0) == 0 or time.time() < item["expiry"]):
                self._hits += 1
                return item["value"]
            elif key in self._cache:
                del self._cache[key]
            self._misses += 1
            return None

    async def set(self, key: str, value: CacheValue, ttl: int) -> bool:
        async with self._lock:
            expiry = time.time() + ttl if ttl > 0 else 0
            self._cache[key] = {
                "value": value,
                "expiry": expiry,
                "created_at": time.time()
            }
            return True

    async def delete(self, key: str) -> bool:
        async with self._lock:
            return self._cache.pop(key, None) is not None

    async def clear(self) -> bool:
        async with self._lock:
            self._cache.clear()
            return True

    async def exists(self, key: str) -> bool:
        return await self.get(key) is not None

    async def ping(self) -> bool:
        return True

    async def info(self) -> Dict[str, Any]:
        async with self._lock:
            await self._cleanup_expired()
            return {
                "memory_cache_size": len(self._cache),
                "cache_entries": sorted(self._cache.keys())[:10],
                "keyspace_hits": self._hits,
                "keyspace_misses": self._misses,
            }

    async def _cleanup_expired(self):
        current_time = time.time()
        expired_keys = [
            key for key, item in self._cache.items()
            if item.get("expiry", 0) > 0 and current_time >= item["expiry"]
        ]
        for key in expired_keys:
            del self._cache[key]

class RedisCacheBackend(CacheBackend):
    name = "redis"

    def __init__(self, redis_url: Optional[str] = None, client=None):
        import redis.asyncio as redis
        # Values that are not valid UTF-8 fail in the response decoder
        self._errors = (redis.RedisError, OSError, UnicodeDecodeError)
        self.redis = client if client is not None else redis.from_url(redis_url, decode_responses=True)

    async def get(self, key: str) -> Optional[CacheValue]:
        try:
            return await self.redis.get(key)
        except self._errors as e:
            raise CacheBackendError("get", key, e) from e

    async def set(self, key: str, value: CacheValue, ttl: int) -> bool:
        try:
            if ttl > 0:
                await self.redis.setex(key, ttl, value)
            else:
                await self.redis.set(key, value)
            return True
        except self._errors as e:
            raise CacheBackendError("set", key, e) from e

    async def delete(self, key: str) -> bool:
        try:
            result = await self.redis.delete(key)
            return result > 0
        except self._errors as e:
            raise CacheBackendError("delete", key, e) from e

    async def clear(self) -> bool:
        try:
            await self.redis.flushdb()
            return True
        except self._errors as e:
            raise CacheBackendError("clear", None, e) from e

    async def exists(self, key: str) -> bool:
        try:
            return await self.redis.exists(key) > 0
        except self._errors as e:
            raise CacheBackendError("exists", key, e) from e

    async def ping(self) -> bool:
        try:
            return bool(await self.redis.ping())
        except self._errors as e:
            raise CacheBackendError("ping", None, e) from e

    async def info(self) -> Dict[str, Any]:
        try:
            info = await self.redis.info("stats")
            server = await self.redis.info("server")
        except self._errors as e:
            raise CacheBackendError("info", None, e) from e
        hits = info.get("keyspace_hits", 0)
        misses = info.get("keyspace_misses", 0)
        return {
            "redis_version": server.get("redis_version"),
            "total_commands_processed": info.get("total_commands_processed"),
            "keyspace_hits": hits,
            "keyspace_misses": misses,
            "expired_keys": info.get("expired_keys"),
            "evicted_keys": info.get("evicted_keys"),
            "hit_ratio": round(hits / max(hits + misses, 1), 4)
        }

    async def close(self) -> None:
        await self.redis.aclose()

def create_cache_backend(settings: Settings) -> CacheBackend:
    if settings.CACHE_BACKEND == "redis" and settings.REDIS_URL:
        logger.info(f"Initializing Redis cache backend at {settings.REDIS_URL}")
        return RedisCacheBackend(settings.REDIS_URL)

    logger.info("Using in-memory cache backend")
    return MemoryCacheBackend()

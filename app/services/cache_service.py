"""Write-through / read-through cache over the bitcoin price table.

The relational store is the only authority. The cache holds copies that may
be missing or stale at any moment:

* reads check the cache first and fall back to the store, repopulating the
  cache on the way out;
* writes hit the store first, then refresh the item entry and drop the
  ranking entry;
* every cache call after a store call is best-effort. Failures go to
  ``on_cache_error`` and never change the result of the operation.
"""
from datetime import datetime, timezone
from typing import Callable, List, Optional, Dict, Any
import logging

from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.core.cache import CacheBackend
from app.core.cache_config import CACHE_KEYS, DEFAULT_CACHE_TTL, bitcoin_key, invalidation_keys
from app.core.exceptions import CacheBackendError, StoreError
from app.crud.bitcoin import bitcoin as crud_bitcoin
from app.schemas.bitcoin import BitcoinSchema, rankings_from_cache, rankings_to_cache

logger = logging.getLogger(__name__)

CacheErrorCallback = Callable[[str, str, Exception], None]

def log_cache_error(operation: str, key: str, exc: Exception) -> None:
    logger.warning(f"Cache {operation} failed for {key}: {exc}")

class CacheService:
    def __init__(
        self,
        session_factory: sessionmaker,
        cache: CacheBackend,
        ttl: int = DEFAULT_CACHE_TTL,
        on_cache_error: Optional[CacheErrorCallback] = None,
    ):
        self.session_factory = session_factory
        self.cache = cache
        self.ttl = ttl
        self.rankings_key = CACHE_KEYS["rankings"]
        self.on_cache_error = on_cache_error or log_cache_error

    async def _store(self, operation: str, func: Callable[[Session], Any]) -> Any:
        def run():
            with self.session_factory() as db:
                try:
                    return func(db)
                except SQLAlchemyError:
                    db.rollback()
                    raise

        try:
            return await run_in_threadpool(run)
        except SQLAlchemyError as e:
            logger.error(f"Store {operation} failed: {e}")
            raise StoreError(operation, e) from e

    async def _cache_get(self, key: str) -> Optional[str]:
        try:
            return await self.cache.get(key)
        except CacheBackendError as e:
            self.on_cache_error("get", key, e)
            return None

    async def _cache_set(self, key: str, value: str) -> bool:
        try:
            await self.cache.set(key, value, self.ttl)
            return True
        except CacheBackendError as e:
            self.on_cache_error("set", key, e)
            return False

    async def _cache_delete(self, key: str) -> None:
        try:
            await self.cache.delete(key)
        except CacheBackendError as e:
            self.on_cache_error("delete", key, e)

    async def prime_cache(self) -> int:
        """Load every record into its item entry. Returns how many were cached.

        The ranking entry is left alone. A failure on one row is logged and
        skipped; failing to query the table raises ``StoreError``.
        """
        logger.info("Starting cache priming...")

        rows = await self._store("prime", crud_bitcoin.get_multi_ordered)

        count = 0
        for row in rows:
            try:
                bitcoin = BitcoinSchema.model_validate(row)
            except ValidationError as e:
                logger.error(f"Error reading bitcoin row {getattr(row, 'symbol', '?')}: {e}")
                continue

            if await self._cache_set(bitcoin_key(bitcoin.symbol), bitcoin.to_cache()):
                count += 1

        logger.info(f"Cache priming completed: {count} bitcoins loaded into cache")
        return count

    async def get_bitcoin(self, symbol: str) -> Optional[BitcoinSchema]:
        key = bitcoin_key(symbol)

        cached = await self._cache_get(key)
        if cached is not None:
            try:
                bitcoin = BitcoinSchema.from_cache(cached)
                logger.info(f"Cache HIT for {symbol}")
                return bitcoin
            except ValidationError as e:
                self.on_cache_error("decode", key, e)

        logger.info(f"Cache MISS for {symbol}")

        row = await self._store("get", lambda db: crud_bitcoin.get(db, symbol))
        if row is None:
            return None

        bitcoin = BitcoinSchema.model_validate(row)
        await self._cache_set(key, bitcoin.to_cache())
        return bitcoin

    async def set_bitcoin(self, symbol: str, price: int) -> BitcoinSchema:
        row = await self._store(
            "upsert", lambda db: crud_bitcoin.upsert(db, symbol=symbol, price=price)
        )
        bitcoin = BitcoinSchema.model_validate(dict(row._mapping))

        await self._cache_set(bitcoin_key(symbol), bitcoin.to_cache())
        for key in invalidation_keys("bitcoin_write", symbol):
            await self._cache_delete(key)

        logger.info(f"Write-through completed for {symbol}")
        return bitcoin

    async def get_bitcoins_ranked(self) -> List[BitcoinSchema]:
        cached = await self._cache_get(self.rankings_key)
        if cached is not None:
            try:
                bitcoins = rankings_from_cache(cached)
                logger.info("Rankings cache HIT")
                return bitcoins
            except ValidationError as e:
                self.on_cache_error("decode", self.rankings_key, e)

        logger.info("Rankings cache MISS")

        rows = await self._store("rank", crud_bitcoin.get_ranked)
        bitcoins = [BitcoinSchema.model_validate(dict(row._mapping)) for row in rows]

        await self._cache_set(self.rankings_key, rankings_to_cache(bitcoins))
        return bitcoins

    async def delete_bitcoin(self, symbol: str) -> Optional[BitcoinSchema]:
        row = await self._store("delete", lambda db: crud_bitcoin.delete(db, symbol=symbol))
        if row is None:
            return None

        bitcoin = BitcoinSchema.model_validate(dict(row._mapping))
        for key in invalidation_keys("bitcoin_delete", symbol):
            await self._cache_delete(key)

        logger.info(f"Deleted {symbol} from DB and cache")
        return bitcoin

    async def get_cache_stats(self) -> Dict[str, Any]:
        stats = {
            "backend": self.cache.name,
            "ttl_seconds": self.ttl,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
        try:
            stats.update(await self.cache.info())
        except CacheBackendError as e:
            self.on_cache_error("info", "*", e)
            stats["error"] = str(e)
        return stats

    async def health_check(self) -> Dict[str, bool]:
        try:
            cache_ok = await self.cache.ping()
        except CacheBackendError as e:
            self.on_cache_error("ping", "*", e)
            cache_ok = False

        try:
            await self._store("ping", crud_bitcoin.ping)
            store_ok = True
        except StoreError:
            store_ok = False

        return {"cache": cache_ok, "store": store_ok}

import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("CACHE_BACKEND", "memory")

import pytest
from fastapi.testclient import TestClient
from app.core.cache import MemoryCacheBackend
from app.core.database import Base, create_session_factory
from app.crud.bitcoin import bitcoin as crud_bitcoin
from app.models import bitcoin as bitcoin_model  # noqa: F401
from app.services.cache_service import CacheService

from tests.helpers.doubles import CacheErrorRecorder


@pytest.fixture(scope="function")
def session_factory(tmp_path):
    factory = create_session_factory(f"sqlite:///{tmp_path / 'bitcoins.db'}")
    engine = factory.kw["bind"]
    Base.metadata.create_all(bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture(scope="function")
def memory_cache():
    return MemoryCacheBackend()


@pytest.fixture(scope="function")
def cache_errors():
    return CacheErrorRecorder()


@pytest.fixture(scope="function")
def cache_service(session_factory, memory_cache, cache_errors):
    return CacheService(
        session_factory=session_factory,
        cache=memory_cache,
        ttl=3600,
        on_cache_error=cache_errors,
    )


@pytest.fixture(scope="function")
def seed_bitcoins(session_factory):
    def _seed(prices):
        with session_factory() as db:
            for symbol, price in prices.items():
                crud_bitcoin.upsert(db, symbol=symbol, price=price)
    return _seed


@pytest.fixture(scope="function")
def client(cache_service):
    from importlib import reload
    import main
    reload(main)
    main.app.state.cache_service = cache_service
    with TestClient(main.app) as test_client:
        yield test_client

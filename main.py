from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.core.config import settings
from app.core.logging import configure_logging
from app.core.cache import create_cache_backend
from app.core.database import SessionLocal
from app.core.exceptions import StoreError
from app.endpoints import bitcoin, cache_admin, utility
from app.middleware.exceptions import (
    global_exception_handler,
    http_exception_handler,
    store_exception_handler,
    validation_exception_handler,
)
from app.middleware.logging import RequestLoggingMiddleware
from app.services.cache_service import CacheService
import logging

logger = logging.getLogger("app.main")

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Origin", "Content-Type", "Accept"],
    expose_headers=["Content-Length", "X-Request-ID"],
    max_age=12 * 60 * 60,
)

app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(RequestLoggingMiddleware)

app.add_exception_handler(Exception, global_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StoreError, store_exception_handler)

app.include_router(utility.router, tags=["Health"])
app.include_router(bitcoin.router, prefix="/api/bitcoins", tags=["Bitcoins"])
app.include_router(cache_admin.router, prefix="/api/cache", tags=["Cache"])

def build_cache_service() -> CacheService:
    return CacheService(
        session_factory=SessionLocal,
        cache=create_cache_backend(settings),
        ttl=settings.CACHE_TTL,
    )

@app.on_event("startup")
async def startup_event():
    configure_logging()

    if getattr(app.state, "cache_service", None) is None:
        app.state.cache_service = build_cache_service()

    if settings.PRIME_CACHE_ON_STARTUP:
        try:
            await app.state.cache_service.prime_cache()
        except StoreError as e:
            logger.warning(f"Warning: Cache priming failed: {e}")

@app.on_event("shutdown")
async def shutdown_event():
    cache_service = getattr(app.state, "cache_service", None)
    if cache_service is not None:
        await cache_service.cache.close()
        cache_service.session_factory.kw["bind"].dispose()
    logger.info("Server exited")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)

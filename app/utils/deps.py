from fastapi import HTTPException, Request, status
from app.services.cache_service import CacheService

def get_cache_service(request: Request) -> CacheService:
    """The one CacheService built at startup and shared by every request."""
    cache_service = getattr(request.app.state, "cache_service", None)
    if cache_service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service is starting up"
        )
    return cache_service

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from typing import Any, Dict

from app.schemas.response import APIResponse
from app.services.cache_service import CacheService
from app.utils.deps import get_cache_service

router = APIRouter()

@router.get("/stats", response_model=APIResponse[Dict[str, Any]])
async def get_cache_stats(
    cache_service: CacheService = Depends(get_cache_service)
):
    """Cache backend statistics (hits, misses, size)"""
    stats = await cache_service.get_cache_stats()
    return APIResponse(message="Cache statistics retrieved", data=stats)

@router.get("/health", response_model=APIResponse[Dict[str, bool]])
async def cache_health_check(
    cache_service: CacheService = Depends(get_cache_service)
):
    """Check that both the cache and the store answer"""
    health = await cache_service.health_check()
    is_healthy = all(health.values())
    response = APIResponse(
        message=f"Service is {'healthy' if is_healthy else 'unhealthy'}",
        data=health
    )
    if not is_healthy:
        return JSONResponse(status_code=503, content=response.model_dump())
    return response

from fastapi import APIRouter

router = APIRouter()

@router.get("/health")
async def health():
    """Liveness probe. Does not touch the store or the cache."""
    return {"status": "healthy"}

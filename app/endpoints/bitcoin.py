from fastapi import APIRouter, Depends, HTTPException, status
from typing import List

from app.schemas.response import APIResponse
from app.schemas.bitcoin import BitcoinSchema, BitcoinCreate, BitcoinUpdate, BitcoinDeleted
from app.services.cache_service import CacheService
from app.utils.deps import get_cache_service

router = APIRouter()

@router.get("", response_model=APIResponse[List[BitcoinSchema]], response_model_exclude_none=True)
async def list_bitcoins_ranked(
    cache_service: CacheService = Depends(get_cache_service)
):
    bitcoins = await cache_service.get_bitcoins_ranked()
    return APIResponse(message="Bitcoins retrieved successfully", data=bitcoins)

@router.get("/{symbol}", response_model=APIResponse[BitcoinSchema], response_model_exclude_none=True)
async def get_bitcoin(
    symbol: str,
    cache_service: CacheService = Depends(get_cache_service)
):
    bitcoin = await cache_service.get_bitcoin(symbol)
    if not bitcoin:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Bitcoin not found"
        )
    return APIResponse(message="Bitcoin retrieved successfully", data=bitcoin)

@router.post("", response_model=APIResponse[BitcoinSchema], status_code=status.HTTP_201_CREATED, response_model_exclude_none=True)
async def create_or_update_bitcoin(
    bitcoin_in: BitcoinCreate,
    cache_service: CacheService = Depends(get_cache_service)
):
    bitcoin = await cache_service.set_bitcoin(bitcoin_in.symbol, bitcoin_in.price)
    return APIResponse(message="Bitcoin saved successfully", data=bitcoin)

@router.put("/{symbol}", response_model=APIResponse[BitcoinSchema], response_model_exclude_none=True)
async def update_bitcoin(
    symbol: str,
    bitcoin_in: BitcoinUpdate,
    cache_service: CacheService = Depends(get_cache_service)
):
    bitcoin = await cache_service.set_bitcoin(symbol, bitcoin_in.price)
    return APIResponse(message="Bitcoin updated successfully", data=bitcoin)

@router.delete("/{symbol}", response_model=APIResponse[BitcoinDeleted], response_model_exclude_none=True)
async def delete_bitcoin(
    symbol: str,
    cache_service: CacheService = Depends(get_cache_service)
):
    bitcoin = await cache_service.delete_bitcoin(symbol)
    if not bitcoin:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Bitcoin not found"
        )
    return APIResponse(message="Bitcoin deleted successfully", data=BitcoinDeleted(bitcoin=bitcoin))

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

class BitcoinSchema(BaseModel):
    symbol: str
    price: int
    rank: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    def to_cache(self) -> str:
        """Serialize for a single-item cache entry; ``rank`` is left out when unset."""
        return self.model_dump_json(exclude_none=True)

    @classmethod
    def from_cache(cls, raw) -> "BitcoinSchema":
        return cls.model_validate_json(raw)

BitcoinList = TypeAdapter(List[BitcoinSchema])

def rankings_to_cache(bitcoins: List[BitcoinSchema]) -> str:
    return BitcoinList.dump_json(bitcoins, exclude_none=True).decode("utf-8")

def rankings_from_cache(raw) -> List[BitcoinSchema]:
    return BitcoinList.validate_json(raw)

class BitcoinCreate(BaseModel):
    symbol: str = Field(..., min_length=1, description="Unique ticker symbol, case-sensitive")
    price: int = Field(..., description="Price in whole units")

class BitcoinUpdate(BaseModel):
    price: int = Field(..., description="Price in whole units")

class BitcoinDeleted(BaseModel):
    bitcoin: BitcoinSchema

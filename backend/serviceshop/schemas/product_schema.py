# backend/serviceshop/schemas/product_schema.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class PriceHistoryEntry(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
    price: float
    offer_percentage: float = 0
    changed_at: datetime


class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)
    id: int
    code: Optional[str] = None
    title: str
    category: str
    description: str = ""
    price: float
    offer_percentage: float = 0
    stock: int = 0
    hide_product: bool = False
    images: List[str] = []
    offer_expiry: Optional[datetime] = None
    price_history: List[PriceHistoryEntry] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


def product_to_dict(p) -> dict:
    return ProductOut.model_validate(p).model_dump(mode="json", by_alias=True)

from decimal import Decimal
from typing import Optional

from pydantic import Field, field_serializer, field_validator

from inventory_api.schemas.common import MAX_INT, ApiModel, UtcDateTime

SKU_PATTERN = r"^[A-Za-z0-9\-_]+$"


class ProductOut(ApiModel):
    id: int
    name: str
    description: Optional[str] = None
    sku: str
    barcode: Optional[str] = None
    price: Decimal
    cost: Decimal
    quantity: int
    minimum_stock_level: int
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    is_low_stock: bool
    created_at: UtcDateTime
    updated_at: UtcDateTime

    @field_serializer("price", "cost")
    def serialize_money(self, v: Decimal) -> float:
        return float(v)


class ProductBase(ApiModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    sku: str = Field(..., min_length=1, max_length=100, pattern=SKU_PATTERN)
    barcode: Optional[str] = Field(None, max_length=100)
    price: Decimal = Field(..., gt=0, max_digits=18, decimal_places=2)
    cost: Decimal = Field(Decimal("0"), ge=0, max_digits=18, decimal_places=2)
    minimum_stock_level: int = Field(0, ge=0, le=MAX_INT)
    category_id: Optional[int] = Field(None, le=MAX_INT)

    @field_validator("barcode", "description", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ProductCreate(ProductBase):
    initial_quantity: int = Field(0, ge=0, le=MAX_INT)


class ProductUpdate(ProductBase):
    id: Optional[int] = Field(None, le=MAX_INT)
    # direct override; recorded as an Adjustment movement when it changes
    quantity: Optional[int] = Field(None, ge=0, le=MAX_INT)

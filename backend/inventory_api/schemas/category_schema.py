from typing import Optional

from pydantic import Field, field_validator

from inventory_api.schemas.common import MAX_INT, ApiModel, UtcDateTime


class CategoryOut(ApiModel):
    id: int
    name: str
    description: Optional[str] = None
    product_count: int = 0
    created_at: UtcDateTime


class CategoryIn(ApiModel):
    id: Optional[int] = Field(None, le=MAX_INT)
    name: str = Field(..., max_length=100)
    description: Optional[str] = Field(None, max_length=500)

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Category name is required")
        return v

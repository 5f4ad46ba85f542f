from typing import Optional

from pydantic import Field

from inventory_api.models.enums import StockMovementType
from inventory_api.schemas.common import MAX_INT, ApiModel, UtcDateTime


class StockMovementRequest(ApiModel):
    product_id: int = Field(..., gt=0, le=MAX_INT)
    # sign and range are checked by the ledger so they surface as 400, not 422
    quantity: int
    reason: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = Field(None, max_length=1000)
    created_by: Optional[str] = Field(None, max_length=100)


class StockMovementOut(ApiModel):
    id: int
    product_id: int
    product_name: Optional[str] = None
    product_sku: Optional[str] = None
    movement_type: StockMovementType
    movement_type_name: str
    quantity: int
    reason: Optional[str] = None
    notes: Optional[str] = None
    created_by: Optional[str] = None
    created_at: UtcDateTime

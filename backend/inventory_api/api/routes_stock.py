from datetime import datetime
from typing import List, Union

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from inventory_api.api.deps import DbId, page_params, require_role
from inventory_api.db import get_db
from inventory_api.models.enums import UserRole
from inventory_api.models.user import User
from inventory_api.schemas.common import PagedResult, PageParams, to_page
from inventory_api.schemas.stock_schema import StockMovementOut, StockMovementRequest
from inventory_api.services.stock_service import StockService

router = APIRouter(prefix="/api/stock-movements", tags=["stock"])

any_user = require_role(UserRole.CASHIER)


@router.get(
    "",
    response_model=Union[PagedResult[StockMovementOut], List[StockMovementOut]],
    dependencies=[Depends(any_user)],
    summary="List movements, newest first",
)
def list_movements(paging: PageParams = Depends(page_params), db: Session = Depends(get_db)):
    svc = StockService(db)
    if paging.requested:
        items, total = svc.get_paged_movements(paging.page_number, paging.page_size)
        return to_page(StockMovementOut, items, total, paging.page_number, paging.page_size)
    return svc.get_all_movements()


@router.get(
    "/product/{product_id}",
    response_model=List[StockMovementOut],
    dependencies=[Depends(any_user)],
    summary="Movements for one product",
)
def by_product(product_id: DbId, db: Session = Depends(get_db)):
    return StockService(db).get_movements_by_product(product_id)


@router.get(
    "/date-range",
    response_model=List[StockMovementOut],
    dependencies=[Depends(any_user)],
    summary="Movements created within [startDate, endDate] (UTC unless an offset is given)",
)
def by_date_range(
    start_date: datetime = Query(..., alias="startDate"),
    end_date: datetime = Query(..., alias="endDate"),
    db: Session = Depends(get_db),
):
    return StockService(db).get_movements_by_date_range(start_date, end_date)


@router.post("/add", response_model=StockMovementOut, summary="Receive stock")
def add_stock(payload: StockMovementRequest, db: Session = Depends(get_db), user: User = Depends(any_user)):
    """
    payload: { "productId": 1, "quantity": 5, "reason": "Delivery", "notes": null }
    createdBy defaults to the caller's username
    """
    return StockService(db).add_stock(
        payload.product_id,
        payload.quantity,
        reason=payload.reason,
        notes=payload.notes,
        created_by=payload.created_by or user.username,
    )


@router.post("/remove", response_model=StockMovementOut, summary="Take stock out")
def remove_stock(payload: StockMovementRequest, db: Session = Depends(get_db), user: User = Depends(any_user)):
    return StockService(db).remove_stock(
        payload.product_id,
        payload.quantity,
        reason=payload.reason,
        notes=payload.notes,
        created_by=payload.created_by or user.username,
    )


@router.post("/adjust", response_model=StockMovementOut, summary="Correct stock to an absolute count")
def adjust_stock(payload: StockMovementRequest, db: Session = Depends(get_db), user: User = Depends(any_user)):
    """
    payload.quantity is the counted quantity, not a delta
    """
    return StockService(db).adjust_stock(
        payload.product_id,
        payload.quantity,
        reason=payload.reason,
        notes=payload.notes,
        created_by=payload.created_by or user.username,
    )

from datetime import date
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from inventory_api.api.deps import page_params, require_role
from inventory_api.db import get_db
from inventory_api.models.enums import UserRole
from inventory_api.schemas.common import PagedResult, PageParams, to_page
from inventory_api.schemas.product_schema import ProductOut
from inventory_api.schemas.stock_schema import StockMovementOut
from inventory_api.services.report_service import ReportService

router = APIRouter(
    prefix="/api/reports",
    tags=["reports"],
    dependencies=[Depends(require_role(UserRole.MODERATOR))],
)


@router.get("/stock", response_model=Union[PagedResult[ProductOut], List[ProductOut]], summary="Current stock")
def stock_report(paging: PageParams = Depends(page_params), db: Session = Depends(get_db)):
    svc = ReportService(db)
    if paging.requested:
        items, total = svc.stock_report_page(paging.page_number, paging.page_size)
        return to_page(ProductOut, items, total, paging.page_number, paging.page_size)
    return svc.stock_report()


@router.get(
    "/low-stock",
    response_model=Union[PagedResult[ProductOut], List[ProductOut]],
    summary="Low stock alerts",
)
def low_stock_report(paging: PageParams = Depends(page_params), db: Session = Depends(get_db)):
    svc = ReportService(db)
    if paging.requested:
        items, total = svc.low_stock_report_page(paging.page_number, paging.page_size)
        return to_page(ProductOut, items, total, paging.page_number, paging.page_size)
    return svc.low_stock_report()


@router.get("/movements", response_model=List[StockMovementOut], summary="Movement history")
def movement_report(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    timezone: Optional[str] = Query(None, description="IANA zone the dates are read in"),
    db: Session = Depends(get_db),
):
    return ReportService(db).movement_report(start_date, end_date, timezone)

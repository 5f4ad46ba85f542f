from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from inventory_api.config import settings
from inventory_api.models.product import Product
from inventory_api.models.stock_movement import StockMovement
from inventory_api.services.exceptions import InvalidArgumentError
from inventory_api.services.product_service import ProductService
from inventory_api.services.stock_service import StockService
from inventory_api.utils.time_utils import get_zone, local_day_range_utc


class ReportService:
    def __init__(self, db: Session):
        self.db = db
        self.products = ProductService(db)
        self.stock = StockService(db)

    def stock_report(self) -> List[Product]:
        return self.products.get_all()

    def stock_report_page(self, page_number: int, page_size: int) -> Tuple[List[Product], int]:
        return self.products.get_paged(page_number, page_size)

    def low_stock_report(self) -> List[Product]:
        return self.products.get_low_stock()

    def low_stock_report_page(self, page_number: int, page_size: int) -> Tuple[List[Product], int]:
        return self.products.get_low_stock_paged(page_number, page_size)

    def movement_report(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        timezone: Optional[str] = None,
    ) -> List[StockMovement]:
        """
        Movements between two local calendar dates, both days included.

        The dates are read in ``timezone`` (falling back to REPORT_TIMEZONE)
        and widened to a UTC range before querying. Without both dates every
        movement is returned.
        """
        if start_date is None or end_date is None:
            return self.stock.get_all_movements()
        try:
            zone = get_zone(timezone or settings.REPORT_TIMEZONE)
        except ValueError as e:
            raise InvalidArgumentError(str(e))
        start, end = local_day_range_utc(start_date, end_date, zone)
        return self.stock.get_movements_by_date_range(start, end)

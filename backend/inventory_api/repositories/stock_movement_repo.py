from datetime import datetime
from typing import List, Tuple

from sqlalchemy.orm import Session, joinedload

from inventory_api.models.stock_movement import StockMovement
from inventory_api.repositories.paging import paginate


class StockMovementRepository:
    """Append-only access to the ledger: no update or delete."""

    def __init__(self, db: Session):
        self.db = db

    def _newest_first(self):
        return (
            self.db.query(StockMovement)
            .options(joinedload(StockMovement.product))
            .order_by(StockMovement.created_at.desc(), StockMovement.id.desc())
        )

    def append(self, movement: StockMovement) -> StockMovement:
        self.db.add(movement)
        self.db.flush()
        return movement

    def list_all(self) -> List[StockMovement]:
        return self._newest_first().all()

    def list_by_product(self, product_id: int) -> List[StockMovement]:
        return self._newest_first().filter(StockMovement.product_id == product_id).all()

    def list_between(self, start: datetime, end: datetime) -> List[StockMovement]:
        return (
            self._newest_first()
            .filter(StockMovement.created_at >= start, StockMovement.created_at <= end)
            .all()
        )

    def page(self, page: int, size: int) -> Tuple[List[StockMovement], int]:
        return paginate(self._newest_first(), page, size)

    def count_by_product(self, product_id: int) -> int:
        return self.db.query(StockMovement).filter(StockMovement.product_id == product_id).count()

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from inventory_api.models.enums import StockMovementType
from inventory_api.models.product import Product
from inventory_api.models.stock_movement import StockMovement
from inventory_api.repositories.product_repo import ProductRepository
from inventory_api.repositories.stock_movement_repo import StockMovementRepository
from inventory_api.schemas.common import MAX_INT
from inventory_api.services.exceptions import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
)
from inventory_api.utils.locks import product_lock
from inventory_api.utils.time_utils import to_utc_naive, utcnow
from inventory_api.utils.transactions import atomic

log = logging.getLogger(__name__)


def _check_range(quantity: int):
    if quantity > MAX_INT:
        raise InvalidArgumentError(f"Quantity cannot exceed {MAX_INT}.")


class StockService:
    """
    The stock ledger.

    Every write follows the same shape: take the product's lock, load the
    product row, validate, set the new quantity, append one movement, commit.
    A failure at any step rolls the whole unit back.
    """

    def __init__(self, db: Session):
        self.db = db
        self.products = ProductRepository(db)
        self.movements = StockMovementRepository(db)

    def _load(self, product_id: int) -> Product:
        product = self.products.get(product_id, for_update=True)
        if not product:
            log.warning("Product not found for stock change. ProductId: %s", product_id)
            raise NotFoundError(f"Product with ID {product_id} not found.")
        return product

    def _record(
        self,
        product: Product,
        movement_type: StockMovementType,
        new_quantity: int,
        reason: Optional[str],
        notes: Optional[str],
        created_by: Optional[str],
    ) -> StockMovement:
        now = utcnow()
        delta = new_quantity - product.quantity
        product.quantity = new_quantity
        product.updated_at = now
        return self.movements.append(
            StockMovement(
                product_id=product.id,
                movement_type=movement_type,
                quantity=delta,
                reason=reason,
                notes=notes,
                created_by=created_by,
                created_at=now,
            )
        )

    def add_stock(
        self,
        product_id: int,
        quantity: int,
        reason: Optional[str] = None,
        notes: Optional[str] = None,
        created_by: Optional[str] = None,
    ) -> StockMovement:
        log.info("Adding stock. ProductId: %s, Quantity: %s", product_id, quantity)
        if quantity <= 0:
            log.warning("Invalid quantity for stock addition. ProductId: %s, Quantity: %s", product_id, quantity)
            raise InvalidArgumentError("Quantity must be greater than zero.")
        _check_range(quantity)

        with product_lock(product_id):
            with atomic(self.db):
                product = self._load(product_id)
                old_quantity = product.quantity
                if old_quantity + quantity > MAX_INT:
                    log.warning(
                        "Stock addition would overflow. ProductId: %s, Current: %s, Quantity: %s",
                        product_id, old_quantity, quantity,
                    )
                    raise InvalidArgumentError(
                        f"Resulting quantity cannot exceed {MAX_INT}. Current: {old_quantity}, Requested: {quantity}"
                    )
                movement = self._record(
                    product, StockMovementType.ADD, old_quantity + quantity, reason, notes, created_by
                )
        log.info(
            "Stock added. ProductId: %s, Quantity: %s, OldQuantity: %s, NewQuantity: %s",
            product_id, quantity, old_quantity, old_quantity + quantity,
        )
        return movement

    def remove_stock(
        self,
        product_id: int,
        quantity: int,
        reason: Optional[str] = None,
        notes: Optional[str] = None,
        created_by: Optional[str] = None,
    ) -> StockMovement:
        log.info("Removing stock. ProductId: %s, Quantity: %s", product_id, quantity)
        if quantity <= 0:
            log.warning("Invalid quantity for stock removal. ProductId: %s, Quantity: %s", product_id, quantity)
            raise InvalidArgumentError("Quantity must be greater than zero.")
        _check_range(quantity)

        with product_lock(product_id):
            with atomic(self.db):
                product = self._load(product_id)
                old_quantity = product.quantity
                if old_quantity < quantity:
                    log.warning(
                        "Insufficient stock for removal. ProductId: %s, Available: %s, Requested: %s",
                        product_id, old_quantity, quantity,
                    )
                    raise ConflictError(
                        f"Insufficient stock. Available: {old_quantity}, Requested: {quantity}"
                    )
                movement = self._record(
                    product, StockMovementType.REMOVE, old_quantity - quantity, reason, notes, created_by
                )
        log.info(
            "Stock removed. ProductId: %s, Quantity: %s, OldQuantity: %s, NewQuantity: %s",
            product_id, quantity, old_quantity, old_quantity - quantity,
        )
        return movement

    def adjust_stock(
        self,
        product_id: int,
        quantity: int,
        reason: Optional[str] = None,
        notes: Optional[str] = None,
        created_by: Optional[str] = None,
    ) -> StockMovement:
        """Set the product's quantity to ``quantity``; the movement carries the difference."""
        if quantity < 0:
            raise InvalidArgumentError("Quantity cannot be negative for adjustment. Use absolute value.")
        _check_range(quantity)

        with product_lock(product_id):
            with atomic(self.db):
                product = self._load(product_id)
                old_quantity = product.quantity
                movement = self._record(
                    product, StockMovementType.ADJUSTMENT, quantity, reason, notes, created_by
                )
        log.info(
            "Stock adjusted. ProductId: %s, OldQuantity: %s, NewQuantity: %s, Delta: %s",
            product_id, old_quantity, quantity, quantity - old_quantity,
        )
        return movement

    def record_override(self, product: Product, new_quantity: int, created_by: Optional[str] = None):
        """
        Ledger entry for a quantity set directly through a product update.

        Runs inside the caller's unit of work and lock; records nothing when
        the quantity does not change.
        """
        if new_quantity == product.quantity:
            return None
        return self._record(
            product, StockMovementType.ADJUSTMENT, new_quantity, "Product update", None, created_by
        )

    # queries

    def get_movements_by_product(self, product_id: int) -> List[StockMovement]:
        return self.movements.list_by_product(product_id)

    def get_movements_by_date_range(self, start: datetime, end: datetime) -> List[StockMovement]:
        start, end = to_utc_naive(start), to_utc_naive(end)
        if start > end:
            raise InvalidArgumentError("Start date must not be after end date.")
        return self.movements.list_between(start, end)

    def get_all_movements(self) -> List[StockMovement]:
        return self.movements.list_all()

    def get_paged_movements(self, page_number: int, page_size: int) -> Tuple[List[StockMovement], int]:
        return self.movements.page(page_number, page_size)

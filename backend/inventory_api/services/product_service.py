import logging
from contextlib import nullcontext
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from inventory_api.models.product import Product
from inventory_api.repositories.category_repo import CategoryRepository
from inventory_api.repositories.product_repo import ProductRepository
from inventory_api.schemas.product_schema import ProductCreate, ProductUpdate
from inventory_api.services.exceptions import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
)
from inventory_api.services.stock_service import StockService
from inventory_api.utils.locks import discard_product_lock, product_lock
from inventory_api.utils.time_utils import utcnow
from inventory_api.utils.transactions import atomic

log = logging.getLogger(__name__)


class ProductService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ProductRepository(db)
        self.categories = CategoryRepository(db)

    def get_by_id(self, product_id: int) -> Optional[Product]:
        return self.repo.get(product_id)

    def get_by_sku(self, sku: str) -> Optional[Product]:
        return self.repo.get_by_sku(sku)

    def get_by_barcode(self, barcode: str) -> Optional[Product]:
        return self.repo.get_by_barcode(barcode)

    def get_all(self) -> List[Product]:
        return self.repo.list_all()

    def get_paged(self, page_number: int, page_size: int) -> Tuple[List[Product], int]:
        return self.repo.page(page_number, page_size)

    def get_by_category(self, category_id: int) -> List[Product]:
        return self.repo.list_by_category(category_id)

    def get_low_stock(self) -> List[Product]:
        return self.repo.list_low_stock()

    def get_low_stock_paged(self, page_number: int, page_size: int) -> Tuple[List[Product], int]:
        return self.repo.page_low_stock(page_number, page_size)

    def search(self, term: str) -> List[Product]:
        if not term or not term.strip():
            raise InvalidArgumentError("Search term is required")
        return self.repo.search(term.strip())

    def _check_unique(self, sku: str, barcode: Optional[str], exclude_id: Optional[int] = None):
        if self.repo.sku_exists(sku, exclude_id):
            log.warning("Product SKU already in use: %s", sku)
            raise ConflictError(f"Product with SKU '{sku}' already exists.")
        if barcode and self.repo.barcode_exists(barcode, exclude_id):
            log.warning("Product barcode already in use: %s", barcode)
            raise ConflictError(f"Product with barcode '{barcode}' already exists.")

    def _check_category(self, category_id: Optional[int]):
        if category_id is not None and not self.categories.get(category_id):
            raise NotFoundError(f"Category with ID {category_id} not found.")

    def create(self, data: ProductCreate) -> Product:
        log.info("Creating product with SKU: %s", data.sku)
        with atomic(self.db):
            self._check_unique(data.sku, data.barcode)
            self._check_category(data.category_id)
            now = utcnow()
            product = self.repo.add(
                Product(
                    name=data.name,
                    description=data.description,
                    sku=data.sku,
                    barcode=data.barcode,
                    price=data.price,
                    cost=data.cost,
                    quantity=data.initial_quantity,
                    minimum_stock_level=data.minimum_stock_level,
                    category_id=data.category_id,
                    created_at=now,
                    updated_at=now,
                )
            )
        log.info("Product created. ID: %s, SKU: %s", product.id, product.sku)
        return product

    def update(self, product_id: int, data: ProductUpdate, updated_by: Optional[str] = None) -> Product:
        """
        Replace a product's catalog fields.

        A supplied ``quantity`` is applied directly but still lands in the
        ledger as an Adjustment, so it takes the same per-product lock as the
        stock endpoints.
        """
        log.info("Updating product ID: %s", product_id)
        lock = product_lock(product_id) if data.quantity is not None else nullcontext()
        with lock:
            with atomic(self.db):
                product = self.repo.get(product_id, for_update=data.quantity is not None)
                if not product:
                    log.warning("Product not found for update. ID: %s", product_id)
                    raise NotFoundError(f"Product with ID {product_id} not found.")
                self._check_unique(data.sku, data.barcode, exclude_id=product_id)
                self._check_category(data.category_id)

                product.name = data.name
                product.description = data.description
                product.sku = data.sku
                product.barcode = data.barcode
                product.price = data.price
                product.cost = data.cost
                product.minimum_stock_level = data.minimum_stock_level
                product.category_id = data.category_id
                if data.quantity is not None:
                    StockService(self.db).record_override(product, data.quantity, updated_by)
                product.updated_at = utcnow()
        return product

    def delete(self, product_id: int):
        log.info("Deleting product ID: %s", product_id)
        with atomic(self.db):
            product = self.repo.get(product_id)
            if not product:
                log.warning("Product not found for deletion. ID: %s", product_id)
                raise NotFoundError(f"Product with ID {product_id} not found.")
            self.repo.delete(product)
        discard_product_lock(product_id)
        log.info("Product deleted. ID: %s", product_id)

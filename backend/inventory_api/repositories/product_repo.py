from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session

from inventory_api.models.product import Product
from inventory_api.repositories.paging import paginate


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, product_id: int, for_update: bool = False) -> Optional[Product]:
        qry = self.db.query(Product).filter(Product.id == product_id)
        if for_update:
            # FOR UPDATE is a no-op on SQLite; the ledger also holds a per-product file lock
            qry = qry.with_for_update().populate_existing()
        return qry.first()

    def get_by_sku(self, sku: str) -> Optional[Product]:
        return self.db.query(Product).filter(Product.sku == sku).first()

    def get_by_barcode(self, barcode: str) -> Optional[Product]:
        return self.db.query(Product).filter(Product.barcode == barcode).first()

    def list_all(self) -> List[Product]:
        return self.db.query(Product).order_by(Product.name, Product.id).all()

    def page(self, page: int, size: int) -> Tuple[List[Product], int]:
        return paginate(self.db.query(Product).order_by(Product.name, Product.id), page, size)

    def list_by_category(self, category_id: int) -> List[Product]:
        return (
            self.db.query(Product)
            .filter(Product.category_id == category_id)
            .order_by(Product.name, Product.id)
            .all()
        )

    def _low_stock(self):
        return (
            self.db.query(Product)
            .filter(Product.quantity <= Product.minimum_stock_level)
            .order_by(Product.name, Product.id)
        )

    def list_low_stock(self) -> List[Product]:
        return self._low_stock().all()

    def page_low_stock(self, page: int, size: int) -> Tuple[List[Product], int]:
        return paginate(self._low_stock(), page, size)

    def search(self, term: str) -> List[Product]:
        like = _like_pattern(term)
        return (
            self.db.query(Product)
            .filter(
                or_(
                    Product.name.ilike(like, escape="\\"),
                    Product.sku.ilike(like, escape="\\"),
                    Product.barcode.ilike(like, escape="\\"),
                    Product.description.ilike(like, escape="\\"),
                )
            )
            .order_by(Product.name, Product.id)
            .all()
        )

    def sku_exists(self, sku: str, exclude_id: Optional[int] = None) -> bool:
        qry = self.db.query(Product.id).filter(Product.sku == sku)
        if exclude_id is not None:
            qry = qry.filter(Product.id != exclude_id)
        return qry.first() is not None

    def barcode_exists(self, barcode: str, exclude_id: Optional[int] = None) -> bool:
        qry = self.db.query(Product.id).filter(Product.barcode == barcode)
        if exclude_id is not None:
            qry = qry.filter(Product.id != exclude_id)
        return qry.first() is not None

    def count_by_category(self, category_id: int) -> int:
        return self.db.query(Product).filter(Product.category_id == category_id).count()

    def add(self, product: Product) -> Product:
        self.db.add(product)
        self.db.flush()
        return product

    def delete(self, product: Product):
        self.db.delete(product)
        self.db.flush()

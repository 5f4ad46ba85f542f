from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from inventory_api.db import Base
from inventory_api.utils.time_utils import utcnow


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    sku = Column(String(100), unique=True, index=True, nullable=False)
    # NULLs never collide in a unique index, so barcode stays optional
    barcode = Column(String(100), unique=True, index=True, nullable=True)
    price = Column(Numeric(18, 2), nullable=False, default=0)
    cost = Column(Numeric(18, 2), nullable=False, default=0)
    quantity = Column(Integer, nullable=False, default=0)
    minimum_stock_level = Column(Integer, nullable=False, default=0)
    category_id = Column(
        Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True
    )
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    category = relationship("Category", back_populates="products")
    movements = relationship(
        "StockMovement",
        back_populates="product",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.minimum_stock_level

    @property
    def category_name(self):
        return self.category.name if self.category else None

    def __repr__(self):
        return f"<Product sku={self.sku} name={self.name} qty={self.quantity}>"

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String, event
from sqlalchemy.orm import relationship

from inventory_api.db import Base
from inventory_api.models.enums import StockMovementType
from inventory_api.utils.time_utils import utcnow


class StockMovement(Base):
    """One ledger entry. ``quantity`` is the signed change applied to the product."""

    __tablename__ = "stock_movements"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(
        Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True
    )
    movement_type = Column(
        Enum(StockMovementType, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    quantity = Column(Integer, nullable=False)
    reason = Column(String(500), nullable=True)
    notes = Column(String(1000), nullable=True)
    created_by = Column(String(100), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)

    product = relationship("Product", back_populates="movements")

    @property
    def product_name(self):
        return self.product.name if self.product else None

    @property
    def product_sku(self):
        return self.product.sku if self.product else None

    @property
    def movement_type_name(self) -> str:
        return self.movement_type.value

    def __repr__(self):
        return f"<StockMovement id={self.id} product={self.product_id} {self.movement_type} {self.quantity:+d}>"


@event.listens_for(StockMovement, "before_update")
def _refuse_update(mapper, connection, target):
    raise ValueError(f"Stock movement {target.id} is immutable")

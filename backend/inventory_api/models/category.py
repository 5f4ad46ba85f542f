from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from inventory_api.db import Base
from inventory_api.utils.time_utils import utcnow


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, index=True, nullable=False)
    description = Column(String(500), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    # no delete cascade: a category cannot be removed while products point at it
    products = relationship("Product", back_populates="category", passive_deletes=True)

    @property
    def product_count(self) -> int:
        return len(self.products)

    def __repr__(self):
        return f"<Category id={self.id} name={self.name}>"

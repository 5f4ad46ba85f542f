from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from inventory_api.models.category import Category
from inventory_api.repositories.paging import paginate


class CategoryRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, category_id: int) -> Optional[Category]:
        return self.db.query(Category).filter(Category.id == category_id).first()

    def list_all(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.name).all()

    def page(self, page: int, size: int) -> Tuple[List[Category], int]:
        return paginate(self.db.query(Category).order_by(Category.name), page, size)

    def name_exists(self, name: str, exclude_id: Optional[int] = None) -> bool:
        qry = self.db.query(Category.id).filter(Category.name == name)
        if exclude_id is not None:
            qry = qry.filter(Category.id != exclude_id)
        return qry.first() is not None

    def add(self, category: Category) -> Category:
        self.db.add(category)
        self.db.flush()
        return category

    def delete(self, category: Category):
        self.db.delete(category)
        self.db.flush()

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from inventory_api.models.category import Category
from inventory_api.repositories.category_repo import CategoryRepository
from inventory_api.repositories.product_repo import ProductRepository
from inventory_api.services.exceptions import ConflictError, NotFoundError
from inventory_api.utils.time_utils import utcnow
from inventory_api.utils.transactions import atomic

log = logging.getLogger(__name__)


class CategoryService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = CategoryRepository(db)
        self.products = ProductRepository(db)

    def get_by_id(self, category_id: int) -> Optional[Category]:
        return self.repo.get(category_id)

    def get_all(self) -> List[Category]:
        return self.repo.list_all()

    def get_paged(self, page_number: int, page_size: int) -> Tuple[List[Category], int]:
        return self.repo.page(page_number, page_size)

    def create(self, name: str, description: Optional[str] = None) -> Category:
        log.info("Creating category: %s", name)
        with atomic(self.db):
            if self.repo.name_exists(name):
                log.warning("Category name already in use: %s", name)
                raise ConflictError(f"Category '{name}' already exists.")
            category = self.repo.add(Category(name=name, description=description, created_at=utcnow()))
        log.info("Category created. ID: %s, Name: %s", category.id, category.name)
        return category

    def update(self, category_id: int, name: str, description: Optional[str] = None) -> Category:
        with atomic(self.db):
            category = self.repo.get(category_id)
            if not category:
                raise NotFoundError(f"Category with ID {category_id} not found.")
            if self.repo.name_exists(name, exclude_id=category_id):
                raise ConflictError(f"Category '{name}' already exists.")
            category.name = name
            category.description = description
        return category

    def delete(self, category_id: int):
        log.info("Deleting category ID: %s", category_id)
        with atomic(self.db):
            category = self.repo.get(category_id)
            if not category:
                log.warning("Category not found for deletion. ID: %s", category_id)
                raise NotFoundError(f"Category with ID {category_id} not found.")
            count = self.products.count_by_category(category_id)
            if count:
                log.warning(
                    "Cannot delete category %s (ID: %s); %s products reference it",
                    category.name, category_id, count,
                )
                raise ConflictError(
                    f"Cannot delete category '{category.name}' because it has associated products."
                )
            self.repo.delete(category)
        log.info("Category deleted. ID: %s", category_id)

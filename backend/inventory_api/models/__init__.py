from inventory_api.models.category import Category
from inventory_api.models.enums import StockMovementType, UserRole
from inventory_api.models.product import Product
from inventory_api.models.stock_movement import StockMovement
from inventory_api.models.user import User

__all__ = [
    "Category",
    "Product",
    "StockMovement",
    "StockMovementType",
    "User",
    "UserRole",
]

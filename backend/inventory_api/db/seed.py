"""
Demo data: one user per role, a handful of categories and a small catalogue.

Idempotent: rows are matched on username, category name and SKU, and only
missing ones are inserted. Every seeded product gets an "Initial stock" Add
movement so the ledger sums to the seeded quantity.
"""

import logging
from decimal import Decimal
from typing import Dict, Iterable

from sqlalchemy.orm import Session

from inventory_api.models.category import Category
from inventory_api.models.enums import StockMovementType, UserRole
from inventory_api.models.product import Product
from inventory_api.models.stock_movement import StockMovement
from inventory_api.models.user import User
from inventory_api.repositories.category_repo import CategoryRepository
from inventory_api.repositories.product_repo import ProductRepository
from inventory_api.repositories.user_repo import UserRepository
from inventory_api.services.auth_service import hash_password
from inventory_api.utils.time_utils import utcnow
from inventory_api.utils.transactions import atomic

log = logging.getLogger(__name__)

SEED_USERS = [
    {"username": "admin", "email": "admin@inventory.com", "password": "admin123", "role": UserRole.SUPER_ADMIN},
    {"username": "moderator", "email": "moderator@inventory.com", "password": "moderator123", "role": UserRole.MODERATOR},
    {"username": "cashier", "email": "cashier@inventory.com", "password": "cashier123", "role": UserRole.CASHIER},
]

SEED_CATEGORIES = [
    ("Electronics", "Electronic devices and components"),
    ("Clothing", "Apparel and fashion items"),
    ("Food & Beverages", "Food products and drinks"),
    ("Home & Garden", "Home improvement and garden supplies"),
    ("Sports & Outdoors", "Sports equipment and outdoor gear"),
]

# (category, name, sku, barcode, price, cost, quantity, minimum)
SEED_PRODUCTS = [
    ("Electronics", "Laptop Pro 15", "ELEC-001", "1234567890123", "1299.99", "800.00", 25, 10),
    ("Electronics", "Wireless Mouse", "ELEC-002", "1234567890124", "29.99", "12.00", 150, 50),
    ("Electronics", "USB-C Hub", "ELEC-004", "1234567890126", "49.99", "20.00", 8, 30),
    ("Clothing", "Cotton T-Shirt", "CLTH-001", "2234567890123", "19.99", "8.00", 300, 100),
    ("Clothing", "Winter Jacket", "CLTH-006", "2234567890128", "99.99", "50.00", 12, 20),
    ("Food & Beverages", "Bottled Water 500ml", "FOOD-001", "3234567890123", "1.99", "0.50", 1000, 300),
    ("Food & Beverages", "Coffee Beans 500g", "FOOD-005", "3234567890127", "12.99", "6.00", 40, 60),
    ("Home & Garden", "Garden Shovel", "HOME-001", "4234567890123", "24.99", "12.00", 50, 15),
    ("Home & Garden", "LED Light Bulb", "HOME-004", "4234567890126", "6.99", "3.00", 300, 100),
    ("Sports & Outdoors", "Yoga Mat", "SPRT-002", "5234567890124", "24.99", "12.00", 100, 30),
    ("Sports & Outdoors", "Camping Tent 4-Person", "SPRT-005", "5234567890127", "149.99", "80.00", 5, 10),
]


def seed_users(db: Session) -> int:
    repo = UserRepository(db)
    created = 0
    for ent in SEED_USERS:
        if repo.get_by_username(ent["username"]):
            continue
        now = utcnow()
        repo.add(
            User(
                username=ent["username"],
                email=ent["email"],
                password_hash=hash_password(ent["password"]),
                role=ent["role"],
                is_active=True,
                created_at=now,
                updated_at=now,
            )
        )
        created += 1
    return created


def seed_categories(db: Session) -> Dict[str, Category]:
    repo = CategoryRepository(db)
    by_name = {c.name: c for c in repo.list_all()}
    for name, description in SEED_CATEGORIES:
        if name not in by_name:
            by_name[name] = repo.add(Category(name=name, description=description, created_at=utcnow()))
    return by_name


def seed_products(db: Session, entries: Iterable[dict], categories: Dict[str, Category]) -> int:
    """
    Insert products that are not there yet.

    Each entry: sku, name, price, cost, quantity, minimum_stock_level and
    optionally barcode, description and category (by name).
    """
    repo = ProductRepository(db)
    created = 0
    for ent in entries:
        sku = ent.get("sku")
        if not sku or repo.get_by_sku(sku):
            continue
        barcode = ent.get("barcode") or None
        if barcode and repo.barcode_exists(barcode):
            log.warning("Skipping seed product %s: barcode %s already in use", sku, barcode)
            continue
        category = categories.get(ent.get("category") or "")
        now = utcnow()
        product = repo.add(
            Product(
                name=ent.get("name") or sku,
                description=ent.get("description"),
                sku=sku,
                barcode=barcode,
                price=Decimal(str(ent.get("price", 0))),
                cost=Decimal(str(ent.get("cost", 0))),
                quantity=int(ent.get("quantity", 0)),
                minimum_stock_level=int(ent.get("minimum_stock_level", 0)),
                category_id=category.id if category else None,
                created_at=now,
                updated_at=now,
            )
        )
        if product.quantity:
            db.add(
                StockMovement(
                    product_id=product.id,
                    movement_type=StockMovementType.ADD,
                    quantity=product.quantity,
                    reason="Initial stock",
                    created_by="seed",
                    created_at=now,
                )
            )
        created += 1
    db.flush()
    return created


def default_products():
    for category, name, sku, barcode, price, cost, qty, minimum in SEED_PRODUCTS:
        yield {
            "category": category,
            "name": name,
            "sku": sku,
            "barcode": barcode,
            "price": price,
            "cost": cost,
            "quantity": qty,
            "minimum_stock_level": minimum,
        }


def seed_database(db: Session, extra_products: Iterable[dict] = ()) -> dict:
    with atomic(db):
        users = seed_users(db)
        categories = seed_categories(db)
        products = seed_products(db, default_products(), categories)
        products += seed_products(db, extra_products, categories)
    log.info("Seeded %s users, %s products", users, products)
    return {"users": users, "products": products}

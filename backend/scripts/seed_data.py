#!/usr/bin/env python3
"""
Create the schema and load demo data (users, categories, products).

Extra products can be imported from a JSON file holding either a list of
entries or an object with an "items" list. Entry keys are forgiving:
sku/id, name/title, price/amount, quantity/stock, minimumStockLevel/min_stock.

Usage:
    python scripts/seed_data.py
    python scripts/seed_data.py --reset --file ./catalogue.json
"""
import argparse
import json
import os
import sys

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from inventory_api.config import settings
from inventory_api.db import SessionLocal, init_db
from inventory_api.db.seed import seed_database
from inventory_api.logging_config import configure_logging


def _first(entry, *keys, default=None):
    for k in keys:
        if entry.get(k) not in (None, ""):
            return entry[k]
    return default


def _normalize_entry(entry):
    """Return a dict with the keys seed_products expects."""
    return {
        "sku": _first(entry, "sku", "SKU", "id", "productId"),
        "name": _first(entry, "name", "title", default=""),
        "description": _first(entry, "description"),
        "barcode": _first(entry, "barcode"),
        "category": _first(entry, "category", "categoryName"),
        "price": _first(entry, "price", "amount", default=0),
        "cost": _first(entry, "cost", default=0),
        "quantity": int(_first(entry, "quantity", "stock", "initialQuantity", default=0)),
        "minimum_stock_level": int(_first(entry, "minimumStockLevel", "minimum_stock_level", "min_stock", default=0)),
    }


def load_entries(path: str):
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except ValueError as e:
            raise RuntimeError(f"Failed to parse JSON from {path}: {e}")
    if isinstance(data, dict):
        source_list = data["items"] if isinstance(data.get("items"), list) else list(data.values())
    elif isinstance(data, list):
        source_list = data
    else:
        source_list = []
    return [_normalize_entry(e) for e in source_list if isinstance(e, dict)]


def main(argv=None):
    parser = argparse.ArgumentParser(description="Seed the inventory database.")
    parser.add_argument("--reset", action="store_true", help="drop and recreate every table first")
    parser.add_argument("--file", "-f", help="JSON file with extra products to import")
    args = parser.parse_args(argv)

    configure_logging(settings.LOG_LEVEL)
    extra = []
    if args.file:
        if not os.path.exists(args.file):
            print("File not found:", args.file)
            return 1
        extra = load_entries(args.file)

    init_db(reset=args.reset)
    db = SessionLocal()
    try:
        counts = seed_database(db, extra_products=extra)
    finally:
        db.close()
    print(f"Seeded users: {counts['users']}, products: {counts['products']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

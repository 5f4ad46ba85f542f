import os

from fastapi import APIRouter
from sqlalchemy import text

from inventory_api.config import settings
from inventory_api.db import engine

router = APIRouter()


@router.get("/health", tags=["health"])
def health():
    db_ok = False
    locks_ok = False
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            db_ok = True
    except Exception:
        db_ok = False
    try:
        os.makedirs(settings.STOCK_LOCK_DIR, exist_ok=True)
        locks_ok = os.access(settings.STOCK_LOCK_DIR, os.W_OK)
    except OSError:
        locks_ok = False

    return {
        "status": "ok" if db_ok and locks_ok else "degraded",
        "db": db_ok,
        "stock_locks": locks_ok,
    }

import threading
from datetime import timedelta
from decimal import Decimal

import pytest

from inventory_api.db import SessionLocal
from inventory_api.models.enums import StockMovementType
from inventory_api.models.product import Product
from inventory_api.models.stock_movement import StockMovement
from inventory_api.repositories.stock_movement_repo import StockMovementRepository
from inventory_api.schemas.common import MAX_INT
from inventory_api.schemas.product_schema import ProductCreate
from inventory_api.services.exceptions import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
)
from inventory_api.services.product_service import ProductService
from inventory_api.services.stock_service import StockService
from inventory_api.utils.time_utils import utcnow


def _product(db, sku="LEDGER-1", quantity=10, minimum=5) -> Product:
    return ProductService(db).create(
        ProductCreate(
            name=f"Product {sku}",
            sku=sku,
            price=Decimal("9.99"),
            initial_quantity=quantity,
            minimum_stock_level=minimum,
        )
    )


def _quantity(product_id) -> int:
    s = SessionLocal()
    try:
        return s.get(Product, product_id).quantity
    finally:
        s.close()


def test_add_then_remove_restores_quantity(db):
    p = _product(db, quantity=7)
    svc = StockService(db)

    svc.add_stock(p.id, 4, reason="Delivery")
    svc.remove_stock(p.id, 4, reason="Sale")

    assert _quantity(p.id) == 7
    moves = svc.get_movements_by_product(p.id)
    assert sorted(m.quantity for m in moves) == [-4, 4]
    assert {m.movement_type for m in moves} == {StockMovementType.ADD, StockMovementType.REMOVE}


def test_remove_more_than_available_is_conflict_and_changes_nothing(db):
    p = _product(db, quantity=3)
    svc = StockService(db)

    with pytest.raises(ConflictError) as exc:
        svc.remove_stock(p.id, 4)

    assert "Insufficient stock" in str(exc.value)
    assert _quantity(p.id) == 3
    assert StockMovementRepository(db).count_by_product(p.id) == 0


def test_remove_exactly_available_empties_stock(db):
    p = _product(db, quantity=3)
    StockService(db).remove_stock(p.id, 3)
    assert _quantity(p.id) == 0


@pytest.mark.parametrize("before,target", [(10, 4), (0, 12), (6, 6), (9, 0)])
def test_adjust_sets_absolute_quantity_and_records_delta(db, before, target):
    p = _product(db, quantity=before)

    movement = StockService(db).adjust_stock(p.id, target, reason="Stock count")

    assert _quantity(p.id) == target
    assert movement.quantity == target - before
    assert movement.movement_type == StockMovementType.ADJUSTMENT


@pytest.mark.parametrize("qty", [0, -1])
def test_add_and_remove_reject_non_positive_quantity(db, qty):
    p = _product(db)
    svc = StockService(db)
    with pytest.raises(InvalidArgumentError):
        svc.add_stock(p.id, qty)
    with pytest.raises(InvalidArgumentError):
        svc.remove_stock(p.id, qty)
    assert _quantity(p.id) == 10


def test_adjust_rejects_negative_target(db):
    p = _product(db)
    with pytest.raises(InvalidArgumentError):
        StockService(db).adjust_stock(p.id, -1)


def test_unknown_product_is_not_found(db):
    svc = StockService(db)
    with pytest.raises(NotFoundError):
        svc.add_stock(999, 1)
    with pytest.raises(NotFoundError):
        svc.remove_stock(999, 1)
    with pytest.raises(NotFoundError):
        svc.adjust_stock(999, 1)


def test_low_stock_scenario(db):
    p = _product(db, sku="X1", quantity=0, minimum=5)
    svc = StockService(db)
    assert p.is_low_stock

    svc.add_stock(p.id, 10)
    db.expire_all()
    assert p.quantity == 10
    assert not p.is_low_stock

    svc.remove_stock(p.id, 8)
    db.expire_all()
    assert p.quantity == 2
    assert p.is_low_stock


def test_movement_records_author_reason_and_notes(db):
    p = _product(db)
    m = StockService(db).add_stock(p.id, 2, reason="Delivery", notes="PO-17", created_by="alice")
    assert (m.reason, m.notes, m.created_by) == ("Delivery", "PO-17", "alice")
    assert m.product_name == p.name
    assert m.product_sku == p.sku
    assert m.movement_type_name == "Add"


def test_movements_are_listed_newest_first(db):
    p = _product(db)
    svc = StockService(db)
    first = svc.add_stock(p.id, 1)
    second = svc.add_stock(p.id, 2)
    third = svc.remove_stock(p.id, 1)

    assert [m.id for m in svc.get_all_movements()] == [third.id, second.id, first.id]
    items, total = svc.get_paged_movements(1, 2)
    assert total == 3
    assert [m.id for m in items] == [third.id, second.id]


def test_date_range_is_inclusive(db):
    p = _product(db)
    svc = StockService(db)
    m = svc.add_stock(p.id, 1)

    exact = svc.get_movements_by_date_range(m.created_at, m.created_at)
    assert [x.id for x in exact] == [m.id]
    later = svc.get_movements_by_date_range(m.created_at + timedelta(seconds=1), utcnow() + timedelta(days=1))
    assert later == []

    with pytest.raises(InvalidArgumentError):
        svc.get_movements_by_date_range(utcnow(), utcnow() - timedelta(days=1))


def test_movements_cannot_be_edited(db):
    p = _product(db)
    m = StockService(db).add_stock(p.id, 1)
    m.quantity = 100
    with pytest.raises(ValueError):
        db.commit()
    db.rollback()
    assert db.get(StockMovement, m.id).quantity == 1


def test_concurrent_removals_never_oversell(db):
    product_id = _product(db, quantity=5).id
    outcomes = []
    lock = threading.Lock()

    def worker():
        s = SessionLocal()
        try:
            StockService(s).remove_stock(product_id, 1)
            result = "ok"
        except ConflictError:
            result = "conflict"
        finally:
            s.close()
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert outcomes.count("ok") == 5
    assert outcomes.count("conflict") == 3
    assert _quantity(product_id) == 0
    assert StockMovementRepository(db).count_by_product(product_id) == 5


def test_quantities_past_the_integer_range_are_rejected(db):
    p = _product(db, quantity=MAX_INT - 1)
    svc = StockService(db)

    with pytest.raises(InvalidArgumentError):
        svc.add_stock(p.id, 2)
    with pytest.raises(InvalidArgumentError):
        svc.add_stock(p.id, 2**63)
    with pytest.raises(InvalidArgumentError):
        svc.remove_stock(p.id, 2**63)
    with pytest.raises(InvalidArgumentError):
        svc.adjust_stock(p.id, MAX_INT + 1)

    assert _quantity(p.id) == MAX_INT - 1
    assert StockMovementRepository(db).count_by_product(p.id) == 0
    svc.add_stock(p.id, 1)
    assert _quantity(p.id) == MAX_INT

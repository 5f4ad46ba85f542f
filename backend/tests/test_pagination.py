import pytest

from inventory_api.schemas.common import PagedResult
from inventory_api.schemas.product_schema import ProductOut


@pytest.fixture
def catalogue(make_product):
    for i in range(25):
        make_product(name=f"Item {i:02d}", sku=f"ITEM-{i:02d}")


def test_last_partial_page(client, cashier, catalogue):
    res = client.get("/api/products", params={"pageNumber": 3, "pageSize": 10}, headers=cashier)
    assert res.status_code == 200
    body = res.json()
    assert len(body["items"]) == 5
    assert body["totalCount"] == 25
    assert body["totalPages"] == 3
    assert body["hasPreviousPage"] is True
    assert body["hasNextPage"] is False
    assert [p["sku"] for p in body["items"]] == [f"ITEM-{i}" for i in range(20, 25)]


def test_first_page_and_beyond_the_end(client, cashier, catalogue):
    first = client.get("/api/products", params={"pageNumber": 1, "pageSize": 10}, headers=cashier).json()
    assert first["hasPreviousPage"] is False
    assert first["hasNextPage"] is True

    past = client.get("/api/products", params={"pageNumber": 9, "pageSize": 10}, headers=cashier).json()
    assert past["items"] == []
    assert past["totalCount"] == 25


def test_one_parameter_defaults_the_other(client, cashier, catalogue):
    body = client.get("/api/products", params={"pageSize": 4}, headers=cashier).json()
    assert body["pageNumber"] == 1
    assert len(body["items"]) == 4

    body = client.get("/api/products", params={"pageNumber": 2}, headers=cashier).json()
    assert body["pageSize"] == 20
    assert len(body["items"]) == 5


def test_no_parameters_returns_plain_list(client, cashier, catalogue):
    body = client.get("/api/products", headers=cashier).json()
    assert isinstance(body, list)
    assert len(body) == 25


def test_out_of_range_parameters_are_rejected(client, cashier):
    assert client.get("/api/products", params={"pageNumber": 0}, headers=cashier).status_code == 422
    assert client.get("/api/products", params={"pageSize": 0}, headers=cashier).status_code == 422
    assert client.get("/api/products", params={"pageSize": 100000}, headers=cashier).status_code == 422


def test_movements_and_users_page_too(client, cashier, admin, make_product):
    p = make_product()
    for _ in range(3):
        client.post("/api/stock-movements/add", json={"productId": p["id"], "quantity": 1}, headers=cashier)

    body = client.get("/api/stock-movements", params={"pageSize": 2}, headers=cashier).json()
    assert body["totalCount"] == 3
    assert body["totalPages"] == 2

    body = client.get("/api/users", params={"pageNumber": 1, "pageSize": 2}, headers=admin).json()
    assert body["totalCount"] == 3
    assert [u["username"] for u in body["items"]] == ["admin", "cashier"]


def test_page_counts():
    page = PagedResult[ProductOut](items=[], total_count=0, page_number=1, page_size=10)
    assert page.total_pages == 0
    assert not page.has_next_page
    page = PagedResult[ProductOut](items=[], total_count=10, page_number=1, page_size=10)
    assert page.total_pages == 1
    assert not page.has_next_page
    page = PagedResult[ProductOut](items=[], total_count=11, page_number=1, page_size=10)
    assert page.total_pages == 2
    assert page.has_next_page

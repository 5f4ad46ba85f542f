import os
import tempfile

# settings are read at import time, so point them at a throwaway database first
_TMP = tempfile.mkdtemp(prefix="inventory_api_tests_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP, 'test.db')}"
os.environ["STOCK_LOCK_DIR"] = os.path.join(_TMP, "locks")
os.environ["SECRET_KEY"] = "test-secret-key-with-enough-bytes-for-hs256"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SEED_DB"] = "false"
os.environ["RESET_DB"] = "false"

import pytest
from fastapi.testclient import TestClient

from inventory_api.db import SessionLocal, init_db
from inventory_api.main import app
from inventory_api.models.enums import UserRole
from inventory_api.schemas.user_schema import UserCreate
from inventory_api.services.user_service import UserService

PASSWORDS = {
    UserRole.SUPER_ADMIN: "admin123",
    UserRole.MODERATOR: "moderator123",
    UserRole.CASHIER: "cashier123",
}
USERNAMES = {
    UserRole.SUPER_ADMIN: "admin",
    UserRole.MODERATOR: "moderator",
    UserRole.CASHIER: "cashier",
}


@pytest.fixture(autouse=True)
def fresh_db():
    init_db(reset=True)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def users(db):
    svc = UserService(db)
    created = {}
    for role, username in USERNAMES.items():
        created[role] = svc.create(
            UserCreate(
                username=username,
                email=f"{username}@inventory.test",
                password=PASSWORDS[role],
                role=role,
            )
        )
    return created


def login(client, username, password):
    res = client.post("/api/auth/login", json={"username": username, "password": password})
    assert res.status_code == 200, res.text
    return {"Authorization": f"Bearer {res.json()['token']}"}


@pytest.fixture
def headers(client, users):
    """Bearer headers per role: headers[UserRole.CASHIER] etc."""
    return {role: login(client, USERNAMES[role], PASSWORDS[role]) for role in USERNAMES}


@pytest.fixture
def admin(headers):
    return headers[UserRole.SUPER_ADMIN]


@pytest.fixture
def moderator(headers):
    return headers[UserRole.MODERATOR]


@pytest.fixture
def cashier(headers):
    return headers[UserRole.CASHIER]


def product_payload(**overrides):
    payload = {
        "name": "Test Coffee",
        "sku": "TEST-001",
        "price": 4.99,
        "cost": 2.5,
        "initialQuantity": 10,
        "minimumStockLevel": 2,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_product(client, moderator):
    def _make(**overrides):
        res = client.post("/api/products", json=product_payload(**overrides), headers=moderator)
        assert res.status_code == 201, res.text
        return res.json()

    return _make

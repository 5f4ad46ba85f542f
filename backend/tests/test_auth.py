from datetime import datetime, timedelta

import jwt

from conftest import product_payload
from inventory_api.config import settings
from inventory_api.models.enums import UserRole
from inventory_api.services.auth_service import hash_password, verify_password
from inventory_api.utils.time_utils import utcnow


def test_password_hash_is_salted_and_verifies():
    a = hash_password("s3cret!")
    b = hash_password("s3cret!")
    assert a != b
    assert verify_password("s3cret!", a)
    assert not verify_password("wrong", a)
    assert not verify_password("s3cret!", "not-a-hash")


def test_login_returns_token_and_role(client, users):
    res = client.post("/api/auth/login", json={"username": "admin", "password": "admin123"})
    assert res.status_code == 200
    body = res.json()
    assert body["username"] == "admin"
    assert body["role"] == "SuperAdmin"
    assert body["userId"] == users[UserRole.SUPER_ADMIN].id
    assert body["expiresAt"].endswith("Z")

    claims = jwt.decode(body["token"], settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    assert claims["sub"] == str(body["userId"])
    assert claims["role"] == "SuperAdmin"
    assert claims["username"] == "admin"
    assert claims["email"] == "admin@inventory.test"
    assert claims["exp"] - claims["iat"] == 8 * 3600
    expires_at = datetime.fromisoformat(body["expiresAt"].replace("Z", "+00:00"))
    assert int(expires_at.timestamp()) == claims["exp"]


def test_login_records_last_login(client, users, admin):
    res = client.get(f"/api/users/{users[UserRole.CASHIER].id}", headers=admin)
    assert res.json()["lastLoginDate"] is not None


def test_bad_credentials_are_indistinguishable(client, users):
    wrong_password = client.post("/api/auth/login", json={"username": "admin", "password": "nope"})
    unknown_user = client.post("/api/auth/login", json={"username": "ghost", "password": "nope"})
    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json()


def test_inactive_user_cannot_log_in(client, users, admin):
    cashier = users[UserRole.CASHIER]
    res = client.put(
        f"/api/users/{cashier.id}",
        json={"username": "cashier", "email": "cashier@inventory.test", "role": "Cashier", "isActive": False},
        headers=admin,
    )
    assert res.status_code == 200
    res = client.post("/api/auth/login", json={"username": "cashier", "password": "cashier123"})
    assert res.status_code == 401
    assert res.json()["detail"] == "Invalid username or password"


def test_deactivated_user_token_stops_working(client, users, admin, cashier):
    assert client.get("/api/products", headers=cashier).status_code == 200
    client.put(
        f"/api/users/{users[UserRole.CASHIER].id}",
        json={"username": "cashier", "email": "cashier@inventory.test", "role": "Cashier", "isActive": False},
        headers=admin,
    )
    assert client.get("/api/products", headers=cashier).status_code == 401


def test_validate_token(client, cashier):
    token = cashier["Authorization"].split(" ", 1)[1]
    assert client.post("/api/auth/validate", json=token).json() is True
    assert client.post("/api/auth/validate", json="garbage").json() is False
    assert client.post("/api/auth/validate", json=token[:-2] + "xx").json() is False


def test_expired_token_is_rejected(client, users):
    past = utcnow() - timedelta(hours=1)
    token = jwt.encode(
        {"sub": str(users[UserRole.SUPER_ADMIN].id), "role": "SuperAdmin", "iat": past - timedelta(hours=8), "exp": past},
        settings.SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )
    assert client.post("/api/auth/validate", json=token).json() is False
    res = client.get("/api/users", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 401


def test_token_signed_with_other_key_is_rejected(client, users):
    token = jwt.encode(
        {"sub": str(users[UserRole.SUPER_ADMIN].id), "exp": utcnow() + timedelta(hours=1)},
        "some-other-secret-that-is-long-enough",
        algorithm="HS256",
    )
    assert client.get("/api/products", headers={"Authorization": f"Bearer {token}"}).status_code == 401


def test_missing_token_is_401_with_challenge(client):
    res = client.get("/api/products")
    assert res.status_code == 401
    assert res.headers["WWW-Authenticate"] == "Bearer"
    assert client.post("/api/stock-movements/add", json={"productId": 1, "quantity": 1}).status_code == 401


def test_role_gates(client, cashier, moderator, admin):
    # cashier: read catalogue and move stock, nothing else
    assert client.get("/api/products", headers=cashier).status_code == 200
    assert client.get("/api/categories", headers=cashier).status_code == 200
    assert client.post("/api/products", json=product_payload(), headers=cashier).status_code == 403
    assert client.post("/api/categories", json={"name": "X"}, headers=cashier).status_code == 403
    assert client.get("/api/reports/stock", headers=cashier).status_code == 403
    assert client.get("/api/users", headers=cashier).status_code == 403

    # moderator: catalogue writes and reports, but no user management
    assert client.get("/api/reports/low-stock", headers=moderator).status_code == 200
    assert client.get("/api/users", headers=moderator).status_code == 403

    # super admin: everything
    assert client.get("/api/users", headers=admin).status_code == 200
    assert client.get("/api/reports/movements", headers=admin).status_code == 200
    assert client.post("/api/products", json=product_payload(), headers=admin).status_code == 201

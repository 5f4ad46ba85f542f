"""
Authentication: password hashing, login and bearer tokens.

Passwords are stored as bcrypt hashes with a per-password salt. Tokens are
HS256-signed JWTs carrying the user's id, username, email and role, valid for
``JWT_EXPIRE_HOURS`` with no refresh; a client logs in again once one expires.
"""

import logging
from datetime import timedelta
from typing import Optional

import bcrypt
import jwt
from sqlalchemy.orm import Session

from inventory_api.config import settings
from inventory_api.models.user import User
from inventory_api.repositories.user_repo import UserRepository
from inventory_api.schemas.auth_schema import AuthResponse
from inventory_api.services.exceptions import AuthenticationError
from inventory_api.utils.time_utils import utcnow
from inventory_api.utils.transactions import atomic

log = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"

# bcrypt only looks at the first 72 bytes and newer releases refuse longer input
_BCRYPT_MAX_BYTES = 72

_dummy_hash: Optional[str] = None


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        # not a bcrypt hash
        return False


def _burn_hash_time(password: str):
    """Spend a bcrypt check so unknown usernames take as long as wrong passwords."""
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = hash_password("not-a-real-password")
    verify_password(password, _dummy_hash)


def create_access_token(user: User) -> tuple:
    """Return ``(token, expires_at)`` for ``user``."""
    issued_at = utcnow()
    expires_at = issued_at + timedelta(hours=settings.JWT_EXPIRE_HOURS)
    payload = {
        "sub": str(user.id),
        "username": user.username,
        "email": user.email,
        "role": user.role.value,
        "iat": issued_at,
        "exp": expires_at,
    }
    token = jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    return token, expires_at


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except jwt.PyJWTError as e:
        raise AuthenticationError("Invalid or expired token") from e


def validate_token(token: str) -> bool:
    try:
        decode_token(token)
    except AuthenticationError:
        return False
    return True


class AuthService:
    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)

    def login(self, username: str, password: str) -> AuthResponse:
        log.info("Login attempt for username: %s", username)
        with atomic(self.db):
            user = self.users.get_by_username(username)
            if user is None or not user.is_active:
                _burn_hash_time(password)
                log.warning("Failed login - user not found or inactive: %s", username)
                raise AuthenticationError(INVALID_CREDENTIALS)
            if not verify_password(password, user.password_hash):
                log.warning("Failed login - invalid password for user: %s", username)
                raise AuthenticationError(INVALID_CREDENTIALS)
            user.last_login_date = utcnow()

        token, expires_at = create_access_token(user)
        log.info("User logged in. Username: %s, Role: %s", user.username, user.role.value)
        return AuthResponse(
            user_id=user.id,
            username=user.username,
            email=user.email,
            role=user.role,
            token=token,
            expires_at=expires_at,
        )

    def validate_token(self, token: str) -> bool:
        return validate_token(token)

    def user_for_token(self, token: str) -> User:
        """Resolve a bearer token to a live, active user or raise AuthenticationError."""
        claims = decode_token(token)
        try:
            user_id = int(claims["sub"])
        except (KeyError, TypeError, ValueError) as e:
            raise AuthenticationError("Invalid or expired token") from e
        user = self.users.get(user_id)
        if user is None or not user.is_active:
            raise AuthenticationError("Invalid or expired token")
        return user

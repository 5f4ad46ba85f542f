import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from inventory_api.models.user import User
from inventory_api.repositories.user_repo import UserRepository
from inventory_api.schemas.user_schema import UserCreate, UserUpdate
from inventory_api.services.auth_service import hash_password
from inventory_api.services.exceptions import ConflictError, NotFoundError
from inventory_api.utils.time_utils import utcnow
from inventory_api.utils.transactions import atomic

log = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository(db)

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.repo.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return self.repo.get_by_username(username)

    def get_all(self) -> List[User]:
        return self.repo.list_all()

    def get_paged(self, page_number: int, page_size: int) -> Tuple[List[User], int]:
        return self.repo.page(page_number, page_size)

    def _check_unique(self, username: str, email: str, user_id: Optional[int] = None):
        existing = self.repo.get_by_username(username)
        if existing is not None and existing.id != user_id:
            log.warning("Username already in use: %s", username)
            raise ConflictError(f"Username '{username}' already exists.")
        existing = self.repo.get_by_email(email)
        if existing is not None and existing.id != user_id:
            log.warning("Email already in use: %s", email)
            raise ConflictError(f"Email '{email}' already exists.")

    def create(self, data: UserCreate) -> User:
        log.info("Creating user: %s", data.username)
        with atomic(self.db):
            self._check_unique(data.username, data.email)
            now = utcnow()
            user = self.repo.add(
                User(
                    username=data.username,
                    email=data.email,
                    password_hash=hash_password(data.password),
                    role=data.role,
                    is_active=data.is_active,
                    created_at=now,
                    updated_at=now,
                )
            )
        log.info("User created. ID: %s, Username: %s", user.id, user.username)
        return user

    def update(self, user_id: int, data: UserUpdate) -> User:
        with atomic(self.db):
            user = self.repo.get(user_id)
            if not user:
                raise NotFoundError(f"User with ID {user_id} not found.")
            self._check_unique(data.username, data.email, user_id=user_id)
            user.username = data.username
            user.email = data.email
            user.role = data.role
            user.is_active = data.is_active
            if data.password:
                user.password_hash = hash_password(data.password)
            user.updated_at = utcnow()
        return user

    def delete(self, user_id: int):
        with atomic(self.db):
            user = self.repo.get(user_id)
            if not user:
                raise NotFoundError(f"User with ID {user_id} not found.")
            self.repo.delete(user)
        log.info("User deleted. ID: %s", user_id)

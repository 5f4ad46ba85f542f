from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from inventory_api.models.user import User
from inventory_api.repositories.paging import paginate


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def list_all(self) -> List[User]:
        return self.db.query(User).order_by(User.username).all()

    def page(self, page: int, size: int) -> Tuple[List[User], int]:
        return paginate(self.db.query(User).order_by(User.username), page, size)

    def add(self, user: User) -> User:
        self.db.add(user)
        self.db.flush()
        return user

    def delete(self, user: User):
        self.db.delete(user)
        self.db.flush()

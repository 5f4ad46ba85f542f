from sqlalchemy import Boolean, Column, DateTime, Enum, Integer, String

from inventory_api.db import Base
from inventory_api.models.enums import UserRole
from inventory_api.utils.time_utils import utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, index=True, nullable=False)
    email = Column(String(200), unique=True, index=True, nullable=False)
    password_hash = Column(String(500), nullable=False)
    role = Column(
        Enum(UserRole, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=UserRole.CASHIER,
    )
    is_active = Column(Boolean, nullable=False, default=True)
    last_login_date = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f"<User username={self.username} role={self.role}>"

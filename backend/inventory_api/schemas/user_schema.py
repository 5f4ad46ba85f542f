from typing import Optional

from pydantic import Field, field_validator

from inventory_api.models.enums import UserRole
from inventory_api.schemas.common import MAX_INT, ApiModel, UtcDateTime

USERNAME_PATTERN = r"^[A-Za-z0-9_]+$"
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserOut(ApiModel):
    id: int
    username: str
    email: str
    role: UserRole
    is_active: bool
    last_login_date: Optional[UtcDateTime] = None
    created_at: UtcDateTime
    updated_at: UtcDateTime


class UserBase(ApiModel):
    username: str = Field(..., min_length=3, max_length=100, pattern=USERNAME_PATTERN)
    email: str = Field(..., max_length=200, pattern=EMAIL_PATTERN)
    role: UserRole = UserRole.CASHIER
    is_active: bool = True


class UserCreate(UserBase):
    password: str = Field(..., min_length=6, max_length=100)


class UserUpdate(UserBase):
    id: Optional[int] = Field(None, le=MAX_INT)
    # blank keeps the current password
    password: Optional[str] = Field(None, max_length=100)

    @field_validator("password")
    @classmethod
    def password_if_given(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v

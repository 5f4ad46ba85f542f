from pydantic import Field

from inventory_api.models.enums import UserRole
from inventory_api.schemas.common import ApiModel, UtcDateTime


class LoginRequest(ApiModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AuthResponse(ApiModel):
    user_id: int
    username: str
    email: str
    role: UserRole
    token: str
    expires_at: UtcDateTime

from typing import Annotated, Optional

from fastapi import Depends, Path, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from inventory_api.config import settings
from inventory_api.db import get_db
from inventory_api.models.enums import UserRole
from inventory_api.models.user import User
from inventory_api.schemas.common import MAX_INT, PageParams
from inventory_api.services.auth_service import AuthService
from inventory_api.services.exceptions import AuthenticationError, AuthorizationError

bearer = HTTPBearer(auto_error=False)

# path ids beyond the 32-bit range are rejected before they reach the database
DbId = Annotated[int, Path(le=MAX_INT)]


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("Not authenticated")
    return AuthService(db).user_for_token(credentials.credentials)


def require_role(minimum: UserRole):
    """Dependency factory: 401 without a valid token, 403 below ``minimum``."""

    def _check(user: User = Depends(get_current_user)) -> User:
        if not user.role.at_least(minimum):
            raise AuthorizationError(
                f"This action requires the {minimum.value} role or higher."
            )
        return user

    return _check


def page_params(
    page_number: Optional[int] = Query(None, alias="pageNumber", ge=1, le=MAX_INT),
    page_size: Optional[int] = Query(None, alias="pageSize", ge=1, le=settings.MAX_PAGE_SIZE),
) -> PageParams:
    """Both omitted means "no paging"; one given defaults the other."""
    if page_number is None and page_size is None:
        return PageParams()
    return PageParams(
        page_number=page_number or 1,
        page_size=page_size or settings.DEFAULT_PAGE_SIZE,
    )

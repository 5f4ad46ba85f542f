from typing import List, Union

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from inventory_api.api.deps import DbId, page_params, require_role
from inventory_api.db import get_db
from inventory_api.models.enums import UserRole
from inventory_api.schemas.common import PagedResult, PageParams, to_page
from inventory_api.schemas.user_schema import UserCreate, UserOut, UserUpdate
from inventory_api.services.exceptions import InvalidArgumentError
from inventory_api.services.user_service import UserService

router = APIRouter(
    prefix="/api/users",
    tags=["users"],
    dependencies=[Depends(require_role(UserRole.SUPER_ADMIN))],
)


@router.get("", response_model=Union[PagedResult[UserOut], List[UserOut]], summary="List users")
def list_users(paging: PageParams = Depends(page_params), db: Session = Depends(get_db)):
    svc = UserService(db)
    if paging.requested:
        items, total = svc.get_paged(paging.page_number, paging.page_size)
        return to_page(UserOut, items, total, paging.page_number, paging.page_size)
    return svc.get_all()


@router.get("/{user_id}", response_model=UserOut, summary="Get user by ID")
def get_user(user_id: DbId, db: Session = Depends(get_db)):
    user = UserService(db).get_by_id(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED, summary="Create user")
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    return UserService(db).create(payload)


@router.put("/{user_id}", response_model=UserOut, summary="Update user (blank password keeps the old one)")
def update_user(user_id: DbId, payload: UserUpdate, db: Session = Depends(get_db)):
    if payload.id is not None and payload.id != user_id:
        raise InvalidArgumentError("ID mismatch")
    return UserService(db).update(user_id, payload)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete user",
)
def delete_user(user_id: DbId, db: Session = Depends(get_db)):
    UserService(db).delete(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

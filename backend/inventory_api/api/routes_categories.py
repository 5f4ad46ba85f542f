from typing import List, Union

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from inventory_api.api.deps import DbId, page_params, require_role
from inventory_api.db import get_db
from inventory_api.models.enums import UserRole
from inventory_api.schemas.category_schema import CategoryIn, CategoryOut
from inventory_api.schemas.common import PagedResult, PageParams, to_page
from inventory_api.services.category_service import CategoryService
from inventory_api.services.exceptions import InvalidArgumentError

router = APIRouter(
    prefix="/api/categories",
    tags=["categories"],
    dependencies=[Depends(require_role(UserRole.CASHIER))],
)

moderator = [Depends(require_role(UserRole.MODERATOR))]


@router.get("", response_model=Union[PagedResult[CategoryOut], List[CategoryOut]], summary="List categories")
def list_categories(paging: PageParams = Depends(page_params), db: Session = Depends(get_db)):
    svc = CategoryService(db)
    if paging.requested:
        items, total = svc.get_paged(paging.page_number, paging.page_size)
        return to_page(CategoryOut, items, total, paging.page_number, paging.page_size)
    return svc.get_all()


@router.get("/{category_id}", response_model=CategoryOut, summary="Get category by ID")
def get_category(category_id: DbId, db: Session = Depends(get_db)):
    category = CategoryService(db).get_by_id(category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.post(
    "",
    response_model=CategoryOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=moderator,
    summary="Create category",
)
def create_category(payload: CategoryIn, db: Session = Depends(get_db)):
    return CategoryService(db).create(payload.name, payload.description)


@router.put("/{category_id}", response_model=CategoryOut, dependencies=moderator, summary="Update category")
def update_category(category_id: DbId, payload: CategoryIn, db: Session = Depends(get_db)):
    if payload.id is not None and payload.id != category_id:
        raise InvalidArgumentError("ID mismatch")
    return CategoryService(db).update(category_id, payload.name, payload.description)


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=moderator,
    summary="Delete category (blocked while products reference it)",
)
def delete_category(category_id: DbId, db: Session = Depends(get_db)):
    CategoryService(db).delete(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

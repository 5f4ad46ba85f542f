from typing import List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from inventory_api.api.deps import DbId, page_params, require_role
from inventory_api.db import get_db
from inventory_api.models.enums import UserRole
from inventory_api.models.user import User
from inventory_api.schemas.common import PagedResult, PageParams, to_page
from inventory_api.schemas.product_schema import ProductCreate, ProductOut, ProductUpdate
from inventory_api.services.exceptions import InvalidArgumentError
from inventory_api.services.product_service import ProductService

router = APIRouter(
    prefix="/api/products",
    tags=["catalogue"],
    dependencies=[Depends(require_role(UserRole.CASHIER))],
)


@router.get("", response_model=Union[PagedResult[ProductOut], List[ProductOut]], summary="List products")
def list_products(paging: PageParams = Depends(page_params), db: Session = Depends(get_db)):
    svc = ProductService(db)
    if paging.requested:
        items, total = svc.get_paged(paging.page_number, paging.page_size)
        return to_page(ProductOut, items, total, paging.page_number, paging.page_size)
    return svc.get_all()


# fixed paths first so they are not swallowed by /{product_id}


@router.get("/search", response_model=List[ProductOut], summary="Search name, SKU, barcode and description")
def search_products(
    term: Optional[str] = Query(None, description="search term"),
    db: Session = Depends(get_db),
):
    return ProductService(db).search(term or "")


@router.get("/low-stock", response_model=List[ProductOut], summary="Products at or below their minimum level")
def low_stock(db: Session = Depends(get_db)):
    return ProductService(db).get_low_stock()


@router.get("/sku/{sku}", response_model=ProductOut, summary="Get product by SKU")
def get_by_sku(sku: str, db: Session = Depends(get_db)):
    p = ProductService(db).get_by_sku(sku)
    if not p:
        raise HTTPException(status_code=404, detail="Product not found")
    return p


@router.get("/barcode/{barcode}", response_model=ProductOut, summary="Get product by barcode")
def get_by_barcode(barcode: str, db: Session = Depends(get_db)):
    p = ProductService(db).get_by_barcode(barcode)
    if not p:
        raise HTTPException(status_code=404, detail="Product not found")
    return p


@router.get("/category/{category_id}", response_model=List[ProductOut], summary="Products in a category")
def by_category(category_id: DbId, db: Session = Depends(get_db)):
    return ProductService(db).get_by_category(category_id)


@router.get("/{product_id}", response_model=ProductOut, summary="Get product by ID")
def get_product(product_id: DbId, db: Session = Depends(get_db)):
    p = ProductService(db).get_by_id(product_id)
    if not p:
        raise HTTPException(status_code=404, detail="Product not found")
    return p


@router.post("", response_model=ProductOut, status_code=status.HTTP_201_CREATED, summary="Create product")
def create_product(
    payload: ProductCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_role(UserRole.MODERATOR)),
):
    return ProductService(db).create(payload)


@router.put("/{product_id}", response_model=ProductOut, summary="Update product")
def update_product(
    product_id: DbId,
    payload: ProductUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(require_role(UserRole.MODERATOR)),
):
    if payload.id is not None and payload.id != product_id:
        raise InvalidArgumentError("ID mismatch")
    return ProductService(db).update(product_id, payload, updated_by=user.username)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete product and its movement history",
)
def delete_product(
    product_id: DbId,
    db: Session = Depends(get_db),
    user: User = Depends(require_role(UserRole.MODERATOR)),
):
    ProductService(db).delete(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

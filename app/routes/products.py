from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from app.dependencies.auth import require_auth
from app.dependencies.services import get_product_service
from app.repositories.product_query import DEFAULT_LOW_STOCK_THRESHOLD, MAX_PAGE_LIMIT, ProductListParams
from app.schemas.product import MessageResponse, ProductListResponse, ProductResponse
from app.schemas.user import TokenClaims
from app.services.product_service import ProductService


router = APIRouter(prefix="/api/products", tags=["Products"])

# Fixed-prefix routes go before /{product_id}.

# LOW STOCK REPORT
@router.get("/reports/low-stock", response_model=List[ProductResponse], response_model_exclude_unset=True)
def low_stock(
    threshold: int = Query(DEFAULT_LOW_STOCK_THRESHOLD, ge=0),
    products: ProductService = Depends(get_product_service),
):
    return products.get_low_stock_products(threshold)

# BY CATEGORY
@router.get("/category/{category}", response_model=List[ProductResponse], response_model_exclude_unset=True)
def by_category(category: str, products: ProductService = Depends(get_product_service)):
    return products.get_products_by_category(category)

# BY SKU
@router.get("/sku/{sku}", response_model=ProductResponse, response_model_exclude_unset=True)
def by_sku(sku: str, products: ProductService = Depends(get_product_service)):
    return products.get_product_by_sku(sku)

# CREATE
@router.post(
    "",
    response_model=ProductResponse,
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
def create(
    payload: Dict[str, Any] = Body(...),
    claims: TokenClaims = Depends(require_auth),
    products: ProductService = Depends(get_product_service),
):
    return products.create_product(payload, claims.id)

# LIST
@router.get("", response_model=ProductListResponse, response_model_exclude_unset=True)
def list_all(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=MAX_PAGE_LIMIT),
    search: Optional[str] = None,
    category: Optional[str] = None,
    is_active: Optional[bool] = Query(None, alias="isActive"),
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_order: str = Query("DESC", alias="sortOrder"),
    min_price: Optional[float] = Query(None, alias="minPrice"),
    max_price: Optional[float] = Query(None, alias="maxPrice"),
    products: ProductService = Depends(get_product_service),
):
    params = ProductListParams(
        page=page,
        limit=limit,
        search=search,
        category=category,
        is_active=is_active,
        sort_by=sort_by,
        sort_order=sort_order,
        min_price=min_price,
        max_price=max_price,
    )
    return products.get_all_products(params)

# GET BY ID
@router.get("/{product_id}", response_model=ProductResponse, response_model_exclude_unset=True)
def get(product_id: int, products: ProductService = Depends(get_product_service)):
    return products.get_product_by_id(product_id)

# UPDATE
@router.put("/{product_id}", response_model=ProductResponse, response_model_exclude_unset=True)
def update(
    product_id: int,
    payload: Dict[str, Any] = Body(...),
    claims: TokenClaims = Depends(require_auth),
    products: ProductService = Depends(get_product_service),
):
    return products.update_product(product_id, payload, claims.id)

# DELETE
@router.delete("/{product_id}", response_model=MessageResponse, dependencies=[Depends(require_auth)])
def delete(product_id: int, products: ProductService = Depends(get_product_service)):
    return products.delete_product(product_id)

# SOFT DELETE
@router.patch("/{product_id}/deactivate", response_model=ProductResponse, response_model_exclude_unset=True)
def deactivate(
    product_id: int,
    claims: TokenClaims = Depends(require_auth),
    products: ProductService = Depends(get_product_service),
):
    return products.soft_delete_product(product_id, claims.id)

# STOCK UPDATE
@router.patch("/{product_id}/stock", response_model=ProductResponse, response_model_exclude_unset=True)
def update_stock(
    product_id: int,
    payload: Dict[str, Any] = Body(...),
    claims: TokenClaims = Depends(require_auth),
    products: ProductService = Depends(get_product_service),
):
    return products.update_product_stock(product_id, payload.get("stock"), claims.id)

from dataclasses import dataclass, replace
from typing import Callable, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Query, Session, joinedload

from app.core.exceptions import ValidationError
from app.database.dialect import contains_ci
from app.models.product import Product

MAX_PAGE_LIMIT = 100
# Offsets must fit a signed 64-bit integer.
MAX_OFFSET = 2 ** 63 - 1
DEFAULT_LOW_STOCK_THRESHOLD = 10

SORTABLE_COLUMNS = {
    "id": Product.id,
    "name": Product.name,
    "price": Product.price,
    "sku": Product.sku,
    "category": Product.category,
    "stock": Product.stock,
    "isActive": Product.is_active,
    "is_active": Product.is_active,
    "createdAt": Product.created_at,
    "created_at": Product.created_at,
    "updatedAt": Product.updated_at,
    "updated_at": Product.updated_at,
}
SORT_ORDERS = ("ASC", "DESC")

ContainsPredicate = Callable[..., object]


@dataclass(frozen=True)
class ProductListParams:
    page: int = 1
    limit: int = 10
    search: Optional[str] = None
    category: Optional[str] = None
    is_active: Optional[bool] = None
    sort_by: str = "createdAt"
    sort_order: str = "DESC"
    min_price: Optional[float] = None
    max_price: Optional[float] = None

    def normalized(self) -> "ProductListParams":
        """Clamp paging and validate the sort options."""
        page = self.page if self.page and self.page > 0 else 1
        limit = self.limit if self.limit and self.limit > 0 else 1
        limit = min(limit, MAX_PAGE_LIMIT)
        page = min(page, MAX_OFFSET // limit)

        sort_by = self.sort_by or "createdAt"
        if sort_by not in SORTABLE_COLUMNS:
            raise ValidationError(
                "sortBy must be one of: " + ", ".join(
                    key for key in SORTABLE_COLUMNS if "_" not in key
                )
            )
        sort_order = (self.sort_order or "DESC").upper()
        if sort_order not in SORT_ORDERS:
            raise ValidationError("sortOrder must be ASC or DESC")

        return replace(self, page=page, limit=limit, sort_by=sort_by, sort_order=sort_order)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def with_identities(query: Query) -> Query:
    return query.options(joinedload(Product.creator), joinedload(Product.updater))


def apply_filters(
    query: Query,
    params: ProductListParams,
    contains: ContainsPredicate = contains_ci,
) -> Query:
    if params.search:
        query = query.filter(
            or_(
                contains(Product.name, params.search),
                contains(Product.description, params.search),
                contains(Product.sku, params.search),
            )
        )

    if params.category:
        query = query.filter(contains(Product.category, params.category))

    if params.is_active is not None:
        query = query.filter(Product.is_active == params.is_active)

    if params.min_price is not None:
        query = query.filter(Product.price >= params.min_price)
    if params.max_price is not None:
        query = query.filter(Product.price <= params.max_price)

    return query


def apply_ordering(query: Query, sort_by: str, sort_order: str) -> Query:
    column = SORTABLE_COLUMNS[sort_by]
    primary = column.asc() if sort_order == "ASC" else column.desc()
    # id keeps rows with equal sort values in a stable order across pages
    return query.order_by(primary, Product.id.asc())


def build_listing(
    db: Session,
    params: ProductListParams,
    contains: ContainsPredicate = contains_ci,
) -> Tuple[Query, Query]:
    """
    Returns (page_query, count_query) for the product listing.
    The count query carries the same filters but no paging or ordering.
    ``params`` must already be normalized.
    """
    filtered = apply_filters(db.query(Product), params, contains)

    count_query = filtered.with_entities(func.count(Product.id))
    page_query = (
        with_identities(apply_ordering(filtered, params.sort_by, params.sort_order))
        .offset(params.offset)
        .limit(params.limit)
    )
    return page_query, count_query


def build_category_listing(
    db: Session,
    category: str,
    contains: ContainsPredicate = contains_ci,
) -> Query:
    query = db.query(Product).filter(
        contains(Product.category, category),
        Product.is_active.is_(True),
    )
    return with_identities(apply_ordering(query, "name", "ASC"))


def build_low_stock_listing(db: Session, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> Query:
    query = db.query(Product).filter(
        Product.stock <= threshold,
        Product.is_active.is_(True),
    )
    return with_identities(apply_ordering(query, "stock", "ASC"))

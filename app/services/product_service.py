import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError

from app.core.exceptions import Conflict, NotFound, Unauthorized, ValidationError
from app.repositories.product_query import DEFAULT_LOW_STOCK_THRESHOLD, ProductListParams
from app.repositories.product_repository import ProductRepository
from app.schemas.product import MessageResponse, Pagination, ProductListResponse, ProductResponse
from app.validators.common import is_non_negative_integer, to_number
from app.validators.product_request import MAX_STOCK, STOCK_TOO_LARGE, ProductRequest, ProductUpdateRequest

logger = logging.getLogger(__name__)


def _duplicate_sku() -> Conflict:
    return Conflict("SKU already exists", code="DUPLICATE_SKU")


def _require_user(user_id: Optional[int]) -> int:
    if not user_id:
        raise Unauthorized("Authentication required")
    return user_id


class ProductService:
    def __init__(self, products: ProductRepository):
        self.products = products

    # --------------------------
    # CREATE PRODUCT
    # --------------------------
    def create_product(self, payload: Dict[str, Any], user_id: int) -> ProductResponse:
        user_id = _require_user(user_id)
        request = ProductRequest.from_body(payload)
        errors = request.validate()
        if errors:
            raise ValidationError(", ".join(errors))

        if self.products.find_by_sku(request.sku):
            raise _duplicate_sku()

        try:
            product = self.products.create(request.to_fields(), user_id)
        except IntegrityError as exc:
            # the unique index catches a concurrent insert the pre-check missed
            self.products.rollback()
            logger.warning("Unique constraint rejected sku %r", request.sku)
            raise _duplicate_sku() from exc

        logger.info("Product %s created by user %s", product.id, user_id)
        return ProductResponse.from_product(product)

    # --------------------------
    # LIST / GET PRODUCTS
    # --------------------------
    def get_all_products(self, params: Optional[ProductListParams] = None) -> ProductListResponse:
        params = (params or ProductListParams()).normalized()
        products, total = self.products.find_all(params)
        return ProductListResponse(
            products=ProductResponse.from_products(products),
            pagination=Pagination.build(page=params.page, limit=params.limit, total=total),
        )

    def get_product_by_id(self, product_id: int) -> ProductResponse:
        product = self.products.find_by_id(product_id)
        if not product:
            raise NotFound("Product not found")
        return ProductResponse.from_product(product)

    def get_product_by_sku(self, sku: str) -> ProductResponse:
        product = self.products.find_by_sku(sku)
        if not product:
            raise NotFound("Product not found")
        return ProductResponse.from_product(product)

    # --------------------------
    # UPDATE PRODUCT
    # --------------------------
    def update_product(self, product_id: int, payload: Dict[str, Any], user_id: int) -> ProductResponse:
        user_id = _require_user(user_id)
        request = ProductUpdateRequest(payload)
        errors = request.validate()
        if errors:
            raise ValidationError(", ".join(errors))

        existing = self.products.find_by_id(product_id)
        if not existing:
            raise NotFound("Product not found")

        new_sku = request.sku
        if new_sku and new_sku != existing.sku and self.products.find_by_sku(new_sku):
            raise _duplicate_sku()

        try:
            product = self.products.update(product_id, request.to_fields(), user_id)
        except IntegrityError as exc:
            self.products.rollback()
            logger.warning("Unique constraint rejected sku %r", new_sku)
            raise _duplicate_sku() from exc

        if not product:
            raise NotFound("Product not found")
        return ProductResponse.from_product(product)

    # --------------------------
    # DELETE PRODUCT
    # --------------------------
    def delete_product(self, product_id: int) -> MessageResponse:
        if not self.products.find_by_id(product_id):
            raise NotFound("Product not found")

        if not self.products.delete(product_id):
            raise NotFound("Product not found")

        logger.info("Product %s deleted", product_id)
        return MessageResponse(message="Product deleted successfully")

    def soft_delete_product(self, product_id: int, user_id: int) -> ProductResponse:
        user_id = _require_user(user_id)
        if not self.products.find_by_id(product_id):
            raise NotFound("Product not found")

        product = self.products.soft_delete(product_id, user_id)
        if not product:
            raise NotFound("Product not found")

        logger.info("Product %s deactivated by user %s", product_id, user_id)
        return ProductResponse.from_product(product)

    # --------------------------
    # STOCK
    # --------------------------
    def update_product_stock(self, product_id: int, stock: Any, user_id: int) -> ProductResponse:
        if stock is None or not is_non_negative_integer(stock):
            raise ValidationError("Stock must be a non-negative integer")
        if to_number(stock) > MAX_STOCK:
            raise ValidationError(STOCK_TOO_LARGE)
        user_id = _require_user(user_id)

        if not self.products.find_by_id(product_id):
            raise NotFound("Product not found")

        product = self.products.update_stock(product_id, int(to_number(stock)), user_id)
        if not product:
            raise NotFound("Product not found")
        return ProductResponse.from_product(product)

    # --------------------------
    # REPORTS
    # --------------------------
    def get_products_by_category(self, category: str) -> List[ProductResponse]:
        if not category or not category.strip():
            raise ValidationError("Category is required")
        return ProductResponse.from_products(self.products.find_by_category(category.strip()))

    def get_low_stock_products(self, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> List[ProductResponse]:
        if threshold is None or threshold < 0:
            raise ValidationError("Threshold must be a non-negative integer")
        return ProductResponse.from_products(self.products.find_low_stock(min(threshold, MAX_STOCK)))

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from app.models.product import Product
from app.repositories.product_query import (
    DEFAULT_LOW_STOCK_THRESHOLD,
    ProductListParams,
    build_category_listing,
    build_listing,
    build_low_stock_listing,
    with_identities,
)


class ProductRepository:
    """
    Data access for products.
    Every read eager-loads creator/updater so responses never lazy-load.
    """

    def __init__(self, db: Session):
        self.db = db

    # --------------------------
    # CREATE
    # --------------------------
    def create(self, fields: Dict[str, Any], user_id: int) -> Product:
        product = Product(**fields, created_by=user_id)
        self.db.add(product)
        self.db.commit()
        return self.find_by_id(product.id)

    # --------------------------
    # READ
    # --------------------------
    def find_all(self, params: ProductListParams) -> Tuple[List[Product], int]:
        """
        Returns (items, total_count) for an already normalized params object.
        """
        page_query, count_query = build_listing(self.db, params)
        total = count_query.scalar() or 0
        return page_query.all(), total

    def find_by_id(self, product_id: int) -> Optional[Product]:
        return (
            with_identities(self.db.query(Product))
            .filter(Product.id == product_id)
            .first()
        )

    def find_by_sku(self, sku: str) -> Optional[Product]:
        return (
            with_identities(self.db.query(Product))
            .filter(Product.sku == sku)
            .first()
        )

    def find_by_category(self, category: str) -> List[Product]:
        return build_category_listing(self.db, category).all()

    def find_low_stock(self, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> List[Product]:
        return build_low_stock_listing(self.db, threshold).all()

    # --------------------------
    # UPDATE
    # --------------------------
    def update(self, product_id: int, fields: Dict[str, Any], user_id: int) -> Optional[Product]:
        product = self.db.query(Product).filter(Product.id == product_id).first()
        if not product:
            return None

        for key, value in fields.items():
            setattr(product, key, value)
        product.updated_by = user_id

        self.db.commit()
        return self.find_by_id(product_id)

    def soft_delete(self, product_id: int, user_id: int) -> Optional[Product]:
        return self.update(product_id, {"is_active": False}, user_id)

    def update_stock(self, product_id: int, stock: int, user_id: int) -> Optional[Product]:
        return self.update(product_id, {"stock": stock}, user_id)

    # --------------------------
    # DELETE
    # --------------------------
    def delete(self, product_id: int) -> bool:
        product = self.db.query(Product).filter(Product.id == product_id).first()
        if not product:
            return False

        self.db.delete(product)
        self.db.commit()
        return True

    def rollback(self) -> None:
        self.db.rollback()

from math import ceil
from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Optional

from app.schemas.user import UserSummary


class Dimensions(BaseModel):
    length: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None


class ProductResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: float
    sku: str
    category: str
    stock: int
    is_active: bool = Field(alias="isActive")
    weight: Optional[float] = None
    dimensions: Optional[Dimensions] = None
    tags: List[str] = []
    created_by: int = Field(alias="createdBy")
    updated_by: Optional[int] = Field(None, alias="updatedBy")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
    creator: Optional[UserSummary] = None
    updater: Optional[UserSummary] = None

    class Config:
        populate_by_name = True

    @classmethod
    def from_product(cls, product) -> "ProductResponse":
        data = dict(
            id=product.id,
            name=product.name,
            description=product.description,
            price=float(product.price),
            sku=product.sku,
            category=product.category,
            stock=product.stock,
            is_active=product.is_active,
            weight=float(product.weight) if product.weight is not None else None,
            dimensions=Dimensions(**product.dimensions) if product.dimensions else None,
            tags=list(product.tags or []),
            created_by=product.created_by,
            updated_by=product.updated_by,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )
        # a product that was never updated has no updater key at all
        if product.creator is not None:
            data["creator"] = UserSummary.model_validate(product.creator)
        if product.updater is not None:
            data["updater"] = UserSummary.model_validate(product.updater)
        return cls(**data)

    @classmethod
    def from_products(cls, products) -> List["ProductResponse"]:
        return [cls.from_product(product) for product in products]


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int = Field(alias="totalPages")

    class Config:
        populate_by_name = True

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, total_pages=ceil(total / limit))


class ProductListResponse(BaseModel):
    products: List[ProductResponse]
    pagination: Pagination


class MessageResponse(BaseModel):
    message: str

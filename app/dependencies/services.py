from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.security import TokenService
from app.database.connection import get_db
from app.repositories.product_repository import ProductRepository
from app.repositories.user_repository import UserRepository
from app.services.product_service import ProductService
from app.services.user_service import UserService


@lru_cache
def get_token_service() -> TokenService:
    return TokenService.from_settings()


def get_user_service(
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> UserService:
    return UserService(UserRepository(db), tokens)


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    return ProductService(ProductRepository(db))

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, status

from app.dependencies.auth import require_auth
from app.dependencies.services import get_user_service
from app.schemas.user import LoginResponse, TokenClaims, UserResponse
from app.services.user_service import UserService

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register_user(
    payload: Dict[str, Any] = Body(...),
    users: UserService = Depends(get_user_service),
):
    return users.register(payload)


@router.post("/login", response_model=LoginResponse)
def login(
    payload: Dict[str, Any] = Body(...),
    users: UserService = Depends(get_user_service),
):
    return users.login(payload)


@router.get("/profile", response_model=UserResponse)
def profile(
    claims: TokenClaims = Depends(require_auth),
    users: UserService = Depends(get_user_service),
):
    return users.get_profile(claims.id)

from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional


class UserBase(BaseModel):
    username: str
    email: Optional[str] = None


class UserResponse(UserBase):
    id: int
    created_at: datetime = Field(alias="createdAt")

    class Config:
        from_attributes = True
        populate_by_name = True


class UserSummary(BaseModel):
    id: int
    username: str
    email: Optional[str] = None

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    token: str
    user: UserResponse
    expires_in: str = Field(alias="expiresIn")

    class Config:
        populate_by_name = True


class TokenClaims(BaseModel):
    id: int
    username: str
    iat: int
    exp: int
    iss: str
    aud: str

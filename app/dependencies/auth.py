from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.exceptions import TokenMissing, Unauthorized
from app.core.security import TokenService
from app.dependencies.services import get_token_service
from app.schemas.user import TokenClaims

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_claims(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> TokenClaims:
    if credentials is None:
        if not request.headers.get("Authorization"):
            raise TokenMissing("Authorization header missing")
        raise TokenMissing("Token missing")
    return tokens.verify(credentials.credentials)


def require_auth(claims: TokenClaims = Depends(get_current_claims)) -> TokenClaims:
    if not claims.id:
        raise Unauthorized("Authentication required")
    return claims

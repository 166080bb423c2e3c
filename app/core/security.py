# app/core/security.py
from calendar import timegm
from datetime import datetime, timedelta
from typing import NamedTuple, Optional

from jose import jwt, JWTError, ExpiredSignatureError
from jose.exceptions import JWTClaimsError
from passlib.context import CryptContext

from app.core.config import settings
from app.core.exceptions import TokenExpired, TokenInvalid, TokenMissing, VerificationFailed
from app.schemas.user import TokenClaims

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


# Password hashing
def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def dummy_verify() -> None:
    # Spend the same hashing time when the username is unknown.
    pwd_context.dummy_verify()


def format_lifetime(minutes: int) -> str:
    if minutes % 60 == 0:
        return f"{minutes // 60}h"
    return f"{minutes}m"


class IssuedToken(NamedTuple):
    token: str
    expires_in: str


class TokenService:
    """
    Mints and checks the bearer tokens handed out at login.

    Tokens carry ``id``, ``username`` and ``iat`` plus fixed ``iss``/``aud``
    claims and expire ``expires_minutes`` after issuance. There is no
    revocation list: rotating ``secret_key`` is the only way to invalidate
    outstanding tokens early.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        issuer: str = "backend-api",
        audience: str = "frontend-app",
        expires_minutes: int = 60,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience
        self.expires_minutes = expires_minutes

    @classmethod
    def from_settings(cls) -> "TokenService":
        return cls(
            secret_key=settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
            issuer=settings.JWT_ISSUER,
            audience=settings.JWT_AUDIENCE,
            expires_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        )

    def issue(self, user, expires_delta: Optional[timedelta] = None) -> IssuedToken:
        issued_at = datetime.utcnow()
        expire = issued_at + (expires_delta or timedelta(minutes=self.expires_minutes))
        claims = {
            "id": user.id,
            "username": user.username,
            "iat": timegm(issued_at.utctimetuple()),
            "exp": expire,
            "iss": self.issuer,
            "aud": self.audience,
        }
        token = jwt.encode(claims, self.secret_key, algorithm=self.algorithm)
        return IssuedToken(token=token, expires_in=format_lifetime(self.expires_minutes))

    def verify(self, token: Optional[str]) -> TokenClaims:
        if not token:
            raise TokenMissing("Token missing")

        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                audience=self.audience,
            )
        except ExpiredSignatureError as exc:
            raise TokenExpired("Token expired") from exc
        except (JWTClaimsError, JWTError) as exc:
            raise TokenInvalid("Invalid token") from exc
        except Exception as exc:
            raise VerificationFailed("Token verification failed") from exc

        try:
            return TokenClaims(**payload)
        except ValueError as exc:
            raise TokenInvalid("Invalid token") from exc

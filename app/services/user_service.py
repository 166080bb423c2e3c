import logging
from typing import Any, Dict

from sqlalchemy.exc import IntegrityError

from app.core.exceptions import Conflict, NotFound, Unauthorized, ValidationError
from app.core.security import TokenService, dummy_verify, get_password_hash, verify_password
from app.repositories.user_repository import UserRepository
from app.schemas.user import LoginResponse, TokenClaims, UserResponse
from app.validators.user_request import validate_login, validate_register

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"


def _duplicate_username() -> Conflict:
    return Conflict("Username already exists", code="DUPLICATE_USERNAME")


def _duplicate_email() -> Conflict:
    return Conflict("Email already exists", code="DUPLICATE_EMAIL")


class UserService:
    def __init__(self, users: UserRepository, tokens: TokenService):
        self.users = users
        self.tokens = tokens

    # --------------------------
    # REGISTER
    # --------------------------
    def register(self, payload: Dict[str, Any]) -> UserResponse:
        errors = validate_register(payload)
        if errors:
            raise ValidationError(", ".join(errors))

        username = payload["username"]
        email = payload.get("email")
        if self.users.find_by_username(username):
            raise _duplicate_username()
        if email and self.users.find_by_email(email):
            raise _duplicate_email()

        try:
            user = self.users.create(
                username=username,
                hashed_password=get_password_hash(payload["password"]),
                email=email,
            )
        except IntegrityError as exc:
            self.users.rollback()
            logger.warning("Unique constraint rejected registration for username %r", username)
            if email and not self.users.find_by_username(username) and self.users.find_by_email(email):
                raise _duplicate_email() from exc
            raise _duplicate_username() from exc

        logger.info("Registered user %s (id=%s)", user.username, user.id)
        return UserResponse.model_validate(user)

    # --------------------------
    # LOGIN
    # --------------------------
    def login(self, payload: Dict[str, Any]) -> LoginResponse:
        errors = validate_login(payload)
        if errors:
            raise ValidationError(", ".join(errors))

        user = self.users.find_by_username(payload["username"])
        if not user:
            dummy_verify()
            logger.info("Failed login for unknown username")
            raise Unauthorized(INVALID_CREDENTIALS, code="INVALID_CREDENTIALS")

        if not verify_password(payload["password"], user.hashed_password):
            logger.info("Failed login for user id=%s", user.id)
            raise Unauthorized(INVALID_CREDENTIALS, code="INVALID_CREDENTIALS")

        issued = self.tokens.issue(user)
        return LoginResponse(
            token=issued.token,
            user=UserResponse.model_validate(user),
            expires_in=issued.expires_in,
        )

    # --------------------------
    # PROFILE
    # --------------------------
    def get_profile(self, user_id: int) -> UserResponse:
        user = self.users.find_by_id(user_id)
        if not user:
            raise NotFound("User not found")
        return UserResponse.model_validate(user)

    def verify_token(self, token: str) -> TokenClaims:
        return self.tokens.verify(token)

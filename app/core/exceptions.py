from typing import Optional


class AppError(Exception):
    """
    Base for every error the API reports to clients.
    Subclasses fix the HTTP status and the default machine-readable code.
    """

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class ValidationError(AppError):
    status_code = 400
    code = "VALIDATION_ERROR"


class Unauthorized(AppError):
    status_code = 401
    code = "UNAUTHORIZED"


class TokenMissing(Unauthorized):
    code = "UNAUTHORIZED"


class TokenExpired(Unauthorized):
    code = "TOKEN_EXPIRED"


class TokenInvalid(Unauthorized):
    code = "INVALID_TOKEN"


class VerificationFailed(Unauthorized):
    code = "TOKEN_VERIFICATION_FAILED"


class NotFound(AppError):
    status_code = 404
    code = "NOT_FOUND"


class Conflict(AppError):
    status_code = 409
    code = "CONFLICT"


class InternalError(AppError):
    status_code = 500
    code = "INTERNAL_ERROR"

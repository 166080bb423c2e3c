import re
from typing import Any, Callable, List

from email_validator import EmailNotValidError, validate_email

from app.validators.common import FieldRule, run_rules

USERNAME_PATTERN = re.compile(r"[A-Za-z0-9]+")
PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30
PASSWORD_MIN_LENGTH = 6


def _when_text(check: Callable[[str], Any]) -> Callable[[Any], bool]:
    # Follow-up rules only judge non-empty strings; the earlier rules report the rest.
    def wrapped(value: Any) -> bool:
        if not isinstance(value, str) or value == "":
            return True
        return bool(check(value))
    return wrapped


def _not_empty(value: Any) -> bool:
    return value != ""


def _is_text(value: Any) -> bool:
    return value is None or isinstance(value, str)


def _is_email(value: Any) -> bool:
    if value is None:
        return True
    if not isinstance(value, str):
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


REGISTER_RULES = [
    FieldRule("username", _not_empty, "Username is required", required="Username is required"),
    FieldRule("username", _is_text, "Username must be a string"),
    FieldRule(
        "username",
        _when_text(USERNAME_PATTERN.fullmatch),
        "Username must only contain alphanumeric characters",
    ),
    FieldRule(
        "username",
        _when_text(lambda v: len(v) >= USERNAME_MIN_LENGTH),
        f"Username must be at least {USERNAME_MIN_LENGTH} characters long",
    ),
    FieldRule(
        "username",
        _when_text(lambda v: len(v) <= USERNAME_MAX_LENGTH),
        f"Username cannot exceed {USERNAME_MAX_LENGTH} characters",
    ),
    FieldRule("password", _not_empty, "Password is required", required="Password is required"),
    FieldRule("password", _is_text, "Password must be a string"),
    FieldRule(
        "password",
        _when_text(lambda v: len(v) >= PASSWORD_MIN_LENGTH),
        f"Password must be at least {PASSWORD_MIN_LENGTH} characters long",
    ),
    FieldRule(
        "password",
        _when_text(PASSWORD_PATTERN.search),
        "Password must contain at least one uppercase letter, one lowercase letter, and one number",
    ),
    FieldRule("email", _is_email, "Email must be a valid email address"),
]

LOGIN_RULES = [
    FieldRule("username", _not_empty, "Username is required", required="Username is required"),
    FieldRule("username", _is_text, "Username must be a string"),
    FieldRule("password", _not_empty, "Password is required", required="Password is required"),
    FieldRule("password", _is_text, "Password must be a string"),
]


def validate_register(payload: dict) -> List[str]:
    return run_rules(payload or {}, REGISTER_RULES)


def validate_login(payload: dict) -> List[str]:
    return run_rules(payload or {}, LOGIN_RULES)

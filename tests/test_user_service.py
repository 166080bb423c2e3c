import pytest

from app.core.exceptions import Conflict, NotFound, Unauthorized, ValidationError
from app.models.user import User


def test_register_returns_user_without_password(user_service, db):
    created = user_service.register({"username": "alice", "password": "Secret123"})

    dumped = created.model_dump(by_alias=True)
    assert dumped["username"] == "alice"
    assert "createdAt" in dumped
    assert "password" not in dumped and "hashed_password" not in dumped
    assert "Secret123" not in str(dumped)

    stored = db.query(User).filter(User.username == "alice").one()
    assert stored.hashed_password != "Secret123"


def test_register_same_username_twice_conflicts(user_service):
    user_service.register({"username": "alice", "password": "Secret123"})
    with pytest.raises(Conflict) as exc:
        user_service.register({"username": "alice", "password": "Different9"})
    assert exc.value.code == "DUPLICATE_USERNAME"
    assert exc.value.status_code == 409


def test_register_taken_email_conflicts(user_service, user):
    with pytest.raises(Conflict) as exc:
        user_service.register({"username": "carol", "password": "Secret123", "email": "alice@example.com"})
    assert exc.value.code == "DUPLICATE_EMAIL"
    assert exc.value.message == "Email already exists"


def test_email_unique_constraint_backs_up_the_precheck(user_service, user, monkeypatch):
    find_by_email = user_service.users.find_by_email
    calls = []

    def miss_first_lookup(email):
        calls.append(email)
        return None if len(calls) == 1 else find_by_email(email)

    monkeypatch.setattr(user_service.users, "find_by_email", miss_first_lookup)
    with pytest.raises(Conflict) as exc:
        user_service.register({"username": "carol", "password": "Secret123", "email": "alice@example.com"})
    assert exc.value.code == "DUPLICATE_EMAIL"


def test_users_without_email_do_not_conflict(user_service):
    user_service.register({"username": "carol", "password": "Secret123"})
    assert user_service.register({"username": "dave", "password": "Secret123"}).email is None


def test_register_validation_error_message(user_service):
    with pytest.raises(ValidationError) as exc:
        user_service.register({"username": "al", "password": "secret"})
    assert exc.value.message == (
        "Username must be at least 3 characters long, "
        "Password must contain at least one uppercase letter, one lowercase letter, and one number"
    )


def test_login_returns_token_and_user(user_service, user, token_service):
    result = user_service.login({"username": "alice", "password": "Secret123"})

    assert result.expires_in == "1h"
    assert result.user.username == "alice"
    claims = token_service.verify(result.token)
    assert claims.id == user.id
    assert claims.username == "alice"
    assert user_service.verify_token(result.token).id == user.id


def test_login_wrong_password_is_unauthorized(user_service, user):
    with pytest.raises(Unauthorized) as exc:
        user_service.login({"username": "alice", "password": "Wrong1234"})
    assert exc.value.code == "INVALID_CREDENTIALS"


def test_login_unknown_user_looks_the_same(user_service, user):
    with pytest.raises(Unauthorized) as unknown:
        user_service.login({"username": "nobody", "password": "Wrong1234"})
    with pytest.raises(Unauthorized) as wrong:
        user_service.login({"username": "alice", "password": "Wrong1234"})
    assert unknown.value.message == wrong.value.message == "Invalid username or password"


def test_login_requires_both_fields(user_service):
    with pytest.raises(ValidationError) as exc:
        user_service.login({"username": "alice"})
    assert exc.value.message == "Password is required"


def test_profile(user_service, user):
    assert user_service.get_profile(user.id).username == "alice"
    with pytest.raises(NotFound):
        user_service.get_profile(9999)

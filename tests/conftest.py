import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from app.core.security import TokenService
from app.database.connection import Base, get_db
from app.dependencies.services import get_token_service
from app.main import app
from app.repositories.product_repository import ProductRepository
from app.repositories.user_repository import UserRepository
from app.services.product_service import ProductService
from app.services.user_service import UserService

TEST_DB_URL = "sqlite:///:memory:"

engine = create_engine(
    TEST_DB_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def token_service():
    return TokenService(secret_key="test-secret-key", expires_minutes=60)


@pytest.fixture()
def user_service(db, token_service):
    return UserService(UserRepository(db), token_service)


@pytest.fixture()
def product_service(db):
    return ProductService(ProductRepository(db))


@pytest.fixture()
def user(user_service):
    return user_service.register({"username": "alice", "password": "Secret123", "email": "alice@example.com"})


@pytest.fixture()
def other_user(user_service):
    return user_service.register({"username": "bob", "password": "Secret123"})


@pytest.fixture()
def client(db, token_service):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_token_service] = lambda: token_service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers(client):
    client.post("/api/users/register", json={"username": "alice", "password": "Secret123"})
    response = client.post("/api/users/login", json={"username": "alice", "password": "Secret123"})
    return {"Authorization": f"Bearer {response.json()['token']}"}

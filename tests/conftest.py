import os

# Configure the application before anything from the package is imported
os.environ["ENVIRONMENT"] = "development"
os.environ["SQLALCHEMY_DATABASE_URI"] = "sqlite://"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ["SEED_DEFAULT_USER"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ.pop("OPENAI_API_KEY", None)

from typing import Callable, Dict, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from medikey.db.base import Base
from medikey.db.session import SessionLocal, engine
from medikey.main import app
from medikey import models  # noqa: F401
from medikey.services.smartwatch import smartwatch_service
from medikey.websocket import manager

API = "/api"


@pytest.fixture(autouse=True)
def _database() -> Generator[None, None, None]:
    """Fresh schema for every test"""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def _reset_connections() -> Generator[None, None, None]:
    yield
    smartwatch_service.connected_devices.clear()
    manager.active_connections.clear()


@pytest.fixture
def db() -> Generator[Session, None, None]:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client() -> TestClient:
    # No context manager: the lifespan hook (create_all + seeding) stays off
    return TestClient(app)


@pytest.fixture
def register_user(client: TestClient) -> Callable[..., Dict]:
    """Register and log in a user; returns its id, token and auth headers"""

    def _register(username: str = "alice", password: str = "secret123", email: str = None) -> Dict:
        email = email or f"{username}@example.com"
        response = client.post(
            f"{API}/auth/register",
            json={"username": username, "password": password, "fullName": username.title(), "email": email},
        )
        assert response.status_code == 201, response.text
        login = client.post(f"{API}/auth/login", json={"username": username, "password": password})
        assert login.status_code == 200, login.text
        token = login.json()["accessToken"]
        return {
            "id": response.json()["id"],
            "token": token,
            "headers": {"Authorization": f"Bearer {token}"},
        }

    return _register


@pytest.fixture
def alice(register_user) -> Dict:
    return register_user("alice")


@pytest.fixture
def bob(register_user) -> Dict:
    return register_user("bob")

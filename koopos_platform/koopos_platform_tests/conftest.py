"""
Pytest configuration for koopos_service tests.

Points the service at its own SQLite file before any service module is
imported, and rebuilds the schema around every test.
"""
import os

os.environ.setdefault("KOOPOS_DATABASE_URL", "sqlite:///./koopos_test.db")

import pytest
from fastapi.testclient import TestClient

from koopos_platform.koopos_platform.koopos_service.main import app
from koopos_platform.koopos_platform.koopos_service.db import Base, engine, init_db
from koopos_platform.koopos_platform.koopos_service.auth import token_issuer


@pytest.fixture(autouse=True)
def reset_database():
    # Drop all tables and recreate them (with seeded roles) before each test
    Base.metadata.drop_all(bind=engine)
    init_db()


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as c:
        yield c


def signup_payload(username="alice", email="a@x.com", password="pw123", role=1):
    return {
        "username": username,
        "email": email,
        "password": password,
        "role": role,
        "firstName": "Alice",
        "lastName": "Liddell",
        "phoneNumber": "081234567890",
        "address": "Jl. Merdeka 1",
    }


def auth_header_for(username: str):
    token = token_issuer.issue(username)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(client):
    register = client.post("/users/signup", json=signup_payload(username="cashier", email="cashier@x.com", role=2))
    assert register.status_code == 200
    return auth_header_for("cashier")

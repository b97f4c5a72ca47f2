"""Shared fixtures: the app runs against an in-memory SQLite database."""
import os

# Set environment BEFORE importing any app modules
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_FILE"] = ""

import pytest
from fastapi.testclient import TestClient

from database import Base, engine
from init_db import init_db
from main import app


@pytest.fixture(autouse=True)
def fresh_db():
    """Recreate every table so each test starts empty"""
    Base.metadata.drop_all(bind=engine)
    init_db()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def create_user(client):
    def _create(name="Jane Doe", email="jane@example.com", **extra):
        response = client.post("/users", json={"name": name, "email": email, **extra})
        assert response.status_code == 201, response.json()
        return response.json()["data"]
    return _create
